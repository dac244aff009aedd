"""
Core data types for the image processor.

All types use @dataclass and Enum for structured representations.
No loose dicts or raw tuples at the internal API boundary.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, Iterator, List, NamedTuple, Optional, Union

import numpy as np

from .errors import UnknownFilter


CHANNEL_MIN = 0
CHANNEL_MAX = 255

# Channel positions inside an RGBA pixel
RED, GREEN, BLUE, ALPHA = 0, 1, 2, 3


class ValidationSeverity(Enum):
    """Validation issue severity."""
    ERROR = auto()
    WARNING = auto()


class FilterId(Enum):
    """Closed set of filters the processor knows how to apply."""
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    RED_BOOST = "red_boost"
    GREEN_BOOST = "green_boost"
    BLUE_BOOST = "blue_boost"

    @classmethod
    def resolve(cls, value: Union["FilterId", str]) -> "FilterId":
        """
        Look up a filter identifier.

        Accepts a FilterId or a name in any common spelling ("red_boost",
        "RED_BOOST", "RedBoost") as well as the legacy names ("RedFilter").
        Raises UnknownFilter otherwise.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            folded = key.replace("_", "").lower()
            for member in cls:
                if folded == member.value.replace("_", ""):
                    return member
            legacy = _LEGACY_FILTER_NAMES.get(key)
            if legacy is not None:
                return cls(legacy)
        raise UnknownFilter(value)


_LEGACY_FILTER_NAMES = {
    "BrightnessFilter": "brightness",
    "ContrastFilter": "contrast",
    "RedFilter": "red_boost",
    "GreenFilter": "green_boost",
    "BlueFilter": "blue_boost",
}


class Pixel(NamedTuple):
    """One RGBA pixel, 8 bits per channel."""
    red: int
    green: int
    blue: int
    alpha: int


@dataclass(frozen=True)
class AverageColor:
    """Per-channel mean of a buffer, truncated toward zero."""
    red: int
    green: int
    blue: int

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)


class PixelBuffer:
    """
    Fixed-size RGBA image held as a (height, width, 4) uint8 array.

    Pixels are addressed row-major: index = y * width + x. The size is
    fixed at construction; filters return new buffers rather than
    mutating the one they are given.
    """

    __slots__ = ("_width", "_height", "_data")

    def __init__(self, width: int, height: int, data: Optional[np.ndarray] = None):
        if width < 0 or height < 0:
            raise ValueError(f"Buffer dimensions must be >= 0, got {width}x{height}")

        if data is None:
            data = np.zeros((height, width, 4), dtype=np.uint8)
        elif not isinstance(data, np.ndarray):
            raise ValueError(f"Expected numpy array, got {type(data).__name__}")
        elif data.shape != (height, width, 4):
            raise ValueError(
                f"Expected pixel array of shape {(height, width, 4)}, got {data.shape}"
            )
        elif data.dtype != np.uint8:
            raise ValueError(f"Expected uint8 dtype, got {data.dtype}")

        self._width = width
        self._height = height
        self._data = data

    @classmethod
    def from_pixels(
        cls, width: int, height: int, pixels: Iterable[Iterable[int]]
    ) -> "PixelBuffer":
        """Build a buffer from a flat row-major sequence of (r, g, b, a) values."""
        raw = np.asarray(list(pixels))
        expected = width * height
        if raw.size == 0 and expected == 0:
            return cls(width, height)
        if raw.dtype.kind == "f":
            with np.errstate(invalid="ignore"):
                whole = np.all(np.mod(raw, 1) == 0)
            if not whole:
                raise ValueError("Channel values must be whole numbers")
        elif raw.dtype.kind not in "iu":
            raise ValueError(f"Channel values must be integers, got {raw.dtype}")
        if raw.ndim != 2 or raw.shape[1] != 4:
            raise ValueError("Each pixel must have exactly 4 channels (r, g, b, a)")
        if raw.shape[0] != expected:
            raise ValueError(
                f"Expected {expected} pixels for a {width}x{height} buffer, got {raw.shape[0]}"
            )
        if raw.min() < CHANNEL_MIN or raw.max() > CHANNEL_MAX:
            raise ValueError(f"Channel values must be within [{CHANNEL_MIN}, {CHANNEL_MAX}]")
        return cls(width, height, raw.astype(np.uint8).reshape(height, width, 4))

    @classmethod
    def filled(cls, width: int, height: int, pixel: Iterable[int]) -> "PixelBuffer":
        """Create a buffer where every pixel has the same value."""
        data = np.empty((height, width, 4), dtype=np.uint8)
        data[...] = np.asarray(tuple(pixel), dtype=np.uint8)
        return cls(width, height, data)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def data(self) -> np.ndarray:
        """Underlying (height, width, 4) array. Treat as read-only."""
        return self._data

    @property
    def pixel_count(self) -> int:
        return self._width * self._height

    @property
    def is_empty(self) -> bool:
        return self.pixel_count == 0

    def pixel_at(self, x: int, y: int) -> Pixel:
        """Get the pixel at column x, row y."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self._width}x{self._height} buffer")
        return Pixel(*(int(v) for v in self._data[y, x]))

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self._width, self._height, self._data.copy())

    def to_pixels(self) -> List[Pixel]:
        """Flatten to a row-major list of pixels."""
        return [Pixel(*(int(v) for v in px)) for px in self._data.reshape(-1, 4)]

    def __len__(self) -> int:
        return self.pixel_count

    def __getitem__(self, index: int) -> Pixel:
        if index < 0:
            index += self.pixel_count
        if not 0 <= index < self.pixel_count:
            raise IndexError(f"Pixel index {index} out of range")
        y, x = divmod(index, self._width)
        return self.pixel_at(x, y)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self.to_pixels())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self._data, other._data)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer({self._width}x{self._height})"


@dataclass
class ValidationIssue:
    """A validation problem."""
    severity: ValidationSeverity
    code: str
    message: str
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.code}: {self.message}"
