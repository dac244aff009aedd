"""
Filter definitions for the processing pipeline.

Every filter measures the average color of the image it is given, then
moves each pixel relative to that average (or scales it outright) by a
caller-supplied factor. The average is taken once per call, before any
pixel changes, and is returned rather than stored so filter instances can
be shared freely.
"""

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from numbers import Real
from typing import Dict, List, Optional, Union

import numpy as np

from ..core import (
    RED,
    GREEN,
    BLUE,
    AverageColor,
    CancellationToken,
    EmptyImage,
    FilterId,
    InvalidFactor,
    PixelBuffer,
)
from .numeric import clamp_channel, scale_truncate

logger = logging.getLogger(__name__)

DEFAULT_BAND_ROWS = 256


def calculate_average(buffer: PixelBuffer) -> AverageColor:
    """
    Average red, green and blue over the whole buffer, ignoring alpha.

    Integer division, so the result is truncated. Raises EmptyImage for a
    buffer with no pixels.
    """
    if buffer.is_empty:
        raise EmptyImage(buffer.width, buffer.height)

    totals = buffer.data[..., :3].reshape(-1, 3).sum(axis=0, dtype=np.int64)
    count = buffer.pixel_count
    red, green, blue = (int(total) // count for total in totals)
    return AverageColor(red=red, green=green, blue=blue)


def check_factor(factor, filter_name: str = "") -> float:
    """Return factor as float, raising InvalidFactor for NaN, inf or non-numbers."""
    if isinstance(factor, bool) or not isinstance(factor, Real):
        raise InvalidFactor(factor, filter_name)
    factor = float(factor)
    if not math.isfinite(factor):
        raise InvalidFactor(factor, filter_name)
    return factor


@dataclass
class ColorFilter:
    """Base class for all color filters."""
    filter_id: FilterId
    name: str
    description: str = ""

    def calculate_average(self, buffer: PixelBuffer) -> AverageColor:
        return calculate_average(buffer)

    def apply(
        self,
        buffer: PixelBuffer,
        factor: float,
        cancel_token: Optional[CancellationToken] = None,
        band_rows: int = DEFAULT_BAND_ROWS,
        max_workers: int = 1,
    ) -> PixelBuffer:
        """
        Apply this filter and return a new buffer of the same size.

        Args:
            buffer: Input buffer, left untouched
            factor: Filter intensity (1.0 = no change for most filters)
            cancel_token: Checked before each band of rows
            band_rows: Number of rows transformed per band
            max_workers: Threads used to transform bands; 1 runs inline

        Returns:
            Filtered buffer
        """
        factor = check_factor(factor, self.name)
        average = self.calculate_average(buffer)
        band_rows = max(1, int(band_rows))

        source = buffer.data
        output = source.copy()
        bands = [
            (start, min(start + band_rows, buffer.height))
            for start in range(0, buffer.height, band_rows)
        ]

        logger.debug(
            "%s x%.4g on %r: average=%s, %d band(s)",
            self.name, factor, buffer, average.as_tuple(), len(bands),
        )

        def run_band(start: int, stop: int) -> None:
            if cancel_token is not None:
                cancel_token.raise_if_stopped()
            self._transform_band(source[start:stop], output[start:stop], average, factor)

        if max_workers > 1 and len(bands) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [executor.submit(run_band, start, stop) for start, stop in bands]
                try:
                    for future in futures:
                        future.result()  # Will raise if the band failed
                except BaseException:
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise
        else:
            for start, stop in bands:
                run_band(start, stop)

        return PixelBuffer(buffer.width, buffer.height, output)

    def _transform_band(
        self,
        source: np.ndarray,
        output: np.ndarray,
        average: AverageColor,
        factor: float,
    ) -> None:
        """Write transformed rows of source into output (same shape views)."""
        raise NotImplementedError(f"{type(self).__name__} does not implement a transform")


# ============================================================================
# FILTER IMPLEMENTATIONS
# ============================================================================

class BrightnessFilter(ColorFilter):
    """Scale red, green and blue of every pixel by the factor."""

    def __init__(self):
        super().__init__(
            filter_id=FilterId.BRIGHTNESS,
            name="Brightness",
            description="Multiplies every color channel (1.0 = no change)",
        )

    def _transform_band(self, source, output, average, factor):
        output[..., :3] = clamp_channel(scale_truncate(source[..., :3], factor))


class ContrastFilter(ColorFilter):
    """Stretch or squeeze every channel around the image average."""

    def __init__(self):
        super().__init__(
            filter_id=FilterId.CONTRAST,
            name="Contrast",
            description="Scales each channel's distance from the average (1.0 = no change)",
        )

    def _transform_band(self, source, output, average, factor):
        avg = np.asarray(average.as_tuple(), dtype=np.int64)
        diff = source[..., :3].astype(np.int64) - avg
        output[..., :3] = clamp_channel(avg + scale_truncate(diff, factor))


class ChannelBoostFilter(ColorFilter):
    """
    Push one channel further above its average.

    Only pixels brighter than the average in that channel move; the rest,
    and the other two channels, are copied through unchanged.
    """

    def __init__(self, filter_id: FilterId, name: str, channel: int):
        super().__init__(
            filter_id=filter_id,
            name=name,
            description=f"Scales {name.split()[0].lower()} above its average (1.0 = no change)",
        )
        self.channel = channel

    def _transform_band(self, source, output, average, factor):
        avg = average.as_tuple()[self.channel]
        values = source[..., self.channel]
        diff = values.astype(np.int64) - avg
        boosted = clamp_channel(avg + scale_truncate(diff, factor))
        output[..., self.channel] = np.where(diff > 0, boosted, values)


class RedBoostFilter(ChannelBoostFilter):
    def __init__(self):
        super().__init__(FilterId.RED_BOOST, "Red Boost", RED)


class GreenBoostFilter(ChannelBoostFilter):
    def __init__(self):
        super().__init__(FilterId.GREEN_BOOST, "Green Boost", GREEN)


class BlueBoostFilter(ChannelBoostFilter):
    def __init__(self):
        super().__init__(FilterId.BLUE_BOOST, "Blue Boost", BLUE)


# Filter classes by identifier
FILTER_CLASSES = {
    FilterId.BRIGHTNESS: BrightnessFilter,
    FilterId.CONTRAST: ContrastFilter,
    FilterId.RED_BOOST: RedBoostFilter,
    FilterId.GREEN_BOOST: GreenBoostFilter,
    FilterId.BLUE_BOOST: BlueBoostFilter,
}

# Registry of shared filter instances
FILTER_REGISTRY: Dict[FilterId, ColorFilter] = {
    filter_id: filter_class() for filter_id, filter_class in FILTER_CLASSES.items()
}


def get_filter(filter_id: Union[FilterId, str]) -> ColorFilter:
    """Get the registered filter for an identifier. Raises UnknownFilter."""
    return FILTER_REGISTRY[FilterId.resolve(filter_id)]


def create_filter(filter_id: Union[FilterId, str]) -> ColorFilter:
    """Create a new filter instance by identifier. Raises UnknownFilter."""
    return FILTER_CLASSES[FilterId.resolve(filter_id)]()


def list_filters() -> List[ColorFilter]:
    """All registered filters in registry order."""
    return list(FILTER_REGISTRY.values())
