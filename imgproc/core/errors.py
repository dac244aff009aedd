"""
Exception types raised by the image processor.

Every failure is reported as a subclass of ImageProcessingError. Each one
also derives from the matching builtin so callers can catch ValueError or
LookupError where that reads better.
"""


class ImageProcessingError(Exception):
    """Base class for all image processor failures."""


class EmptyImage(ImageProcessingError, ValueError):
    """A zero-sized buffer was given to an operation that needs pixels."""

    def __init__(self, width: int = 0, height: int = 0):
        self.width = width
        self.height = height
        super().__init__(f"Cannot process an empty {width}x{height} image")


class UnknownFilter(ImageProcessingError, LookupError):
    """A filter identifier outside the registered set was requested."""

    def __init__(self, filter_id):
        self.filter_id = filter_id
        super().__init__(f"Unknown filter: {filter_id!r}")


class PipelineLengthMismatch(ImageProcessingError, ValueError):
    """Filter and factor lists of a two-array pipeline differ in length."""

    def __init__(self, filter_count: int, factor_count: int):
        self.filter_count = filter_count
        self.factor_count = factor_count
        super().__init__(
            f"Pipelines must have same length: {filter_count} filters, "
            f"{factor_count} factors"
        )


class InvalidFactor(ImageProcessingError, ValueError):
    """A filter factor is not a finite number."""

    def __init__(self, factor, filter_name: str = ""):
        self.factor = factor
        self.filter_name = filter_name
        where = f" for {filter_name}" if filter_name else ""
        super().__init__(f"Factor{where} must be a finite number, got {factor!r}")


class ProcessingCancelled(ImageProcessingError, RuntimeError):
    """Processing stopped because cancellation was requested."""

    def __init__(self, message: str = "Processing stopped by user"):
        super().__init__(message)


class PipelineFormatError(ImageProcessingError, ValueError):
    """A serialized pipeline could not be read."""
