"""
Image Processor — average-color filters for RGBA pixel buffers.

Applies brightness, contrast and per-channel boost filters to a raw RGBA
buffer, one at a time or as an ordered pipeline of (filter, factor) steps.
Decoding and encoding image files is left to the caller.
"""

from .core import (
    AverageColor,
    CancellationToken,
    EmptyImage,
    FilterId,
    ImageProcessingError,
    InvalidFactor,
    Pixel,
    PixelBuffer,
    PipelineFormatError,
    PipelineLengthMismatch,
    ProcessingCancelled,
    UnknownFilter,
)
from .processing import (
    FilterSpec,
    ProcessingExecutor,
    ProcessingPipeline,
    calculate_average,
    get_filter,
)
from .services import ImageProcessor, PipelineSerializer, Settings, configure_logging

__version__ = "1.0.0"

__all__ = [
    "AverageColor",
    "CancellationToken",
    "EmptyImage",
    "FilterId",
    "ImageProcessingError",
    "InvalidFactor",
    "Pixel",
    "PixelBuffer",
    "PipelineFormatError",
    "PipelineLengthMismatch",
    "ProcessingCancelled",
    "UnknownFilter",
    "FilterSpec",
    "ProcessingExecutor",
    "ProcessingPipeline",
    "calculate_average",
    "get_filter",
    "ImageProcessor",
    "PipelineSerializer",
    "Settings",
    "configure_logging",
]
