"""Core data types, errors and validation."""

from .errors import (
    ImageProcessingError,
    EmptyImage,
    UnknownFilter,
    PipelineLengthMismatch,
    InvalidFactor,
    ProcessingCancelled,
    PipelineFormatError,
)
from .types import (
    CHANNEL_MIN,
    CHANNEL_MAX,
    RED,
    GREEN,
    BLUE,
    ALPHA,
    FilterId,
    Pixel,
    AverageColor,
    PixelBuffer,
    ValidationIssue,
    ValidationSeverity,
)
from .cancellation import CancellationToken
from .validation import ValidationEngine, first_error

__all__ = [
    # Errors
    "ImageProcessingError",
    "EmptyImage",
    "UnknownFilter",
    "PipelineLengthMismatch",
    "InvalidFactor",
    "ProcessingCancelled",
    "PipelineFormatError",
    # Types
    "CHANNEL_MIN",
    "CHANNEL_MAX",
    "RED",
    "GREEN",
    "BLUE",
    "ALPHA",
    "FilterId",
    "Pixel",
    "AverageColor",
    "PixelBuffer",
    "ValidationIssue",
    "ValidationSeverity",
    "CancellationToken",
    # Validation
    "ValidationEngine",
    "first_error",
]
