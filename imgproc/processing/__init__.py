"""
Processing system for the image processor.

Provides average-color based filters that operate on RGBA pixel buffers.
Pipelines are stored as ordered (filter, factor) steps and applied
sequentially, each step consuming the previous step's output.
"""

from .pipeline import FilterSpec, ProcessingPipeline
from .filters import (
    ColorFilter,
    BrightnessFilter,
    ContrastFilter,
    ChannelBoostFilter,
    RedBoostFilter,
    GreenBoostFilter,
    BlueBoostFilter,
)
from .executor import ProcessingExecutor
from .filters import (
    DEFAULT_BAND_ROWS,
    calculate_average,
    check_factor,
    create_filter,
    get_filter,
    list_filters,
    FILTER_REGISTRY,
)
from .numeric import clamp_channel, scale_truncate

__all__ = [
    "FilterSpec",
    "ProcessingPipeline",
    "ColorFilter",
    "ProcessingExecutor",
    # Helpers
    "DEFAULT_BAND_ROWS",
    "calculate_average",
    "check_factor",
    "create_filter",
    "get_filter",
    "list_filters",
    "FILTER_REGISTRY",
    "clamp_channel",
    "scale_truncate",
    # Filters
    "BrightnessFilter",
    "ContrastFilter",
    "ChannelBoostFilter",
    "RedBoostFilter",
    "GreenBoostFilter",
    "BlueBoostFilter",
]
