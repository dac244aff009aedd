"""Channel arithmetic shared by the color filters."""

import numpy as np

from ..core import CHANNEL_MIN, CHANNEL_MAX


def scale_truncate(values: np.ndarray, factor: float) -> np.ndarray:
    """
    Multiply integer channel values by a float factor and drop the fraction.

    Rounds toward zero (13 * 1.2 -> 15, -87 * 1.2 -> -104), never to nearest.
    Returns float64; products beyond float range become +-inf and clamp later.
    """
    with np.errstate(over="ignore"):
        return np.trunc(values.astype(np.float64) * factor)


def clamp_channel(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and narrow to uint8."""
    return np.clip(values, CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)
