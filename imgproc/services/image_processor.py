"""
Image processor session.

Holds the image being edited and applies filters to it one at a time or
as a whole pipeline, keeping the original around for reset.
"""

import logging
from typing import List, Optional, Sequence, Union

from ..core import CancellationToken, FilterId, PixelBuffer
from ..processing import FilterSpec, ProcessingExecutor
from ..processing.executor import PipelineLike
from .settings import Settings

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Stateful wrapper that filters a single image in place of its caller."""

    def __init__(
        self,
        image: PixelBuffer,
        executor: Optional[ProcessingExecutor] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings
        if executor is None:
            executor = (
                ProcessingExecutor.from_settings(settings)
                if settings is not None
                else ProcessingExecutor()
            )
        self.executor = executor
        self._original = image
        self._current = image
        self.history: List[FilterSpec] = []

    # ========== Filtering ==========

    def apply_filter(
        self,
        filter_id: Union[FilterId, str],
        factor: Optional[float] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """Apply one filter to the current image and return the result."""
        if factor is None:
            factor = self.settings.get_default_factor() if self.settings is not None else 1.0
        return self.apply_filters([FilterSpec(filter_id, factor)], cancel_token)

    def apply_filters(
        self,
        pipeline: PipelineLike,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """
        Apply a pipeline to the current image.

        On any error the current image is left as it was.
        """
        steps = ProcessingExecutor.resolve_steps(pipeline)
        self._current = self.executor.execute(self._current, steps, cancel_token)
        self.history.extend(steps)
        logger.info("Applied %d step(s); %d in history", len(steps), len(self.history))
        return self._current

    def apply_filter_arrays(
        self,
        filter_ids: Sequence[Union[FilterId, str]],
        factors: Sequence[float],
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """Apply a pipeline given as parallel filter and factor lists."""
        self._current = self.executor.execute_parallel(
            self._current, filter_ids, factors, cancel_token
        )
        self.history.extend(FilterSpec(f, x) for f, x in zip(filter_ids, factors))
        return self._current

    # ========== State ==========

    def filtered_image(self) -> PixelBuffer:
        """Return the image with every applied filter."""
        return self._current

    @property
    def original_image(self) -> PixelBuffer:
        return self._original

    def reset(self) -> None:
        """Discard all applied filters."""
        self._current = self._original
        self.history.clear()
