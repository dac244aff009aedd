"""
Processing executor - applies filter pipelines to pixel buffers.

Bridges the processing pipeline to the filter registry, running each step
on the output of the previous one.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from ..core import (
    CancellationToken,
    EmptyImage,
    FilterId,
    InvalidFactor,
    PipelineLengthMismatch,
    PixelBuffer,
    ValidationEngine,
    ValidationSeverity,
    UnknownFilter,
    first_error,
)
from .filters import DEFAULT_BAND_ROWS, get_filter
from .pipeline import FilterSpec, ProcessingPipeline

logger = logging.getLogger(__name__)

PipelineLike = Union[ProcessingPipeline, Iterable[Union[FilterSpec, Tuple[Any, float]]]]


class ProcessingExecutor:
    """Executes processing pipelines on PixelBuffer objects."""

    def __init__(self, band_rows: int = DEFAULT_BAND_ROWS, max_workers: int = 1):
        self.band_rows = band_rows
        self.max_workers = max_workers

    @classmethod
    def from_settings(cls, settings) -> "ProcessingExecutor":
        """Build an executor configured from a Settings object."""
        return cls(band_rows=settings.get_band_rows(), max_workers=settings.get_max_workers())

    def execute(
        self,
        buffer: PixelBuffer,
        pipeline: PipelineLike,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """
        Apply all enabled steps in pipeline to buffer sequentially.

        The whole pipeline is checked before the first step runs, so an
        unknown filter or bad factor aborts with nothing applied.

        Args:
            buffer: Input pixel buffer
            pipeline: ProcessingPipeline, or a sequence of FilterSpec /
                (filter, factor) pairs
            cancel_token: Optional token checked between row bands

        Returns:
            Processed pixel buffer
        """
        steps = self.resolve_steps(pipeline)
        if not steps:
            return buffer

        self._preflight(buffer, steps)

        result = buffer
        for index, step in enumerate(steps):
            if cancel_token is not None:
                cancel_token.raise_if_stopped()
            logger.debug("Step %d/%d: %s x%s", index + 1, len(steps), step.filter_id.value, step.factor)
            result = self.apply_filter(result, step.filter_id, step.factor, cancel_token)

        return result

    def execute_parallel(
        self,
        buffer: PixelBuffer,
        filter_ids: Sequence[Union[FilterId, str]],
        factors: Sequence[float],
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """
        Apply a pipeline given as two parallel lists.

        Raises PipelineLengthMismatch when the lists differ in length.
        """
        if len(filter_ids) != len(factors):
            raise PipelineLengthMismatch(len(filter_ids), len(factors))
        return self.execute(buffer, list(zip(filter_ids, factors)), cancel_token)

    def apply_filter(
        self,
        buffer: PixelBuffer,
        filter_id: Union[FilterId, str],
        factor: float,
        cancel_token: Optional[CancellationToken] = None,
    ) -> PixelBuffer:
        """Apply a single filter by identifier."""
        color_filter = get_filter(filter_id)
        return color_filter.apply(
            buffer,
            factor,
            cancel_token=cancel_token,
            band_rows=self.band_rows,
            max_workers=self.max_workers,
        )

    @staticmethod
    def resolve_steps(pipeline: PipelineLike) -> List[FilterSpec]:
        """
        Normalise any accepted pipeline form into enabled FilterSpecs.

        Returns copies, so later edits to the caller's steps do not reach
        the run (or a history built from it). Identifiers are resolved
        again, which catches steps edited after creation.
        """
        if isinstance(pipeline, ProcessingPipeline):
            if not pipeline.enabled:
                return []
            pipeline = pipeline.steps
        # Coerce everything first so an unknown identifier fails up front
        steps = [FilterSpec.coerce(item).copy() for item in pipeline]
        return [step for step in steps if step.enabled]

    @staticmethod
    def _preflight(buffer: PixelBuffer, steps: List[FilterSpec]) -> None:
        """Raise the typed error for the first blocking issue, log the rest."""
        issues = ValidationEngine.validate_run(buffer, steps)

        for issue in issues:
            if issue.severity == ValidationSeverity.WARNING:
                logger.warning("%s", issue)

        error = first_error(issues)
        if error is None:
            return

        if error.code == "EMPTY_IMAGE":
            raise EmptyImage(buffer.width, buffer.height)
        if error.code == "UNKNOWN_FILTER":
            raise UnknownFilter(error.context.get("filter_id"))
        if error.code == "INVALID_FACTOR":
            raise InvalidFactor(error.context.get("factor"), error.context.get("filter_id", ""))
        raise ValueError(str(error))
