"""
Validation engine for filter runs.

Structured validation rules that must pass before a pipeline is executed.
Returns ValidationIssue list; ERROR severity blocks execution.
"""

import math
from numbers import Real
from typing import List, Sequence, TYPE_CHECKING

from .errors import UnknownFilter
from .types import FilterId, PixelBuffer, ValidationIssue, ValidationSeverity

# Avoid circular imports
if TYPE_CHECKING:
    from ..processing import FilterSpec


class ValidationEngine:
    """Validates a buffer and the filter steps about to run on it."""

    @staticmethod
    def validate_run(
        buffer: PixelBuffer,
        steps: Sequence["FilterSpec"],
    ) -> List[ValidationIssue]:
        """
        Validate buffer and steps.

        Returns list of ValidationIssue; execution is blocked if any ERROR present.
        """
        issues = []

        # 1. Something to average over
        issues.extend(ValidationEngine._validate_buffer(buffer, steps))

        # 2. Factors
        issues.extend(ValidationEngine.validate_steps(steps))

        return issues

    @staticmethod
    def _validate_buffer(
        buffer: PixelBuffer,
        steps: Sequence["FilterSpec"],
    ) -> List[ValidationIssue]:
        """An empty buffer is only an error when some filter will run."""
        issues = []

        if buffer.is_empty and any(step.enabled for step in steps):
            issues.append(
                ValidationIssue(
                    severity=ValidationSeverity.ERROR,
                    code="EMPTY_IMAGE",
                    message=f"Cannot filter an empty {buffer.width}x{buffer.height} image.",
                    context={"width": buffer.width, "height": buffer.height},
                )
            )

        return issues

    @staticmethod
    def validate_steps(steps: Sequence["FilterSpec"]) -> List[ValidationIssue]:
        """Check every enabled step names a known filter and has a usable factor."""
        issues = []

        for index, step in enumerate(steps):
            if not step.enabled:
                continue

            try:
                name = FilterId.resolve(step.filter_id).value
            except UnknownFilter:
                issues.append(
                    ValidationIssue(
                        severity=ValidationSeverity.ERROR,
                        code="UNKNOWN_FILTER",
                        message=f"Step {index}: unknown filter {step.filter_id!r}.",
                        context={"index": index, "filter_id": step.filter_id},
                    )
                )
                continue

            factor = step.factor

            if isinstance(factor, bool) or not isinstance(factor, Real) or not math.isfinite(factor):
                issues.append(
                    ValidationIssue(
                        severity=ValidationSeverity.ERROR,
                        code="INVALID_FACTOR",
                        message=f"Step {index} ({name}): factor must be a finite number, got {factor!r}.",
                        context={"index": index, "filter_id": name, "factor": factor},
                    )
                )
                continue

            if factor < 0:
                # Allowed; every channel ends up clamped
                issues.append(
                    ValidationIssue(
                        severity=ValidationSeverity.WARNING,
                        code="NEGATIVE_FACTOR",
                        message=f"Step {index} ({name}): negative factor {factor} will be clamped.",
                        context={"index": index, "filter_id": name, "factor": factor},
                    )
                )

        return issues


def first_error(issues: List[ValidationIssue]):
    """Return the first ERROR issue, or None."""
    for issue in issues:
        if issue.severity == ValidationSeverity.ERROR:
            return issue
    return None
