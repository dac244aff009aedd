"""
Processing pipeline management.

Manages a chain of filter steps that are applied sequentially to image data.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..core import FilterId, PipelineFormatError, ValidationEngine, ValidationSeverity


@dataclass
class FilterSpec:
    """One pipeline step: which filter to run and how strongly."""
    filter_id: FilterId
    factor: float = 1.0
    enabled: bool = True

    def __post_init__(self):
        # Accept any spelling FilterId.resolve understands
        self.filter_id = FilterId.resolve(self.filter_id)

    @classmethod
    def coerce(cls, item: Union["FilterSpec", Tuple[Any, float]]) -> "FilterSpec":
        """Turn a FilterSpec or an (identifier, factor) pair into a FilterSpec."""
        if isinstance(item, cls):
            return item
        try:
            filter_id, factor = item
        except (TypeError, ValueError):
            raise ValueError(f"Expected FilterSpec or (filter, factor) pair, got {item!r}")
        return cls(filter_id, factor)

    def copy(self) -> "FilterSpec":
        """Detached copy; the identifier is resolved again."""
        return FilterSpec(self.filter_id, self.factor, self.enabled)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filter_id": self.filter_id.value,
            "factor": self.factor,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterSpec":
        """Deserialize a step. Raises UnknownFilter for unrecognised identifiers."""
        filter_id = data.get("filter_id")
        if not filter_id:
            raise PipelineFormatError(f"Pipeline step is missing 'filter_id': {data!r}")
        return cls(
            filter_id=filter_id,
            factor=data.get("factor", 1.0),
            enabled=_read_bool(data, "enabled"),
        )


@dataclass
class ProcessingPipeline:
    """Container for an ordered sequence of filter steps."""

    steps: List[FilterSpec] = field(default_factory=list)
    enabled: bool = True

    @classmethod
    def from_pairs(cls, pairs: Iterable[Union[FilterSpec, Tuple[Any, float]]]) -> "ProcessingPipeline":
        """Build a pipeline from (identifier, factor) pairs or FilterSpecs."""
        return cls(steps=[FilterSpec.coerce(item) for item in pairs])

    def add_step(self, step: Union[FilterSpec, Tuple[Any, float]]) -> None:
        """Append a step (or an (identifier, factor) pair) to the pipeline."""
        self.steps.append(FilterSpec.coerce(step))

    def add(self, filter_id: Union[FilterId, str], factor: float = 1.0) -> FilterSpec:
        """Append a step built from an identifier and factor, returning it."""
        step = FilterSpec(filter_id, factor)
        self.steps.append(step)
        return step

    def remove_step(self, index: int) -> bool:
        """Remove a step by index. Returns success."""
        if 0 <= index < len(self.steps):
            del self.steps[index]
            return True
        return False

    def move_step(self, from_index: int, to_index: int) -> bool:
        """Move a step from one position to another. Returns success."""
        if not (0 <= from_index < len(self.steps) and 0 <= to_index < len(self.steps)):
            return False

        step = self.steps.pop(from_index)
        self.steps.insert(to_index, step)
        return True

    def get_step(self, index: int) -> Optional[FilterSpec]:
        """Get a step by index."""
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def validate(self) -> tuple[bool, List[str]]:
        """Validate all step factors. Returns (is_valid, errors)."""
        issues = ValidationEngine.validate_steps(self.steps)
        errors = [
            issue.message for issue in issues
            if issue.severity == ValidationSeverity.ERROR
        ]
        return len(errors) == 0, errors

    def clear(self) -> None:
        """Remove all steps from pipeline."""
        self.steps.clear()

    def is_empty(self) -> bool:
        """Check if pipeline has any steps."""
        return len(self.steps) == 0

    def get_enabled_steps(self) -> List[FilterSpec]:
        """Get list of enabled steps in order."""
        if not self.enabled:
            return []
        return [s for s in self.steps if s.enabled]

    def __len__(self) -> int:
        """Return number of steps in pipeline."""
        return len(self.steps)

    def __iter__(self):
        """Iterate over steps in pipeline."""
        return iter(self.steps)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pipeline to dictionary."""
        return {
            "enabled": self.enabled,
            "steps": [step.to_dict() for step in self.steps],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "ProcessingPipeline":
        """
        Deserialize pipeline from dictionary.

        Unknown filter identifiers raise UnknownFilter; steps are never
        silently dropped.
        """
        pipeline = ProcessingPipeline()
        pipeline.enabled = _read_bool(data, "enabled")

        steps = data.get("steps", [])
        if not isinstance(steps, list):
            raise PipelineFormatError("'steps' must be a list")

        for step_data in steps:
            if not isinstance(step_data, dict):
                raise PipelineFormatError(f"Pipeline step must be an object, got {step_data!r}")
            pipeline.add_step(FilterSpec.from_dict(step_data))

        return pipeline


def _read_bool(data: Dict[str, Any], key: str, default: bool = True) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise PipelineFormatError(f"'{key}' must be true or false, got {value!r}")
    return value
