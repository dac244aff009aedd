"""
Pipeline serialization and deserialization.

Handles saving and loading of filter pipelines to/from JSON format.
"""

import json
from pathlib import Path
from typing import Any, Dict

from ..core import PipelineFormatError
from ..processing import ProcessingPipeline


class PipelineSerializer:
    """
    Serializes and deserializes ProcessingPipeline to/from JSON.

    The version field allows old files to be rejected cleanly instead of
    being half-read.
    """

    # Format version for future compatibility
    FORMAT_VERSION = "1.0"

    @staticmethod
    def serialize(pipeline: ProcessingPipeline) -> Dict[str, Any]:
        """Convert a pipeline to a serializable dictionary."""
        return {
            "format_version": PipelineSerializer.FORMAT_VERSION,
            "pipeline": pipeline.to_dict(),
        }

    @staticmethod
    def deserialize(data: Dict[str, Any]) -> ProcessingPipeline:
        """
        Convert a dictionary back to a pipeline.

        Raises PipelineFormatError for structural problems and
        UnknownFilter for unrecognised filter identifiers.
        """
        if not isinstance(data, dict):
            raise PipelineFormatError("Pipeline document must be a JSON object")

        # Version check for future compatibility
        version = data.get("format_version", "1.0")
        if version != PipelineSerializer.FORMAT_VERSION:
            raise PipelineFormatError(
                f"Unsupported pipeline format version: {version}. "
                f"Expected {PipelineSerializer.FORMAT_VERSION}"
            )

        pipeline_data = data.get("pipeline", {})
        if not isinstance(pipeline_data, dict):
            raise PipelineFormatError("'pipeline' must be a JSON object")

        return ProcessingPipeline.from_dict(pipeline_data)

    @staticmethod
    def save_to_file(pipeline: ProcessingPipeline, file_path: Path) -> None:
        """Save pipeline to JSON file."""
        file_path = Path(file_path)
        data = PipelineSerializer.serialize(pipeline)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def load_from_file(file_path: Path) -> ProcessingPipeline:
        """Load pipeline from JSON file."""
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"Pipeline file not found: {file_path}")

        with open(file_path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise PipelineFormatError(f"Invalid pipeline JSON in {file_path}: {e}") from e

        return PipelineSerializer.deserialize(data)
