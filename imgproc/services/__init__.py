"""Services module initialization."""
from .settings import Settings, configure_logging
from .pipeline_serializer import PipelineSerializer
from .image_processor import ImageProcessor

__all__ = ["Settings", "configure_logging", "PipelineSerializer", "ImageProcessor"]
