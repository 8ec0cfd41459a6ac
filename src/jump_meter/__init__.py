"""Jump Meter: vertical jump height measurement from pose landmark streams."""

from jump_meter.core.types import (
    AnthropometricProfile,
    Landmark,
    LandmarkIndex,
    LandmarkSet,
    MeasurementSnapshot,
)
from jump_meter.pipeline.detector import JumpHeightDetector, measure_batch

__all__ = [
    "JumpHeightDetector",
    "measure_batch",
    "Landmark",
    "LandmarkIndex",
    "LandmarkSet",
    "AnthropometricProfile",
    "MeasurementSnapshot",
]

__version__ = "0.1.0"
