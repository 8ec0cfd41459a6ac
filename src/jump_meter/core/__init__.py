"""Core infrastructure: config, types, exceptions, and logging."""

from jump_meter.core.config import Settings, get_settings
from jump_meter.core.exceptions import (
    AnthropometryError,
    JumpMeterError,
    RecordingError,
)
from jump_meter.core.logging import get_logger, setup_logging
from jump_meter.core.types import (
    AnthropometricProfile,
    DebugInfo,
    Landmark,
    LandmarkIndex,
    LandmarkSet,
    MeasurementSnapshot,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "Landmark",
    "LandmarkIndex",
    "LandmarkSet",
    "AnthropometricProfile",
    "DebugInfo",
    "MeasurementSnapshot",
    # Exceptions
    "JumpMeterError",
    "AnthropometryError",
    "RecordingError",
    # Logging
    "setup_logging",
    "get_logger",
]
