"""Pure analysis logic: stability, calibration, scale, motion filtering, peak tracking.

This module contains NO I/O operations.
"""

from jump_meter.analysis.calibration import BaselineCalibrator, CalibrationState
from jump_meter.analysis.motion import MotionCheck, MotionValidityFilter
from jump_meter.analysis.scale import ScaleCalibration, ScaleResult
from jump_meter.analysis.stability import StabilityMonitor
from jump_meter.analysis.tracker import HeightMeasurement, PeakHeightTracker

__all__ = [
    "StabilityMonitor",
    "BaselineCalibrator",
    "CalibrationState",
    "ScaleCalibration",
    "ScaleResult",
    "MotionValidityFilter",
    "MotionCheck",
    "PeakHeightTracker",
    "HeightMeasurement",
]
