"""Landmark geometry, visibility gating, and signal filters."""

from jump_meter.vision.filters import RunningAverage, SmoothingFilter
from jump_meter.vision.geometry import (
    full_body_pixel_span,
    hip_center_depth,
    hip_center_vertical,
)
from jump_meter.vision.visibility import VisibilityGate, is_fully_visible

__all__ = [
    "hip_center_vertical",
    "hip_center_depth",
    "full_body_pixel_span",
    "VisibilityGate",
    "is_fully_visible",
    "SmoothingFilter",
    "RunningAverage",
]
