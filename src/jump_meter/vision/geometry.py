"""Scalar measurements derived from a frame's landmarks.

Pure functions: no state, no I/O. Missing input yields None, never raises.
"""

from __future__ import annotations

from jump_meter.core.types import LandmarkIndex, LandmarkSet


def hip_center_vertical(landmarks: LandmarkSet) -> float | None:
    """Vertical pixel position of the hip center.

    Returns:
        Mean of left/right hip y, or None if either hip is missing
    """
    left_hip = landmarks.get(LandmarkIndex.LEFT_HIP)
    right_hip = landmarks.get(LandmarkIndex.RIGHT_HIP)

    if left_hip is None or right_hip is None:
        return None

    return (left_hip.y + right_hip.y) / 2


def hip_center_depth(landmarks: LandmarkSet) -> float | None:
    """Depth of the hip center, independent of visibility gating."""
    left_hip = landmarks.get(LandmarkIndex.LEFT_HIP)
    right_hip = landmarks.get(LandmarkIndex.RIGHT_HIP)

    if left_hip is None or right_hip is None:
        return None

    return (left_hip.z + right_hip.z) / 2


def full_body_pixel_span(landmarks: LandmarkSet) -> float | None:
    """Vertical pixel distance from eye center down to heel center.

    Returns:
        Span in pixels, or None if an eye or heel is missing or the
        heels are not below the eyes
    """
    left_eye = landmarks.get(LandmarkIndex.LEFT_EYE)
    right_eye = landmarks.get(LandmarkIndex.RIGHT_EYE)
    left_heel = landmarks.get(LandmarkIndex.LEFT_HEEL)
    right_heel = landmarks.get(LandmarkIndex.RIGHT_HEEL)

    if left_eye is None or right_eye is None or left_heel is None or right_heel is None:
        return None

    eye_center_y = (left_eye.y + right_eye.y) / 2
    heel_center_y = (left_heel.y + right_heel.y) / 2
    span = heel_center_y - eye_center_y

    return span if span > 0 else None
