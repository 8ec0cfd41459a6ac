"""Pytest fixtures for Jump Meter tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jump_meter.core.config import (
    AnthropometrySettings,
    CalibrationSettings,
    MotionFilterSettings,
    Settings,
    StabilitySettings,
    TrackingSettings,
)
from jump_meter.core.types import AnthropometricProfile, Landmark, LandmarkIndex, LandmarkSet
from jump_meter.pipeline.detector import JumpHeightDetector

# Power-of-two frame rate keeps timestamps exact in binary floating point
FPS = 32.0
BASELINE_HIP_Y = 400.0
BASELINE_DEPTH = 100.0
EYE_ABOVE_HIP_PX = 180.0


def build_landmarks(
    hip_y: float = BASELINE_HIP_Y,
    hip_z: float = BASELINE_DEPTH,
    confidence: float = 0.98,
    span: float = 480.0,
    omit: tuple[LandmarkIndex, ...] = (),
) -> LandmarkSet:
    """Create a full 33-landmark skeleton.

    Eyes sit EYE_ABOVE_HIP_PX above the hips and heels `span` px below the eyes.
    """
    eye_y = hip_y - EYE_ABOVE_HIP_PX
    heel_y = eye_y + span

    landmarks: dict[int, Landmark] = {}
    for index in LandmarkIndex:
        if index in omit:
            continue
        if index in (LandmarkIndex.LEFT_EYE, LandmarkIndex.RIGHT_EYE):
            y = eye_y
        elif index in (LandmarkIndex.LEFT_HEEL, LandmarkIndex.RIGHT_HEEL):
            y = heel_y
        else:
            y = hip_y
        landmarks[index.value] = Landmark(
            x=300.0 + index.value * 2.0,
            y=y,
            z=hip_z,
            confidence=confidence,
        )

    return LandmarkSet(landmarks=landmarks)


class FrameFeeder:
    """Feeds frames to a detector with evenly spaced timestamps."""

    def __init__(self, detector: JumpHeightDetector) -> None:
        self.detector = detector
        self.frame_idx = 0

    @property
    def timestamp(self) -> float:
        return self.frame_idx / FPS

    def feed(self, landmarks: LandmarkSet, count: int = 1) -> None:
        for _ in range(count):
            self.detector.process_frame(landmarks, self.timestamp)
            self.frame_idx += 1

    def until_calibrating(self, landmarks: LandmarkSet, max_frames: int = 500) -> int:
        """Feed still frames until the first calibration frame is accepted."""
        for fed in range(1, max_frames + 1):
            self.feed(landmarks)
            if self.detector.calibration.frame_count > 0:
                return fed
        raise AssertionError("Calibration never started")

    def calibrate(self, landmarks: LandmarkSet, max_frames: int = 500) -> int:
        """Feed still frames until calibration completes."""
        for fed in range(1, max_frames + 1):
            self.feed(landmarks)
            if self.detector.is_calibrated:
                return fed
        raise AssertionError("Calibration never completed")


@pytest.fixture
def settings() -> Settings:
    """Default settings for testing."""
    return Settings()


@pytest.fixture
def stability_settings() -> StabilitySettings:
    return StabilitySettings()


@pytest.fixture
def calibration_settings() -> CalibrationSettings:
    return CalibrationSettings()


@pytest.fixture
def motion_settings() -> MotionFilterSettings:
    return MotionFilterSettings()


@pytest.fixture
def tracking_settings() -> TrackingSettings:
    return TrackingSettings()


@pytest.fixture
def anthropometry_settings() -> AnthropometrySettings:
    return AnthropometrySettings()


@pytest.fixture
def make_landmarks() -> Callable[..., LandmarkSet]:
    """Factory for full-skeleton landmark sets."""
    return build_landmarks


@pytest.fixture
def standing_landmarks() -> LandmarkSet:
    """Still subject at the baseline position."""
    return build_landmarks()


@pytest.fixture
def detector(settings: Settings) -> JumpHeightDetector:
    """Fresh detector with default settings."""
    return JumpHeightDetector(settings)


@pytest.fixture
def feeder(detector: JumpHeightDetector) -> FrameFeeder:
    """Frame feeder bound to the detector fixture."""
    return FrameFeeder(detector)


@pytest.fixture
def calibrated_feeder(feeder: FrameFeeder, standing_landmarks: LandmarkSet) -> FrameFeeder:
    """Feeder whose detector has completed calibration at the baseline."""
    feeder.calibrate(standing_landmarks)
    return feeder


@pytest.fixture
def precise_profile() -> AnthropometricProfile:
    """170 cm subject with a measured 10 cm eye-to-head offset.

    With the default 480 px span this gives exactly 3.0 px/cm.
    """
    return AnthropometricProfile(user_height_cm=170.0, eye_to_head_vertex_cm=10.0)


@pytest.fixture
def estimated_profile() -> AnthropometricProfile:
    """170 cm subject without a measured eye-to-head offset."""
    return AnthropometricProfile(user_height_cm=170.0, heel_to_hand_reach_cm=220.0)
