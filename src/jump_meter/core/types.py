"""Core data types and structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from jump_meter.core.exceptions import AnthropometryError


@dataclass(frozen=True, slots=True)
class Landmark:
    """A single body landmark in image space.

    x and y are pixel coordinates (y grows downward), z is the estimator's
    relative depth (smaller = nearer the camera) and confidence is the
    in-frame likelihood in [0, 1].
    """

    x: float
    y: float
    z: float
    confidence: float


class LandmarkIndex(Enum):
    """The 33-point body landmark topology shared by MediaPipe and ML Kit."""

    NOSE = 0
    LEFT_EYE_INNER = 1
    LEFT_EYE = 2
    LEFT_EYE_OUTER = 3
    RIGHT_EYE_INNER = 4
    RIGHT_EYE = 5
    RIGHT_EYE_OUTER = 6
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_PINKY = 17
    RIGHT_PINKY = 18
    LEFT_INDEX = 19
    RIGHT_INDEX = 20
    LEFT_THUMB = 21
    RIGHT_THUMB = 22
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28
    LEFT_HEEL = 29
    RIGHT_HEEL = 30
    LEFT_FOOT_INDEX = 31
    RIGHT_FOOT_INDEX = 32


@dataclass(slots=True)
class LandmarkSet:
    """Landmarks detected in a single frame, keyed by LandmarkIndex value."""

    landmarks: dict[int, Landmark] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.landmarks)

    @property
    def is_empty(self) -> bool:
        """True when the estimator found no person in the frame."""
        return not self.landmarks

    @property
    def mean_confidence(self) -> float:
        """Average confidence over all detected landmarks."""
        if not self.landmarks:
            return 0.0
        return sum(lm.confidence for lm in self.landmarks.values()) / len(self.landmarks)

    def get(self, index: LandmarkIndex) -> Landmark | None:
        """Get a specific landmark by its enum index."""
        return self.landmarks.get(index.value)

    def confidence_of(self, index: LandmarkIndex) -> float:
        """Confidence of a landmark, 0.0 when it was not detected."""
        landmark = self.landmarks.get(index.value)
        return landmark.confidence if landmark is not None else 0.0


# Validation bounds for user-entered body measurements
MIN_HEIGHT_CM = 100.0
MAX_HEIGHT_CM = 250.0
MAX_EYE_TO_HEAD_CM = 30.0
MIN_REACH_CM = 150.0
MAX_REACH_CM = 300.0


@dataclass(frozen=True, slots=True)
class AnthropometricProfile:
    """Self-reported body measurements used as the physical scale reference.

    Attributes:
        user_height_cm: Standing height
        eye_to_head_vertex_cm: Measured eye line to top of head, if known
        heel_to_hand_reach_cm: Standing reach added to jump height (0 = unknown)

    Raises:
        AnthropometryError: If any value is outside a plausible human range
    """

    user_height_cm: float
    eye_to_head_vertex_cm: float | None = None
    heel_to_hand_reach_cm: float = 0.0

    def __post_init__(self) -> None:
        if not MIN_HEIGHT_CM <= self.user_height_cm <= MAX_HEIGHT_CM:
            raise AnthropometryError(
                f"Height must be between {MIN_HEIGHT_CM:.0f}-{MAX_HEIGHT_CM:.0f} cm, "
                f"got {self.user_height_cm}"
            )
        if self.eye_to_head_vertex_cm is not None and not (
            0.0 <= self.eye_to_head_vertex_cm <= MAX_EYE_TO_HEAD_CM
        ):
            raise AnthropometryError(
                f"Eye-to-head distance must be between 0-{MAX_EYE_TO_HEAD_CM:.0f} cm, "
                f"got {self.eye_to_head_vertex_cm}"
            )
        if self.heel_to_hand_reach_cm != 0.0 and not (
            MIN_REACH_CM <= self.heel_to_hand_reach_cm <= MAX_REACH_CM
        ):
            raise AnthropometryError(
                f"Heel-to-hand reach must be between {MIN_REACH_CM:.0f}-{MAX_REACH_CM:.0f} cm, "
                f"got {self.heel_to_hand_reach_cm}"
            )

    @property
    def has_precise_offset(self) -> bool:
        """Whether the eye-to-head-vertex offset was measured."""
        return self.eye_to_head_vertex_cm is not None


@dataclass(frozen=True, slots=True)
class DebugInfo:
    """Raw per-frame figures for operator-facing diagnostics."""

    pose_detected: bool = False
    landmarks_detected: int = 0
    confidence_score: float = 0.0
    is_stable: bool = False
    stability_progress: float = 0.0
    calibration_progress: int = 0
    calibration_frames_needed: int = 60
    is_calibrated: bool = False
    current_hip_y_px: float = 0.0
    baseline_hip_y_px: float = 0.0
    hip_movement_px: float = 0.0
    current_depth: float = 0.0
    baseline_depth: float = 0.0
    depth_variation: float = 0.0
    body_span_px: float = 0.0
    px_per_cm: float = 1.0
    user_height_cm: float = 0.0
    eye_to_heel_cm: float = 0.0
    frame_valid: bool = True
    position_warning: str | None = None


@dataclass(frozen=True, slots=True)
class MeasurementSnapshot:
    """Immutable measurement state published after every frame.

    Bounds equal the point estimate unless the scale came from the
    population-average eye-to-heel proportion.
    """

    max_height_cm: float = 0.0
    max_height_lower_bound_cm: float = 0.0
    max_height_upper_bound_cm: float = 0.0
    max_spike_reach_cm: float = 0.0
    max_spike_reach_lower_bound_cm: float = 0.0
    max_spike_reach_upper_bound_cm: float = 0.0
    has_precise_anthropometry: bool = False
    debug: DebugInfo = field(default_factory=DebugInfo)

    @property
    def is_calibrating(self) -> bool:
        """True until the baseline calibration window has completed."""
        return not self.debug.is_calibrated
