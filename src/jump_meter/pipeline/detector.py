"""Frame processing pipeline orchestration."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable
from dataclasses import replace

from jump_meter.analysis.calibration import BaselineCalibrator, CalibrationState
from jump_meter.analysis.motion import MotionValidityFilter
from jump_meter.analysis.scale import ScaleCalibration, ScaleResult
from jump_meter.analysis.stability import StabilityMonitor
from jump_meter.analysis.tracker import HeightMeasurement, PeakHeightTracker
from jump_meter.core.config import Settings, get_settings
from jump_meter.core.logging import get_logger
from jump_meter.core.types import (
    AnthropometricProfile,
    DebugInfo,
    LandmarkSet,
    MeasurementSnapshot,
)
from jump_meter.vision.geometry import (
    full_body_pixel_span,
    hip_center_depth,
    hip_center_vertical,
)
from jump_meter.vision.visibility import VisibilityGate

logger = get_logger(__name__)


class JumpHeightDetector:
    """Streaming vertical jump measurement for a single subject.

    Coordinates:
    - Visibility gating and stability detection before calibration
    - Baseline calibration and anthropometric scale
    - Depth-based motion filtering after calibration
    - Peak height tracking

    Frames must be fed in arrival order from one producer. Any thread may
    read current_snapshot() at any time; the snapshot is immutable and
    replaced whole after each frame.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize detector with settings.

        Args:
            settings: Application settings (uses defaults if None)
            clock: Time source in seconds, used when a frame has no timestamp
        """
        self.settings = settings or get_settings()
        self._clock = clock
        self._lock = threading.Lock()

        self._gate = VisibilityGate(self.settings.visibility)
        self._stability = StabilityMonitor(self.settings.stability)
        self._calibrator = BaselineCalibrator(self.settings.calibration)
        self._scale = ScaleCalibration(self.settings.anthropometry)
        self._motion = MotionValidityFilter(self.settings.motion)
        self._tracker = PeakHeightTracker(self.settings.tracking)

        self._profile: AnthropometricProfile | None = None
        self._scale_result: ScaleResult | None = None
        self._is_stable = False
        self._stability_progress = 0.0
        self._snapshot = self._initial_snapshot()

    @property
    def profile(self) -> AnthropometricProfile | None:
        """Anthropometric profile in use (survives reset)."""
        return self._profile

    @property
    def calibration(self) -> CalibrationState:
        """Live calibration state."""
        return self._calibrator.state

    @property
    def is_calibrated(self) -> bool:
        return self._calibrator.is_calibrated

    @property
    def stability(self) -> StabilityMonitor:
        return self._stability

    @property
    def motion_filter(self) -> MotionValidityFilter:
        return self._motion

    @property
    def tracker(self) -> PeakHeightTracker:
        return self._tracker

    def current_snapshot(self) -> MeasurementSnapshot:
        """Latest published measurement; never blocks."""
        return self._snapshot

    def set_anthropometry(self, profile: AnthropometricProfile) -> None:
        """Supply the subject's body measurements.

        May be called at any time. If body spans have already been collected
        the scale is recomputed immediately; otherwise it is applied when
        calibration completes.

        Args:
            profile: Subject's body measurements
        """
        with self._lock:
            self._profile = profile
            self._apply_profile()
            self._snapshot = self._publish(self._snapshot.debug)

    def reset(self) -> None:
        """Clear calibration, tracking, stability and motion state.

        The anthropometric profile is kept.
        """
        with self._lock:
            self._stability.reset()
            self._calibrator.reset()
            self._motion.reset()
            self._tracker.reset()
            self._scale_result = None
            self._is_stable = False
            self._stability_progress = 0.0
            self._snapshot = self._initial_snapshot()
        logger.info("Detector reset")

    def process_frame(self, landmarks: LandmarkSet, timestamp: float | None = None) -> None:
        """Advance the pipeline by one frame.

        Args:
            landmarks: Landmarks detected in the frame (empty if no person)
            timestamp: Frame time in seconds (defaults to the detector clock)
        """
        if timestamp is None:
            timestamp = self._clock()

        with self._lock:
            self._process(landmarks, timestamp)

    def _process(self, landmarks: LandmarkSet, timestamp: float) -> None:
        calibrated = self._calibrator.is_calibrated
        visible = calibrated or self._gate.is_fully_visible(landmarks)

        vertical = hip_center_vertical(landmarks) if visible else None
        depth = hip_center_depth(landmarks)
        available = vertical is not None and depth is not None

        frame_valid = True
        warning: str | None = None
        depth_variation = 0.0

        if not calibrated:
            sample = (vertical, depth) if available else None
            was_stable = self._is_stable
            self._is_stable, self._stability_progress = self._stability.update(sample, timestamp)
            if self._is_stable and not was_stable:
                logger.info("Stability achieved - starting calibration")

            if not available:
                if landmarks.is_empty and self._calibrator.state.frame_count > 0:
                    logger.info("No person detected - resetting calibration progress")
                    self._calibrator.reset()
                    self._scale_result = None
            elif self._is_stable and self._calibrator.add_frame(vertical, depth, landmarks):
                self._on_calibrated()

        elif available:
            check = self._motion.check(depth, self._calibrator.state.baseline_depth)
            frame_valid = check.is_valid
            warning = check.warning
            depth_variation = check.depth_variation

            if frame_valid:
                self._tracker.update(vertical)
            else:
                logger.debug("Invalid movement detected - ignoring frame")
        else:
            frame_valid = False

        debug = self._debug_info(
            landmarks,
            vertical=vertical,
            depth=depth,
            depth_variation=depth_variation,
            frame_valid=frame_valid,
            warning=warning,
        )
        self._snapshot = self._publish(debug)

    def _on_calibrated(self) -> None:
        self._tracker.start(self._calibrator.state.baseline_vertical)
        self._motion.reset()
        self._apply_profile()

    def _apply_profile(self) -> None:
        if self._profile is None:
            return
        result = self._scale.apply_anthropometry(self._calibrator.state, self._profile)
        if result is not None:
            self._scale_result = result

    def _measurement(self) -> HeightMeasurement:
        if not self._calibrator.is_calibrated:
            return HeightMeasurement()

        reach = self._profile.heel_to_hand_reach_cm if self._profile is not None else 0.0
        bounded = self._scale_result is not None and not self._scale_result.is_precise

        return self._tracker.measure(
            self._calibrator.state.px_per_cm,
            self._scale,
            reach_offset_cm=reach,
            bounded=bounded,
        )

    def _publish(self, debug: DebugInfo) -> MeasurementSnapshot:
        m = self._measurement()
        return MeasurementSnapshot(
            max_height_cm=m.height_cm,
            max_height_lower_bound_cm=m.height_lower_cm,
            max_height_upper_bound_cm=m.height_upper_cm,
            max_spike_reach_cm=m.spike_reach_cm,
            max_spike_reach_lower_bound_cm=m.spike_reach_lower_cm,
            max_spike_reach_upper_bound_cm=m.spike_reach_upper_cm,
            has_precise_anthropometry=(
                self._scale_result is not None and self._scale_result.is_precise
            ),
            debug=self._refresh_scale_debug(debug),
        )

    def _refresh_scale_debug(self, debug: DebugInfo) -> DebugInfo:
        """Copy of debug with the current scale figures."""
        return replace(
            debug,
            px_per_cm=self._calibrator.state.px_per_cm,
            user_height_cm=self._profile.user_height_cm if self._profile else 0.0,
            eye_to_heel_cm=self._scale_result.eye_to_heel_cm if self._scale_result else 0.0,
        )

    def _debug_info(
        self,
        landmarks: LandmarkSet,
        vertical: float | None,
        depth: float | None,
        depth_variation: float,
        frame_valid: bool,
        warning: str | None,
    ) -> DebugInfo:
        state = self._calibrator.state
        body_span = state.mean_body_span
        if body_span is None:
            body_span = full_body_pixel_span(landmarks) or 0.0

        hip_movement = 0.0
        if state.is_calibrated and vertical is not None:
            hip_movement = abs(vertical - state.baseline_vertical)

        return DebugInfo(
            pose_detected=not landmarks.is_empty,
            landmarks_detected=len(landmarks),
            confidence_score=landmarks.mean_confidence,
            is_stable=self._is_stable,
            stability_progress=self._stability_progress,
            calibration_progress=state.frame_count,
            calibration_frames_needed=self.settings.calibration.target_frames,
            is_calibrated=state.is_calibrated,
            current_hip_y_px=vertical if vertical is not None else 0.0,
            baseline_hip_y_px=state.baseline_vertical,
            hip_movement_px=hip_movement,
            current_depth=depth if depth is not None else 0.0,
            baseline_depth=state.baseline_depth,
            depth_variation=depth_variation,
            body_span_px=body_span,
            frame_valid=frame_valid,
            position_warning=warning,
        )

    def _initial_snapshot(self) -> MeasurementSnapshot:
        return MeasurementSnapshot(
            debug=DebugInfo(
                calibration_frames_needed=self.settings.calibration.target_frames,
                px_per_cm=self.settings.calibration.default_px_per_cm,
                user_height_cm=self._profile.user_height_cm if self._profile else 0.0,
            )
        )


def measure_batch(
    frames: Iterable[tuple[float, LandmarkSet]],
    profile: AnthropometricProfile | None = None,
    settings: Settings | None = None,
) -> list[MeasurementSnapshot]:
    """Process a recorded sequence and return the snapshot after each frame.

    Pure function for batch processing recorded data.

    Args:
        frames: (timestamp, landmarks) pairs in frame order
        profile: Subject's body measurements, if known
        settings: Detector settings

    Returns:
        One MeasurementSnapshot per input frame
    """
    detector = JumpHeightDetector(settings)
    if profile is not None:
        detector.set_anthropometry(profile)

    snapshots: list[MeasurementSnapshot] = []
    for timestamp, landmarks in frames:
        detector.process_frame(landmarks, timestamp)
        snapshots.append(detector.current_snapshot())

    return snapshots
