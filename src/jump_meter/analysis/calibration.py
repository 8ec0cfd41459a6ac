"""Baseline calibration from a window of still, fully visible frames.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

import numpy as np

from jump_meter.core.config import CalibrationSettings
from jump_meter.core.logging import get_logger
from jump_meter.core.types import LandmarkSet
from jump_meter.vision.filters import RunningAverage
from jump_meter.vision.geometry import full_body_pixel_span

logger = get_logger(__name__)


@dataclass
class CalibrationState:
    """Baseline and scale established during calibration.

    Attributes:
        frame_count: Calibration frames consumed so far
        baseline_vertical: Running average of hip center y (px)
        baseline_depth: Running average of hip center depth
        body_span_samples: Eye-to-heel pixel spans from the second half
        px_per_cm: Pixel-to-centimeter scale (1.0 until anthropometry)
        is_calibrated: Whether the calibration window has completed
    """

    frame_count: int = 0
    baseline_vertical: float = 0.0
    baseline_depth: float = 0.0
    body_span_samples: deque[float] = field(default_factory=lambda: deque(maxlen=30))
    px_per_cm: float = 1.0
    is_calibrated: bool = False

    @property
    def mean_body_span(self) -> float | None:
        """Mean eye-to-heel span in pixels, None if nothing was sampled."""
        if not self.body_span_samples:
            return None
        return float(np.mean(self.body_span_samples))


class BaselineCalibrator:
    """Accumulates the resting baseline over a fixed number of frames.

    Every accepted frame folds into a running average of hip position and
    depth. Body spans are only sampled in the second half of the window,
    once the baseline has settled.
    """

    def __init__(self, settings: CalibrationSettings | None = None) -> None:
        """Initialize calibrator with settings.

        Args:
            settings: Calibration settings (uses defaults if None)
        """
        self.settings = settings or CalibrationSettings()
        self._vertical = RunningAverage()
        self._depth = RunningAverage()
        self.state = self._fresh_state()

    @property
    def is_calibrated(self) -> bool:
        return self.state.is_calibrated

    @property
    def progress(self) -> float:
        """Fraction of the calibration window completed."""
        return min(self.state.frame_count / self.settings.target_frames, 1.0)

    def reset(self) -> None:
        """Discard all calibration progress."""
        self._vertical.reset()
        self._depth.reset()
        self.state = self._fresh_state()

    def add_frame(self, vertical: float, depth: float, landmarks: LandmarkSet) -> bool:
        """Fold one still frame into the baseline.

        Args:
            vertical: Hip center y in pixels
            depth: Hip center depth
            landmarks: Frame landmarks, used for body span sampling

        Returns:
            True if this frame completed calibration
        """
        state = self.state
        if state.is_calibrated:
            return False

        state.frame_count += 1
        n = state.frame_count
        state.baseline_vertical = self._vertical.add(vertical)
        state.baseline_depth = self._depth.add(depth)

        if n > self.settings.target_frames / 2:
            span = full_body_pixel_span(landmarks)
            if span is not None:
                state.body_span_samples.append(span)

        logger.debug(
            "Calibration frame %d/%d - baseline y: %.1f, depth: %.1f",
            n,
            self.settings.target_frames,
            state.baseline_vertical,
            state.baseline_depth,
        )

        if n < self.settings.target_frames:
            return False

        self._finalize()
        return True

    def _finalize(self) -> None:
        state = self.state
        state.px_per_cm = self.settings.default_px_per_cm

        mean_span = state.mean_body_span
        if mean_span is None:
            logger.warning(
                "No full body measurements collected - height accuracy will be degraded"
            )
        else:
            logger.info(
                "Collected %d body span samples (mean %.1f px)",
                len(state.body_span_samples),
                mean_span,
            )

        state.is_calibrated = True
        logger.info(
            "Calibration completed: baseline y %.1f px, depth %.1f",
            state.baseline_vertical,
            state.baseline_depth,
        )

    def _fresh_state(self) -> CalibrationState:
        return CalibrationState(
            body_span_samples=deque(maxlen=self.settings.span_buffer_size),
            px_per_cm=self.settings.default_px_per_cm,
        )
