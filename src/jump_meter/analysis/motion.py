"""Depth-based rejection of approach/retreat motion after calibration.

Walking toward the camera also lifts the hips in the image, so frames whose
depth drifts from the calibrated stance are not trusted as jump frames.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

import numpy as np

from jump_meter.core.config import MotionFilterSettings
from jump_meter.core.logging import get_logger

logger = get_logger(__name__)

CLOSER_WARNING = "You moved closer to the camera - step back to your starting position"
FARTHER_WARNING = "You moved farther away from the camera - step forward to your starting position"


@dataclass(frozen=True, slots=True)
class MotionCheck:
    """Result of validating one calibrated frame.

    Attributes:
        is_valid: All depth checks passed
        depth_variation: Absolute depth difference from the baseline
        warning: Directional position hint, independent of is_valid
    """

    is_valid: bool
    depth_variation: float
    warning: str | None = None


class MotionValidityFilter:
    """Three depth checks; a frame is valid only if all pass.

    1. Depth vs. the recent-history average (once enough samples exist)
    2. Depth vs. the calibration baseline depth
    3. Depth vs. the recent-history average at a stricter drift threshold
    """

    def __init__(self, settings: MotionFilterSettings | None = None) -> None:
        """Initialize filter with settings.

        Args:
            settings: Motion filter parameters (uses defaults if None)
        """
        self.settings = settings or MotionFilterSettings()
        self._depth_history: deque[float] = deque(maxlen=self.settings.depth_history_size)
        self._average_depth: float | None = None
        self._warning_active = False

    @property
    def history_length(self) -> int:
        return len(self._depth_history)

    @property
    def average_depth(self) -> float | None:
        """Running average over the depth history once established."""
        return self._average_depth

    def reset(self) -> None:
        """Clear depth history."""
        self._depth_history.clear()
        self._average_depth = None
        self._warning_active = False

    def check(self, depth: float, baseline_depth: float) -> MotionCheck:
        """Validate a frame's hip depth.

        Args:
            depth: Current hip center depth
            baseline_depth: Depth recorded during calibration

        Returns:
            MotionCheck with validity, variation and optional warning
        """
        threshold = self.settings.depth_threshold
        self._depth_history.append(depth)

        if len(self._depth_history) >= self.settings.min_depth_samples:
            self._average_depth = float(np.mean(self._depth_history))

        baseline_variation = abs(depth - baseline_depth)
        warning = self._position_warning(depth, baseline_depth)

        is_valid = True

        if len(self._depth_history) >= self.settings.min_depth_samples:
            history_variation = abs(depth - self._average_depth)
            if history_variation > threshold:
                logger.debug(
                    "Depth variation too high: %.1f > %.1f - likely approaching/moving away",
                    history_variation,
                    threshold,
                )
                is_valid = False

        if baseline_variation > threshold:
            logger.debug(
                "Depth changed significantly from baseline: %.1f > %.1f",
                baseline_variation,
                threshold,
            )
            is_valid = False

        if self._average_depth is not None:
            drift_threshold = threshold * self.settings.drift_factor
            drift = abs(depth - self._average_depth)
            if drift > drift_threshold:
                logger.debug("Average depth difference too high: %.1f > %.1f", drift, drift_threshold)
                is_valid = False

        return MotionCheck(is_valid=is_valid, depth_variation=baseline_variation, warning=warning)

    def _position_warning(self, depth: float, baseline_depth: float) -> str | None:
        deviation = depth - baseline_depth
        limit = self.settings.depth_threshold * self.settings.warning_factor

        if abs(deviation) <= limit:
            if self._warning_active:
                logger.info("Back at starting position")
            self._warning_active = False
            return None

        warning = CLOSER_WARNING if deviation < 0 else FARTHER_WARNING
        if not self._warning_active:
            logger.warning("Position drift %.1f from baseline depth: %s", deviation, warning)
        self._warning_active = True
        return warning
