"""Stillness detection that gates the start of calibration.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from jump_meter.core.config import StabilitySettings
from jump_meter.core.logging import get_logger

logger = get_logger(__name__)


class StabilityMonitor:
    """Sliding-window test that the subject has stood still long enough.

    Two independent concerns are tracked:
    - the boolean decision: the most recent window of (vertical, depth)
      samples deviates less than the thresholds from its mean, continuously
      for the required wall-clock duration
    - a 0-1 progress figure for display: sample accumulation fills the
      first half, elapsed stable time fills the second half
    """

    def __init__(self, settings: StabilitySettings | None = None) -> None:
        """Initialize monitor with settings.

        Args:
            settings: Stability parameters (uses defaults if None)
        """
        self.settings = settings or StabilitySettings()
        self._history: deque[tuple[float, float]] = deque(maxlen=self.settings.history_size)
        self._is_stable = False
        self._stable_since: float | None = None

    @property
    def history_length(self) -> int:
        """Number of samples currently held."""
        return len(self._history)

    @property
    def is_stable(self) -> bool:
        """Whether the latest window is within thresholds (timer running)."""
        return self._is_stable

    def reset(self) -> None:
        """Drop history and stop the stability timer."""
        self._history.clear()
        self._is_stable = False
        self._stable_since = None

    def update(
        self,
        sample: tuple[float, float] | None,
        timestamp: float,
    ) -> tuple[bool, float]:
        """Add a (vertical, depth) sample and evaluate stability.

        Args:
            sample: Hip center (vertical px, depth), or None if unavailable
            timestamp: Frame wall-clock time in seconds

        Returns:
            Tuple of (is_stable_enough, progress)
        """
        if sample is None:
            self.reset()
            return False, 0.0

        self._history.append(sample)

        if len(self._history) < self.settings.min_samples:
            return False, self._sample_progress(self.settings.min_samples)

        currently_stable = self._window_is_still()

        if not currently_stable:
            if self._is_stable:
                logger.debug("Movement stability lost - resetting timer")
            self._is_stable = False
            self._stable_since = None
            return False, self._sample_progress(self.settings.history_size)

        if not self._is_stable or self._stable_since is None:
            self._is_stable = True
            self._stable_since = timestamp
            logger.debug("Movement became stable - starting stability timer")

        elapsed = timestamp - self._stable_since
        stable_enough = elapsed >= self.settings.required_duration_s

        return stable_enough, self._time_progress(elapsed)

    def _window_is_still(self) -> bool:
        """Max absolute deviation from the window mean is below thresholds."""
        window = np.asarray(list(self._history)[-self.settings.window_size :], dtype=np.float64)
        deviation = np.abs(window - window.mean(axis=0)).max(axis=0)
        max_vertical, max_depth = float(deviation[0]), float(deviation[1])

        logger.debug("Stability window: vertical var %.1f px, depth var %.1f", max_vertical, max_depth)

        return (
            max_vertical < self.settings.vertical_threshold_px
            and max_depth < self.settings.depth_threshold
        )

    def _sample_progress(self, needed: int) -> float:
        return min(len(self._history) / needed, 1.0) * 0.5

    def _time_progress(self, elapsed: float) -> float:
        fraction = min(max(elapsed / self.settings.required_duration_s, 0.0), 1.0)
        return 0.5 + fraction * 0.5
