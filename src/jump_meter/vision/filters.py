"""Averaging filters for hip position and depth signals."""

from __future__ import annotations

from collections import deque

import numpy as np


class SmoothingFilter:
    """Windowed mean over the most recent hip positions.

    The window starts empty, so the first sample after a reset is returned
    unchanged and the mean widens until the window fills.
    """

    def __init__(self, window_size: int = 10) -> None:
        """Initialize smoothing filter.

        Args:
            window_size: Number of samples averaged
        """
        self.window_size = window_size
        self._window: deque[float] = deque(maxlen=window_size)

    def reset(self) -> None:
        """Empty the window."""
        self._window.clear()

    def update(self, value: float) -> float:
        """Push a sample and return the windowed mean.

        Args:
            value: Raw measurement in pixels

        Returns:
            Mean of the samples currently in the window
        """
        self._window.append(value)
        return float(np.mean(self._window))


class RunningAverage:
    """Cumulative mean over every sample since the last reset.

    Keeps only the count and the current mean, so memory stays constant
    however many samples are added.
    """

    def __init__(self) -> None:
        self._count = 0
        self._mean = 0.0

    def reset(self) -> None:
        self._count = 0
        self._mean = 0.0

    def add(self, value: float) -> float:
        """Fold a sample into the mean and return the updated mean."""
        self._count += 1
        self._mean += (value - self._mean) / self._count
        return self._mean
