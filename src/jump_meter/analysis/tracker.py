"""Maximum jump height tracking from calibrated hip positions.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from jump_meter.analysis.scale import ScaleCalibration
from jump_meter.core.config import TrackingSettings
from jump_meter.core.logging import get_logger
from jump_meter.vision.filters import SmoothingFilter

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class HeightMeasurement:
    """Peak height and spike reach with their confidence bounds (cm)."""

    height_cm: float = 0.0
    height_lower_cm: float = 0.0
    height_upper_cm: float = 0.0
    spike_reach_cm: float = 0.0
    spike_reach_lower_cm: float = 0.0
    spike_reach_upper_cm: float = 0.0


class PeakHeightTracker:
    """Tracks the highest smoothed hip position since calibration.

    Image y grows downward, so a higher hip has a smaller y. The peak only
    ever moves up within an epoch; reset() starts a new one.
    """

    def __init__(self, settings: TrackingSettings | None = None) -> None:
        """Initialize tracker with settings.

        Args:
            settings: Tracking parameters (uses defaults if None)
        """
        self.settings = settings or TrackingSettings()
        self._smoother = SmoothingFilter(self.settings.smoothing_window)
        self._baseline_px: float | None = None
        self._peak_px: float | None = None

    @property
    def baseline_px(self) -> float | None:
        return self._baseline_px

    @property
    def peak_px(self) -> float | None:
        return self._peak_px

    @property
    def displacement_px(self) -> float:
        """Pixel distance between baseline and peak."""
        if self._baseline_px is None or self._peak_px is None:
            return 0.0
        return abs(self._peak_px - self._baseline_px)

    def start(self, baseline_px: float) -> None:
        """Begin tracking against a freshly calibrated baseline."""
        self._smoother.reset()
        self._baseline_px = baseline_px
        self._peak_px = baseline_px

    def reset(self) -> None:
        """Forget baseline and peak."""
        self._smoother.reset()
        self._baseline_px = None
        self._peak_px = None

    def update(self, vertical_px: float) -> bool:
        """Feed a validated hip position.

        Args:
            vertical_px: Raw hip center y in pixels

        Returns:
            True if a new peak was recorded
        """
        smoothed = self._smoother.update(vertical_px)

        if self._peak_px is not None and smoothed >= self._peak_px:
            return False

        self._peak_px = smoothed
        logger.debug("New peak at %.1f px (%.1f px above baseline)", smoothed, self.displacement_px)
        return True

    def height_cm(self, px_per_cm: float) -> float:
        """Peak displacement converted to centimeters."""
        return self.displacement_px / px_per_cm

    def measure(
        self,
        px_per_cm: float,
        scale: ScaleCalibration,
        reach_offset_cm: float = 0.0,
        bounded: bool = False,
    ) -> HeightMeasurement:
        """Build the full measurement for the current peak.

        Args:
            px_per_cm: Active pixel-to-centimeter scale
            scale: Scale calibration supplying the bound ratios
            reach_offset_cm: Standing heel-to-hand reach
            bounded: Whether to widen the estimate into an interval

        Returns:
            HeightMeasurement with height, spike reach and bounds
        """
        height = self.height_cm(px_per_cm)
        lower, upper = scale.height_bounds(height, is_precise=not bounded)

        return HeightMeasurement(
            height_cm=height,
            height_lower_cm=lower,
            height_upper_cm=upper,
            spike_reach_cm=height + reach_offset_cm,
            spike_reach_lower_cm=lower + reach_offset_cm,
            spike_reach_upper_cm=upper + reach_offset_cm,
        )
