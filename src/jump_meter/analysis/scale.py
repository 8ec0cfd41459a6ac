"""Pixel-to-centimeter scale from the subject's self-reported height.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from jump_meter.analysis.calibration import CalibrationState
from jump_meter.core.config import AnthropometrySettings
from jump_meter.core.logging import get_logger
from jump_meter.core.types import AnthropometricProfile

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ScaleResult:
    """Outcome of applying an anthropometric profile."""

    px_per_cm: float
    eye_to_heel_cm: float
    mean_span_px: float
    is_precise: bool


class ScaleCalibration:
    """Converts body height into the scale between pixels and centimeters.

    The eye-to-heel distance is either measured exactly (height minus the
    eye-to-head-vertex offset) or estimated as a fixed proportion of stature.
    When estimated, heights carry an interval derived from the observed
    spread of that proportion.
    """

    def __init__(self, settings: AnthropometrySettings | None = None) -> None:
        self.settings = settings or AnthropometrySettings()

    def eye_to_heel_cm(self, profile: AnthropometricProfile) -> float:
        """Physical eye-to-heel distance for a profile."""
        if profile.eye_to_head_vertex_cm is not None:
            return profile.user_height_cm - profile.eye_to_head_vertex_cm
        return profile.user_height_cm * self.settings.eye_to_heel_ratio

    def apply_anthropometry(
        self,
        state: CalibrationState,
        profile: AnthropometricProfile,
    ) -> ScaleResult | None:
        """Overwrite the calibration scale using collected body spans.

        Args:
            state: Calibration state holding body span samples
            profile: Subject's body measurements

        Returns:
            The applied scale, or None if no span samples exist yet
        """
        mean_span = state.mean_body_span
        if mean_span is None:
            logger.warning("Cannot set pixel-to-cm ratio: no full body measurements available")
            return None

        eye_to_heel = self.eye_to_heel_cm(profile)
        state.px_per_cm = mean_span / eye_to_heel

        logger.info(
            "Pixel-to-cm ratio %.4f (height %.0f cm, eye-to-heel %.1f cm %s, span %.1f px)",
            state.px_per_cm,
            profile.user_height_cm,
            eye_to_heel,
            "measured" if profile.has_precise_offset else "estimated",
            mean_span,
        )

        return ScaleResult(
            px_per_cm=state.px_per_cm,
            eye_to_heel_cm=eye_to_heel,
            mean_span_px=mean_span,
            is_precise=profile.has_precise_offset,
        )

    def height_bounds(self, height_cm: float, is_precise: bool) -> tuple[float, float]:
        """Confidence interval for a height measured with this scale.

        Args:
            height_cm: Point estimate
            is_precise: Whether the eye-to-head offset was measured

        Returns:
            Tuple of (lower, upper); both equal height_cm when precise
        """
        if is_precise:
            return height_cm, height_cm

        ratio = self.settings.eye_to_heel_ratio
        return (
            height_cm * (self.settings.eye_to_heel_ratio_low / ratio),
            height_cm * (self.settings.eye_to_heel_ratio_high / ratio),
        )
