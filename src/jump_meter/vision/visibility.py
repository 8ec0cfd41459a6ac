"""Full-skeleton visibility gate for calibration frames."""

from __future__ import annotations

from jump_meter.core.config import VisibilitySettings
from jump_meter.core.logging import get_logger
from jump_meter.core.types import LandmarkIndex, LandmarkSet

logger = get_logger(__name__)

TRACKED_LANDMARKS: tuple[LandmarkIndex, ...] = tuple(LandmarkIndex)


def is_fully_visible(landmarks: LandmarkSet, confidence_threshold: float = 0.96) -> bool:
    """Check that every tracked landmark is present above the threshold.

    A single occluded or blurred joint fails the whole frame; landmarks that
    are missing count as zero confidence.

    Args:
        landmarks: Landmarks for the current frame
        confidence_threshold: Minimum (exclusive) confidence per landmark

    Returns:
        True if all tracked landmarks pass
    """
    failing = [
        index.name
        for index in TRACKED_LANDMARKS
        if landmarks.confidence_of(index) <= confidence_threshold
    ]

    if failing:
        logger.debug(
            "Skeleton not fully visible: %d/%d landmarks below %.2f (%s)",
            len(failing),
            len(TRACKED_LANDMARKS),
            confidence_threshold,
            ", ".join(failing[:5]),
        )
        return False

    return True


class VisibilityGate:
    """Settings-bound wrapper around is_fully_visible."""

    def __init__(self, settings: VisibilitySettings | None = None) -> None:
        self.settings = settings or VisibilitySettings()

    def is_fully_visible(self, landmarks: LandmarkSet) -> bool:
        return is_fully_visible(landmarks, self.settings.confidence_threshold)
