"""Landmark recordings for offline replay and accuracy checks.

A recording is JSON Lines, one frame per line:

    {"t": 0.033, "landmarks": [{"id": 23, "x": 310.0, "y": 402.5, "z": -12.0, "confidence": 0.99}, ...]}
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path

from jump_meter.core.config import Settings
from jump_meter.core.exceptions import RecordingError
from jump_meter.core.logging import get_logger
from jump_meter.core.types import AnthropometricProfile, Landmark, LandmarkSet, MeasurementSnapshot
from jump_meter.pipeline.detector import measure_batch

logger = get_logger(__name__)


def parse_frame(line: str, line_number: int = 0) -> tuple[float, LandmarkSet]:
    """Parse one recording line.

    Args:
        line: JSON object with "t" and "landmarks"
        line_number: Position in the file, for error messages

    Returns:
        Tuple of (timestamp, landmarks)

    Raises:
        RecordingError: If the line is not a valid frame
    """
    try:
        data = json.loads(line)
        timestamp = float(data["t"])
        landmarks = {
            int(item["id"]): Landmark(
                x=float(item["x"]),
                y=float(item["y"]),
                z=float(item["z"]),
                confidence=float(item["confidence"]),
            )
            for item in data["landmarks"]
        }
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise RecordingError(f"Invalid frame on line {line_number}: {e}") from e

    return timestamp, LandmarkSet(landmarks=landmarks)


def load_recording(path: Path) -> Iterator[tuple[float, LandmarkSet]]:
    """Lazily read frames from a recording file.

    Args:
        path: JSON Lines recording

    Yields:
        (timestamp, landmarks) pairs in file order

    Raises:
        RecordingError: If the file is missing or a line is malformed
    """
    try:
        f = open(path, encoding="utf-8")
    except OSError as e:
        raise RecordingError(f"Cannot open recording {path}: {e}") from e

    with f:
        try:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                yield parse_frame(line, line_number)
        except UnicodeDecodeError as e:
            raise RecordingError(f"Recording {path} is not valid UTF-8: {e}") from e


def replay(
    path: Path,
    profile: AnthropometricProfile | None = None,
    settings: Settings | None = None,
) -> list[MeasurementSnapshot]:
    """Run a recording through a fresh detector.

    Args:
        path: JSON Lines recording
        profile: Subject's body measurements, if known
        settings: Detector settings

    Returns:
        Snapshot after every frame
    """
    logger.info("Replaying recording: %s", path)
    snapshots = measure_batch(load_recording(path), profile=profile, settings=settings)
    logger.info("Replayed %d frames", len(snapshots))
    return snapshots
