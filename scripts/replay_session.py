#!/usr/bin/env python3
"""Replay a recorded landmark stream and report the measured jump.

Feeds every frame of a JSON Lines recording through the detector, prints
the final height and spike reach, and optionally writes per-frame results
to CSV for inspection.
"""

from __future__ import annotations

import argparse
import csv
import sys
from pathlib import Path

from jump_meter.core.config import get_settings
from jump_meter.core.exceptions import JumpMeterError
from jump_meter.core.logging import get_logger, setup_logging
from jump_meter.core.types import AnthropometricProfile, MeasurementSnapshot
from jump_meter.pipeline.recording import replay

logger = get_logger(__name__)

CSV_COLUMNS = [
    "frame",
    "is_calibrated",
    "calibration_progress",
    "stability_progress",
    "current_hip_y_px",
    "baseline_hip_y_px",
    "depth_variation",
    "frame_valid",
    "px_per_cm",
    "max_height_cm",
    "max_height_lower_cm",
    "max_height_upper_cm",
    "max_spike_reach_cm",
    "position_warning",
]


def print_summary(snapshot: MeasurementSnapshot, frame_count: int) -> None:
    """Print the final measurement."""
    debug = snapshot.debug

    print("\n" + "=" * 50)
    print("REPLAY RESULT")
    print("=" * 50)
    print(f"Frames processed:  {frame_count}")
    print(f"Calibrated:        {'yes' if debug.is_calibrated else 'no'}")
    print(f"Calibration:       {debug.calibration_progress}/{debug.calibration_frames_needed}")
    print(f"Scale:             {debug.px_per_cm:.3f} px/cm")

    if not debug.is_calibrated:
        print("\nNo measurement: calibration never completed")
        return

    if snapshot.has_precise_anthropometry:
        print(f"\nMax height:        {snapshot.max_height_cm:.1f} cm")
    else:
        print(
            f"\nMax height:        {snapshot.max_height_cm:.1f} cm "
            f"({snapshot.max_height_lower_bound_cm:.1f} - "
            f"{snapshot.max_height_upper_bound_cm:.1f})"
        )

    if snapshot.max_spike_reach_cm != snapshot.max_height_cm:
        print(f"Max spike reach:   {snapshot.max_spike_reach_cm:.1f} cm")

    if debug.user_height_cm == 0.0:
        print("\nNote: no body height given, values are in pixels")


def write_csv(path: Path, snapshots: list[MeasurementSnapshot]) -> None:
    """Write one row per frame."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_COLUMNS)
        for i, s in enumerate(snapshots):
            d = s.debug
            writer.writerow(
                [
                    i,
                    d.is_calibrated,
                    d.calibration_progress,
                    f"{d.stability_progress:.3f}",
                    f"{d.current_hip_y_px:.2f}",
                    f"{d.baseline_hip_y_px:.2f}",
                    f"{d.depth_variation:.2f}",
                    d.frame_valid,
                    f"{d.px_per_cm:.4f}",
                    f"{s.max_height_cm:.2f}",
                    f"{s.max_height_lower_bound_cm:.2f}",
                    f"{s.max_height_upper_bound_cm:.2f}",
                    f"{s.max_spike_reach_cm:.2f}",
                    d.position_warning or "",
                ]
            )
    logger.info("Results saved to %s", path)


def main() -> int:
    """Run replay script."""
    parser = argparse.ArgumentParser(description="Replay a recorded landmark stream")
    parser.add_argument(
        "recording",
        type=Path,
        help="Path to JSON Lines landmark recording",
    )
    parser.add_argument(
        "--height",
        type=float,
        help="Subject standing height in cm",
    )
    parser.add_argument(
        "--eye-to-head",
        type=float,
        help="Measured eye-to-head-vertex distance in cm",
    )
    parser.add_argument(
        "--reach",
        type=float,
        default=0.0,
        help="Standing heel-to-hand reach in cm",
    )
    parser.add_argument(
        "--csv",
        type=Path,
        help="Output CSV for per-frame results",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: from settings)",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(args.log_level or settings.logging.level, settings.logging.file)

    try:
        profile = None
        if args.height is not None:
            profile = AnthropometricProfile(
                user_height_cm=args.height,
                eye_to_head_vertex_cm=args.eye_to_head,
                heel_to_hand_reach_cm=args.reach,
            )

        snapshots = replay(args.recording, profile=profile, settings=settings)
    except JumpMeterError as e:
        logger.error("Replay failed: %s", e)
        return 1

    if not snapshots:
        logger.warning("Recording contains no frames")
        return 1

    print_summary(snapshots[-1], len(snapshots))

    if args.csv:
        write_csv(args.csv, snapshots)

    return 0


if __name__ == "__main__":
    sys.exit(main())
