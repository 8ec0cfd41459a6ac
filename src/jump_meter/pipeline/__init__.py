"""Frame pipeline: the streaming detector and recording replay."""

from jump_meter.pipeline.detector import JumpHeightDetector, measure_batch
from jump_meter.pipeline.recording import load_recording, parse_frame, replay

__all__ = ["JumpHeightDetector", "measure_batch", "load_recording", "parse_frame", "replay"]
