"""Tests for baseline calibration."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from jump_meter.analysis.calibration import BaselineCalibrator
from jump_meter.core.config import CalibrationSettings
from jump_meter.core.types import LandmarkIndex, LandmarkSet


class TestBaselineCalibrator:
    """Tests for the BaselineCalibrator class."""

    def test_initial_state(self, calibration_settings: CalibrationSettings) -> None:
        """Calibrator should start at zero frames with the default scale."""
        calibrator = BaselineCalibrator(calibration_settings)

        assert calibrator.state.frame_count == 0
        assert calibrator.state.px_per_cm == 1.0
        assert not calibrator.is_calibrated
        assert calibrator.progress == 0.0
        assert calibrator.state.mean_body_span is None

    def test_running_average(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """Baseline should be the running mean of accepted samples."""
        calibrator = BaselineCalibrator(calibration_settings)

        calibrator.add_frame(400.0, 100.0, standing_landmarks)
        calibrator.add_frame(410.0, 110.0, standing_landmarks)
        calibrator.add_frame(420.0, 90.0, standing_landmarks)

        assert calibrator.state.frame_count == 3
        assert calibrator.state.baseline_vertical == pytest.approx(410.0)
        assert calibrator.state.baseline_depth == pytest.approx(100.0)
        assert calibrator.progress == pytest.approx(3 / 60)

    def test_spans_sampled_in_second_half_only(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """Body spans should only be collected after frame 30."""
        calibrator = BaselineCalibrator(calibration_settings)

        for _ in range(30):
            calibrator.add_frame(400.0, 100.0, standing_landmarks)
        assert len(calibrator.state.body_span_samples) == 0

        calibrator.add_frame(400.0, 100.0, standing_landmarks)
        assert len(calibrator.state.body_span_samples) == 1

    def test_baseline_restarts_after_reset(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """Samples from before a reset do not leak into the new baseline."""
        calibrator = BaselineCalibrator(calibration_settings)
        for _ in range(20):
            calibrator.add_frame(300.0, 60.0, standing_landmarks)

        calibrator.reset()
        calibrator.add_frame(400.0, 100.0, standing_landmarks)

        assert calibrator.state.baseline_vertical == 400.0
        assert calibrator.state.baseline_depth == 100.0

    def test_completes_at_target_frames(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """The 60th frame should complete calibration."""
        calibrator = BaselineCalibrator(calibration_settings)

        results = [calibrator.add_frame(400.0, 100.0, standing_landmarks) for _ in range(60)]

        assert results[-1] is True
        assert not any(results[:-1])
        assert calibrator.is_calibrated
        assert calibrator.state.frame_count == 60
        assert calibrator.progress == 1.0
        assert len(calibrator.state.body_span_samples) == 30
        assert calibrator.state.mean_body_span == pytest.approx(480.0)
        assert calibrator.state.px_per_cm == 1.0

    def test_frames_after_completion_ignored(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """Calibrated state should be frozen."""
        calibrator = BaselineCalibrator(calibration_settings)
        for _ in range(60):
            calibrator.add_frame(400.0, 100.0, standing_landmarks)

        assert calibrator.add_frame(300.0, 50.0, standing_landmarks) is False
        assert calibrator.state.frame_count == 60
        assert calibrator.state.baseline_vertical == pytest.approx(400.0)

    def test_completes_without_spans(
        self,
        calibration_settings: CalibrationSettings,
        make_landmarks: Callable[..., LandmarkSet],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Missing heels degrade accuracy but do not block calibration."""
        no_heels = make_landmarks(omit=(LandmarkIndex.LEFT_HEEL, LandmarkIndex.RIGHT_HEEL))
        calibrator = BaselineCalibrator(calibration_settings)

        with caplog.at_level("WARNING", logger="jump_meter"):
            for _ in range(60):
                calibrator.add_frame(400.0, 100.0, no_heels)

        assert calibrator.is_calibrated
        assert calibrator.state.mean_body_span is None
        assert "height accuracy will be degraded" in caplog.text

    def test_reset(
        self,
        calibration_settings: CalibrationSettings,
        standing_landmarks: LandmarkSet,
    ) -> None:
        """Reset should discard all progress."""
        calibrator = BaselineCalibrator(calibration_settings)
        for _ in range(60):
            calibrator.add_frame(400.0, 100.0, standing_landmarks)

        calibrator.reset()

        assert calibrator.state.frame_count == 0
        assert not calibrator.is_calibrated
        assert calibrator.state.baseline_vertical == 0.0
        assert len(calibrator.state.body_span_samples) == 0

    def test_custom_target(self, standing_landmarks: LandmarkSet) -> None:
        """Window length should come from settings."""
        calibrator = BaselineCalibrator(CalibrationSettings(target_frames=10, span_buffer_size=5))

        for _ in range(10):
            calibrator.add_frame(400.0, 100.0, standing_landmarks)

        assert calibrator.is_calibrated
        assert len(calibrator.state.body_span_samples) == 5
