"""Application configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VisibilitySettings(BaseSettings):
    """Full-skeleton visibility gate."""

    model_config = SettingsConfigDict(env_prefix="VISIBILITY_")

    confidence_threshold: float = 0.96


class StabilitySettings(BaseSettings):
    """Pre-calibration stillness detection."""

    model_config = SettingsConfigDict(env_prefix="STABILITY_")

    history_size: int = 60
    min_samples: int = 30
    window_size: int = 30
    vertical_threshold_px: float = 15.0
    required_duration_s: float = 2.0

    @property
    def depth_threshold(self) -> float:
        """Depth axis tolerates half the vertical deviation."""
        return self.vertical_threshold_px / 2


class CalibrationSettings(BaseSettings):
    """Baseline calibration window."""

    model_config = SettingsConfigDict(env_prefix="CALIBRATION_")

    target_frames: int = 60
    span_buffer_size: int = 30
    default_px_per_cm: float = 1.0


class MotionFilterSettings(BaseSettings):
    """Depth-based rejection of toward/away-from-camera motion."""

    model_config = SettingsConfigDict(env_prefix="MOTION_")

    depth_history_size: int = 30
    min_depth_samples: int = 10
    depth_threshold: float = 50.0
    drift_factor: float = 0.7
    warning_factor: float = 0.7


class TrackingSettings(BaseSettings):
    """Peak height tracking parameters."""

    model_config = SettingsConfigDict(env_prefix="TRACKING_")

    smoothing_window: int = 10


class AnthropometrySettings(BaseSettings):
    """Population eye-to-heel proportions of stature."""

    model_config = SettingsConfigDict(env_prefix="ANTHRO_")

    eye_to_heel_ratio: float = 0.884
    eye_to_heel_ratio_low: float = 0.877
    eye_to_heel_ratio_high: float = 0.887


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    visibility: VisibilitySettings = Field(default_factory=VisibilitySettings)
    stability: StabilitySettings = Field(default_factory=StabilitySettings)
    calibration: CalibrationSettings = Field(default_factory=CalibrationSettings)
    motion: MotionFilterSettings = Field(default_factory=MotionFilterSettings)
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    anthropometry: AnthropometrySettings = Field(default_factory=AnthropometrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
