# config.py
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    # --- Metadata ---
    APP_NAME: str = "Backwatch Posture API"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Real-time posture classification over a webcam landmark stream"

    # --- Logging ---
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")
    LOG_FILE: Optional[str] = Field(None, env="LOG_FILE")
    JSON_LOGS: bool = Field(False, env="JSON_LOGS")

    # --- CORS ---
    ALLOWED_ORIGINS: List[str] = Field(["*"], env="ALLOWED_ORIGINS")

    # --- Tracking ---
    DEFAULT_SENSITIVITY: int = Field(5, ge=1, le=10, env="DEFAULT_SENSITIVITY")
    PUBLISH_INTERVAL_SEC: float = Field(0.1, gt=0.0, env="PUBLISH_INTERVAL_SEC")
    DEFAULT_PRIVACY_MODE: str = Field("none", env="DEFAULT_PRIVACY_MODE")
    DEFAULT_SKELETON_COLOR: str = Field("green", env="DEFAULT_SKELETON_COLOR")

    # --- Alerts ---
    ALERT_TIMER_SEC: int = Field(60, env="ALERT_TIMER_SEC")
    ALERT_TIMER_CHOICES: List[int] = Field(
        [5, 10, 15, 30, 45, 60, 90, 120, 180, 300], env="ALERT_TIMER_CHOICES"
    )
    NOTIFICATION_COOLDOWN_SEC: int = Field(3600, ge=0, env="NOTIFICATION_COOLDOWN_SEC")

    # --- Pose estimator (MediaPipe) ---
    POSE_MODEL_COMPLEXITY: int = Field(1, ge=0, le=2, env="POSE_MODEL_COMPLEXITY")
    POSE_MIN_DETECTION_CONFIDENCE: float = Field(0.5, ge=0.0, le=1.0, env="POSE_MIN_DETECTION_CONFIDENCE")
    POSE_MIN_TRACKING_CONFIDENCE: float = Field(0.5, ge=0.0, le=1.0, env="POSE_MIN_TRACKING_CONFIDENCE")

    # --- Frames ---
    FRAME_MAX_WIDTH: int = Field(1280, ge=160, le=3840, env="FRAME_MAX_WIDTH")
    OVERLAY_JPEG_QUALITY: int = Field(80, ge=10, le=100, env="OVERLAY_JPEG_QUALITY")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = AppSettings()
