"""
Pydantic models and option types for the posture tracker.

Provides the published metrics record plus the small option struct the
tracker reads fresh on every frame.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .constants import MAX_SENSITIVITY, MIN_SENSITIVITY


class PrivacyMode(str, Enum):
    """How the raw video is obscured under the skeleton."""
    NONE = "none"
    PIXELATE = "pixelate"
    BLUR = "blur"
    BLACKOUT = "blackout"


SKELETON_COLORS = {
    "green": "#34C759",
    "blue": "#0A84FF",
    "lightblue": "#50D2E8",
    "yellow": "#FFD60A",
    "white": "#FFFFFF",
}
ALERT_COLOR = "#FF3B30"
SPINE_NEUTRAL_COLOR = "#F2F2F7"


@dataclass
class TrackingOptions:
    """Operator settings, read by the tracker on every frame."""
    sensitivity: int = 5
    suppressed: bool = False
    privacy_mode: PrivacyMode = PrivacyMode.NONE
    skeleton_color: str = "green"

    @property
    def skeleton_hex(self) -> str:
        return SKELETON_COLORS[self.skeleton_color]


class PostureMetrics(BaseModel):
    """Metrics published for one accepted frame."""
    neck_angle: float = Field(0.0, ge=0.0, le=180.0, description="Neck angle in degrees")
    screen_distance: float = Field(0.0, ge=0.0, description="Estimated camera distance in cm")
    slouch_factor: float = Field(0.0, description="Mean shoulder height (normalized y)")
    head_offset: float = Field(0.0, ge=0.0, description="Lateral nose offset from shoulder centre")
    is_optimal: bool = False
    is_warning: bool = False
    is_alarm: bool = False
    is_neck_warning: bool = False
    person_visible: bool = False

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def neutral(cls) -> "PostureMetrics":
        """Zeroed record for frames without a visible person."""
        return cls()


class AlertEvent(BaseModel):
    """Bad posture held for the full alert timer."""
    duration_sec: float = Field(..., ge=0.0)
    is_alarm: bool
    notify: bool = Field(..., description="False while the notification cooldown is active")

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class SessionSummary(BaseModel):
    """Summary of a monitoring session."""
    percent: int = Field(..., ge=0, le=100, description="Share of visible frames with good posture")
    duration_min: int = Field(..., ge=0)
    sensitivity: int = Field(..., ge=MIN_SENSITIVITY, le=MAX_SENSITIVITY)
    writing_min: int = Field(..., ge=0)
    grade: Literal["good", "fair", "poor"]

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
