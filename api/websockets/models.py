"""
Pydantic models for posture WebSocket control messages.

Text frames sent by the client are JSON objects discriminated by ``type``.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from posture.models import PrivacyMode


class _Control(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SensitivityMessage(_Control):
    """Change the classification strictness."""
    type: Literal["sensitivity"]
    level: int = Field(..., ge=1, le=10, description="1 = lenient, 10 = strict")


class CalibrateMessage(_Control):
    """Capture the next visible pose as the baseline."""
    type: Literal["calibrate"]


class PrivacyMessage(_Control):
    """Select how the video under the skeleton is obscured."""
    type: Literal["privacy"]
    mode: PrivacyMode


class WritingModeMessage(_Control):
    """Suppress all posture alerts while writing or leaning over the desk."""
    type: Literal["writing_mode"]
    enabled: bool


class SkeletonColorMessage(_Control):
    type: Literal["skeleton_color"]
    color: str = Field(..., min_length=1)


class RenderMessage(_Control):
    """Toggle sending rendered overlay frames back to the client."""
    type: Literal["render"]
    enabled: bool


class TimerMessage(_Control):
    """Seconds of sustained bad posture before an alert fires."""
    type: Literal["timer"]
    seconds: int = Field(..., gt=0)


class StopMessage(_Control):
    """End the monitoring session; the baseline is kept."""
    type: Literal["stop"]


ControlMessage = Annotated[
    Union[
        SensitivityMessage,
        CalibrateMessage,
        PrivacyMessage,
        WritingModeMessage,
        SkeletonColorMessage,
        RenderMessage,
        TimerMessage,
        StopMessage,
    ],
    Field(discriminator="type"),
]

control_message_adapter = TypeAdapter(ControlMessage)


def parse_control_message(raw: str) -> ControlMessage:
    """Validate a JSON control message; raises pydantic.ValidationError."""
    return control_message_adapter.validate_json(raw)
