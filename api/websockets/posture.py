"""
WebSocket handler for real-time posture tracking.

Binary messages carry encoded camera frames; text messages carry JSON
control messages (see ``api.websockets.models``). Each connection owns its
own estimator, tracker, alert timer and session statistics, and frames are
processed strictly one at a time.
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from config import AppSettings, settings
from posture.alerts import AlertTimer
from posture.exceptions import InvalidAlertTimerError, PostureTrackingError
from posture.models import TrackingOptions
from posture.session import SessionTracker
from posture.tracker import PostureTracker
from video.exceptions import FrameProcessingError
from video.overlay import OverlayRenderer
from video.pose_estimator import PoseEstimator
from video.realtime import decode_frame_data, encode_frame
from .models import (
    CalibrateMessage,
    PrivacyMessage,
    RenderMessage,
    SensitivityMessage,
    SkeletonColorMessage,
    StopMessage,
    TimerMessage,
    WritingModeMessage,
    parse_control_message,
)

logger = logging.getLogger(__name__)


class PostureSession:
    """
    State for one posture WebSocket connection.

    Wraps the tracker with the alert timer, session statistics and the
    overlay rendering switch.
    """

    def __init__(self, app_settings: AppSettings, estimator):
        """
        Initialize a new posture session.

        Args:
            app_settings: Application settings (defaults, limits).
            estimator: Object with ``estimate(frame) -> pose or None``.
        """
        self.settings = app_settings
        self.estimator = estimator

        self.tracker = PostureTracker(
            TrackingOptions(sensitivity=app_settings.DEFAULT_SENSITIVITY),
            publish_interval=app_settings.PUBLISH_INTERVAL_SEC,
            renderer=OverlayRenderer(),
        )
        # Defaults are validated like client control messages.
        self.tracker.set_privacy_mode(app_settings.DEFAULT_PRIVACY_MODE)
        self.tracker.set_skeleton_color(app_settings.DEFAULT_SKELETON_COLOR)
        self.alerts = AlertTimer(app_settings.ALERT_TIMER_SEC, app_settings.NOTIFICATION_COOLDOWN_SEC)
        self.stats = SessionTracker()
        self.render_enabled = False
        self.frame_index = 0

    def state(self) -> Dict[str, Any]:
        options = self.tracker.options
        return {
            "sensitivity": options.sensitivity,
            "privacyMode": options.privacy_mode.value,
            "writingMode": options.suppressed,
            "skeletonColor": options.skeleton_color,
            "render": self.render_enabled,
            "timerSec": self.alerts.timer_seconds,
            "calibrationArmed": self.tracker.baseline_store.is_armed,
            "calibrationCount": self.tracker.baseline_store.calibration_count,
        }

    def handle_frame(self, frame_data: bytes) -> Tuple[List[Dict[str, Any]], Optional[bytes]]:
        """
        Decode, estimate and classify one frame.

        Returns:
            Tuple of (JSON events to send, rendered overlay JPEG or None).
        """
        frame = decode_frame_data(frame_data, self.settings.FRAME_MAX_WIDTH, self.frame_index)
        self.frame_index += 1
        pose = self.estimator.estimate(frame)

        calibrations_before = self.tracker.baseline_store.calibration_count
        overlay = None
        if self.render_enabled:
            rendered, published = self.tracker.process_frame(frame, pose)
            overlay = encode_frame(rendered, self.settings.OVERLAY_JPEG_QUALITY)
        else:
            published = self.tracker.process(pose)

        events: List[Dict[str, Any]] = []
        calibrations = self.tracker.baseline_store.calibration_count
        if calibrations != calibrations_before:
            events.append({"type": "calibrated", "count": calibrations})

        if published is not None:
            self.stats.record(published)
            events.append({"type": "metrics", "data": published.model_dump(by_alias=True)})
            alert = self.alerts.update(published)
            if alert is not None:
                events.append({"type": "alert", "data": alert.model_dump(by_alias=True)})

        return events, overlay

    def handle_control(self, raw: str) -> List[Dict[str, Any]]:
        """
        Apply one JSON control message.

        Raises:
            ValidationError: Malformed message.
            PostureTrackingError: Valid shape but unacceptable value.
        """
        message = parse_control_message(raw)
        replies: List[Dict[str, Any]] = []

        if isinstance(message, SensitivityMessage):
            self.tracker.set_sensitivity(message.level)
        elif isinstance(message, CalibrateMessage):
            self.tracker.calibrate()
        elif isinstance(message, PrivacyMessage):
            self.tracker.set_privacy_mode(message.mode)
        elif isinstance(message, WritingModeMessage):
            self.tracker.set_suppressed_mode(message.enabled)
            self.stats.set_writing_mode(message.enabled)
        elif isinstance(message, SkeletonColorMessage):
            self.tracker.set_skeleton_color(message.color)
        elif isinstance(message, RenderMessage):
            self.render_enabled = message.enabled
        elif isinstance(message, TimerMessage):
            if message.seconds not in self.settings.ALERT_TIMER_CHOICES:
                raise InvalidAlertTimerError(
                    f"Timer must be one of {self.settings.ALERT_TIMER_CHOICES}, got {message.seconds}"
                )
            self.alerts.set_timer(message.seconds)
        elif isinstance(message, StopMessage):
            replies.append({"type": "session_summary", "data": self.stop().model_dump(by_alias=True)})

        replies.append({"type": "ack", "control": message.type, "state": self.state()})
        return replies

    def stop(self):
        """Summarize and reset the session. The baseline survives."""
        summary = self.stats.summary(self.tracker.options.sensitivity)
        self.tracker.set_suppressed_mode(False)
        self.tracker.reset()
        self.alerts.reset()
        self.stats.start()
        logger.info(f"Session stopped: {summary.percent}% good posture over {summary.duration_min} min")
        return summary


async def handle_posture_stream(websocket: WebSocket) -> None:
    """
    Serve one posture tracking connection.

    Args:
        websocket: The accepted-on-entry client connection.
    """
    await websocket.accept()
    session_id = uuid.uuid4().hex[:8]
    logger.info(f"[{session_id}] Posture stream connected")

    try:
        with PoseEstimator.from_settings(settings) as estimator:
            session = PostureSession(settings, estimator)
            await websocket.send_json({"type": "connected", "session": session_id, "state": session.state()})

            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break

                if message.get("bytes") is not None:
                    try:
                        events, overlay = await asyncio.to_thread(session.handle_frame, message["bytes"])
                    except FrameProcessingError as e:
                        logger.warning(f"[{session_id}] {e}")
                        await websocket.send_json({"type": "error", "detail": e.message})
                        continue
                    for event in events:
                        await websocket.send_json(event)
                    if overlay is not None:
                        await websocket.send_bytes(overlay)

                elif message.get("text") is not None:
                    try:
                        replies = session.handle_control(message["text"])
                    except ValidationError as e:
                        await websocket.send_json({"type": "error", "detail": e.errors(include_url=False, include_context=False)})
                        continue
                    except PostureTrackingError as e:
                        await websocket.send_json({"type": "error", "detail": e.message})
                        continue
                    for reply in replies:
                        await websocket.send_json(reply)

    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"[{session_id}] Posture stream failed: {e}", exc_info=True)
        try:
            await websocket.close(code=1011)
        except RuntimeError:
            pass
    finally:
        logger.info(f"[{session_id}] Posture stream closed")
