# /posture/alerts.py

"""
Sustained-bad-posture alerts.

Consumes published metrics and fires once bad posture (warning or alarm)
has been held continuously for the configured timer. After firing the
timer restarts, so a persisting problem fires again one period later.
System notifications are additionally limited by a cooldown.
"""

import time
from typing import Callable, Optional

from utils.logging import get_logger
from .models import AlertEvent, PostureMetrics

logger = get_logger(__name__)


class AlertTimer:
    """Tracks how long bad posture has been held."""

    def __init__(
        self,
        timer_seconds: float = 60.0,
        cooldown_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timer_seconds = timer_seconds
        self.cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._bad_since: Optional[float] = None
        self._last_notification: Optional[float] = None

    @property
    def active(self) -> bool:
        return self._bad_since is not None

    def set_timer(self, seconds: float) -> None:
        self.timer_seconds = seconds
        self._bad_since = None

    def reset(self) -> None:
        self._bad_since = None

    def update(self, metrics: PostureMetrics, now: Optional[float] = None) -> Optional[AlertEvent]:
        """
        Feed one published metrics record.

        Returns:
            An AlertEvent when the timer elapsed, else None.
        """
        now = self._clock() if now is None else now

        if not metrics.person_visible or not (metrics.is_warning or metrics.is_alarm):
            self._bad_since = None
            return None

        if self._bad_since is None:
            self._bad_since = now
            return None

        duration = now - self._bad_since
        if duration < self.timer_seconds:
            return None

        notify = (
            self._last_notification is None
            or now - self._last_notification >= self.cooldown_seconds
        )
        if notify:
            self._last_notification = now
        self._bad_since = now

        logger.info(f"Bad posture held for {duration:.1f}s (notify={notify})")
        return AlertEvent(duration_sec=duration, is_alarm=metrics.is_alarm, notify=notify)
