# /posture/session.py

"""Session statistics: good-posture share and time spent in writing mode."""

import time
from typing import Callable, Optional

from .models import PostureMetrics, SessionSummary

GOOD_GRADE_PERCENT = 80
FAIR_GRADE_PERCENT = 50


def grade_for(percent: int) -> str:
    if percent >= GOOD_GRADE_PERCENT:
        return "good"
    if percent >= FAIR_GRADE_PERCENT:
        return "fair"
    return "poor"


class SessionTracker:
    """
    Accumulates statistics over one monitoring session.

    Only frames with a visible person count; a frame is good when it
    carries neither warning nor alarm.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self.start()

    def start(self) -> None:
        self.started_at = self._clock()
        self.total_frames = 0
        self.good_frames = 0
        self._writing_since: Optional[float] = None
        self._writing_seconds = 0.0

    def record(self, metrics: PostureMetrics) -> None:
        if not metrics.person_visible:
            return
        self.total_frames += 1
        if not (metrics.is_warning or metrics.is_alarm):
            self.good_frames += 1

    def set_writing_mode(self, enabled: bool) -> None:
        now = self._clock()
        if enabled and self._writing_since is None:
            self._writing_since = now
        elif not enabled and self._writing_since is not None:
            self._writing_seconds += now - self._writing_since
            self._writing_since = None

    def writing_seconds(self, now: Optional[float] = None) -> float:
        now = self._clock() if now is None else now
        total = self._writing_seconds
        if self._writing_since is not None:
            total += now - self._writing_since
        return total

    def summary(self, sensitivity: int) -> SessionSummary:
        now = self._clock()
        percent = round(self.good_frames / self.total_frames * 100) if self.total_frames else 0
        return SessionSummary(
            percent=percent,
            duration_min=round((now - self.started_at) / 60),
            sensitivity=sensitivity,
            writing_min=round(self.writing_seconds(now) / 60),
            grade=grade_for(percent),
        )
