"""Tests for sustained-posture alerts and session statistics."""

import pytest

from posture.alerts import AlertTimer
from posture.models import PostureMetrics
from posture.session import SessionTracker, grade_for
from _helpers import FakeClock

GOOD = PostureMetrics(is_optimal=True, person_visible=True, neck_angle=175.0)
WARNING = PostureMetrics(is_warning=True, person_visible=True, neck_angle=120.0)
ALARM = PostureMetrics(is_alarm=True, person_visible=True, neck_angle=170.0)
ABSENT = PostureMetrics.neutral()


class TestAlertTimer:

    def test_fires_after_timer(self):
        timer = AlertTimer(timer_seconds=10, cooldown_seconds=3600)
        assert timer.update(WARNING, now=0.0) is None
        assert timer.active
        assert timer.update(WARNING, now=9.9) is None
        event = timer.update(WARNING, now=10.0)
        assert event is not None
        assert event.duration_sec == pytest.approx(10.0)
        assert event.notify and not event.is_alarm

    def test_good_frame_resets(self):
        timer = AlertTimer(timer_seconds=10)
        timer.update(WARNING, now=0.0)
        timer.update(GOOD, now=5.0)
        assert not timer.active
        assert timer.update(WARNING, now=9.0) is None
        assert timer.update(WARNING, now=15.0) is None
        assert timer.update(WARNING, now=19.0) is not None

    def test_absent_person_resets(self):
        timer = AlertTimer(timer_seconds=10)
        timer.update(ALARM, now=0.0)
        timer.update(ABSENT, now=5.0)
        assert not timer.active

    def test_refires_and_respects_cooldown(self):
        timer = AlertTimer(timer_seconds=10, cooldown_seconds=25)
        timer.update(ALARM, now=0.0)
        first = timer.update(ALARM, now=10.0)
        second = timer.update(ALARM, now=20.0)
        third = timer.update(ALARM, now=30.0)
        assert first.notify and first.is_alarm
        assert second is not None and not second.notify
        assert third is not None and not third.notify
        assert timer.update(ALARM, now=40.0).notify

    def test_set_timer_restarts_count(self):
        timer = AlertTimer(timer_seconds=60)
        timer.update(WARNING, now=0.0)
        timer.set_timer(30)
        assert timer.timer_seconds == 30
        assert not timer.active

    def test_serializes_with_camel_case(self):
        timer = AlertTimer(timer_seconds=1)
        timer.update(WARNING, now=0.0)
        event = timer.update(WARNING, now=2.0)
        assert event.model_dump(by_alias=True) == {"durationSec": 2.0, "isAlarm": False, "notify": True}


class TestSessionTracker:

    @pytest.mark.parametrize("percent, grade", [(100, "good"), (80, "good"), (79, "fair"), (50, "fair"), (49, "poor"), (0, "poor")])
    def test_grades(self, percent, grade):
        assert grade_for(percent) == grade

    def test_counts_visible_frames_only(self):
        clock = FakeClock()
        stats = SessionTracker(clock)
        for metrics in (GOOD, GOOD, GOOD, WARNING, ABSENT, ABSENT):
            stats.record(metrics)
        clock.advance(600)
        summary = stats.summary(sensitivity=7)
        assert summary.percent == 75
        assert summary.grade == "fair"
        assert summary.duration_min == 10
        assert summary.sensitivity == 7

    def test_empty_session(self):
        summary = SessionTracker(FakeClock()).summary(sensitivity=5)
        assert summary.percent == 0
        assert summary.grade == "poor"

    def test_writing_time(self):
        clock = FakeClock()
        stats = SessionTracker(clock)
        stats.set_writing_mode(True)
        clock.advance(120)
        stats.set_writing_mode(False)
        clock.advance(60)
        stats.set_writing_mode(True)
        stats.set_writing_mode(True)
        clock.advance(60)
        assert stats.writing_seconds() == pytest.approx(180.0)
        assert stats.summary(5).writing_min == 3

    def test_start_clears_statistics(self):
        clock = FakeClock()
        stats = SessionTracker(clock)
        stats.record(WARNING)
        stats.set_writing_mode(True)
        clock.advance(300)
        stats.start()
        assert stats.total_frames == 0
        assert stats.writing_seconds() == 0.0

    def test_summary_aliases(self):
        data = SessionTracker(FakeClock()).summary(5).model_dump(by_alias=True)
        assert set(data) == {"percent", "durationMin", "sensitivity", "writingMin", "grade"}
