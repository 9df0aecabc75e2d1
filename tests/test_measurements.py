"""Tests for metric extraction."""

import pytest

from posture.landmarks import PoseLandmark as P
from posture.measurements import (
    chin_down_penalty,
    ear_tilt_degrees,
    estimate_screen_distance,
    extract_measurements,
)
from utils.math import Point
from _helpers import UPPER_BODY, make_pose, shift


class TestUprightMeasurements:

    @pytest.fixture
    def upright(self):
        return extract_measurements(make_pose())

    def test_neck_angle_is_straight(self, upright):
        assert upright.neck_angle == pytest.approx(180.0)

    def test_shoulder_metrics(self, upright):
        assert upright.shoulder_span == pytest.approx(0.24)
        assert upright.shoulder_height == pytest.approx(0.50)
        assert upright.ear_shoulder_gap == pytest.approx(0.21)

    def test_head_centered(self, upright):
        assert upright.head_offset == pytest.approx(0.0)
        assert upright.head_turned is False

    def test_torso(self, upright):
        assert upright.hip_center_y == pytest.approx(0.85)
        assert upright.torso_extent == pytest.approx(0.35)

    def test_screen_distance(self, upright):
        assert upright.screen_distance == pytest.approx(144.34, abs=0.01)


class TestNeckAngle:

    def test_forward_head_lowers_angle(self):
        pose = shift(make_pose(), [P.LEFT_EAR, P.RIGHT_EAR], dx=0.1)
        assert extract_measurements(pose).neck_angle == pytest.approx(154.54, abs=0.01)

    def test_lateral_tilt_penalty(self):
        # Ear line rises 0.06 over 0.12: about 26.6° of tilt, 0.6 of it is removed.
        pose = make_pose({P.LEFT_EAR: (0.56, 0.26), P.RIGHT_EAR: (0.44, 0.32)})
        tilt = ear_tilt_degrees(pose[P.LEFT_EAR], pose[P.RIGHT_EAR])
        assert tilt == pytest.approx(26.565, abs=0.01)
        assert extract_measurements(pose).neck_angle == pytest.approx(180.0 - 0.6 * tilt)

    def test_chin_down_penalty_applies_past_threshold(self):
        # Nose drop ratio 0.15 / 0.21 ≈ 0.714 -> (0.714 - 0.45) * 60 ≈ 15.9°
        pose = make_pose({P.NOSE: (0.50, 0.44)})
        with_penalty = extract_measurements(pose)
        without = extract_measurements(pose, apply_chin_penalty=False)
        assert without.neck_angle == pytest.approx(180.0)
        assert with_penalty.neck_angle == pytest.approx(180.0 - (0.15 / 0.21 - 0.45) * 60, abs=1e-6)

    def test_chin_penalty_not_triggered_below_ratio(self):
        assert chin_down_penalty(Point(0.5, 0.38), Point(0.5, 0.29), Point(0.5, 0.5)) == 0.0

    def test_neck_angle_never_negative(self):
        pose = make_pose({P.LEFT_EAR: (0.50, 0.10), P.RIGHT_EAR: (0.50, 0.40), P.NOSE: (0.5, 0.49)})
        assert extract_measurements(pose).neck_angle >= 0.0


class TestOtherMetrics:

    def test_head_offset(self):
        pose = shift(make_pose(), [P.NOSE], dx=0.07)
        assert extract_measurements(pose).head_offset == pytest.approx(0.07)

    def test_head_turned_when_ears_overlap(self):
        pose = make_pose({P.LEFT_EAR: (0.52, 0.29), P.RIGHT_EAR: (0.49, 0.29)})
        assert extract_measurements(pose).head_turned is True

    def test_missing_hips_leave_torso_unknown(self):
        m = extract_measurements(make_pose(count=23))
        assert m.hip_center_y is None
        assert m.torso_extent is None

    def test_low_confidence_hips_leave_torso_unknown(self):
        m = extract_measurements(make_pose({P.RIGHT_HIP: (0.42, 0.85, 0.2)}))
        assert m.torso_extent is None

    def test_raised_shoulders_shrink_gap(self):
        pose = shift(make_pose(), [P.LEFT_SHOULDER, P.RIGHT_SHOULDER], dy=-0.08)
        m = extract_measurements(pose)
        assert m.ear_shoulder_gap == pytest.approx(0.13)
        assert m.shoulder_height == pytest.approx(0.42)

    def test_whole_body_scale(self):
        m = extract_measurements(make_pose(scale=0.5))
        assert m.shoulder_span == pytest.approx(0.12)
        assert m.screen_distance == pytest.approx(2 * 144.34, abs=0.02)

    def test_upper_body_shift_keeps_angle(self):
        pose = shift(make_pose(), UPPER_BODY, dy=-0.1)
        assert extract_measurements(pose).neck_angle == pytest.approx(180.0)


def test_screen_distance_zero_span():
    assert estimate_screen_distance(0.0) == 0.0
