# /posture/measurements.py

"""
Metric extraction: turns a visible pose into semantic posture measurements.

All measurements are in normalized frame units except the neck angle
(degrees) and the screen distance estimate (centimetres).
"""

import math
from dataclasses import dataclass
from typing import Optional

from utils.math import Point, calculate_angle, distance, midpoint
from .constants import (
    CAMERA_HFOV_DEG,
    CHIN_DOWN_GAIN,
    CHIN_DOWN_RATIO,
    HEAD_TURNED_EAR_RATIO,
    MIN_KEYPOINT_VISIBILITY,
    SHOULDER_WIDTH_CM,
    TILT_PENALTY_SCALE,
    VIRTUAL_POINT_OFFSET,
)
from .landmarks import Pose, PoseLandmark, get_landmark, is_confident


@dataclass(frozen=True)
class PoseMeasurements:
    """Posture measurements derived from a single pose."""
    neck_angle: float
    shoulder_span: float
    shoulder_height: float
    head_offset: float
    ear_shoulder_gap: float
    head_turned: bool
    screen_distance: float
    hip_center_y: Optional[float] = None
    torso_extent: Optional[float] = None


def estimate_screen_distance(shoulder_span: float) -> float:
    """Rough camera distance in cm, assuming an average shoulder width."""
    if shoulder_span <= 0:
        return 0.0
    half_fov = math.radians(CAMERA_HFOV_DEG) / 2.0
    return SHOULDER_WIDTH_CM / (2.0 * shoulder_span * math.tan(half_fov))


def ear_tilt_degrees(left_ear, right_ear) -> float:
    """Angle of the ear line against the horizontal, in [0, 90]."""
    dx = abs(right_ear.x - left_ear.x)
    dy = abs(right_ear.y - left_ear.y)
    if dx == 0 and dy == 0:
        return 0.0
    return math.degrees(math.atan2(dy, dx))


def chin_down_penalty(nose, ear_mid, shoulder_mid) -> float:
    """Degrees to subtract when the nose drops far below the ears."""
    span = shoulder_mid.y - ear_mid.y
    if span <= 0:
        return 0.0
    ratio = (nose.y - ear_mid.y) / span
    if ratio <= CHIN_DOWN_RATIO:
        return 0.0
    return (ratio - CHIN_DOWN_RATIO) * CHIN_DOWN_GAIN


def extract_measurements(pose: Pose, apply_chin_penalty: bool = True) -> PoseMeasurements:
    """
    Compute posture measurements from a pose that passed the visibility gate.

    Args:
        pose: Landmark sequence in MediaPipe order.
        apply_chin_penalty: Subtract the chin-down penalty from the neck
            angle. Disabled while writing, where looking down is expected.

    Returns:
        PoseMeasurements for the pose.
    """
    nose = get_landmark(pose, PoseLandmark.NOSE)
    left_shoulder = get_landmark(pose, PoseLandmark.LEFT_SHOULDER)
    right_shoulder = get_landmark(pose, PoseLandmark.RIGHT_SHOULDER)
    left_ear = get_landmark(pose, PoseLandmark.LEFT_EAR)
    right_ear = get_landmark(pose, PoseLandmark.RIGHT_EAR)

    shoulder_mid = midpoint(left_shoulder, right_shoulder)
    shoulder_span = distance(left_shoulder, right_shoulder)
    shoulder_height = shoulder_mid.y

    if left_ear is not None and right_ear is not None:
        ear_mid = midpoint(left_ear, right_ear)
        tilt_penalty = ear_tilt_degrees(left_ear, right_ear) * TILT_PENALTY_SCALE
        ear_spread = abs(right_ear.x - left_ear.x)
        head_turned = ear_spread < HEAD_TURNED_EAR_RATIO * shoulder_span
    else:
        ear_mid = Point(nose.x, nose.y)
        tilt_penalty = 0.0
        head_turned = False

    virtual_point = Point(ear_mid.x, ear_mid.y - VIRTUAL_POINT_OFFSET)
    neck_angle = calculate_angle(virtual_point, ear_mid, shoulder_mid) - tilt_penalty
    if apply_chin_penalty:
        neck_angle -= chin_down_penalty(nose, ear_mid, shoulder_mid)

    hip_center_y = None
    torso_extent = None
    left_hip = get_landmark(pose, PoseLandmark.LEFT_HIP)
    right_hip = get_landmark(pose, PoseLandmark.RIGHT_HIP)
    if is_confident(left_hip, MIN_KEYPOINT_VISIBILITY) and is_confident(right_hip, MIN_KEYPOINT_VISIBILITY):
        hip_center_y = (left_hip.y + right_hip.y) / 2.0
        torso_extent = hip_center_y - shoulder_height

    return PoseMeasurements(
        neck_angle=max(0.0, neck_angle),
        shoulder_span=shoulder_span,
        shoulder_height=shoulder_height,
        head_offset=abs(nose.x - shoulder_mid.x),
        ear_shoulder_gap=shoulder_mid.y - ear_mid.y,
        head_turned=head_turned,
        screen_distance=estimate_screen_distance(shoulder_span),
        hip_center_y=hip_center_y,
        torso_extent=torso_extent,
    )
