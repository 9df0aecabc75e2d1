# /posture/visibility.py

"""
Visibility gate: decides whether a pose is a real, in-frame person.

The estimator happily reports phantom or half-collapsed skeletons when
nobody sits in front of the camera; everything downstream assumes the
gate has already rejected those.
"""

from typing import Optional

from utils.math import distance
from .constants import (
    FRAME_BOUND_MAX,
    FRAME_BOUND_MIN,
    MIN_KEYPOINT_VISIBILITY,
    MIN_LANDMARKS,
    MIN_SHOULDER_SPAN,
)
from .landmarks import Landmark, Pose, PoseLandmark, get_landmark, is_confident

_KEYPOINTS = (PoseLandmark.NOSE, PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER)


def _in_frame(landmark: Landmark) -> bool:
    return (
        FRAME_BOUND_MIN <= landmark.x <= FRAME_BOUND_MAX
        and FRAME_BOUND_MIN <= landmark.y <= FRAME_BOUND_MAX
    )


def is_person_visible(pose: Optional[Pose]) -> bool:
    """
    Return True when the pose represents a confidently tracked person.

    All of the following must hold: at least 13 landmarks, nose and both
    shoulders inside the extended frame bounds with visibility absent or
    above 0.5, and shoulders at least 0.02 apart.
    """
    if pose is None or len(pose) < MIN_LANDMARKS:
        return False

    keypoints = [get_landmark(pose, index) for index in _KEYPOINTS]
    for landmark in keypoints:
        if landmark is None or not _in_frame(landmark):
            return False
        if not is_confident(landmark, MIN_KEYPOINT_VISIBILITY):
            return False

    _, left_shoulder, right_shoulder = keypoints
    return distance(left_shoulder, right_shoulder) >= MIN_SHOULDER_SPAN
