"""Landmark and pose types shared by the posture pipeline.

Poses follow the MediaPipe 33-point body topology. Only the upper body is
used by the classifier, but the full ordering is kept so that landmark
indices line up with the estimator output.
"""

from enum import IntEnum
from typing import NamedTuple, Optional, Sequence, Tuple


class Landmark(NamedTuple):
    """A tracked body point in normalized frame coordinates."""
    x: float
    y: float
    visibility: Optional[float] = None


Pose = Sequence[Landmark]


class PoseLandmark(IntEnum):
    """Anatomical landmark indices used by the pipeline."""
    NOSE = 0
    LEFT_EAR = 7
    RIGHT_EAR = 8
    MOUTH_LEFT = 9
    MOUTH_RIGHT = 10
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16
    LEFT_HIP = 23
    RIGHT_HIP = 24


POSE_LANDMARK_COUNT = 33

# Upper-body skeleton drawn by the overlay.
NECK_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (PoseLandmark.LEFT_EAR, PoseLandmark.LEFT_SHOULDER),
    (PoseLandmark.RIGHT_EAR, PoseLandmark.RIGHT_SHOULDER),
)

TORSO_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER),
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_HIP),
    (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_HIP),
    (PoseLandmark.LEFT_HIP, PoseLandmark.RIGHT_HIP),
)

SKELETON_CONNECTIONS: Tuple[Tuple[int, int], ...] = (
    (PoseLandmark.NOSE, PoseLandmark.LEFT_EAR),
    (PoseLandmark.NOSE, PoseLandmark.RIGHT_EAR),
    (PoseLandmark.MOUTH_LEFT, PoseLandmark.MOUTH_RIGHT),
    *NECK_CONNECTIONS,
    *TORSO_CONNECTIONS,
    (PoseLandmark.LEFT_SHOULDER, PoseLandmark.LEFT_ELBOW),
    (PoseLandmark.LEFT_ELBOW, PoseLandmark.LEFT_WRIST),
    (PoseLandmark.RIGHT_SHOULDER, PoseLandmark.RIGHT_ELBOW),
    (PoseLandmark.RIGHT_ELBOW, PoseLandmark.RIGHT_WRIST),
)


def get_landmark(pose: Optional[Pose], index: int) -> Optional[Landmark]:
    """Return the landmark at ``index`` or None when the pose is too short."""
    if pose is None or index >= len(pose):
        return None
    return pose[index]


def is_confident(landmark: Optional[Landmark], threshold: float) -> bool:
    """True when the landmark exists and its visibility is absent or above threshold."""
    if landmark is None:
        return False
    return landmark.visibility is None or landmark.visibility > threshold
