"""Posture classification package.

External code can simply do ``from posture import PostureTracker``.
"""

from .baseline import BaselineStore  # noqa: F401
from .classifier import Classification, evaluate_posture  # noqa: F401
from .landmarks import Landmark, PoseLandmark  # noqa: F401
from .models import PostureMetrics, PrivacyMode, TrackingOptions  # noqa: F401
from .tracker import PostureTracker  # noqa: F401
from .visibility import is_person_visible  # noqa: F401

__all__ = [
    "BaselineStore",
    "Classification",
    "evaluate_posture",
    "Landmark",
    "PoseLandmark",
    "PostureMetrics",
    "PrivacyMode",
    "TrackingOptions",
    "PostureTracker",
    "is_person_visible",
]
