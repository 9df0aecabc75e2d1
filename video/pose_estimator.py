# /video/pose_estimator.py

"""
Manages the lifecycle of the MediaPipe pose model and converts its output
into :class:`posture.landmarks.Landmark` sequences.
"""

from typing import Optional, Tuple

import cv2
import numpy as np

from posture.landmarks import Landmark
from utils.logging import get_logger, log_execution_time

logger = get_logger(__name__)


def landmarks_from_results(results) -> Optional[Tuple[Landmark, ...]]:
    """Convert a MediaPipe Pose result into a landmark tuple (None if no body)."""
    pose_landmarks = getattr(results, "pose_landmarks", None)
    if not pose_landmarks:
        return None
    return tuple(
        Landmark(
            x=float(lm.x),
            y=float(lm.y),
            visibility=float(lm.visibility),
        )
        for lm in pose_landmarks.landmark
    )


class PoseEstimator:
    """
    A context manager to handle the setup and teardown of the MediaPipe
    pose model.

    This isolates MediaPipe dependencies and ensures resources are properly
    released.
    """

    def __init__(
        self,
        complexity: int = 1,
        min_detection_confidence: float = 0.5,
        min_tracking_confidence: float = 0.5,
    ):
        """
        Initializes the estimator with desired model configuration.

        Args:
            complexity: Model complexity (0=lite, 1=full, 2=heavy).
            min_detection_confidence: Minimum detection confidence.
            min_tracking_confidence: Minimum tracking confidence.
        """
        self.pose_config = {
            "static_image_mode": False,
            "model_complexity": complexity,
            "smooth_landmarks": True,
            "enable_segmentation": False,
            "min_detection_confidence": min_detection_confidence,
            "min_tracking_confidence": min_tracking_confidence,
        }
        self.pose_detector = None

    @classmethod
    def from_settings(cls, settings) -> "PoseEstimator":
        return cls(
            complexity=settings.POSE_MODEL_COMPLEXITY,
            min_detection_confidence=settings.POSE_MIN_DETECTION_CONFIDENCE,
            min_tracking_confidence=settings.POSE_MIN_TRACKING_CONFIDENCE,
        )

    def __enter__(self):
        """Initializes the pose model."""
        import mediapipe as mp

        self.pose_detector = mp.solutions.pose.Pose(**self.pose_config)
        logger.info(f"MediaPipe Pose initialized (complexity={self.pose_config['model_complexity']})")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Closes the model and releases resources."""
        if self.pose_detector:
            self.pose_detector.close()
            self.pose_detector = None

    @log_execution_time(logger)
    def estimate(self, frame: np.ndarray) -> Optional[Tuple[Landmark, ...]]:
        """
        Run pose estimation on a BGR frame.

        Returns:
            The landmark sequence, or None when no body was detected.
        """
        if self.pose_detector is None:
            raise RuntimeError("PoseEstimator must be used as a context manager")
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        return landmarks_from_results(self.pose_detector.process(rgb))
