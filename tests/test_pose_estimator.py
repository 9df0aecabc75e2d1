from types import SimpleNamespace

import numpy as np
import pytest

from posture.landmarks import Landmark
from video.exceptions import FrameDecodeError
from video.pose_estimator import PoseEstimator, landmarks_from_results
from video.realtime import decode_frame_data, encode_frame


def _results(points):
    landmarks = [SimpleNamespace(x=x, y=y, z=0.0, visibility=v) for x, y, v in points]
    return SimpleNamespace(pose_landmarks=SimpleNamespace(landmark=landmarks))


class TestLandmarkConversion:

    def test_converts_landmarks(self):
        pose = landmarks_from_results(_results([(0.1, 0.2, 0.9), (0.3, 0.4, 0.5)]))
        assert pose == (Landmark(0.1, 0.2, 0.9), Landmark(0.3, 0.4, 0.5))

    def test_no_body_detected(self):
        assert landmarks_from_results(SimpleNamespace(pose_landmarks=None)) is None
        assert landmarks_from_results(object()) is None


class TestPoseEstimator:

    def test_estimate_requires_context(self):
        estimator = PoseEstimator()
        with pytest.raises(RuntimeError):
            estimator.estimate(np.zeros((8, 8, 3), dtype=np.uint8))

    def test_from_settings(self):
        settings = SimpleNamespace(
            POSE_MODEL_COMPLEXITY=0,
            POSE_MIN_DETECTION_CONFIDENCE=0.6,
            POSE_MIN_TRACKING_CONFIDENCE=0.7,
        )
        estimator = PoseEstimator.from_settings(settings)
        assert estimator.pose_config["model_complexity"] == 0
        assert estimator.pose_config["min_detection_confidence"] == 0.6
        assert estimator.pose_config["min_tracking_confidence"] == 0.7

    def test_detector_released_on_exit(self):
        closed = []
        estimator = PoseEstimator()
        estimator.pose_detector = SimpleNamespace(close=lambda: closed.append(True))
        estimator.__exit__(None, None, None)
        assert closed == [True]
        assert estimator.pose_detector is None


class TestFrameCodec:

    def test_roundtrip_keeps_size(self):
        frame = np.full((40, 60, 3), 128, dtype=np.uint8)
        decoded = decode_frame_data(encode_frame(frame))
        assert decoded.shape == frame.shape

    def test_downscales_wide_frames(self):
        frame = np.zeros((100, 400, 3), dtype=np.uint8)
        decoded = decode_frame_data(encode_frame(frame), max_width=200)
        assert decoded.shape[:2] == (50, 200)

    @pytest.mark.parametrize("data", [b"", b"not an image"])
    def test_invalid_bytes(self, data):
        with pytest.raises(FrameDecodeError) as excinfo:
            decode_frame_data(data, frame_index=7)
        assert excinfo.value.frame_index == 7
