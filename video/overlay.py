# /video/overlay.py

"""
Overlay rendering: colour-coded skeleton and a stylized spine.

Colours follow the classification of the frame:
- alarm turns the whole skeleton and the spine red;
- a neck warning reddens the ear-to-shoulder segments;
- a slouch warning reddens the torso segments;
- raised shoulders alone leave both skeleton and spine untouched.
"""

from typing import List, Optional, Tuple

import numpy as np

from posture.classifier import Classification
from posture.constants import MIN_KEYPOINT_VISIBILITY
from posture.landmarks import (
    NECK_CONNECTIONS,
    SKELETON_CONNECTIONS,
    TORSO_CONNECTIONS,
    Pose,
    PoseLandmark,
    get_landmark,
    is_confident,
)
from posture.models import ALERT_COLOR, SPINE_NEUTRAL_COLOR, TrackingOptions
from utils.logging import get_logger
from .privacy import obscure
from .surface import DrawingSurface, OpenCVSurface, PixelPoint

logger = get_logger(__name__)

SKELETON_THICKNESS = 2
LANDMARK_RADIUS = 3
SPINE_VERTEBRAE = 12
SPINE_CURVE_THICKNESS = 1
SPINE_MAX_WIDTH = 0.035     # Vertebra width at the hips, fraction of frame width
SPINE_MIN_WIDTH = 0.015     # Vertebra width at the neck
VERTEBRA_FILL = 0.6         # Vertebra height as a share of the segment length
CHIN_EXTENSION = 0.8        # Chin = mouth centre pushed away from the nose by this much

_NECK = set(NECK_CONNECTIONS)
_TORSO = set(TORSO_CONNECTIONS)
_DOT_LANDMARKS = sorted({index for pair in SKELETON_CONNECTIONS for index in pair})


def _to_pixels(landmark, width: int, height: int) -> PixelPoint:
    return landmark.x * width, landmark.y * height


def _quadratic_point(p0: PixelPoint, control: PixelPoint, p2: PixelPoint, t: float) -> PixelPoint:
    u = 1.0 - t
    return (
        u * u * p0[0] + 2 * u * t * control[0] + t * t * p2[0],
        u * u * p0[1] + 2 * u * t * control[1] + t * t * p2[1],
    )


def spine_curve(
    hip: PixelPoint,
    shoulder: PixelPoint,
    head: PixelPoint,
    samples: int = SPINE_VERTEBRAE + 1,
) -> List[PixelPoint]:
    """
    Sample a quadratic curve from hip through shoulder to head.

    The control point is chosen so the curve passes through the shoulder
    centre at its midpoint.
    """
    control = (
        2 * shoulder[0] - (hip[0] + head[0]) / 2.0,
        2 * shoulder[1] - (hip[1] + head[1]) / 2.0,
    )
    return [_quadratic_point(hip, control, head, i / (samples - 1)) for i in range(samples)]


def spine_anchors(pose: Pose, width: int, height: int) -> Optional[Tuple[PixelPoint, PixelPoint, PixelPoint]]:
    """Hip centre, shoulder centre and head reference in pixels."""
    nose = get_landmark(pose, PoseLandmark.NOSE)
    left_shoulder = get_landmark(pose, PoseLandmark.LEFT_SHOULDER)
    right_shoulder = get_landmark(pose, PoseLandmark.RIGHT_SHOULDER)
    if nose is None or left_shoulder is None or right_shoulder is None:
        return None

    ls = _to_pixels(left_shoulder, width, height)
    rs = _to_pixels(right_shoulder, width, height)
    shoulder = ((ls[0] + rs[0]) / 2.0, (ls[1] + rs[1]) / 2.0)
    nose_px = _to_pixels(nose, width, height)

    mouth_left = get_landmark(pose, PoseLandmark.MOUTH_LEFT)
    mouth_right = get_landmark(pose, PoseLandmark.MOUTH_RIGHT)
    if mouth_left is not None and mouth_right is not None:
        ml = _to_pixels(mouth_left, width, height)
        mr = _to_pixels(mouth_right, width, height)
        mouth = ((ml[0] + mr[0]) / 2.0, (ml[1] + mr[1]) / 2.0)
        head = (
            mouth[0] + (mouth[0] - nose_px[0]) * CHIN_EXTENSION,
            mouth[1] + (mouth[1] - nose_px[1]) * CHIN_EXTENSION,
        )
    else:
        head = nose_px

    left_hip = get_landmark(pose, PoseLandmark.LEFT_HIP)
    right_hip = get_landmark(pose, PoseLandmark.RIGHT_HIP)
    if is_confident(left_hip, MIN_KEYPOINT_VISIBILITY) and is_confident(right_hip, MIN_KEYPOINT_VISIBILITY):
        lh = _to_pixels(left_hip, width, height)
        rh = _to_pixels(right_hip, width, height)
        hip = ((lh[0] + rh[0]) / 2.0, (lh[1] + rh[1]) / 2.0)
    else:
        # Hips out of frame: extend below the shoulders by the head-to-shoulder drop.
        drop = max(shoulder[1] - head[1], height * 0.1)
        hip = (shoulder[0], shoulder[1] + drop)

    return hip, shoulder, head


class OverlayRenderer:
    """Draws the privacy-filtered frame, the skeleton and the spine."""

    def render(
        self,
        frame: np.ndarray,
        pose: Optional[Pose],
        classification: Classification,
        options: TrackingOptions,
    ) -> np.ndarray:
        """
        Render one overlay frame.

        Args:
            frame: Source BGR frame.
            pose: Visible pose, or None to draw the frame only.
            classification: Flags for this frame.
            options: Current tracking options (privacy mode, palette).

        Returns:
            The rendered BGR image.
        """
        surface = OpenCVSurface.for_frame(frame)
        surface.draw_image(obscure(frame, options.privacy_mode))
        if pose is not None:
            self.draw(surface, pose, classification, options)
        return surface.image

    def draw(
        self,
        surface: DrawingSurface,
        pose: Pose,
        classification: Classification,
        options: TrackingOptions,
    ) -> None:
        self.draw_skeleton(surface, pose, classification, options)
        self.draw_spine(surface, pose, classification)

    def segment_color(self, connection: Tuple[int, int], classification: Classification, base: str) -> str:
        if classification.is_alarm:
            return ALERT_COLOR
        if connection in _NECK and classification.is_neck_warning:
            return ALERT_COLOR
        if connection in _TORSO and classification.is_slouch_warning:
            return ALERT_COLOR
        return base

    def draw_skeleton(
        self,
        surface: DrawingSurface,
        pose: Pose,
        classification: Classification,
        options: TrackingOptions,
    ) -> None:
        width, height = surface.size
        base = ALERT_COLOR if classification.is_alarm else options.skeleton_hex

        for connection in SKELETON_CONNECTIONS:
            start = get_landmark(pose, connection[0])
            end = get_landmark(pose, connection[1])
            if not (is_confident(start, MIN_KEYPOINT_VISIBILITY) and is_confident(end, MIN_KEYPOINT_VISIBILITY)):
                continue
            surface.line(
                _to_pixels(start, width, height),
                _to_pixels(end, width, height),
                self.segment_color(connection, classification, base),
                SKELETON_THICKNESS,
            )

        for index in _DOT_LANDMARKS:
            landmark = get_landmark(pose, index)
            if is_confident(landmark, MIN_KEYPOINT_VISIBILITY):
                surface.circle(_to_pixels(landmark, width, height), LANDMARK_RADIUS, base)

    def draw_spine(self, surface: DrawingSurface, pose: Pose, classification: Classification) -> None:
        width, height = surface.size
        anchors = spine_anchors(pose, width, height)
        if anchors is None:
            logger.debug("Spine skipped: missing anchor landmarks")
            return

        color = ALERT_COLOR if classification.spine_alert else SPINE_NEUTRAL_COLOR
        points = spine_curve(*anchors)
        surface.polyline(points, color, SPINE_CURVE_THICKNESS)

        for i in range(SPINE_VERTEBRAE):
            (x1, y1), (x2, y2) = points[i], points[i + 1]
            length = float(np.hypot(x2 - x1, y2 - y1))
            taper = i / max(1, SPINE_VERTEBRAE - 1)
            vertebra_width = width * (SPINE_MAX_WIDTH + (SPINE_MIN_WIDTH - SPINE_MAX_WIDTH) * taper)
            vertebra_height = max(1.0, length * VERTEBRA_FILL)
            surface.filled_rounded_rect(
                ((x1 + x2) / 2.0, (y1 + y2) / 2.0),
                vertebra_width,
                vertebra_height,
                min(vertebra_width, vertebra_height) / 2.0,
                color,
            )
