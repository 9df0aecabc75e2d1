"""Tests for overlay rendering and privacy filters."""

import numpy as np
import pytest

from posture.classifier import NEUTRAL, Classification
from posture.exceptions import InvalidPrivacyModeError
from posture.landmarks import NECK_CONNECTIONS, SKELETON_CONNECTIONS, TORSO_CONNECTIONS
from posture.landmarks import PoseLandmark as P
from posture.models import ALERT_COLOR, SKELETON_COLORS, SPINE_NEUTRAL_COLOR, PrivacyMode, TrackingOptions
from video.overlay import SPINE_VERTEBRAE, OverlayRenderer, spine_anchors, spine_curve
from video.privacy import obscure
from video.surface import OpenCVSurface
from _helpers import RecordingSurface, make_pose

GREEN = SKELETON_COLORS["green"]


@pytest.fixture
def renderer():
    return OverlayRenderer()


def draw(renderer, classification, options=None, pose=None):
    surface = RecordingSurface()
    renderer.draw(surface, pose or make_pose(), classification, options or TrackingOptions())
    return surface


def line_colors(surface):
    lines = surface.of_kind("line")
    assert len(lines) == len(SKELETON_CONNECTIONS)
    return dict(zip(SKELETON_CONNECTIONS, (call[3] for call in lines)))


class TestColouring:

    def test_optimal_uses_palette_and_neutral_spine(self, renderer):
        surface = draw(renderer, NEUTRAL)
        assert set(line_colors(surface).values()) == {GREEN}
        assert {call[3] for call in surface.of_kind("circle")} == {GREEN}
        assert {call[5] for call in surface.of_kind("rounded_rect")} == {SPINE_NEUTRAL_COLOR}

    def test_palette_choice(self, renderer):
        surface = draw(renderer, NEUTRAL, TrackingOptions(skeleton_color="white"))
        assert set(line_colors(surface).values()) == {"#FFFFFF"}

    def test_alarm_turns_everything_red(self, renderer):
        surface = draw(renderer, Classification(is_alarm=True))
        assert set(line_colors(surface).values()) == {ALERT_COLOR}
        assert {call[3] for call in surface.of_kind("circle")} == {ALERT_COLOR}
        assert surface.of_kind("polyline")[0][2] == ALERT_COLOR

    def test_neck_warning_reddens_neck_only(self, renderer):
        colors = line_colors(draw(renderer, Classification(is_warning=True, is_neck_warning=True)))
        for connection, color in colors.items():
            assert color == (ALERT_COLOR if connection in NECK_CONNECTIONS else GREEN)

    def test_slouch_reddens_torso_only(self, renderer):
        surface = draw(renderer, Classification(is_warning=True, is_slouch_warning=True))
        for connection, color in line_colors(surface).items():
            assert color == (ALERT_COLOR if connection in TORSO_CONNECTIONS else GREEN)
        assert surface.of_kind("polyline")[0][2] == ALERT_COLOR

    def test_raised_shoulders_keep_spine_neutral(self, renderer):
        surface = draw(renderer, Classification(is_warning=True, shoulders_raised=True))
        assert set(line_colors(surface).values()) == {GREEN}
        assert {call[5] for call in surface.of_kind("rounded_rect")} == {SPINE_NEUTRAL_COLOR}

    def test_low_confidence_segments_skipped(self, renderer):
        pose = make_pose(overrides={P.LEFT_WRIST: (0.64, 0.80, 0.2)})
        surface = draw(renderer, NEUTRAL, pose=pose)
        assert len(surface.of_kind("line")) == len(SKELETON_CONNECTIONS) - 1


class TestSpine:

    def test_curve_passes_through_shoulder(self):
        points = spine_curve((320.0, 400.0), (300.0, 240.0), (330.0, 150.0))
        assert len(points) == SPINE_VERTEBRAE + 1
        assert points[0] == pytest.approx((320.0, 400.0))
        assert points[SPINE_VERTEBRAE // 2] == pytest.approx((300.0, 240.0))
        assert points[-1] == pytest.approx((330.0, 150.0))

    def test_anchors_use_chin_and_hips(self):
        hip, shoulder, head = spine_anchors(make_pose(), 100, 100)
        assert hip == pytest.approx((50.0, 85.0))
        assert shoulder == pytest.approx((50.0, 50.0))
        # Mouth centre (50, 34) pushed away from the nose (50, 30).
        assert head == pytest.approx((50.0, 37.2))

    def test_anchors_without_hips(self):
        pose = make_pose(overrides={P.LEFT_HIP: (0.58, 0.85, 0.1), P.RIGHT_HIP: (0.42, 0.85, 0.1)})
        hip, shoulder, _ = spine_anchors(pose, 100, 100)
        assert hip[0] == pytest.approx(shoulder[0])
        assert hip[1] > shoulder[1]

    def test_vertebrae_taper_towards_neck(self, renderer):
        rects = draw(renderer, NEUTRAL).of_kind("rounded_rect")
        assert len(rects) == SPINE_VERTEBRAE
        widths = [call[2] for call in rects]
        assert widths == sorted(widths, reverse=True)
        assert widths[0] == pytest.approx(640 * 0.035)
        assert widths[-1] == pytest.approx(640 * 0.015)


class TestRender:

    @pytest.fixture
    def frame(self):
        return np.full((48, 64, 3), 200, dtype=np.uint8)

    @pytest.mark.parametrize("mode, expected", [
        (PrivacyMode.NONE, 200),
        (PrivacyMode.PIXELATE, 200),
        (PrivacyMode.BLUR, 140),
        (PrivacyMode.BLACKOUT, 0),
    ])
    def test_privacy_modes(self, renderer, frame, mode, expected):
        image = renderer.render(frame, None, NEUTRAL, TrackingOptions(privacy_mode=mode))
        assert image.shape == frame.shape
        assert int(image[0, 0, 0]) == pytest.approx(expected, abs=1)

    def test_source_frame_untouched(self, renderer, frame):
        renderer.render(frame, make_pose(), Classification(is_alarm=True), TrackingOptions())
        assert (frame == 200).all()

    def test_pose_drawn_over_blackout(self, renderer, frame):
        options = TrackingOptions(privacy_mode=PrivacyMode.BLACKOUT)
        image = renderer.render(frame, make_pose(), NEUTRAL, options)
        assert image.any()

    def test_obscure_rejects_unknown_mode(self, frame):
        with pytest.raises(InvalidPrivacyModeError):
            obscure(frame, "sepia")

    def test_opencv_surface_resizes_image(self):
        surface = OpenCVSurface(32, 16)
        surface.draw_image(np.full((8, 8, 3), 50, dtype=np.uint8))
        assert surface.size == (32, 16)
        assert (surface.image == 50).all()
