# /posture/tracker.py

"""
Per-frame posture tracking pipeline.

``PostureTracker`` wires the visibility gate, metric extraction, the
baseline store, classification with overrides and the update throttler
together, and exposes the operator control surface. It runs
synchronously on whatever thread delivers frames; no internal state is
shared across trackers.
"""

from typing import Any, Callable, Optional, Tuple

from utils.logging import get_logger
from .baseline import BaselineStore
from .classifier import NEUTRAL, Classification, evaluate_posture
from .exceptions import InvalidPrivacyModeError, UnknownSkeletonColorError
from .landmarks import Pose
from .measurements import PoseMeasurements, extract_measurements
from .models import SKELETON_COLORS, PostureMetrics, PrivacyMode, TrackingOptions
from .throttle import UpdateThrottler
from .thresholds import validate_sensitivity
from .visibility import is_person_visible

logger = get_logger(__name__)

MetricsCallback = Callable[[PostureMetrics], None]


def build_metrics(measurements: PoseMeasurements, classification: Classification) -> PostureMetrics:
    return PostureMetrics(
        neck_angle=measurements.neck_angle,
        screen_distance=measurements.screen_distance,
        slouch_factor=measurements.shoulder_height,
        head_offset=measurements.head_offset,
        is_optimal=classification.is_optimal,
        is_warning=classification.is_warning,
        is_alarm=classification.is_alarm,
        is_neck_warning=classification.is_neck_warning,
        person_visible=True,
    )


class PostureTracker:
    """
    Classifies posture frame by frame against a calibrated baseline.

    Control methods (``set_sensitivity``, ``calibrate``, ...) take effect
    on the next processed frame.
    """

    def __init__(
        self,
        options: Optional[TrackingOptions] = None,
        on_metrics: Optional[MetricsCallback] = None,
        publish_interval: float = 0.1,
        clock: Optional[Callable[[], float]] = None,
        renderer: Any = None,
    ):
        """
        Initialize the tracker.

        Args:
            options: Initial operator settings (defaults if None).
            on_metrics: Called with every published metrics record.
            publish_interval: Minimum seconds between published records.
            clock: Monotonic clock used by the throttler.
            renderer: Object with a ``render(frame, pose, classification,
                options)`` method, used by ``process_frame``.
        """
        self.options = options or TrackingOptions()
        self.on_metrics = on_metrics
        self.renderer = renderer
        self.baseline_store = BaselineStore()
        self.throttler = (
            UpdateThrottler(publish_interval, clock) if clock else UpdateThrottler(publish_interval)
        )
        self.last_classification: Classification = NEUTRAL
        self.last_visible = False

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def set_sensitivity(self, level: int) -> None:
        self.options.sensitivity = validate_sensitivity(level)
        logger.info(f"Sensitivity set to {self.options.sensitivity}")

    def calibrate(self) -> None:
        """Arm a one-shot capture of the next visible pose as baseline."""
        self.baseline_store.arm()

    def set_privacy_mode(self, mode) -> None:
        try:
            self.options.privacy_mode = PrivacyMode(mode)
        except ValueError:
            raise InvalidPrivacyModeError(f"Unknown privacy mode: {mode!r}") from None
        logger.info(f"Privacy mode set to {self.options.privacy_mode.value}")

    def set_suppressed_mode(self, suppressed: bool) -> None:
        self.options.suppressed = bool(suppressed)
        logger.info(f"Suppressed (writing) mode {'on' if self.options.suppressed else 'off'}")

    def set_skeleton_color(self, name: str) -> None:
        if name not in SKELETON_COLORS:
            raise UnknownSkeletonColorError(
                f"Unknown skeleton colour {name!r}; expected one of {sorted(SKELETON_COLORS)}"
            )
        self.options.skeleton_color = name

    @property
    def has_baseline(self) -> bool:
        return self.baseline_store.baseline is not None

    def reset(self) -> None:
        """Forget per-session state after a camera stop. The baseline survives."""
        self.throttler.reset()
        self.last_classification = NEUTRAL
        self.last_visible = False

    # ------------------------------------------------------------------
    # Per-frame processing
    # ------------------------------------------------------------------

    def evaluate(self, pose: Optional[Pose]) -> PostureMetrics:
        """Classify one pose without throttling."""
        options = self.options

        if not is_person_visible(pose):
            self.last_classification = NEUTRAL
            self.last_visible = False
            return PostureMetrics.neutral()

        self.baseline_store.offer(pose)

        current = extract_measurements(pose, apply_chin_penalty=not options.suppressed)
        classification = evaluate_posture(
            current,
            self.baseline_store.measurements,
            options.sensitivity,
            suppressed=options.suppressed,
        )
        self.last_classification = classification
        self.last_visible = True
        return build_metrics(current, classification)

    def process(self, pose: Optional[Pose]) -> Optional[PostureMetrics]:
        """
        Run the pipeline for one frame.

        Returns:
            The published metrics record, or None when throttled.
        """
        metrics = self.evaluate(pose)
        if not self.throttler.should_publish():
            return None
        if self.on_metrics is not None:
            self.on_metrics(metrics)
        return metrics

    def process_frame(self, frame, pose: Optional[Pose]) -> Tuple[Any, Optional[PostureMetrics]]:
        """Process a frame and draw the overlay for it."""
        published = self.process(pose)
        if self.renderer is None:
            return frame, published
        rendered = self.renderer.render(
            frame,
            pose if self.last_visible else None,
            self.last_classification,
            self.options,
        )
        return rendered, published
