# /posture/classifier.py

"""
Posture classification against a calibrated baseline.

``classify`` maps current measurements to warning/alarm flags using the
sensitivity tables; ``resolve_overrides`` then clears those flags when the
subject stood up or moved away from the desk. ``evaluate_posture`` runs
both in the required order:

    classify -> stood-up / moved-away override -> raised-shoulder recheck
"""

from dataclasses import dataclass
from typing import Optional

from utils.logging import get_logger
from .constants import MOVED_AWAY_SPAN_RATIO, STAND_UP_HIP_RISE, STAND_UP_TORSO_RATIO
from .measurements import PoseMeasurements
from .thresholds import (
    ALARM_DISTANCE_RATIO,
    HEAD_OFFSET_MAX,
    NECK_ANGLE_MIN,
    SHOULDER_RAISE_GAP_RATIO,
    SHOULDER_RAISE_HEIGHT,
    slouch_margin,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Classification:
    """Flags produced for one frame."""
    is_warning: bool = False
    is_alarm: bool = False
    is_neck_warning: bool = False
    is_slouch_warning: bool = False
    shoulders_raised: bool = False
    stood_up: bool = False
    moved_away: bool = False

    @property
    def is_optimal(self) -> bool:
        return not (self.is_warning or self.is_alarm)

    @property
    def spine_alert(self) -> bool:
        """Whether the spine is drawn in the alert colour.

        Raised shoulders alone keep the spine neutral.
        """
        return self.is_alarm or self.is_neck_warning or self.is_slouch_warning


NEUTRAL = Classification()


def detect_raised_shoulders(
    current: PoseMeasurements,
    baseline: PoseMeasurements,
    sensitivity: int,
    include_height: bool = True,
) -> bool:
    """
    Shoulders pulled up towards the ears compared to the baseline.

    With ``include_height`` false only the ear-to-shoulder gap is compared;
    absolute shoulder height says nothing once the subject stood up.
    """
    lifted = include_height and (
        baseline.shoulder_height - current.shoulder_height > SHOULDER_RAISE_HEIGHT(sensitivity)
    )
    gap_shrunk = (
        baseline.ear_shoulder_gap > 0
        and current.ear_shoulder_gap < baseline.ear_shoulder_gap * SHOULDER_RAISE_GAP_RATIO(sensitivity)
    )
    return lifted or gap_shrunk


def classify(
    current: PoseMeasurements,
    baseline: Optional[PoseMeasurements],
    sensitivity: int,
) -> Classification:
    """
    Compare current measurements to the baseline at the given sensitivity.

    Without a baseline nothing can be judged and the result is neutral.
    """
    if baseline is None:
        return NEUTRAL

    is_alarm = current.shoulder_span > baseline.shoulder_span * ALARM_DISTANCE_RATIO(sensitivity)
    is_slouching = current.shoulder_height > (
        baseline.shoulder_height + slouch_margin(sensitivity, current.head_turned)
    )
    neck_bent = current.neck_angle < NECK_ANGLE_MIN(sensitivity)
    head_sideways = current.head_offset > HEAD_OFFSET_MAX(sensitivity)
    shoulders_raised = detect_raised_shoulders(current, baseline, sensitivity)

    is_neck_warning = neck_bent or head_sideways
    return Classification(
        is_warning=is_slouching or is_neck_warning or shoulders_raised,
        is_alarm=is_alarm,
        is_neck_warning=is_neck_warning,
        is_slouch_warning=is_slouching,
        shoulders_raised=shoulders_raised,
    )


def has_stood_up(current: PoseMeasurements, baseline: PoseMeasurements) -> bool:
    """Torso visibly longer and hips risen compared to the seated baseline."""
    if current.torso_extent is None or baseline.torso_extent is None:
        return False
    if baseline.torso_extent <= 0:
        return False
    torso_extended = current.torso_extent > baseline.torso_extent * STAND_UP_TORSO_RATIO
    hips_risen = baseline.hip_center_y - current.hip_center_y > STAND_UP_HIP_RISE
    return torso_extended and hips_risen


def has_moved_away(current: PoseMeasurements, baseline: PoseMeasurements) -> bool:
    return current.shoulder_span < baseline.shoulder_span * MOVED_AWAY_SPAN_RATIO


def resolve_overrides(
    classification: Classification,
    current: PoseMeasurements,
    baseline: Optional[PoseMeasurements],
    sensitivity: int,
) -> Classification:
    """
    Clear alerts when the subject is not sitting at the desk.

    A subject who stood up may still hold tense shoulders, so the
    raised-shoulder check is applied again after the stand-up override.
    Nothing is judged once the subject moved away.
    """
    if baseline is None:
        return classification

    if has_moved_away(current, baseline):
        logger.debug("Moved-away override: span %.3f vs baseline %.3f",
                     current.shoulder_span, baseline.shoulder_span)
        return Classification(moved_away=True)

    if not has_stood_up(current, baseline):
        return classification

    logger.debug("Stood-up override: torso %.3f vs baseline %.3f",
                 current.torso_extent, baseline.torso_extent)
    shoulders_raised = detect_raised_shoulders(current, baseline, sensitivity, include_height=False)
    return Classification(
        is_warning=shoulders_raised,
        shoulders_raised=shoulders_raised,
        stood_up=True,
    )


def evaluate_posture(
    current: PoseMeasurements,
    baseline: Optional[PoseMeasurements],
    sensitivity: int,
    suppressed: bool = False,
) -> Classification:
    """Full classification for one visible frame, overrides included."""
    if suppressed:
        return NEUTRAL
    classification = classify(current, baseline, sensitivity)
    return resolve_overrides(classification, current, baseline, sensitivity)

