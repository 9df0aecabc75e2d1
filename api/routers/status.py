"""Health and threshold inspection endpoints."""
import logging

from fastapi import APIRouter

from config import settings
from posture.thresholds import (
    ALARM_DISTANCE_RATIO,
    HEAD_OFFSET_MAX,
    NECK_ANGLE_MIN,
    SHOULDER_RAISE_GAP_RATIO,
    SHOULDER_RAISE_HEIGHT,
    slouch_margin,
    validate_sensitivity,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Status"])


@router.get("/health")
async def health():
    return {"status": "ok", "version": settings.APP_VERSION}


@router.get("/v1/sensitivity/{level}/thresholds")
async def sensitivity_thresholds(level: int):
    """Threshold values the classifier applies at a sensitivity level."""
    level = validate_sensitivity(level)
    return {
        "sensitivity": level,
        "alarmDistanceRatio": ALARM_DISTANCE_RATIO(level),
        "slouchMargin": slouch_margin(level),
        "slouchMarginHeadTurned": slouch_margin(level, head_turned=True),
        "neckAngleMin": NECK_ANGLE_MIN(level),
        "headOffsetMax": HEAD_OFFSET_MAX(level),
        "shoulderRaiseHeight": SHOULDER_RAISE_HEIGHT(level),
        "shoulderRaiseGapRatio": SHOULDER_RAISE_GAP_RATIO(level),
    }
