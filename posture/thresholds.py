# /posture/thresholds.py

"""
Sensitivity-parameterized thresholds.

Every threshold is a piecewise function of the sensitivity level (1 =
lenient, 10 = strict). The tiers are deliberately non-linear: each posture
failure mode tolerates a different amount of drift at different levels, so
every tier keeps its own formula instead of one interpolation.

``tf`` below is the tolerance factor ``(10 - s) / 9``: 1 at sensitivity 1,
0 at sensitivity 10.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from .constants import (
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    SLOUCH_STRICT_SCALE,
    SLOUCH_STRICT_SENSITIVITY,
    SLOUCH_STRICT_TURNED_SENSITIVITY,
)
from .exceptions import InvalidSensitivityError


def tolerance_factor(sensitivity: int) -> float:
    return (MAX_SENSITIVITY - sensitivity) / (MAX_SENSITIVITY - MIN_SENSITIVITY)


def validate_sensitivity(level) -> int:
    """Return ``level`` as an int, raising if it is not a whole number in 1..10."""
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        raise InvalidSensitivityError(level)
    if int(level) != level or not MIN_SENSITIVITY <= level <= MAX_SENSITIVITY:
        raise InvalidSensitivityError(level)
    return int(level)


@dataclass(frozen=True)
class TierBand:
    """Formula applied to sensitivities in ``[low, high]``."""
    low: int
    high: int
    formula: Callable[[int], float]

    def contains(self, sensitivity: int) -> bool:
        return self.low <= sensitivity <= self.high


class PiecewiseThreshold:
    """A threshold defined by an ordered table of sensitivity tiers."""

    def __init__(self, name: str, bands: Tuple[TierBand, ...]):
        self.name = name
        self.bands = bands

    def band_for(self, sensitivity: int) -> TierBand:
        for band in self.bands:
            if band.contains(sensitivity):
                return band
        raise InvalidSensitivityError(sensitivity)

    def __call__(self, sensitivity: int) -> float:
        return self.band_for(sensitivity).formula(sensitivity)

    def __repr__(self) -> str:
        tiers = ", ".join(f"{b.low}-{b.high}" for b in self.bands)
        return f"PiecewiseThreshold({self.name!r}, tiers=[{tiers}])"


# Alarm when shoulder span exceeds baseline span times this ratio (too close).
ALARM_DISTANCE_RATIO = PiecewiseThreshold("alarm_distance_ratio", (
    TierBand(1, 3, lambda s: 1.15 + 0.15 * tolerance_factor(s)),
    TierBand(4, 10, lambda s: 1.05 + (10 - s) * 0.008),
))

# Warning when shoulder height drops this far below the baseline height.
SLOUCH_MARGIN = PiecewiseThreshold("slouch_margin", (
    TierBand(1, 10, lambda s: 0.03 + 0.07 * tolerance_factor(s)),
))

# Warning when the neck angle falls below this many degrees.
NECK_ANGLE_MIN = PiecewiseThreshold("neck_angle_min", (
    TierBand(1, 4, lambda s: 150.0 - 25.0 * tolerance_factor(s)),
    TierBand(5, 5, lambda s: 140.0),
    TierBand(6, 7, lambda s: 146.0 + 3.0 * (s - 6)),
    TierBand(8, 10, lambda s: 152.0 + 2.0 * (s - 8)),
))

# Warning when the nose drifts sideways from the shoulder centre by more than this.
HEAD_OFFSET_MAX = PiecewiseThreshold("head_offset_max", (
    TierBand(1, 4, lambda s: 0.12 - 0.01 * (s - 1)),
    TierBand(5, 5, lambda s: 0.085),
    TierBand(6, 7, lambda s: 0.075 - 0.005 * (s - 6)),
    TierBand(8, 10, lambda s: 0.06 - 0.005 * (s - 8)),
))

# Raised shoulders: shoulders moved up by more than this vs. baseline.
SHOULDER_RAISE_HEIGHT = PiecewiseThreshold("shoulder_raise_height", (
    TierBand(1, 4, lambda s: 0.07 - 0.005 * (s - 1)),
    TierBand(5, 5, lambda s: 0.05),
    TierBand(6, 7, lambda s: 0.045 - 0.005 * (s - 6)),
    TierBand(8, 10, lambda s: 0.035 - 0.003 * (s - 8)),
))

# Raised shoulders: ear-to-shoulder gap shrank below this fraction of baseline.
SHOULDER_RAISE_GAP_RATIO = PiecewiseThreshold("shoulder_raise_gap_ratio", (
    TierBand(1, 4, lambda s: 0.70 + 0.02 * (s - 1)),
    TierBand(5, 5, lambda s: 0.78),
    TierBand(6, 7, lambda s: 0.80 + 0.02 * (s - 6)),
    TierBand(8, 10, lambda s: 0.85 + 0.01 * (s - 8)),
))


def slouch_margin(sensitivity: int, head_turned: bool = False) -> float:
    """Slouch margin, tightened at high sensitivity or with the head turned."""
    margin = SLOUCH_MARGIN(sensitivity)
    if sensitivity >= SLOUCH_STRICT_SENSITIVITY or (
        head_turned and sensitivity >= SLOUCH_STRICT_TURNED_SENSITIVITY
    ):
        margin *= SLOUCH_STRICT_SCALE
    return margin
