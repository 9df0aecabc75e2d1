# /posture/baseline.py

"""
Baseline store with one-shot calibration.

``calibrate()`` arms the store; the next visible pose offered while armed
becomes the baseline and the store returns to idle. If no visible pose
ever arrives the store stays armed; there is no timeout.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from utils.logging import get_logger
from .landmarks import Landmark, Pose
from .measurements import PoseMeasurements, extract_measurements

logger = get_logger(__name__)


class CalibrationState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"


@dataclass(frozen=True)
class Baseline:
    """A calibrated reference pose and the measurements derived from it."""
    pose: Tuple[Landmark, ...]
    measurements: PoseMeasurements


class BaselineStore:
    """Holds at most one baseline; replaced atomically on calibration."""

    def __init__(self):
        self._baseline: Optional[Baseline] = None
        self._state = CalibrationState.IDLE
        self.calibration_count = 0

    @property
    def baseline(self) -> Optional[Baseline]:
        return self._baseline

    @property
    def measurements(self) -> Optional[PoseMeasurements]:
        return self._baseline.measurements if self._baseline else None

    @property
    def state(self) -> CalibrationState:
        return self._state

    @property
    def is_armed(self) -> bool:
        return self._state is CalibrationState.ARMED

    def arm(self) -> None:
        """Capture the next visible pose as the new baseline."""
        self._state = CalibrationState.ARMED
        logger.info("Calibration armed; waiting for a visible pose")

    def offer(self, pose: Pose) -> bool:
        """
        Offer a visible pose to the store.

        Returns:
            True if the pose was captured as the new baseline.
        """
        if not self.is_armed:
            return False

        # Chin penalty does not matter for the baseline: its neck angle is never compared.
        baseline = Baseline(pose=tuple(pose), measurements=extract_measurements(pose))
        self._baseline = baseline
        self._state = CalibrationState.IDLE
        self.calibration_count += 1
        logger.info(
            "Baseline captured (#%d): shoulder span %.3f, shoulder height %.3f",
            self.calibration_count,
            baseline.measurements.shoulder_span,
            baseline.measurements.shoulder_height,
        )
        return True
