# /posture/throttle.py

"""Rate limiting for published posture metrics."""

import time
from typing import Callable, Optional

# Float rounding tolerated at the interval boundary.
BOUNDARY_EPSILON = 1e-9


class UpdateThrottler:
    """
    Allows at most one publish per ``interval`` seconds of wall-clock time.

    The first call always publishes. Frames rejected here are still
    rendered; only their metrics event is dropped.
    """

    def __init__(self, interval: float = 0.1, clock: Callable[[], float] = time.monotonic):
        self.interval = interval
        self._clock = clock
        self._last_publish: Optional[float] = None

    def should_publish(self, now: Optional[float] = None) -> bool:
        now = self._clock() if now is None else now
        if self._last_publish is not None and now - self._last_publish < self.interval - BOUNDARY_EPSILON:
            return False
        self._last_publish = now
        return True

    def reset(self) -> None:
        self._last_publish = None
