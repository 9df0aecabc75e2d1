"""Geometry helpers used on every processed frame.

Points are anything with ``x`` and ``y`` attributes in normalized frame
coordinates (landmarks, :class:`Point`).
"""

import math
from typing import NamedTuple

from numba import jit


class Point(NamedTuple):
    """A bare 2D point in normalized frame coordinates."""
    x: float
    y: float


@jit(nopython=False, forceobj=True)
def _angle_deg(ax: float, ay: float, bx: float, by: float, cx: float, cy: float) -> float:
    """Angle at (bx, by) between the rays towards (ax, ay) and (cx, cy).

    Using Numba JIT because the neck angle is evaluated on every frame.
    """
    radians = math.atan2(cy - by, cx - bx) - math.atan2(ay - by, ax - bx)
    angle = abs(radians * 180.0 / math.pi)
    if angle > 180.0:
        angle = 360.0 - angle
    return angle


def calculate_angle(a, b, c) -> float:
    """Return the angle ABC in degrees, reflected into [0, 180]."""
    return float(_angle_deg(a.x, a.y, b.x, b.y, c.x, c.y))


def distance(a, b) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def midpoint(a, b) -> Point:
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)
