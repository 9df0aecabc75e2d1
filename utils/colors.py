"""Colour helpers for the OpenCV drawing surface."""

from typing import Tuple

BGR = Tuple[int, int, int]


def hex_to_bgr(color: str) -> BGR:
    """Convert ``#RRGGBB`` into an OpenCV BGR tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB colour, got {color!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return b, g, r
