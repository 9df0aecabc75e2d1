# /video/privacy.py

"""Privacy filters applied to the raw video before the skeleton is drawn."""

import cv2
import numpy as np

from posture.exceptions import InvalidPrivacyModeError
from posture.models import PrivacyMode

PIXELATE_FACTOR = 24       # Downscale divisor for the pixelation pass
PIXELATE_BLUR_SIGMA = 6.0
BLUR_SIGMA = 20.0
BLUR_BRIGHTNESS = 0.7


def pixelate(frame: np.ndarray) -> np.ndarray:
    """Heavy pixelation followed by a blur."""
    height, width = frame.shape[:2]
    small = cv2.resize(
        frame,
        (max(1, width // PIXELATE_FACTOR), max(1, height // PIXELATE_FACTOR)),
        interpolation=cv2.INTER_LINEAR,
    )
    blocky = cv2.resize(small, (width, height), interpolation=cv2.INTER_NEAREST)
    return cv2.GaussianBlur(blocky, (0, 0), PIXELATE_BLUR_SIGMA)


def blur(frame: np.ndarray) -> np.ndarray:
    """Strong blur with dimmed brightness."""
    blurred = cv2.GaussianBlur(frame, (0, 0), BLUR_SIGMA)
    return cv2.convertScaleAbs(blurred, alpha=BLUR_BRIGHTNESS, beta=0)


def obscure(frame: np.ndarray, mode) -> np.ndarray:
    """
    Return a copy of ``frame`` obscured according to ``mode``.

    Args:
        frame: BGR image.
        mode: A PrivacyMode or its string value.
    """
    try:
        mode = PrivacyMode(mode)
    except ValueError:
        raise InvalidPrivacyModeError(f"Unknown privacy mode: {mode!r}") from None

    if mode is PrivacyMode.PIXELATE:
        return pixelate(frame)
    if mode is PrivacyMode.BLUR:
        return blur(frame)
    if mode is PrivacyMode.BLACKOUT:
        return np.zeros_like(frame)
    return frame.copy()
