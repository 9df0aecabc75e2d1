# /video/surface.py

"""
Drawing surfaces for the overlay renderer.

The renderer only issues primitive calls (image, lines, polylines,
circles, filled rounded rectangles) in pixel coordinates, so it can draw
onto any implementation of :class:`DrawingSurface`.
"""

from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import cv2
import numpy as np

from utils.colors import hex_to_bgr

PixelPoint = Tuple[float, float]


class DrawingSurface(ABC):
    """A 2D drawing target sized to the video frame."""

    @property
    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """(width, height) in pixels."""

    @abstractmethod
    def draw_image(self, image: np.ndarray) -> None:
        """Fill the surface with an image scaled to its size."""

    @abstractmethod
    def line(self, start: PixelPoint, end: PixelPoint, color: str, thickness: int = 1) -> None:
        ...

    @abstractmethod
    def polyline(self, points: Sequence[PixelPoint], color: str, thickness: int = 1) -> None:
        ...

    @abstractmethod
    def circle(self, center: PixelPoint, radius: int, color: str) -> None:
        """Filled circle."""

    @abstractmethod
    def filled_rounded_rect(
        self,
        center: PixelPoint,
        width: float,
        height: float,
        radius: float,
        color: str,
    ) -> None:
        ...


def _px(point: PixelPoint) -> Tuple[int, int]:
    return int(round(point[0])), int(round(point[1]))


class OpenCVSurface(DrawingSurface):
    """Draws onto a BGR numpy image with OpenCV."""

    def __init__(self, width: int, height: int):
        self.image = np.zeros((height, width, 3), dtype=np.uint8)

    @classmethod
    def for_frame(cls, frame: np.ndarray) -> "OpenCVSurface":
        height, width = frame.shape[:2]
        return cls(width, height)

    @property
    def size(self) -> Tuple[int, int]:
        height, width = self.image.shape[:2]
        return width, height

    def draw_image(self, image: np.ndarray) -> None:
        width, height = self.size
        if image.shape[:2] != (height, width):
            image = cv2.resize(image, (width, height))
        if image.ndim == 2:
            image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
        self.image[:] = image

    def line(self, start, end, color, thickness=1):
        cv2.line(self.image, _px(start), _px(end), hex_to_bgr(color), max(1, int(thickness)), cv2.LINE_AA)

    def polyline(self, points, color, thickness=1):
        if len(points) < 2:
            return
        pts = np.array([_px(p) for p in points], dtype=np.int32).reshape((-1, 1, 2))
        cv2.polylines(self.image, [pts], False, hex_to_bgr(color), max(1, int(thickness)), cv2.LINE_AA)

    def circle(self, center, radius, color):
        cv2.circle(self.image, _px(center), max(1, int(radius)), hex_to_bgr(color), -1, cv2.LINE_AA)

    def filled_rounded_rect(self, center, width, height, radius, color):
        bgr = hex_to_bgr(color)
        cx, cy = center
        half_w, half_h = width / 2.0, height / 2.0
        r = int(max(0, min(radius, half_w, half_h)))
        x1, y1 = int(round(cx - half_w)), int(round(cy - half_h))
        x2, y2 = int(round(cx + half_w)), int(round(cy + half_h))

        if r == 0:
            cv2.rectangle(self.image, (x1, y1), (x2, y2), bgr, -1)
            return

        cv2.rectangle(self.image, (x1 + r, y1), (x2 - r, y2), bgr, -1)
        cv2.rectangle(self.image, (x1, y1 + r), (x2, y2 - r), bgr, -1)
        for corner in ((x1 + r, y1 + r), (x2 - r, y1 + r), (x1 + r, y2 - r), (x2 - r, y2 - r)):
            cv2.circle(self.image, corner, r, bgr, -1, cv2.LINE_AA)
