"""Video package: pose estimation adapter, frame codec and overlay rendering.

External code can simply do ``from video import ...``.
"""

from .overlay import OverlayRenderer  # noqa: F401
from .realtime import decode_frame_data, encode_frame  # noqa: F401

__all__ = [
    "OverlayRenderer",
    "decode_frame_data",
    "encode_frame",
]
