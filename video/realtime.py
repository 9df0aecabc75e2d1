"""
Real-time frame codec helpers for the posture WebSocket.
"""

from typing import Optional

import cv2
import numpy as np

from .exceptions import FrameDecodeError


def decode_frame_data(frame_data: bytes, max_width: Optional[int] = None, frame_index: int = -1) -> np.ndarray:
    """
    Decode binary frame data received from WebSocket.

    Args:
        frame_data: Encoded image bytes (JPEG, PNG, ...)
        max_width: Downscale frames wider than this, keeping aspect ratio
        frame_index: Index used in error messages

    Returns:
        np.ndarray: Decoded BGR frame

    Raises:
        FrameDecodeError: If the bytes are not a decodable image
    """
    nparr = np.frombuffer(frame_data, np.uint8)
    frame = cv2.imdecode(nparr, cv2.IMREAD_COLOR) if nparr.size else None
    if frame is None:
        raise FrameDecodeError("Could not decode frame data", frame_index)

    height, width = frame.shape[:2]
    if max_width and width > max_width:
        scale = max_width / width
        frame = cv2.resize(frame, (max_width, max(1, int(round(height * scale)))))

    return frame


def encode_frame(frame: np.ndarray, quality: int = 80) -> bytes:
    """Encode a BGR frame as JPEG bytes."""
    ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise FrameDecodeError("Could not encode overlay frame")
    return buffer.tobytes()
