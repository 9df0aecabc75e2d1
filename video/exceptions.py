# video/exceptions.py
"""Custom exceptions for frame handling."""


class FrameProcessingError(Exception):
    """Base exception for frame handling failures."""

    def __init__(self, message: str, frame_index: int = -1):
        self.message = message
        self.frame_index = frame_index
        super().__init__(f"[Frame: {frame_index}] {message}")


class FrameDecodeError(FrameProcessingError):
    """Raised when an incoming frame cannot be decoded as an image."""
    pass
