"""
WebSocket handlers for real-time posture tracking.
"""

from .posture import handle_posture_stream

__all__ = [
    "handle_posture_stream",
]
