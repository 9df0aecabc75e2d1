# posture/exceptions.py
"""Custom exceptions for the posture tracking pipeline."""


class PostureTrackingError(Exception):
    """Base exception for posture tracking failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidSensitivityError(PostureTrackingError, ValueError):
    """Raised when a sensitivity level falls outside 1..10."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Sensitivity must be an integer between 1 and 10, got {level!r}")


class InvalidPrivacyModeError(PostureTrackingError, ValueError):
    """Raised when an unknown privacy mode is requested."""
    pass


class UnknownSkeletonColorError(PostureTrackingError, ValueError):
    """Raised when a skeleton colour is not part of the palette."""
    pass


class InvalidAlertTimerError(PostureTrackingError, ValueError):
    """Raised when an alert timer value is not one of the configured choices."""
    pass
