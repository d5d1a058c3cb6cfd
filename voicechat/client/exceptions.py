"""Errors raised by the client-side components."""


class AudioCaptureError(Exception):
    """Raised when the microphone cannot be opened."""


class RealtimeConnectionError(Exception):
    """Raised when the call socket cannot be opened."""
