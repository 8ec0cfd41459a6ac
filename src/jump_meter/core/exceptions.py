"""Custom exceptions for Jump Meter.

The frame pipeline itself never raises; these cover the input boundaries.
"""


class JumpMeterError(Exception):
    """Base exception for all Jump Meter errors."""

    pass


class AnthropometryError(JumpMeterError):
    """Body measurements outside plausible human ranges."""

    def __init__(self, message: str = "Invalid anthropometric profile") -> None:
        self.message = message
        super().__init__(self.message)


class RecordingError(JumpMeterError):
    """A landmark recording could not be parsed."""

    def __init__(self, message: str = "Invalid landmark recording") -> None:
        self.message = message
        super().__init__(self.message)
