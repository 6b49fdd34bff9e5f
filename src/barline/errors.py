"""
Error Types

Exceptions raised by the barline pipeline. Everything derives from
BarlineError so callers can catch the whole family at once.
"""


class BarlineError(Exception):
    """Base class for all barline errors."""


class InvalidDimensions(BarlineError, ValueError):
    """Pixel buffer dimensions don't match its data."""

    def __init__(self, width: int, height: int, size: int, reason: str = ""):
        self.width = width
        self.height = height
        self.size = size
        message = f"Invalid pixel buffer {width}x{height} with {size} values"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class DegenerateWindow(BarlineError, ValueError):
    """Adaptive threshold window collapsed to zero pixels."""

    def __init__(self, width: int):
        self.width = width
        super().__init__(
            f"Adaptive threshold needs an image at least 4 pixels wide (got {width})"
        )


class ImageSourceError(BarlineError):
    """An image source could not be turned into pixel data."""
