"""
Pixel Buffer

Value object carrying raw, row-major, channel-interleaved pixel data
between acquisition, thresholding and line extraction.

Ownership: binarizers write into ``data`` in place and hand back the
same PixelBuffer. A caller passing a buffer to a binarizer gives up the
original pixel values for the duration of the call; use ``copy()`` first
when they are still needed.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from PIL import Image

from .errors import InvalidDimensions


def as_flat_array(data: Sequence[int]) -> np.ndarray:
    """
    Get flat pixel data as a numpy array.

    numpy arrays are returned as-is so writes reach the caller's memory;
    any other sequence is copied into a new array.
    """
    if isinstance(data, np.ndarray):
        return data
    return np.asarray(data)


def validate_dimensions(data: np.ndarray, width: int, height: int) -> int:
    """
    Check that a flat data array matches the given dimensions.

    Args:
        data: Flat pixel data
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        Channel count per pixel

    Raises:
        InvalidDimensions: If width/height aren't positive or the data
            length isn't an exact multiple of width * height
    """
    size = int(np.size(data))
    if width <= 0 or height <= 0:
        raise InvalidDimensions(width, height, size, "width and height must be positive")
    if size == 0 or size % (width * height) != 0:
        raise InvalidDimensions(width, height, size, "data length is not a multiple of width*height")
    return size // (width * height)


@dataclass(eq=False)
class PixelBuffer:
    """Raw pixel data with its dimensions. Compared by identity."""
    data: np.ndarray  # Flat, contiguous, values 0-255
    width: int
    height: int

    @property
    def channels(self) -> int:
        """Number of values stored per pixel."""
        return self.data.size // (self.width * self.height)

    def validate(self) -> int:
        """
        Validate dimensions against the data.

        Returns:
            Channel count

        Raises:
            TypeError: If data isn't a flat numpy array
            InvalidDimensions: If the dimensions don't match the data
        """
        if not isinstance(self.data, np.ndarray) or self.data.ndim != 1:
            raise TypeError("PixelBuffer data must be a flat numpy array")
        return validate_dimensions(self.data, self.width, self.height)

    def pixels(self) -> np.ndarray:
        """
        Get a (height, width, channels) view of the data.

        The view shares memory with ``data``; writes go straight into the buffer.
        """
        channels = self.validate()
        return self.data.reshape(self.height, self.width, channels)

    def rows(self, start: int, stop: int) -> "PixelBuffer":
        """
        Copy a horizontal strip of rows into a new buffer.

        Args:
            start: First row (inclusive)
            stop: Last row (exclusive), clamped to the image height

        Returns:
            New PixelBuffer holding rows [start, stop)
        """
        start = max(0, start)
        stop = min(self.height, stop)
        if stop <= start:
            raise InvalidDimensions(self.width, stop - start, 0, "empty row range")
        strip = self.pixels()[start:stop].copy()
        return PixelBuffer(strip.reshape(-1), self.width, stop - start)

    def copy(self) -> "PixelBuffer":
        """Deep copy of the buffer."""
        return PixelBuffer(self.data.copy(), self.width, self.height)

    def to_image(self) -> Image.Image:
        """
        Convert to a PIL image.

        Uses the first three channels (or the single grey channel).
        """
        pixels = self.pixels().astype(np.uint8)
        if pixels.shape[2] >= 3:
            return Image.fromarray(np.ascontiguousarray(pixels[:, :, :3]), "RGB")
        return Image.fromarray(np.ascontiguousarray(pixels[:, :, 0]), "L")

    @classmethod
    def from_sequence(cls, values: Sequence[int], width: int, height: int) -> "PixelBuffer":
        """Build a buffer from any flat sequence of 0-255 integers (copied)."""
        data = np.asarray(values, dtype=np.uint8).reshape(-1).copy()
        buffer = cls(data, width, height)
        buffer.validate()
        return buffer

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """
        Build a buffer from an HxW or HxWxC array (copied).

        Args:
            array: Image array in RGB(A) or greyscale order
        """
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[:, :, np.newaxis]
        if array.ndim != 3:
            raise InvalidDimensions(0, 0, int(array.size), f"expected 2 or 3 dimensions, got {array.ndim}")
        height, width = array.shape[:2]
        data = np.ascontiguousarray(array, dtype=np.uint8).reshape(-1).copy()
        buffer = cls(data, width, height)
        buffer.validate()
        return buffer

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Build an RGBA buffer from a PIL image."""
        rgba = image.convert("RGBA")
        return cls.from_array(np.array(rgba))
