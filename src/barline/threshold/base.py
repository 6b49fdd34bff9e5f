"""
Binarizer Base Interface

Abstract base class defining the thresholding contract.
"""

from abc import ABC, abstractmethod

import numpy as np

from ..pixels import PixelBuffer


class Binarizer(ABC):
    """
    Abstract base class for binarizers.

    Implementations greyscale and threshold a PixelBuffer in place: the
    color channels they touch end up holding only 0 or 255, and the same
    buffer object is returned.

    Attributes:
        name: Short identifier used by the registry
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base binarizer"

    @abstractmethod
    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Binarize a buffer in place.

        Args:
            buffer: Pixel buffer; its data is overwritten

        Returns:
            The same buffer

        Raises:
            InvalidDimensions: If the buffer is malformed
        """
        pass

    def __call__(self, buffer: PixelBuffer) -> PixelBuffer:
        return self.apply(buffer)


def greyscale(pixels: np.ndarray) -> np.ndarray:
    """
    Greyscale a (height, width, channels) view in place.

    The grey value is the unweighted mean of the first three channels
    (fewer for 1- or 2-channel data) and is written back into them.
    Alpha and any further channels are left alone.

    Args:
        pixels: Pixel view, modified in place

    Returns:
        Float grey values with shape (height, width)
    """
    color = min(3, pixels.shape[2])
    grey = pixels[:, :, :color].astype(np.float64).mean(axis=2)
    pixels[:, :, :color] = grey[:, :, np.newaxis]
    return grey


def write_binary(pixels: np.ndarray, white: np.ndarray) -> None:
    """Write 255 where ``white`` is set and 0 elsewhere into the color channels."""
    color = min(3, pixels.shape[2])
    pixels[:, :, :color] = np.where(white, 255, 0)[:, :, np.newaxis]


def write_back(data, array: np.ndarray) -> None:
    """Copy results into ``data`` when it isn't the processed array itself."""
    if array is not data:
        data[:] = array.tolist()
