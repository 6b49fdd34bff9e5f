"""
Adaptive Threshold - Local mean thresholding over an integral image.

Each pixel is compared against the mean of a square window around it.
A pixel darker than (1 - bias) of its window mean becomes a bar (0),
everything else becomes a space (255). The window sums come from an
integral image, so the cost per pixel is constant regardless of window size.
"""

import logging
import math
from typing import MutableSequence

import numpy as np

from ..errors import DegenerateWindow
from ..pixels import PixelBuffer, as_flat_array
from .base import Binarizer, greyscale, write_back, write_binary
from .factory import register_binarizer

logger = logging.getLogger(__name__)

# Fraction below the local mean a pixel must fall to count as dark
DEFAULT_BIAS = 0.15


def window_radius(width: int) -> int:
    """Half-size of the local window: ceil(floor(width / 4) / 2)."""
    return math.ceil((width // 4) / 2)


def integral_image(grey: np.ndarray) -> np.ndarray:
    """
    Build the integral image of a greyscale array.

    Column prefix sums accumulated across columns, so that
    ``result[y, x]`` is the sum over the rectangle [0, x] x [0, y].
    """
    return grey.cumsum(axis=0).cumsum(axis=1)


@register_binarizer
class AdaptiveBinarizer(Binarizer):
    """
    Bradley-style local threshold.

    Images narrower than 4 pixels produce a zero-sized window. By default
    the window radius is clamped to 1 in that case; with
    ``clamp_window=False`` a DegenerateWindow error is raised instead.
    """
    name = "adaptive"
    description = "Adaptive - local window mean with darkness bias"

    def __init__(self, bias: float = DEFAULT_BIAS, clamp_window: bool = True):
        """
        Args:
            bias: Fraction below the window mean that counts as dark
            clamp_window: Clamp a zero window radius to 1 instead of raising
        """
        self.bias = bias
        self.clamp_window = clamp_window

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        pixels = buffer.pixels()
        width, height = buffer.width, buffer.height

        radius = window_radius(width)
        if radius == 0:
            if not self.clamp_window:
                raise DegenerateWindow(width)
            logger.debug(f"Window radius clamped to 1 for {width}px wide image")
            radius = 1

        grey = greyscale(pixels)
        integral = integral_image(grey)

        # Window corners per column/row, clamped to the image
        cols = np.arange(width)
        rows = np.arange(height)
        x1 = np.maximum(cols - radius, 0)
        x2 = np.minimum(cols + radius, width - 1)
        y1 = np.maximum(rows - radius, 0)[:, np.newaxis]
        y2 = np.minimum(rows + radius, height - 1)[:, np.newaxis]

        count = (x2 - x1)[np.newaxis, :] * (y2 - y1)
        window_sum = (
            integral[y2, x2]
            - integral[y1, x2]
            - integral[y2, x1]
            + integral[y1, x1]
        )

        dark = grey * count < window_sum * (1 - self.bias)
        write_binary(pixels, ~dark)

        logger.debug(
            f"Adaptive threshold {width}x{height}: radius={radius}, "
            f"dark pixels={int(dark.sum())}"
        )
        return buffer


def apply_adaptive_threshold(data: MutableSequence[int], width: int, height: int) -> MutableSequence[int]:
    """
    Greyscale and adaptively threshold flat pixel data in place.

    Args:
        data: Flat pixel data, a numpy array or mutable sequence (modified in place)
        width: Image width
        height: Image height

    Returns:
        The same data object
    """
    array = as_flat_array(data)
    AdaptiveBinarizer().apply(PixelBuffer(array, width, height))
    write_back(data, array)
    return data
