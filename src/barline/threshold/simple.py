"""
Simple Threshold - Fixed global cutoff on the channel mean.
"""

import logging
from typing import MutableSequence

from ..pixels import PixelBuffer, as_flat_array
from .base import Binarizer, greyscale, write_back, write_binary
from .factory import register_binarizer

logger = logging.getLogger(__name__)

DEFAULT_MIDPOINT = 127


@register_binarizer
class SimpleBinarizer(Binarizer):
    """
    Global threshold: grey >= midpoint becomes 255, anything darker 0.

    No spatial context, so it's cheap but sensitive to uneven lighting.
    """
    name = "simple"
    description = "Simple - fixed midpoint on channel mean"

    def __init__(self, midpoint: float = DEFAULT_MIDPOINT):
        self.midpoint = midpoint

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        pixels = buffer.pixels()
        grey = greyscale(pixels)
        write_binary(pixels, grey >= self.midpoint)
        logger.debug(f"Simple threshold {buffer.width}x{buffer.height} at {self.midpoint}")
        return buffer


def apply_simple_threshold(data: MutableSequence[int], width: int, height: int) -> MutableSequence[int]:
    """
    Greyscale and threshold flat pixel data in place.

    Accepts a numpy array or any mutable sequence such as a list.

    Returns:
        The same data object
    """
    array = as_flat_array(data)
    SimpleBinarizer().apply(PixelBuffer(array, width, height))
    write_back(data, array)
    return data
