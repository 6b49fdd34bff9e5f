"""
Line Extraction

Turns a binarized PixelBuffer into bar/space widths.

Each column is collapsed to a single boolean (white when more than one of
its pixels is 255), the booleans are run-length encoded, and white
padding at either edge is dropped.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .pixels import PixelBuffer, as_flat_array

logger = logging.getLogger(__name__)

WHITE = 255
BLACK = 0


def column_profile(buffer: PixelBuffer) -> np.ndarray:
    """
    Classify every column as white (True) or black (False).

    Args:
        buffer: Binarized pixel buffer

    Returns:
        Boolean array of length width
    """
    first_channel = buffer.pixels()[:, :, 0]
    matches = np.count_nonzero(first_channel == WHITE, axis=0)
    return matches > 1


def detect_padding(buffer: PixelBuffer) -> Tuple[bool, bool]:
    """
    Detect white padding on the left and right edges.

    Only the last row is inspected: a black pixel in the first (last)
    column means there is no padding on the left (right).

    Returns:
        Tuple of (left_padding, right_padding)
    """
    last_row = buffer.pixels()[-1, :, 0]
    left = last_row[0] != BLACK
    right = last_row[-1] != BLACK
    return bool(left), bool(right)


def run_lengths(profile: np.ndarray) -> List[int]:
    """
    Run-length encode a boolean sequence.

    Args:
        profile: 1-D boolean array

    Returns:
        Length of every maximal run of equal values, left to right
    """
    if len(profile) == 0:
        return []
    changes = np.flatnonzero(profile[1:] != profile[:-1]) + 1
    bounds = np.concatenate(([0], changes, [len(profile)]))
    return [int(n) for n in np.diff(bounds)]


def extract_lines(buffer: PixelBuffer) -> List[int]:
    """
    Extract bar/space widths from a binarized buffer.

    Args:
        buffer: Binarized pixel buffer (see barline.threshold)

    Returns:
        Run lengths with edge padding removed. A uniform image gives
        [width], or [] when padding is trimmed from both sides.

    Raises:
        InvalidDimensions: If the buffer is malformed
    """
    profile = column_profile(buffer)
    left, right = detect_padding(buffer)

    lines = run_lengths(profile)
    if left and lines:
        lines.pop(0)
    if right and lines:
        lines.pop()

    logger.debug(
        f"Extracted {len(lines)} runs from {buffer.width}x{buffer.height} "
        f"(padding left={left}, right={right})"
    )
    return lines


def get_lines(data: Sequence[int], width: int, height: int) -> List[int]:
    """Run-length sequence from flat binarized data."""
    return extract_lines(PixelBuffer(as_flat_array(data), width, height))
