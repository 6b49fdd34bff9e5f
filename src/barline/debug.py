"""
Debug Utilities

Functions for saving annotated debug images of a scan and managing
debug output.
"""

from pathlib import Path
from typing import List, Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .lines import column_profile
from .pixels import PixelBuffer
from .result import ScanLine, ScanResult


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

# Strip colors
DECODED_COLOR = "green"
UNDECODED_COLOR = "red"
BOUNDARY_COLOR = "blue"


def run_boundaries(buffer: PixelBuffer, row: int, rows: int) -> List[int]:
    """
    Columns where the white/black classification of a strip changes.

    Args:
        buffer: Binarized buffer
        row: First row of the strip
        rows: Strip height

    Returns:
        Column indices at which a new run starts
    """
    profile = column_profile(buffer.rows(row, row + rows))
    return [int(x) for x in np.flatnonzero(profile[1:] != profile[:-1]) + 1]


def save_debug_image(
    buffer: PixelBuffer,
    lines: List[ScanLine],
    path: str,
    result: Optional[ScanResult] = None,
    strip_rows: int = 2
) -> None:
    """
    Save an annotated debug image of a binarized scan.

    Annotations include:
    - Every scan strip (green if decoded, red otherwise)
    - Run boundaries along each strip
    - Summary text when a ScanResult is given

    Args:
        buffer: Binarized pixel buffer
        lines: Scan lines read from the buffer
        path: Output file path
        result: Scan result for the summary line (can be None)
        strip_rows: Rows per scan strip
    """
    # Ensure debug directory exists
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    debug_img = buffer.to_image().convert("RGB")
    draw = ImageDraw.Draw(debug_img)

    try:
        font = ImageFont.truetype("arial.ttf", 12)
    except OSError:
        font = ImageFont.load_default()

    rows = min(strip_rows, buffer.height)
    for line in lines:
        color = DECODED_COLOR if line.candidate else UNDECODED_COLOR
        y = line.row + rows // 2
        draw.line([(0, y), (buffer.width - 1, y)], fill=color, width=1)

        for x in run_boundaries(buffer, line.row, rows):
            draw.line([(x, line.row), (x, line.row + rows)], fill=BOUNDARY_COLOR, width=1)

        label = line.candidate if line.candidate else f"{len(line.runs)} runs"
        draw.text((2, max(0, line.row - 12)), label, fill=color, font=font)

    if result is not None:
        summary = f"Result: '{result.text}', Strips: {len(result.candidates)}/{len(result.lines)}, " \
                  f"Time: {result.processing_time_ms:.1f}ms"
        draw.text((2, 2), summary, fill=BOUNDARY_COLOR, font=font)

    # Save image
    debug_img.save(path, "PNG")

    # Cleanup old debug images
    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError:
            pass
