"""
Barcode Scanner

Wires acquisition, thresholding, line extraction and consensus merging
into one pass over an image.

The image is binarized once, then several thin horizontal strips spread
over its height are read independently. Each strip's runs go to a
caller-supplied decoder and the decoded strings are merged.
"""

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .acquisition import AcquisitionStrategy, create_acquisition, parse_source
from .consensus import combine_candidates
from .lines import extract_lines
from .pixels import PixelBuffer
from .result import ScanLine, ScanResult
from .threshold import Binarizer, create_binarizer

logger = logging.getLogger(__name__)

# Strip positions in units of height / (len(SCAN_POINTS) + 1),
# alternating outward-in so the edges are tried before the middle
SCAN_POINTS: Tuple[int, ...] = (1, 9, 2, 8, 3, 7, 4, 6, 5)

# Rows per scan strip
DEFAULT_STRIP_ROWS = 2

# Maps a run-length sequence to a decoded string (None/"" if undecodable)
Decoder = Callable[[List[int]], Optional[str]]


def _setting(settings: Dict[str, Any], key: str, default: Any, kind: Callable[[Any], Any]) -> Any:
    """Read a setting converted with ``kind``; bad values raise ValueError."""
    value = settings.get(key, default)
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid setting {key}={value!r}: {e}") from e


class BarcodeScanner:
    """
    Reads bar widths from an image and merges decoded readings.

    Example:
        scanner = BarcodeScanner(binarizer=create_binarizer("adaptive"))
        result = scanner.scan("barcode.png", my_decoder)
        print(result.text)
    """

    def __init__(
        self,
        acquisition: Optional[AcquisitionStrategy] = None,
        binarizer: Optional[Binarizer] = None,
        scan_points: Optional[Sequence[int]] = None,
        strip_rows: int = DEFAULT_STRIP_ROWS,
    ):
        """
        Args:
            acquisition: Strategy used to load sources (default: "local")
            binarizer: Threshold applied to the image (default: "simple")
            scan_points: Strip positions (default: SCAN_POINTS)
            strip_rows: Rows per scan strip
        """
        if strip_rows < 1:
            raise ValueError(f"strip_rows must be positive, got {strip_rows}")

        self.acquisition = acquisition or create_acquisition("local")
        self.binarizer = binarizer or create_binarizer("simple")
        self.scan_points = tuple(scan_points) if scan_points is not None else SCAN_POINTS
        self.strip_rows = strip_rows

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "BarcodeScanner":
        """
        Build a scanner from a settings dictionary (see barline.settings).

        Raises:
            ValueError: If a setting has the wrong type or an unknown name
        """
        threshold = settings.get("threshold", "simple")
        if threshold == "adaptive":
            binarizer = create_binarizer(
                "adaptive",
                bias=_setting(settings, "bias", 0.15, float),
                clamp_window=bool(settings.get("clamp_window", True)),
            )
        elif threshold == "simple":
            binarizer = create_binarizer("simple", midpoint=_setting(settings, "midpoint", 127, float))
        else:
            binarizer = create_binarizer(threshold)

        scan_points = settings.get("scan_points")
        if scan_points is not None:
            scan_points = _setting(settings, "scan_points", None, lambda points: [int(p) for p in points])

        acquisition_name = settings.get("acquisition", "local")
        if acquisition_name == "local":
            timeout = _setting(settings, "request_timeout", 10.0, float)
            acquisition = create_acquisition("local", timeout=timeout)
        else:
            acquisition = create_acquisition(acquisition_name)

        return cls(
            acquisition=acquisition,
            binarizer=binarizer,
            scan_points=scan_points,
            strip_rows=_setting(settings, "strip_rows", DEFAULT_STRIP_ROWS, int),
        )

    def strip_rows_for(self, height: int) -> List[int]:
        """
        First row of every scan strip for an image of the given height.

        Strips are shifted up so they fit inside the image.
        """
        rows_per_strip = min(self.strip_rows, height)
        step = height / (len(self.scan_points) + 1)
        starts = []
        for point in self.scan_points:
            start = int(step * point)
            starts.append(max(0, min(start, height - rows_per_strip)))
        return starts

    def read_lines(self, source: Any) -> Tuple[PixelBuffer, List[ScanLine]]:
        """
        Acquire and binarize an image, then read every scan strip.

        Raw pixel sources are binarized in place (the caller hands over
        the buffer); other sources are loaded into a new buffer.

        Args:
            source: Anything parse_source() accepts

        Returns:
            Tuple of (binarized buffer, scan lines in scan order)
        """
        buffer = self.acquisition.acquire(parse_source(source))
        self.binarizer.apply(buffer)

        rows_per_strip = min(self.strip_rows, buffer.height)
        lines = []
        for start in self.strip_rows_for(buffer.height):
            strip = buffer.rows(start, start + rows_per_strip)
            lines.append(ScanLine(row=start, runs=extract_lines(strip)))

        logger.debug(
            f"Read {len(lines)} strips from {buffer.width}x{buffer.height} "
            f"image using {self.binarizer.name} threshold"
        )
        return buffer, lines

    def decode_lines(self, lines: List[ScanLine], decoder: Decoder) -> List[str]:
        """
        Run the decoder over every non-empty scan line.

        Sets ``candidate`` on each line that decodes.

        Returns:
            Decoded strings in scan order
        """
        candidates: List[str] = []

        for line in lines:
            if not line.runs:
                continue
            try:
                candidate = decoder(line.runs)
            except ValueError as e:
                logger.debug(f"Strip at row {line.row} not decodable: {e}")
                continue

            if candidate:
                line.candidate = candidate
                candidates.append(candidate)

        return candidates

    def scan(self, source: Any, decoder: Decoder) -> ScanResult:
        """
        Scan an image and merge the decoded strips.

        A decoder signals an unreadable strip by returning None/"" or by
        raising ValueError; other exceptions propagate.

        Args:
            source: Anything parse_source() accepts
            decoder: Maps runs to a decoded string

        Returns:
            ScanResult with the merged text and per-strip details
        """
        start_time = time.perf_counter()

        buffer, lines = self.read_lines(source)
        candidates = self.decode_lines(lines, decoder)
        text = combine_candidates(candidates)
        if candidates:
            logger.info(f"Decoded '{text}' from {len(candidates)}/{len(lines)} strips")
        else:
            logger.warning("No strip could be decoded")

        return ScanResult(
            text=text,
            lines=lines,
            candidates=candidates,
            width=buffer.width,
            height=buffer.height,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
