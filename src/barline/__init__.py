"""
barline - Bar/space width extraction for 1-D barcodes

Binarizes barcode images, reads run lengths of alternating bars and
spaces, and merges several decoded readings into one result. Mapping
run lengths to characters is left to an external symbology decoder.

Usage:
    from barline import BarcodeScanner, create_binarizer

    scanner = BarcodeScanner(binarizer=create_binarizer("adaptive"))
    buffer, lines = scanner.read_lines("barcode.png")
    for line in lines:
        print(line.row, line.runs)

    # With a decoder: runs -> string (or None)
    result = scanner.scan("barcode.png", decoder)
    print(result.text)
"""

# Public API - Data types
from .pixels import PixelBuffer
from .result import ScanLine, ScanResult

# Public API - Errors
from .errors import (
    BarlineError,
    InvalidDimensions,
    DegenerateWindow,
    ImageSourceError,
)

# Public API - Pipeline stages
from .threshold import (
    Binarizer,
    SimpleBinarizer,
    AdaptiveBinarizer,
    create_binarizer,
    get_binarizer_names,
    apply_simple_threshold,
    apply_adaptive_threshold,
)
from .lines import extract_lines, get_lines
from .consensus import combine_candidates, WILDCARD

# Public API - Acquisition
from .acquisition import (
    FilePath,
    RemoteUrl,
    ElementReference,
    RawPixelData,
    AcquisitionStrategy,
    create_acquisition,
    parse_source,
)

# Public API - Scanner
from .scanner import BarcodeScanner, SCAN_POINTS

__version__ = "0.1.0"

__all__ = [
    # Data types
    "PixelBuffer",
    "ScanLine",
    "ScanResult",
    # Errors
    "BarlineError",
    "InvalidDimensions",
    "DegenerateWindow",
    "ImageSourceError",
    # Thresholding
    "Binarizer",
    "SimpleBinarizer",
    "AdaptiveBinarizer",
    "create_binarizer",
    "get_binarizer_names",
    "apply_simple_threshold",
    "apply_adaptive_threshold",
    # Lines
    "extract_lines",
    "get_lines",
    # Consensus
    "combine_candidates",
    "WILDCARD",
    # Acquisition
    "FilePath",
    "RemoteUrl",
    "ElementReference",
    "RawPixelData",
    "AcquisitionStrategy",
    "create_acquisition",
    "parse_source",
    # Scanner
    "BarcodeScanner",
    "SCAN_POINTS",
]
