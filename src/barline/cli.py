"""
barline - Command line entry point

Reads bar/space widths from a barcode image and prints them per scan
strip. With --decoder, each strip is also decoded by an external
symbology function and the readings are merged.

Example:
    python main.py barcode.png
    python main.py https://example.com/code.png --adaptive
    python main.py barcode.png --decoder mypkg.code39:decode
"""

import argparse
import importlib
import json
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .consensus import combine_candidates
from .debug import DEBUG_DIR, save_debug_image
from .errors import BarlineError
from .scanner import BarcodeScanner, Decoder
from .settings import load_settings
from .threshold import get_binarizer_names

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(debug: bool = False, log_file: Optional[str] = None) -> None:
    """Configure logging to the console and optionally to a file."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def load_decoder(target: str) -> Decoder:
    """
    Import a decoder given as "module:function".

    Raises:
        ValueError: If the target is malformed or not callable
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Decoder must look like 'module:function', got '{target}'")

    module = importlib.import_module(module_name)
    decoder = getattr(module, attr, None)
    if not callable(decoder):
        raise ValueError(f"{target} is not callable")
    return decoder


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="barline - Read bar/space widths from 1-D barcode images"
    )
    parser.add_argument(
        "source",
        help="Image file, URL, or #element id"
    )
    method = parser.add_mutually_exclusive_group()
    method.add_argument(
        "--adaptive", "-a",
        action="store_true",
        help="Use adaptive (local window) threshold"
    )
    method.add_argument(
        "--threshold", "-t",
        choices=get_binarizer_names(),
        help="Threshold method (overrides config)"
    )
    parser.add_argument(
        "--strip-rows",
        type=int,
        help="Rows per scan strip (overrides config)"
    )
    parser.add_argument(
        "--decoder",
        help="Symbology decoder as module:function"
    )
    parser.add_argument(
        "--config", "-c",
        help="Settings file (default: barline.json)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Verbose logging and save an annotated debug image"
    )
    parser.add_argument(
        "--log-file",
        help="Also write the log to this file"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run a scan from the command line and return the exit code."""
    args = parse_args(argv)

    settings = load_settings(args.config)
    debug_mode = args.debug or settings.get("debug_enabled", False)
    setup_logging(debug_mode, args.log_file)

    # CLI flags override saved settings
    if args.adaptive:
        settings["threshold"] = "adaptive"
    elif args.threshold:
        settings["threshold"] = args.threshold
    if args.strip_rows is not None:
        settings["strip_rows"] = args.strip_rows

    text = None
    try:
        scanner = BarcodeScanner.from_settings(settings)
        decoder = load_decoder(args.decoder) if args.decoder else None

        buffer, lines = scanner.read_lines(args.source)
        if decoder is not None:
            text = combine_candidates(scanner.decode_lines(lines, decoder))

    except (BarlineError, ValueError, ImportError) as e:
        logger.error(f"Scan failed: {e}")
        return 1

    for line in lines:
        suffix = f" -> {line.candidate}" if line.candidate else ""
        print(f"row {line.row}: {json.dumps(line.runs)}{suffix}")

    if text is not None:
        print(f"result: {text}")

    if debug_mode:
        path = DEBUG_DIR / f"debug_{datetime.now():%Y%m%d_%H%M%S}.png"
        save_debug_image(buffer, lines, str(path), strip_rows=scanner.strip_rows)
        logger.info(f"Debug image saved: {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
