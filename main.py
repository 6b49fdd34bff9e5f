"""
barline - Entry Point

Reads bar/space widths from a barcode image.

Example:
    python main.py barcode.png
    python main.py barcode.png --adaptive --debug
"""

import sys
from pathlib import Path

# Run from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from barline.cli import main


if __name__ == "__main__":
    sys.exit(main())
