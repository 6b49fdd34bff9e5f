"""
Acquisition Package - Turning image sources into pixel buffers.

Usage:
    from barline.acquisition import create_acquisition, parse_source

    acquisition = create_acquisition("local", timeout=5.0)
    buffer = acquisition.acquire(parse_source("barcode.png"))
"""

from .sources import (
    FilePath,
    RemoteUrl,
    ElementReference,
    RawPixelData,
    ImageSource,
    is_url,
    parse_source,
)
from .base import AcquisitionStrategy
from .factory import (
    create_acquisition,
    register_acquisition,
    available_acquisitions,
)

# Import strategies to register them
from .local import LocalAcquisition, decode_image_bytes
from .memory import MemoryAcquisition

__all__ = [
    # Sources
    "FilePath",
    "RemoteUrl",
    "ElementReference",
    "RawPixelData",
    "ImageSource",
    "is_url",
    "parse_source",
    # Strategies
    "AcquisitionStrategy",
    "LocalAcquisition",
    "MemoryAcquisition",
    "decode_image_bytes",
    # Factory
    "create_acquisition",
    "register_acquisition",
    "available_acquisitions",
]
