"""
Memory Acquisition

Acquisition for sandboxed hosts: only registered elements and raw
pixel data, no filesystem or network access.
"""

from .base import AcquisitionStrategy
from .factory import register_acquisition


@register_acquisition
class MemoryAcquisition(AcquisitionStrategy):
    """Registered elements and raw pixel data only."""
    name = "memory"
    description = "Memory - registered elements and raw pixels only"
