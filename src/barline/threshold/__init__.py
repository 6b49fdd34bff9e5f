"""
Threshold Package - Pluggable binarization of pixel buffers.

Usage:
    from barline.threshold import create_binarizer

    binarizer = create_binarizer("adaptive", bias=0.15)
    buffer = binarizer.apply(buffer)  # same buffer, now 0/255
"""

from .base import Binarizer
from .factory import (
    create_binarizer,
    get_binarizer_names,
    get_binarizer_info,
    register_binarizer,
)

# Import binarizers to register them
from .simple import SimpleBinarizer, apply_simple_threshold, DEFAULT_MIDPOINT
from .adaptive import AdaptiveBinarizer, apply_adaptive_threshold, DEFAULT_BIAS

__all__ = [
    "Binarizer",
    "create_binarizer",
    "get_binarizer_names",
    "get_binarizer_info",
    "register_binarizer",
    "SimpleBinarizer",
    "AdaptiveBinarizer",
    "apply_simple_threshold",
    "apply_adaptive_threshold",
    "DEFAULT_MIDPOINT",
    "DEFAULT_BIAS",
]
