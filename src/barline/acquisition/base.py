"""
Acquisition Strategy Base Interface

Abstract base class turning an ImageSource into a PixelBuffer.
"""

import logging
from abc import ABC
from typing import Dict, Union

import numpy as np
from PIL import Image

from ..errors import ImageSourceError
from ..pixels import PixelBuffer
from .sources import (
    ElementReference,
    FilePath,
    ImageSource,
    RawPixelData,
    RemoteUrl,
)

logger = logging.getLogger(__name__)

ElementImage = Union[Image.Image, np.ndarray, PixelBuffer]


class AcquisitionStrategy(ABC):
    """
    Abstract base class for acquisition strategies.

    The base class handles raw pixel data and the element registry.
    Files and URLs are rejected unless a subclass supports them by
    overriding read_file() / fetch_url().

    Attributes:
        name: Short identifier used by the registry
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base acquisition"

    def __init__(self):
        self._elements: Dict[str, ElementImage] = {}

    def register_element(self, element_id: str, image: ElementImage) -> None:
        """
        Make an in-memory image available as ElementReference(element_id).

        Args:
            element_id: Name the image is looked up by
            image: PIL image, numpy array or PixelBuffer
        """
        if not isinstance(image, (Image.Image, np.ndarray, PixelBuffer)):
            raise TypeError(f"Unsupported element type: {type(image).__name__}")
        self._elements[element_id] = image

    def unregister_element(self, element_id: str) -> None:
        """Forget a registered element (no-op if unknown)."""
        self._elements.pop(element_id, None)

    def acquire(self, source: ImageSource) -> PixelBuffer:
        """
        Turn an image source into pixel data.

        Args:
            source: One ImageSource variant (see parse_source)

        Returns:
            PixelBuffer of the image. Raw buffers are returned as-is,
            everything else is a freshly allocated RGBA buffer.

        Raises:
            ImageSourceError: If the source can't be read or isn't a
                supported variant
        """
        if isinstance(source, RawPixelData):
            buffer = source.buffer
            buffer.validate()
        elif isinstance(source, ElementReference):
            buffer = self.lookup_element(source.element_id)
        elif isinstance(source, FilePath):
            buffer = self.read_file(source)
        elif isinstance(source, RemoteUrl):
            buffer = self.fetch_url(source)
        else:
            raise ImageSourceError(f"Invalid image source specified: {source!r}")

        logger.debug(f"Acquired {buffer.width}x{buffer.height} image from {type(source).__name__}")
        return buffer

    def lookup_element(self, element_id: str) -> PixelBuffer:
        """Resolve a registered element into a new buffer."""
        if element_id not in self._elements:
            raise ImageSourceError(f"No image element registered as '{element_id}'")

        image = self._elements[element_id]
        if isinstance(image, PixelBuffer):
            return image.copy()
        if isinstance(image, Image.Image):
            return PixelBuffer.from_image(image)
        return PixelBuffer.from_array(image)

    def read_file(self, source: FilePath) -> PixelBuffer:
        raise ImageSourceError(f"{self.name} acquisition can't read files: {source.path}")

    def fetch_url(self, source: RemoteUrl) -> PixelBuffer:
        raise ImageSourceError(f"{self.name} acquisition can't fetch URLs: {source.url}")
