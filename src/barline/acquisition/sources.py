"""
Image Source Variants

Closed set of source kinds an acquisition strategy understands. Callers
resolve whatever they hold into exactly one variant with parse_source()
before acquiring it.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import numpy as np
from PIL import Image

from ..errors import ImageSourceError
from ..pixels import PixelBuffer


URL_PATTERN = re.compile(
    r"(ftp|http|https)://(\w+:{0,1}\w*@)?(\S+)(:[0-9]+)?(/|/([\w#!:.?+=&%@!\-/]))?"
)

# Prefix marking a string as a registered element id, e.g. "#barcode"
ELEMENT_PREFIX = "#"


@dataclass(frozen=True)
class FilePath:
    """Image file on the local filesystem."""
    path: Path


@dataclass(frozen=True)
class RemoteUrl:
    """Image reachable over ftp/http/https."""
    url: str


@dataclass(frozen=True)
class ElementReference:
    """Named in-memory image registered with an acquisition strategy."""
    element_id: str


@dataclass(frozen=True)
class RawPixelData:
    """Already-decoded pixel data."""
    buffer: PixelBuffer


ImageSource = Union[FilePath, RemoteUrl, ElementReference, RawPixelData]

SOURCE_TYPES = (FilePath, RemoteUrl, ElementReference, RawPixelData)


def is_url(value: str) -> bool:
    """Check if a string starts with an ftp/http/https URL."""
    return URL_PATTERN.match(value) is not None


def parse_source(value: Any) -> ImageSource:
    """
    Resolve a caller value into one ImageSource variant.

    Resolution order:
        - an ImageSource variant is returned unchanged
        - PixelBuffer, PIL image or numpy array -> RawPixelData
        - "#name" -> ElementReference("name")
        - URL string -> RemoteUrl
        - any other string or Path -> FilePath

    Raises:
        ImageSourceError: If the value matches none of the above
    """
    if isinstance(value, SOURCE_TYPES):
        return value
    if isinstance(value, PixelBuffer):
        return RawPixelData(value)
    if isinstance(value, Image.Image):
        return RawPixelData(PixelBuffer.from_image(value))
    if isinstance(value, np.ndarray):
        return RawPixelData(PixelBuffer.from_array(value))
    if isinstance(value, Path):
        return FilePath(value)
    if isinstance(value, str):
        if value.startswith(ELEMENT_PREFIX):
            return ElementReference(value[len(ELEMENT_PREFIX):])
        if is_url(value):
            return RemoteUrl(value)
        return FilePath(Path(value))

    raise ImageSourceError(f"Invalid image source specified: {type(value).__name__}")
