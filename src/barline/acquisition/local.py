"""
Local Acquisition

Reads image files with Pillow and downloads remote images with requests.
"""

import logging

import cv2
import numpy as np
import requests
from PIL import Image, UnidentifiedImageError

from ..errors import ImageSourceError
from ..pixels import PixelBuffer
from .base import AcquisitionStrategy
from .factory import register_acquisition
from .sources import FilePath, RemoteUrl

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def decode_image_bytes(content: bytes) -> PixelBuffer:
    """
    Decode encoded image bytes (PNG, JPEG, ...) into an RGBA buffer.

    Raises:
        ImageSourceError: If the bytes aren't a decodable image
    """
    nparr = np.frombuffer(content, np.uint8)
    image = cv2.imdecode(nparr, cv2.IMREAD_COLOR) if nparr.size else None
    if image is None:
        raise ImageSourceError("Failed to decode image data")
    return PixelBuffer.from_array(cv2.cvtColor(image, cv2.COLOR_BGR2RGBA))


@register_acquisition
class LocalAcquisition(AcquisitionStrategy):
    """
    Acquisition for hosts with filesystem and network access.

    Supports every source variant.
    """
    name = "local"
    description = "Local - files via Pillow, URLs via HTTP"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """
        Args:
            timeout: HTTP request timeout in seconds
        """
        super().__init__()
        self.timeout = timeout

    def read_file(self, source: FilePath) -> PixelBuffer:
        path = source.path
        if not path.is_file():
            raise ImageSourceError(f"Image file not found: {path}")

        try:
            with Image.open(path) as image:
                return PixelBuffer.from_image(image)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageSourceError(f"Failed to read image {path}: {e}") from e

    def fetch_url(self, source: RemoteUrl) -> PixelBuffer:
        url = source.url
        logger.debug(f"Downloading {url}")

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ImageSourceError(f"Failed to download {url}: {e}") from e

        if response.status_code != 200:
            raise ImageSourceError(f"Failed to download {url}: HTTP {response.status_code}")

        try:
            return decode_image_bytes(response.content)
        except ImageSourceError as e:
            raise ImageSourceError(f"Failed to decode image from {url}") from e
