#!/usr/bin/env python3
"""
Tests for image source resolution and acquisition strategies.

Usage:
    pytest tests/test_acquisition.py
"""

import sys
from pathlib import Path

import cv2
import numpy as np
import pytest
import requests
from PIL import Image

# Add source root to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from barline import PixelBuffer, ImageSourceError
from barline.acquisition import (
    ElementReference,
    FilePath,
    LocalAcquisition,
    MemoryAcquisition,
    RawPixelData,
    RemoteUrl,
    available_acquisitions,
    create_acquisition,
    decode_image_bytes,
    is_url,
    parse_source,
)
from barline.acquisition import local


def sample_rgb(width=6, height=3) -> np.ndarray:
    rgb = np.zeros((height, width, 3), dtype=np.uint8)
    rgb[:, ::2] = (255, 255, 255)
    rgb[0, 0] = (10, 20, 30)
    return rgb


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content


def png_bytes(rgb: np.ndarray) -> bytes:
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert ok
    return encoded.tobytes()


def test_is_url():
    assert is_url("http://example.com/code.png")
    assert is_url("https://user:pw@example.com:8080/a/b.png?x=1")
    assert is_url("ftp://files.example.com/code.jpg")
    assert not is_url("barcode.png")
    assert not is_url("/tmp/images/barcode.png")
    assert not is_url("#barcode")


def test_parse_source_variants():
    """Every caller value resolves to exactly one variant."""
    print("\n" + "="*60)
    print("TEST: Source resolution")
    print("="*60)

    assert parse_source("https://example.com/a.png") == RemoteUrl("https://example.com/a.png")
    assert parse_source("#scanner") == ElementReference("scanner")
    assert parse_source("images/a.png") == FilePath(Path("images/a.png"))
    assert parse_source(Path("a.png")) == FilePath(Path("a.png"))

    buffer = PixelBuffer.from_array(sample_rgb())
    raw = parse_source(buffer)
    assert isinstance(raw, RawPixelData)
    assert raw.buffer is buffer

    from_image = parse_source(Image.fromarray(sample_rgb()))
    assert isinstance(from_image, RawPixelData)
    assert from_image.buffer.channels == 4

    from_array = parse_source(sample_rgb())
    assert isinstance(from_array, RawPixelData)
    assert from_array.buffer.channels == 3

    source = RemoteUrl("http://example.com")
    assert parse_source(source) is source

    print("  [PASS] Source resolution")


def test_url_must_lead_the_string():
    assert is_url("https://example.com/code.png")
    assert not is_url("images/http://example.com/a.png")
    assert parse_source("images/http://example.com/a.png") == FilePath(Path("images/http://example.com/a.png"))


def test_parse_source_rejects_unknown():
    with pytest.raises(ImageSourceError, match="Invalid image source"):
        parse_source(42)
    with pytest.raises(ImageSourceError):
        parse_source({"data": [], "width": 1})


def test_raw_pixel_data_passthrough():
    buffer = PixelBuffer.from_array(sample_rgb())
    acquired = MemoryAcquisition().acquire(RawPixelData(buffer))
    assert acquired is buffer


def test_element_registry():
    acquisition = MemoryAcquisition()
    acquisition.register_element("img", Image.fromarray(sample_rgb()))
    acquisition.register_element("arr", sample_rgb())

    buffer = acquisition.acquire(ElementReference("img"))
    assert (buffer.width, buffer.height, buffer.channels) == (6, 3, 4)
    assert buffer.pixels()[0, 0].tolist() == [10, 20, 30, 255]

    assert acquisition.acquire(ElementReference("arr")).channels == 3

    acquisition.unregister_element("img")
    with pytest.raises(ImageSourceError, match="No image element"):
        acquisition.acquire(ElementReference("img"))


def test_element_buffer_is_copied():
    """A registered PixelBuffer isn't binarized in place by later scans."""
    original = PixelBuffer.from_array(sample_rgb())
    acquisition = MemoryAcquisition()
    acquisition.register_element("buf", original)

    acquired = acquisition.acquire(ElementReference("buf"))
    assert acquired is not original
    assert np.array_equal(acquired.data, original.data)


def test_register_element_rejects_other_types():
    with pytest.raises(TypeError):
        MemoryAcquisition().register_element("x", "not an image")


def test_memory_rejects_files_and_urls():
    acquisition = MemoryAcquisition()
    with pytest.raises(ImageSourceError):
        acquisition.acquire(FilePath(Path("barcode.png")))
    with pytest.raises(ImageSourceError):
        acquisition.acquire(RemoteUrl("http://example.com/a.png"))


def test_unknown_variant_rejected():
    with pytest.raises(ImageSourceError, match="Invalid image source"):
        LocalAcquisition().acquire("barcode.png")


def test_local_reads_file(tmp_path):
    path = tmp_path / "code.png"
    Image.fromarray(sample_rgb()).save(path)

    buffer = LocalAcquisition().acquire(FilePath(path))
    assert (buffer.width, buffer.height, buffer.channels) == (6, 3, 4)
    assert buffer.pixels()[0, 0].tolist() == [10, 20, 30, 255]


def test_local_missing_file(tmp_path):
    with pytest.raises(ImageSourceError, match="not found"):
        LocalAcquisition().acquire(FilePath(tmp_path / "missing.png"))


def test_local_unreadable_file(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")
    with pytest.raises(ImageSourceError):
        LocalAcquisition().acquire(FilePath(path))


def test_local_fetches_url(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(200, png_bytes(sample_rgb()))

    monkeypatch.setattr(local.requests, "get", fake_get)
    buffer = LocalAcquisition(timeout=3.0).acquire(RemoteUrl("http://example.com/a.png"))

    assert calls == [("http://example.com/a.png", 3.0)]
    assert (buffer.width, buffer.height, buffer.channels) == (6, 3, 4)
    assert buffer.pixels()[0, 0].tolist() == [10, 20, 30, 255]


def test_local_http_error(monkeypatch):
    monkeypatch.setattr(local.requests, "get", lambda url, timeout: FakeResponse(404))
    with pytest.raises(ImageSourceError, match="HTTP 404"):
        LocalAcquisition().acquire(RemoteUrl("http://example.com/a.png"))


def test_local_network_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(local.requests, "get", fake_get)
    with pytest.raises(ImageSourceError) as excinfo:
        LocalAcquisition().acquire(RemoteUrl("http://example.com/a.png"))
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_local_undecodable_download(monkeypatch):
    monkeypatch.setattr(local.requests, "get", lambda url, timeout: FakeResponse(200, b"garbage"))
    with pytest.raises(ImageSourceError, match="decode"):
        LocalAcquisition().acquire(RemoteUrl("http://example.com/a.png"))


def test_decode_image_bytes_empty():
    with pytest.raises(ImageSourceError):
        decode_image_bytes(b"")


def test_factory():
    assert {"local", "memory"} <= set(available_acquisitions())
    assert isinstance(create_acquisition(), LocalAcquisition)
    assert create_acquisition("local", timeout=2.5).timeout == 2.5
    assert isinstance(create_acquisition("memory"), MemoryAcquisition)

    with pytest.raises(ValueError, match="Unknown acquisition"):
        create_acquisition("browser")


def main():
    """Run all tests."""
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    sys.exit(main())
