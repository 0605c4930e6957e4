"""Image decoder tests — raw bytes and base64 payloads."""
from __future__ import annotations

import base64

import pytest
from PIL import Image

from snaptalk.core.errors import DecodeError
from snaptalk.imaging.decoder import decode_base64, decode_image, strip_data_url_prefix


# ---------------------------------------------------------------------------
# decode_image
# ---------------------------------------------------------------------------

def test_decode_image_returns_rgb_raster(text_png: bytes) -> None:
    img = decode_image(text_png, "hello.png")
    assert isinstance(img, Image.Image)
    assert img.mode == "RGB"
    assert img.size == (640, 160)


def test_decode_image_converts_grayscale_to_rgb() -> None:
    import io

    buf = io.BytesIO()
    Image.new("L", (10, 10), 255).save(buf, format="PNG")
    img = decode_image(buf.getvalue())
    assert img.mode == "RGB"


def test_decode_image_rejects_empty_bytes() -> None:
    with pytest.raises(DecodeError):
        decode_image(b"")


def test_decode_image_rejects_non_image_bytes() -> None:
    with pytest.raises(DecodeError, match="Could not read image file"):
        decode_image(b"this is definitely not a png")


def test_decode_image_rejects_truncated_png(text_png: bytes) -> None:
    with pytest.raises(DecodeError):
        decode_image(text_png[: len(text_png) // 2])


# ---------------------------------------------------------------------------
# base64 / data URL handling
# ---------------------------------------------------------------------------

def test_strip_data_url_prefix_keeps_text_after_first_comma() -> None:
    assert strip_data_url_prefix("data:image/png;base64,AAAA") == "AAAA"
    assert strip_data_url_prefix("AAAA") == "AAAA"


def test_decode_base64_plain(text_png: bytes, text_png_b64: str) -> None:
    assert decode_base64(text_png_b64) == text_png


def test_decode_base64_data_url_prefix_is_equivalent(text_png_b64: str) -> None:
    with_prefix = decode_base64("data:image/png;base64," + text_png_b64)
    without_prefix = decode_base64(text_png_b64)
    assert with_prefix == without_prefix
    assert decode_image(with_prefix).tobytes() == decode_image(without_prefix).tobytes()


def test_decode_base64_rejects_invalid_characters() -> None:
    with pytest.raises(DecodeError, match="Could not decode base64 image"):
        decode_base64("not*valid*base64!!")


def test_decode_base64_rejects_empty_after_prefix() -> None:
    with pytest.raises(DecodeError):
        decode_base64("data:image/png;base64,")


def test_decode_base64_of_non_image_fails_at_image_decode() -> None:
    raw = decode_base64(base64.b64encode(b"plain text").decode())
    with pytest.raises(DecodeError):
        decode_image(raw)
