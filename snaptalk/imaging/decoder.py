"""Turn raw upload bytes or base64 payloads into an in-memory RGB raster."""
from __future__ import annotations

import base64
import binascii
import io
import logging

from PIL import Image, UnidentifiedImageError

from snaptalk.core.errors import DecodeError

logger = logging.getLogger(__name__)

DecodedImage = Image.Image


def strip_data_url_prefix(payload: str) -> str:
    """Drop a ``data:<type>;base64,`` style prefix (everything up to the first comma)."""
    if "," in payload:
        return payload.split(",", 1)[1]
    return payload


def decode_base64(payload: str) -> bytes:
    """Decode a raw base64 string or data URL into bytes."""
    data = strip_data_url_prefix(payload).strip()
    if not data:
        raise DecodeError("Could not decode base64 image: no image data")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Could not decode base64 image: {exc}") from exc


def decode_image(data: bytes, source_hint: str | None = None) -> DecodedImage:
    """Decode *data* into an RGB :class:`PIL.Image.Image`.

    Pillow opens images lazily, so the pixel data is loaded here to surface
    truncated or corrupt files as :class:`DecodeError` rather than later inside
    the OCR engine.
    """
    if not data:
        raise DecodeError("Could not read image file: no bytes received")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            raster = img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(f"Could not read image file: {exc}") from exc

    if raster.width == 0 or raster.height == 0:
        raise DecodeError("Could not read image file: image has no pixels")

    logger.debug(
        "image_decoded",
        extra={"source": source_hint, "width": raster.width, "height": raster.height},
    )
    return raster
