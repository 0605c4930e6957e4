"""Shared pytest configuration and fixtures for SnapTalk tests."""
from __future__ import annotations

import base64
import io
import os

# Provide required env vars before any snaptalk module is imported
os.environ.setdefault("OCR_PROVIDER", "mock")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from PIL import Image, ImageDraw, ImageFont


def render_png(text: str = "", size: tuple[int, int] = (640, 160)) -> bytes:
    """Render *text* in black on a white canvas and return PNG bytes."""
    img = Image.new("RGB", size, "white")
    if text:
        draw = ImageDraw.Draw(img)
        try:
            font = ImageFont.load_default(size=48)
        except TypeError:  # Pillow < 10.1 has no sized default font
            font = ImageFont.load_default()
        draw.text((20, 40), text, fill="black", font=font)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def text_png() -> bytes:
    return render_png("HELLO WORLD")


@pytest.fixture()
def blank_png() -> bytes:
    return render_png("")


@pytest.fixture()
def text_png_b64(text_png: bytes) -> str:
    return base64.b64encode(text_png).decode("ascii")
