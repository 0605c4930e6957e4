"""Error taxonomy shared by the pipeline and the HTTP layer.

Each error carries the HTTP status it maps to. Everything raised inside the
pipeline is a server-side failure (500); only a request that never names an
image is rejected as a client error.
"""
from __future__ import annotations


class OCRServiceError(Exception):
    status_code: int = 500


class ValidationError(OCRServiceError):
    """Input is missing, empty or not an image."""


class MissingImageError(ValidationError):
    """The request carried no image field at all."""

    status_code = 400


class DecodeError(OCRServiceError):
    """Bytes could not be turned into a raster image."""


class RecognitionError(OCRServiceError):
    """The OCR engine failed on a decoded image."""
