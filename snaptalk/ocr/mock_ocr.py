from __future__ import annotations

from snaptalk.imaging.decoder import DecodedImage
from snaptalk.ocr.base_ocr import OCREngine


class MockOCREngine(OCREngine):
    name = "mock"

    def __init__(self, text: str = "SnapTalk mock OCR text") -> None:
        self._text = text
        self.calls = 0

    def recognize(self, image: DecodedImage) -> str:
        # Mock OCR for development/testing
        self.calls += 1
        return self._text
