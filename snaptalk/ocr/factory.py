from __future__ import annotations

from snaptalk.core.config import Settings, settings as default_settings
from snaptalk.ocr.base_ocr import OCREngine
from snaptalk.ocr.mock_ocr import MockOCREngine


def get_ocr_engine(settings: Settings | None = None) -> OCREngine:
    """Build the process-wide OCR engine.

    OCR_PROVIDER options:
        tesseract — TesseractOCREngine (pytesseract + tesseract binary)
        mock      — fixed text (dev/test, no tesseract required)
    """
    settings = settings or default_settings
    provider = settings.ocr_provider.lower().strip()

    if provider == "mock":
        return MockOCREngine(text=settings.mock_ocr_text)

    if provider == "tesseract":
        from snaptalk.ocr.engines import TesseractOCREngine
        return TesseractOCREngine(
            lang=settings.tesseract_lang,
            psm=settings.tesseract_psm,
            oem=settings.tesseract_oem,
            tessdata_dir=settings.tessdata_dir,
            fallback_tessdata_dir=settings.platform_tessdata_dir,
            tesseract_cmd=settings.tesseract_cmd,
        )

    raise ValueError(f"Unknown OCR_PROVIDER={settings.ocr_provider!r}")
