"""TesseractOCREngine: local Tesseract through pytesseract."""
from __future__ import annotations

import logging
import os
import threading

import pytesseract

from snaptalk.core.errors import RecognitionError
from snaptalk.imaging.decoder import DecodedImage
from snaptalk.ocr.base_ocr import OCREngine

logger = logging.getLogger(__name__)


class TesseractOCREngine(OCREngine):
    """OCR engine backed by the Tesseract CLI (runs 100% locally).

    Install dependency:
        pip install pytesseract   (plus the tesseract binary and language data)

    Config (via .env):
        OCR_PROVIDER=tesseract
        TESSERACT_LANG=eng
        TESSERACT_PSM=1
        TESSERACT_OEM=1
        TESSDATA_DIR=/usr/share/tesseract-ocr/4.00/tessdata
        TESSERACT_CMD=/usr/bin/tesseract   (optional)

    Language and modes are fixed at construction. Calls are serialised on a
    lock: the handle is shared by all requests.
    """

    name = "tesseract"

    def __init__(
        self,
        lang: str = "eng",
        psm: int = 1,
        oem: int = 1,
        tessdata_dir: str | None = None,
        fallback_tessdata_dir: str | None = None,
        tesseract_cmd: str | None = None,
    ) -> None:
        self._lang = lang
        self._psm = psm
        self._oem = oem
        self._tessdata_dir = self._resolve_tessdata_dir(tessdata_dir, fallback_tessdata_dir)
        self._lock = threading.Lock()

        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

        logger.info(
            "tesseract_engine_initialized",
            extra={
                "lang": self._lang,
                "psm": self._psm,
                "oem": self._oem,
                "tessdata_dir": self._tessdata_dir,
            },
        )

    @staticmethod
    def _resolve_tessdata_dir(tessdata_dir: str | None, fallback: str | None) -> str | None:
        # An explicit directory is used as given; a wrong one fails at call time.
        if tessdata_dir:
            return tessdata_dir
        # The platform guess is best effort: if it is absent, use tesseract's built-in default.
        if fallback and not os.path.isdir(fallback):
            logger.warning(
                "tessdata_dir_not_found_using_default",
                extra={"tessdata_dir": fallback},
            )
            return None
        return fallback

    @property
    def tessdata_dir(self) -> str | None:
        return self._tessdata_dir

    @property
    def config(self) -> str:
        """Extra command-line flags passed to tesseract on every call."""
        parts = [f"--oem {self._oem}", f"--psm {self._psm}"]
        if self._tessdata_dir:
            parts.append(f'--tessdata-dir "{self._tessdata_dir}"')
        return " ".join(parts)

    def recognize(self, image: DecodedImage) -> str:
        with self._lock:
            try:
                return pytesseract.image_to_string(image, lang=self._lang, config=self.config)
            except pytesseract.TesseractNotFoundError as exc:
                raise RecognitionError(
                    "tesseract is not installed or it's not in your PATH"
                ) from exc
            except (pytesseract.TesseractError, OSError, RuntimeError, ValueError) as exc:
                raise RecognitionError(str(exc) or exc.__class__.__name__) from exc
