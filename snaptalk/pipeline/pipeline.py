"""Recognition pipeline: validate -> decode -> recognize -> normalize.

Both ingress paths (multipart upload and base64 camera capture) end up in
:meth:`RecognitionPipeline.extract_text`, so trimming, the empty-result
placeholder and timing are applied identically. Nothing is retried; any
failure is raised to the caller as an :class:`OCRServiceError` subclass.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from snaptalk.core.errors import OCRServiceError, RecognitionError, ValidationError
from snaptalk.imaging.decoder import decode_base64, decode_image
from snaptalk.ocr.base_ocr import OCREngine

logger = logging.getLogger(__name__)

NO_TEXT_FOUND = "No text found in the image. Please try with a clearer image containing text."


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    elapsed_ms: int


class RecognitionPipeline:
    def __init__(self, ocr_engine: OCREngine) -> None:
        self._ocr_engine = ocr_engine

    # ------------------------------------------------------------------ #
    #  Public entry points                                                 #
    # ------------------------------------------------------------------ #

    async def extract_text(
        self,
        raw_bytes: bytes | None,
        *,
        source_hint: str | None = None,
        content_type: str | None = None,
    ) -> ExtractionResult:
        self._validate(raw_bytes, content_type)

        t0 = time.monotonic()
        loop = asyncio.get_running_loop()
        image = await loop.run_in_executor(None, decode_image, raw_bytes, source_hint)

        try:
            ocr_result = await self._ocr_engine.extract_text(image)
        except OCRServiceError:
            raise
        except Exception as exc:
            raise RecognitionError(str(exc) or exc.__class__.__name__) from exc

        logger.info(
            "ocr_complete",
            extra={"source": source_hint, "duration_ms": ocr_result.duration_ms},
        )

        text = ocr_result.text.strip()
        if not text:
            text = NO_TEXT_FOUND
        else:
            logger.info("text_extracted", extra={"source": source_hint, "chars": len(text)})

        elapsed_ms = int((time.monotonic() - t0) * 1000)
        return ExtractionResult(text=text, elapsed_ms=elapsed_ms)

    async def extract_text_from_base64(self, payload: str) -> ExtractionResult:
        """Decode a raw base64 string or ``data:`` URL, then run :meth:`extract_text`."""
        raw_bytes = decode_base64(payload)
        return await self.extract_text(raw_bytes, source_hint="camera")

    # ------------------------------------------------------------------ #
    #  Validation                                                          #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _validate(raw_bytes: bytes | None, content_type: str | None) -> None:
        if not raw_bytes:
            raise ValidationError("Uploaded file is empty")
        if content_type is not None and not content_type.lower().startswith("image/"):
            raise ValidationError("File must be an image")
