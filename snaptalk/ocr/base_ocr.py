from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass

from snaptalk.imaging.decoder import DecodedImage


@dataclass(frozen=True)
class OCRResult:
    text: str
    duration_ms: int  # wall-clock time spent inside the engine


class OCREngine:
    """A long-lived recognition handle shared by every request.

    Subclasses implement the blocking :meth:`recognize`; :meth:`extract_text`
    runs it on the default executor so request handlers never block the loop.
    """

    name = "base"

    def recognize(self, image: DecodedImage) -> str:
        raise NotImplementedError

    async def extract_text(self, image: DecodedImage) -> OCRResult:
        loop = asyncio.get_running_loop()
        t0 = time.monotonic()
        text = await loop.run_in_executor(None, self.recognize, image)
        duration_ms = int((time.monotonic() - t0) * 1000)
        return OCRResult(text=text, duration_ms=duration_ms)
