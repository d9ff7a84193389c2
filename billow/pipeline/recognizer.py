"""
Recognition adapter — image bytes in, best-effort plain text out.

The engine is any callable ``bytes -> str``.  Whatever it raises is logged
and turned into an empty string: a receipt whose text could not be read is
still a valid receipt.
"""
from __future__ import annotations

import io
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Engine = Callable[[bytes], Optional[str]]


def tesseract_engine(lang: str = "eng", timeout: int = 0) -> Engine:
    """Build an engine backed by Tesseract (pytesseract + Pillow)."""

    def _recognize(image_bytes: bytes) -> str:
        import pytesseract
        from PIL import Image

        with Image.open(io.BytesIO(image_bytes)) as img:
            if img.mode != "L":
                img = img.convert("L")
            return pytesseract.image_to_string(img, lang=lang, timeout=timeout)

    return _recognize


def normalize_text(text: Optional[str]) -> str:
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    # Tesseract terminates each page with a form feed
    return text.rstrip()


class RecognitionAdapter:
    def __init__(self, engine: Engine):
        self.engine = engine

    def recognize(self, image_bytes: bytes) -> str:
        try:
            raw = self.engine(image_bytes)
        except Exception as exc:
            logger.warning("Recognition failed (%d bytes): %s", len(image_bytes), exc, exc_info=True)
            return ""
        text = normalize_text(raw)
        logger.info("Recognized %d characters", len(text))
        return text
