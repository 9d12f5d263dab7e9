"""
Tesseract text extractor using pytesseract and Pillow.
"""

import asyncio
import base64
import binascii
import io

import pytesseract
from PIL import Image

from synapse.core.ocr.base import TextExtractor
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


def decode_image_payload(image: str | bytes) -> bytes:
    """
    Decode a base64 string or data URL ("data:image/png;base64,...") to bytes.

    Raw bytes are returned unchanged.

    Raises:
        ValueError: If the string is not valid base64
    """
    if isinstance(image, bytes):
        return image

    payload = image.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")

    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e


class TesseractExtractor(TextExtractor):
    """OCR via the local tesseract binary for a fixed language model."""

    def __init__(
        self,
        language: str = "eng",
        tesseract_cmd: str | None = None,
        tesseract_config: str = "--oem 3 --psm 6",
    ):
        """
        Initialize Tesseract extractor.

        Args:
            language: Tesseract language code (e.g. "eng")
            tesseract_cmd: Optional path to the tesseract binary
            tesseract_config: Extra command-line flags for tesseract
        """
        self.language = language
        self.tesseract_config = tesseract_config
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    async def extract(self, image: str | bytes) -> str:
        try:
            image_bytes = decode_image_payload(image)
            # pytesseract shells out to tesseract; keep it off the event loop
            text = await asyncio.to_thread(self._recognize, image_bytes)
        except Exception as e:
            logger.warning(f"OCR failed, continuing without text: {e}")
            return ""
        return text.strip()

    def _recognize(self, image_bytes: bytes) -> str:
        with Image.open(io.BytesIO(image_bytes)) as img:
            return pytesseract.image_to_string(
                img, lang=self.language, config=self.tesseract_config
            )
