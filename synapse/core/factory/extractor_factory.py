"""
Factory for creating OCR text extractors.
"""

from synapse.config import OCRConfig
from synapse.core.ocr.base import TextExtractor
from synapse.core.ocr.tesseract import TesseractExtractor


class TextExtractorFactory:
    """Factory for creating text extractors from configuration."""

    @staticmethod
    def create(config: OCRConfig) -> TextExtractor:
        return TesseractExtractor(
            language=config.language,
            tesseract_cmd=config.tesseract_cmd,
            tesseract_config=config.tesseract_config,
        )
