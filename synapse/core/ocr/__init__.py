"""
Image text extraction (OCR).
"""
from synapse.core.ocr.base import TextExtractor
from synapse.core.ocr.tesseract import TesseractExtractor, decode_image_payload

__all__ = [
    "TextExtractor",
    "TesseractExtractor",
    "decode_image_payload",
]
