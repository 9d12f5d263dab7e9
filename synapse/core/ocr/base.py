"""
Abstract base class for image text extraction.
"""

from abc import ABC, abstractmethod


class TextExtractor(ABC):
    """
    Abstract base for OCR providers.

    extract() is best-effort: it returns "" when no text could be recovered
    for any reason, and never raises.
    """

    @abstractmethod
    async def extract(self, image: str | bytes) -> str:
        """
        Extract text from an image payload.

        Args:
            image: Base64 string, data URL, or raw image bytes

        Returns:
            Recovered text, or "" when nothing could be recovered
        """
        pass
