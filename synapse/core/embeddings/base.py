"""
Abstract base class for embedding providers.
Handles text to vector embeddings for semantic search.
"""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """
    Abstract base for embedding providers.

    Implementations make exactly one provider call per embed() and raise
    EmbeddingError on any provider failure; they never retry.
    """

    model: str

    @abstractmethod
    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding vector for text.

        Args:
            text: Text to embed
            **kwargs: Provider-specific parameters

        Returns:
            List of floats representing the embedding vector

        Raises:
            EmptyInputError: If text is empty
            EmbeddingError: If embedding generation fails
        """
        pass

    @abstractmethod
    async def close(self):
        """Close any open connections."""
        pass
