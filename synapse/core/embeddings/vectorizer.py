"""
Vectorizer adapter over an embedding provider.

Turns text into a VectorResult. Provider failures are absorbed: the caller
gets a DEGRADED result instead of an exception, and the note it belongs to
is later excluded from semantic ranking.
"""

from synapse.core.embeddings.base import Embedder
from synapse.models.embedding import VectorResult
from synapse.utils.exceptions import EmptyInputError
from synapse.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DIMENSION = 1536


class Vectorizer:
    """
    Fixed-dimension text vectorization with a degrade-don't-fail contract.

    Exactly one provider call is made per vectorize(); there are no retries.
    """

    def __init__(self, embedder: Embedder, dimension: int = DEFAULT_DIMENSION):
        """
        Initialize vectorizer.

        Args:
            embedder: Embedding provider
            dimension: Required length of every vector
        """
        self.embedder = embedder
        self.dimension = dimension

    async def vectorize(self, text: str) -> VectorResult:
        """
        Vectorize text.

        Args:
            text: Non-blank text

        Returns:
            VectorResult.ok with a vector of length `dimension`, or
            VectorResult.degraded when the provider failed or returned
            a vector of the wrong length

        Raises:
            EmptyInputError: If text is empty or whitespace-only
        """
        if not text or not text.strip():
            raise EmptyInputError("Cannot vectorize empty text")

        try:
            vector = await self.embedder.embed(text)
        except EmptyInputError:
            raise
        except Exception as e:
            logger.bind(model=getattr(self.embedder, "model", None), error=str(e)).warning(
                f"Embedding provider failed, storing without embedding: {e}"
            )
            return VectorResult.degraded(str(e))

        if len(vector) != self.dimension:
            logger.bind(model=getattr(self.embedder, "model", None)).warning(
                f"Embedding has {len(vector)} dimensions, expected {self.dimension}"
            )
            return VectorResult.degraded(
                f"dimension mismatch: got {len(vector)}, expected {self.dimension}"
            )

        return VectorResult.ok(vector)

    async def close(self) -> None:
        await self.embedder.close()
