"""
OpenAI embedder using official SDK.
"""

from openai import AsyncOpenAI

from synapse.core.embeddings.base import Embedder
from synapse.utils.exceptions import EmbeddingError, EmptyInputError
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


class OpenAIEmbedder(Embedder):
    """
    OpenAI embedder for generating text embeddings.

    Supports models like text-embedding-3-small, text-embedding-3-large, etc.
    Retries are disabled on the client: a failed call is reported once.
    """

    # Known dimensions for OpenAI embedding models
    MODEL_DIMENSIONS = {
        "text-embedding-3-small": 1536,
        "text-embedding-3-large": 3072,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        organization: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        dimensions: int | None = None,
    ):
        """
        Initialize OpenAI embedder.

        Args:
            api_key: OpenAI API key
            model: Embedding model name (e.g., "text-embedding-3-small")
            organization: Optional organization ID
            base_url: Optional custom base URL
            timeout: Request timeout in seconds
            dimensions: Requested output size (text-embedding-3 models only)
        """
        self.model = model
        self.dimensions = dimensions

        self.client = AsyncOpenAI(
            api_key=api_key,
            organization=organization,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text using OpenAI.

        Args:
            text: Text to embed
            **kwargs: Additional parameters (e.g., user)

        Returns:
            Embedding vector as list of floats

        Raises:
            EmptyInputError: If text is empty
            EmbeddingError: If OpenAI API call fails
        """
        if not text or not text.strip():
            raise EmptyInputError("Text cannot be empty")

        if self.dimensions is not None:
            kwargs.setdefault("dimensions", self.dimensions)

        try:
            response = await self.client.embeddings.create(model=self.model, input=text, **kwargs)

            if not response.data:
                raise EmbeddingError("OpenAI returned empty embedding response")

            return response.data[0].embedding
        except EmbeddingError:
            raise
        except Exception as e:
            logger.bind(model=self.model, error=str(e), error_type=type(e).__name__).error(
                f"OpenAI embedding error: {e}"
            )
            raise EmbeddingError(f"OpenAI embedding error: {e}") from e

    async def close(self):
        """Close OpenAI client."""
        await self.client.close()
