"""
Ollama embedder using native ollama-python SDK.
"""

import ollama

from synapse.core.embeddings.base import Embedder
from synapse.utils.exceptions import EmbeddingError, EmptyInputError
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


class OllamaEmbedder(Embedder):
    """
    Ollama embedder for local embedding models (nomic-embed-text, mxbai-embed-large, ...).

    The configured dimension must match the model's native output size.
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "nomic-embed-text",
        timeout: float = 30.0,
    ):
        self.host = host
        self.model = model
        self.timeout = timeout

        self.client = ollama.AsyncClient(host=host, timeout=timeout)

    async def embed(self, text: str, **kwargs) -> list[float]:
        """
        Generate embedding for text using Ollama.

        Raises:
            EmptyInputError: If text is empty
            EmbeddingError: If Ollama embedding fails
        """
        if not text or not text.strip():
            raise EmptyInputError("Text cannot be empty")

        try:
            response = await self.client.embeddings(model=self.model, prompt=text, **kwargs)

            if not response or "embedding" not in response:
                raise EmbeddingError("Ollama returned invalid embedding response")

            return list(response["embedding"])
        except EmbeddingError:
            raise
        except Exception as e:
            logger.bind(model=self.model, host=self.host, error=str(e)).error(
                f"Ollama embedding error: {e}"
            )
            raise EmbeddingError(f"Ollama embedding error: {e}") from e

    async def close(self):
        """Close client (Ollama SDK handles cleanup internally)."""
        pass
