"""
Factory for creating embedder providers and the vectorizer around them.
"""

from synapse.config import EmbedderConfig
from synapse.core.embeddings.base import Embedder
from synapse.core.embeddings.ollama import OllamaEmbedder
from synapse.core.embeddings.openai import OpenAIEmbedder
from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.utils.exceptions import ConfigurationError


class EmbedderFactory:
    """Factory for creating embedder providers from configuration."""

    @staticmethod
    def create(config: EmbedderConfig) -> Embedder:
        """
        Create embedder from configuration.

        Args:
            config: Embedder configuration

        Returns:
            Embedder instance

        Raises:
            ConfigurationError: If provider is unsupported or the API key is missing
        """
        if config.provider == "openai":
            if not config.api_key:
                raise ConfigurationError("OpenAI API key is required")
            # Only text-embedding-3 models accept an explicit output size
            dimensions = config.dimension if config.model.startswith("text-embedding-3") else None
            return OpenAIEmbedder(
                api_key=config.api_key,
                model=config.model,
                base_url=config.base_url,
                timeout=config.timeout,
                dimensions=dimensions,
            )
        elif config.provider == "ollama":
            return OllamaEmbedder(
                host=config.base_url or "http://localhost:11434",
                model=config.model,
                timeout=config.timeout,
            )
        else:
            raise ConfigurationError(f"Unsupported embedder provider: {config.provider}")

    @staticmethod
    def create_vectorizer(config: EmbedderConfig) -> Vectorizer:
        """Create a Vectorizer enforcing the configured dimension."""
        return Vectorizer(EmbedderFactory.create(config), dimension=config.dimension)
