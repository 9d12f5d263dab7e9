"""
Embedder abstraction layer for text embeddings.

Supported providers:
- OpenAI (official SDK)
- Ollama (native SDK)

The Vectorizer wraps a provider and degrades instead of failing.
"""
from synapse.core.embeddings.base import Embedder
from synapse.core.embeddings.ollama import OllamaEmbedder
from synapse.core.embeddings.openai import OpenAIEmbedder
from synapse.core.embeddings.vectorizer import Vectorizer

__all__ = [
    "Embedder",
    "OllamaEmbedder",
    "OpenAIEmbedder",
    "Vectorizer",
]
