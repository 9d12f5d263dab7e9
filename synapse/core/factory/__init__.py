"""
Factory modules for creating Synapse components.

Provides modular factories for the embedder, note store and text extractor.
"""

from synapse.core.factory.embedder_factory import EmbedderFactory
from synapse.core.factory.extractor_factory import TextExtractorFactory
from synapse.core.factory.store_factory import NoteStoreFactory

__all__ = [
    "EmbedderFactory",
    "NoteStoreFactory",
    "TextExtractorFactory",
]
