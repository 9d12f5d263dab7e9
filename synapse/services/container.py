"""
Service container - builds and owns the process-wide components.

The HTTP layer receives a container instead of reaching for module globals,
so tests can hand in one built from fakes.
"""

from dataclasses import dataclass

from synapse.config import Config
from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.core.factory import EmbedderFactory, NoteStoreFactory, TextExtractorFactory
from synapse.core.note_store.base import NoteStore
from synapse.core.ocr.base import TextExtractor
from synapse.services.ingestion import IngestionPipeline
from synapse.services.retrieval import RetrievalEngine
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ServiceContainer:
    """Ingestion pipeline and retrieval engine sharing one store and vectorizer."""

    store: NoteStore
    vectorizer: Vectorizer
    extractor: TextExtractor
    pipeline: IngestionPipeline
    retrieval: RetrievalEngine

    @classmethod
    def from_components(
        cls,
        store: NoteStore,
        vectorizer: Vectorizer,
        extractor: TextExtractor,
        config: Config | None = None,
    ) -> "ServiceContainer":
        """Wire already-constructed components together."""
        config = config or Config()
        return cls(
            store=store,
            vectorizer=vectorizer,
            extractor=extractor,
            pipeline=IngestionPipeline(store=store, vectorizer=vectorizer, extractor=extractor),
            retrieval=RetrievalEngine(
                store=store,
                vectorizer=vectorizer,
                semantic_limit=config.search.semantic_limit,
                top_tags_limit=config.search.top_tags_limit,
            ),
        )

    @classmethod
    async def build(cls, config: Config) -> "ServiceContainer":
        """
        Create and initialize every component from configuration.

        Raises:
            ConfigurationError: If the embedder provider is unsupported or misconfigured
            StorageError: If the note store cannot be initialized
        """
        logger.info("Creating embedder")
        vectorizer = EmbedderFactory.create_vectorizer(config.embedder)

        logger.info("Creating text extractor")
        extractor = TextExtractorFactory.create(config.ocr)

        logger.info("Creating note store")
        store = NoteStoreFactory.create(config.storage)

        services = cls.from_components(store, vectorizer, extractor, config)
        await services.start()
        return services

    async def start(self) -> None:
        """Initialize the note store (idempotent)."""
        await self.store.initialize()

    async def stop(self) -> None:
        """Close the note store connection; the store can be started again."""
        await self.store.close()

    async def close(self) -> None:
        await self.vectorizer.close()
        await self.store.close()
