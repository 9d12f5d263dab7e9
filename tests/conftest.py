"""
Shared test fixtures for all test modules.

Provider fakes stand in for the embedding API and tesseract so tests run
offline; the note store is a real SQLite database under tmp_path.
"""

from collections.abc import AsyncGenerator
from datetime import datetime

import pytest

from synapse.core.embeddings.base import Embedder
from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.core.note_store.sqlite_store import SQLiteNoteStore
from synapse.core.ocr.base import TextExtractor
from synapse.services.ingestion import IngestionPipeline
from synapse.services.retrieval import RetrievalEngine
from synapse.utils.exceptions import EmbeddingError

TEST_DIMENSION = 4

# Fixed "now" for ingestion and analytics
FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0)


class FakeEmbedder(Embedder):
    """Embedder returning preset vectors; set `fail` to simulate quota errors."""

    def __init__(self, default: list[float] | None = None):
        self.model = "fake-embedding"
        self.vectors: dict[str, list[float]] = {}
        self.default = default or [1.0] * TEST_DIMENSION
        self.fail = False
        self.calls: list[str] = []
        self.closed = False

    async def embed(self, text: str, **kwargs) -> list[float]:
        self.calls.append(text)
        if self.fail:
            raise EmbeddingError("quota exceeded")
        return self.vectors.get(text, self.default)

    async def close(self):
        self.closed = True


class FakeExtractor(TextExtractor):
    """Text extractor returning preset text."""

    def __init__(self, text: str = ""):
        self.text = text
        self.calls: list = []

    async def extract(self, image) -> str:
        self.calls.append(image)
        return self.text


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def vectorizer(embedder) -> Vectorizer:
    return Vectorizer(embedder, dimension=TEST_DIMENSION)


@pytest.fixture
async def store(tmp_path) -> AsyncGenerator[SQLiteNoteStore, None]:
    """Initialized SQLite note store in a temporary directory."""
    note_store = SQLiteNoteStore(db_path=str(tmp_path / "notes.db"))
    await note_store.initialize()
    yield note_store
    await note_store.close()


@pytest.fixture
def pipeline(store, vectorizer, extractor) -> IngestionPipeline:
    return IngestionPipeline(
        store=store,
        vectorizer=vectorizer,
        extractor=extractor,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def retrieval(store, vectorizer) -> RetrievalEngine:
    return RetrievalEngine(store=store, vectorizer=vectorizer, clock=lambda: FIXED_NOW)
