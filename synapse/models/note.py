"""
Note model and the records derived from it.

A Note is the unit of storage: a snippet of text (typed, selected in the
browser or OCR'd from an image) together with its auto-derived tags and,
when vectorization succeeded, its embedding.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

IMAGE_PLACEHOLDER_TEXT = "Image content"


class EmbeddingStatus(str, Enum):
    """Whether a note carries a vector usable for similarity ranking."""

    OK = "ok"  # Provider returned a vector of the configured dimension
    DEGRADED = "degraded"  # Provider failed; no vector stored
    NONE = "none"  # Never vectorized (image notes)


class Note(BaseModel):
    """
    Immutable stored record of text with tags, optional embedding and timestamp.

    The id is empty until the note store assigns one on insert.
    """

    id: str = Field(default="", description="Unique note ID (note_xxx)")
    text: str = Field(..., description="Note text (placeholder for textless images)")
    embedding: list[float] = Field(default_factory=list, description="Vector embedding of text")
    embedding_status: EmbeddingStatus = Field(
        default=EmbeddingStatus.NONE,
        description="Whether the embedding may be used for ranking",
    )
    tags: list[str] = Field(default_factory=list, description="Lowercase vocabulary tags")
    image: str | None = Field(default=None, description="Encoded image payload for image notes")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation timestamp")

    model_config = {"frozen": True}

    @property
    def has_embedding(self) -> bool:
        """True when the note may take part in semantic ranking."""
        return self.embedding_status == EmbeddingStatus.OK and len(self.embedding) > 0

    @property
    def text_preview(self) -> str:
        """First 60 characters of the text, for log lines."""
        return self.text[:60]


class ScoredNote(BaseModel):
    """Semantic search hit. The embedding itself is never exposed."""

    text: str
    tags: list[str]
    image: str | None = None
    score: float


class ImageIngestionResult(BaseModel):
    """Result of ingesting an image: the stored note plus the raw OCR text."""

    note: Note
    extracted_text: str = ""


class CorpusAnalytics(BaseModel):
    """Corpus summary returned by the analytics query."""

    total_notes: int = Field(default=0, ge=0)
    this_month_notes: int = Field(default=0, ge=0)
    top_tags: list[str] = Field(default_factory=list)
