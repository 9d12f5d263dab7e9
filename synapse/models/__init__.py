"""
Data models for Synapse.

Core models:
- Note: stored snippet with tags, optional embedding and timestamp
- EmbeddingStatus: whether a note's embedding is usable for ranking
- VectorResult: outcome of vectorizing a text (ok or degraded)
- ScoredNote, ImageIngestionResult, CorpusAnalytics: query and ingestion results
"""

from synapse.models.embedding import VectorResult
from synapse.models.note import (
    IMAGE_PLACEHOLDER_TEXT,
    CorpusAnalytics,
    EmbeddingStatus,
    ImageIngestionResult,
    Note,
    ScoredNote,
)

__all__ = [
    "Note",
    "EmbeddingStatus",
    "IMAGE_PLACEHOLDER_TEXT",
    "VectorResult",
    "ScoredNote",
    "ImageIngestionResult",
    "CorpusAnalytics",
]
