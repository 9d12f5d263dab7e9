"""
Services for Synapse.

High-level business logic services:
- IngestionPipeline: text/image -> tagged, vectorized, stored note
- RetrievalEngine: keyword, semantic and filter queries plus analytics
- ServiceContainer: construction and lifecycle of the components above
"""

from synapse.services.container import ServiceContainer
from synapse.services.ingestion import IngestionPipeline
from synapse.services.retrieval import RetrievalEngine

__all__ = [
    "IngestionPipeline",
    "RetrievalEngine",
    "ServiceContainer",
]
