"""
Retrieval engine - keyword, semantic and structured queries over the corpus.

Semantic search scans the whole corpus on every query and scores each note
with a usable embedding against the query vector. There is no index; the
cost is O(N * D) per request.
"""

from collections import Counter
from collections.abc import Callable
from datetime import datetime

from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.core.note_store.base import NoteStore
from synapse.core.similarity import batch_cosine_similarity
from synapse.models.note import CorpusAnalytics, Note, ScoredNote
from synapse.utils.dates import end_of_day, parse_day, start_of_day
from synapse.utils.exceptions import QueryError
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


class RetrievalEngine:
    """Answers keyword, semantic, filter and analytics queries."""

    def __init__(
        self,
        store: NoteStore,
        vectorizer: Vectorizer,
        semantic_limit: int = 5,
        top_tags_limit: int = 3,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize retrieval engine.

        Args:
            store: Note store to query
            vectorizer: Vectorizer used for query embeddings
            semantic_limit: Maximum semantic search results
            top_tags_limit: Number of tags reported by analytics
            clock: Source of "now" for analytics
        """
        self.store = store
        self.vectorizer = vectorizer
        self.semantic_limit = semantic_limit
        self.top_tags_limit = top_tags_limit
        self.clock = clock

    async def keyword_search(self, query: str) -> list[Note]:
        """
        Case-insensitive literal match against note text or tags.

        Results are in store order, not ranked. An empty query matches all notes.
        """
        return await self.store.find_by_pattern(query or "")

    async def semantic_search(self, query: str, limit: int | None = None) -> list[ScoredNote]:
        """
        Rank notes by cosine similarity to the query.

        Notes without a usable embedding (image notes, degraded notes) are
        never scored. Ties keep corpus order.

        Args:
            query: Free-text query
            limit: Maximum results (default: configured semantic_limit)

        Returns:
            Up to `limit` scored notes, highest score first

        Raises:
            QueryError: If query is empty or whitespace-only
            StorageError: If the corpus could not be read
        """
        if not query or not query.strip():
            raise QueryError("Empty search query.")

        if limit is None:
            limit = self.semantic_limit
        if limit <= 0:
            return []
        logger.info(f"Performing semantic search for: {query!r}")

        query_vector = await self.vectorizer.vectorize(query)
        if query_vector.is_degraded:
            logger.bind(reason=query_vector.reason).warning(
                "Query could not be vectorized, returning no semantic results"
            )
            return []

        dimension = len(query_vector.vector)
        candidates = [
            note
            for note in await self.store.scan_all()
            if note.has_embedding and len(note.embedding) == dimension
        ]
        if not candidates:
            return []

        scores = batch_cosine_similarity(
            query_vector.vector, [note.embedding for note in candidates]
        )

        # sorted() is stable, so equal scores keep scan order
        ranked = sorted(zip(candidates, scores), key=lambda pair: pair[1], reverse=True)

        return [
            ScoredNote(text=note.text, tags=note.tags, image=note.image, score=score)
            for note, score in ranked[:limit]
        ]

    async def filter_notes(
        self,
        start: str | None = None,
        end: str | None = None,
        pattern: str | None = None,
    ) -> list[Note]:
        """
        Notes created within a day range that match a tag/text pattern.

        Args:
            start: First day, DD-MM-YYYY, or None for unbounded
            end: Last day (inclusive, through 23:59:59.999999), DD-MM-YYYY, or None
            pattern: Text/tag pattern, None or blank for no constraint

        Returns:
            Matching notes, newest first

        Raises:
            QueryError: If a date is not DD-MM-YYYY
        """
        start_day = parse_day(start)
        end_day = parse_day(end)

        notes = await self.store.find_by_range(
            start=start_of_day(start_day) if start_day else None,
            end=end_of_day(end_day) if end_day else None,
            pattern=pattern,
        )
        logger.bind(start=start, end=end, pattern=pattern).info(
            f"Found {len(notes)} matching notes"
        )
        return notes

    async def analytics(self) -> CorpusAnalytics:
        """
        Summarize the corpus.

        this_month_notes compares the calendar month only, not the year, so
        notes from the same month of earlier years are counted too.
        """
        notes = await self.store.scan_all()
        current_month = self.clock().month

        tag_counts: Counter[str] = Counter()
        for note in notes:
            tag_counts.update(note.tags)

        # most_common() orders equal counts by first insertion
        return CorpusAnalytics(
            total_notes=len(notes),
            this_month_notes=sum(1 for note in notes if note.created_at.month == current_month),
            top_tags=[tag for tag, _ in tag_counts.most_common(self.top_tags_limit)],
        )
