"""
Ingestion pipeline - turns raw text or images into stored notes.

Flow:
- text:  tagger -> vectorizer -> store
- image: OCR -> tagger -> store (no embedding)

Vectorizer and OCR failures are absorbed (the note is stored degraded or
with placeholder text). Only empty input and storage failures reach the
caller.
"""

import base64
from collections.abc import Callable
from datetime import datetime

from synapse.core.embeddings.vectorizer import Vectorizer
from synapse.core.note_store.base import NoteStore
from synapse.core.ocr.base import TextExtractor
from synapse.core.tagging import TagExtractor
from synapse.models.note import (
    IMAGE_PLACEHOLDER_TEXT,
    EmbeddingStatus,
    ImageIngestionResult,
    Note,
)
from synapse.utils.exceptions import EmptyInputError
from synapse.utils.logger import get_logger

logger = get_logger(__name__)


class IngestionPipeline:
    """Orchestrates text extractor, tagger, vectorizer and note store."""

    def __init__(
        self,
        store: NoteStore,
        vectorizer: Vectorizer,
        extractor: TextExtractor,
        tagger: TagExtractor | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize ingestion pipeline.

        Args:
            store: Note store receiving new notes
            vectorizer: Text vectorizer (degrades instead of failing)
            extractor: OCR text extractor for image notes
            tagger: Tag extractor, default color/object vocabularies
            clock: Source of creation timestamps
        """
        self.store = store
        self.vectorizer = vectorizer
        self.extractor = extractor
        self.tagger = tagger or TagExtractor()
        self.clock = clock

    async def ingest_text(self, text: str) -> Note:
        """
        Tag, vectorize and store a text note.

        Args:
            text: Note text

        Returns:
            The persisted note

        Raises:
            EmptyInputError: If text is empty or whitespace-only
            StorageError: If the note could not be stored
        """
        if not text or not text.strip():
            raise EmptyInputError("Cannot save empty note.")

        tags = self.tagger.extract(text)
        # External call happens before the store is touched
        vector = await self.vectorizer.vectorize(text)

        note = Note(
            text=text,
            embedding=vector.vector,
            embedding_status=vector.status,
            tags=tags,
            created_at=self.clock(),
        )
        note_id = await self.store.insert(note)
        note = note.model_copy(update={"id": note_id})

        logger.bind(note_id=note_id, embedding_status=note.embedding_status.value).info(
            f"Note saved: {note.text_preview} | Tags: {tags}"
        )
        return note

    async def ingest_image(self, image: str | bytes | None) -> ImageIngestionResult:
        """
        OCR, tag and store an image note.

        Args:
            image: Encoded image payload (base64 or data URL)

        Returns:
            The persisted note and the raw extracted text

        Raises:
            EmptyInputError: If no image payload was supplied
            StorageError: If the note could not be stored
        """
        if not image:
            raise EmptyInputError("No image provided")

        extracted_text = await self.extractor.extract(image)
        tags = self.tagger.extract(extracted_text)

        note = Note(
            text=extracted_text or IMAGE_PLACEHOLDER_TEXT,
            embedding_status=EmbeddingStatus.NONE,
            tags=tags,
            image=image if isinstance(image, str) else base64.b64encode(image).decode("ascii"),
            created_at=self.clock(),
        )
        note_id = await self.store.insert(note)
        note = note.model_copy(update={"id": note_id})

        logger.bind(note_id=note_id, text_recovered=bool(extracted_text)).info(
            f"Image + text saved | Tags: {tags}"
        )
        return ImageIngestionResult(note=note, extracted_text=extracted_text)
