"""
Base interface for note storage.

The corpus is append-only: notes are inserted once and never updated or
deleted. Queries return notes in a stable order.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from synapse.models.note import Note


class NoteStore(ABC):
    """Abstract base class for note storage implementations."""

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the store (create tables/indices).

        Raises:
            StorageError: If initialization fails
        """
        pass

    @abstractmethod
    async def insert(self, note: Note) -> str:
        """
        Persist a note atomically.

        Args:
            note: Note to store; an id is assigned when the note has none

        Returns:
            The stored note's id

        Raises:
            StorageError: If the write fails (nothing is written)
        """
        pass

    @abstractmethod
    async def scan_all(self) -> list[Note]:
        """Return the full corpus in insertion order."""
        pass

    @abstractmethod
    async def find_by_pattern(self, pattern: str) -> list[Note]:
        """
        Case-insensitive literal match against note text or any tag.

        An empty pattern matches every note. Results are in insertion order.
        """
        pass

    @abstractmethod
    async def find_by_range(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        pattern: str | None = None,
    ) -> list[Note]:
        """
        Notes created within [start, end] that also match pattern.

        Args:
            start: Inclusive lower bound, None for unbounded
            end: Inclusive upper bound, None for unbounded
            pattern: Text/tag pattern as in find_by_pattern, None or blank for none

        Returns:
            Matching notes, newest first
        """
        pass

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored notes."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connections."""
        pass
