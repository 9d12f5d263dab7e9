"""
SQLite note store implementation using aiosqlite.
"""

import asyncio
import json
import re
from datetime import datetime
from functools import lru_cache
from pathlib import Path

import aiosqlite

from synapse.core.note_store.base import NoteStore
from synapse.models.note import EmbeddingStatus, Note
from synapse.utils.exceptions import StorageError
from synapse.utils.id_generator import generate_note_id
from synapse.utils.logger import get_logger

logger = get_logger(__name__)

_NOTE_COLUMNS = "id, text, embedding, embedding_status, tags, image, created_at"

# Matches the pattern against the text or any element of the JSON tags array
_PATTERN_CLAUSE = (
    "(text REGEXP ? OR EXISTS (SELECT 1 FROM json_each(notes.tags) WHERE json_each.value REGEXP ?))"
)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _regexp(pattern: str, value: str | None) -> bool:
    """SQLite REGEXP implementation: `value REGEXP pattern` calls regexp(pattern, value)."""
    if value is None:
        return False
    return _compile(pattern).search(value) is not None


def _format_timestamp(value: datetime) -> str:
    # Fixed-width ISO strings so lexical order equals chronological order
    return value.isoformat(timespec="microseconds")


class SQLiteNoteStore(NoteStore):
    """
    SQLite-based note store.

    Features:
    - Append-only notes table, insertion order kept by an autoincrement key
    - Tags stored as a JSON array and matched with json_each
    - User patterns escaped before they reach the REGEXP function
    - One transaction per insert, serialized by an asyncio lock
    """

    def __init__(self, db_path: str = "data/synapse.db"):
        """
        Initialize SQLite note store.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
        """
        self.db_path = db_path
        self.connection: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._connect_lock = asyncio.Lock()

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    async def connect(self) -> None:
        """Establish connection to SQLite (once, even under concurrent first use)."""
        if self.connection is not None:
            return
        async with self._connect_lock:
            if self.connection is not None:
                return
            connection = await aiosqlite.connect(self.db_path)
            connection.row_factory = aiosqlite.Row
            await connection.create_function("REGEXP", 2, _regexp, deterministic=True)
            if self.db_path != ":memory:":
                await connection.execute("PRAGMA journal_mode = WAL")
            await connection.commit()
            # Published only once fully configured
            self.connection = connection

    async def initialize(self) -> None:
        """Initialize database schema."""
        try:
            await self.connect()

            await self.connection.execute(
                """
                CREATE TABLE IF NOT EXISTS notes (
                    seq INTEGER PRIMARY KEY AUTOINCREMENT,
                    id TEXT NOT NULL UNIQUE,
                    text TEXT NOT NULL,
                    embedding TEXT,
                    embedding_status TEXT NOT NULL,
                    tags TEXT NOT NULL DEFAULT '[]',
                    image TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
            await self.connection.execute(
                "CREATE INDEX IF NOT EXISTS idx_notes_created ON notes(created_at)"
            )
            await self.connection.commit()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to initialize note store: {e}") from e

        logger.info(f"SQLite note store ready at {self.db_path}")

    async def insert(self, note: Note) -> str:
        await self.connect()

        note_id = note.id or generate_note_id()
        embedding_json = json.dumps(note.embedding) if note.has_embedding else None

        async with self._write_lock:
            try:
                await self.connection.execute(
                    f"INSERT INTO notes ({_NOTE_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        note_id,
                        note.text,
                        embedding_json,
                        note.embedding_status.value,
                        json.dumps(note.tags),
                        note.image,
                        _format_timestamp(note.created_at),
                    ),
                )
                await self.connection.commit()
            except aiosqlite.Error as e:
                await self.connection.rollback()
                logger.bind(note_id=note_id).error(f"Failed to insert note: {e}")
                raise StorageError(f"Failed to save note: {e}", context={"note_id": note_id}) from e

        return note_id

    async def scan_all(self) -> list[Note]:
        return await self._select("", (), order="seq ASC")

    async def find_by_pattern(self, pattern: str) -> list[Note]:
        escaped = re.escape(pattern or "")
        return await self._select(
            f"WHERE {_PATTERN_CLAUSE}", (escaped, escaped), order="seq ASC"
        )

    async def find_by_range(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        pattern: str | None = None,
    ) -> list[Note]:
        clauses: list[str] = []
        params: list[str] = []

        if start is not None:
            clauses.append("created_at >= ?")
            params.append(_format_timestamp(start))
        if end is not None:
            clauses.append("created_at <= ?")
            params.append(_format_timestamp(end))
        if pattern and pattern.strip():
            escaped = re.escape(pattern.strip())
            clauses.append(_PATTERN_CLAUSE)
            params.extend([escaped, escaped])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return await self._select(where, tuple(params), order="created_at DESC, seq DESC")

    async def count(self) -> int:
        await self.connect()
        try:
            async with self.connection.execute("SELECT COUNT(*) FROM notes") as cursor:
                row = await cursor.fetchone()
        except aiosqlite.Error as e:
            raise StorageError(f"Failed to count notes: {e}") from e
        return row[0]

    async def close(self) -> None:
        if self.connection:
            await self.connection.close()
            self.connection = None

    async def _select(self, where: str, params: tuple, order: str) -> list[Note]:
        await self.connect()
        query = f"SELECT {_NOTE_COLUMNS} FROM notes {where} ORDER BY {order}"
        try:
            async with self.connection.execute(query, params) as cursor:
                rows = await cursor.fetchall()
        except aiosqlite.Error as e:
            logger.error(f"Note query failed: {e}")
            raise StorageError(f"Failed to query notes: {e}") from e
        return [self._row_to_note(row) for row in rows]

    @staticmethod
    def _row_to_note(row: aiosqlite.Row) -> Note:
        return Note(
            id=row["id"],
            text=row["text"],
            embedding=json.loads(row["embedding"]) if row["embedding"] else [],
            embedding_status=EmbeddingStatus(row["embedding_status"]),
            tags=json.loads(row["tags"]),
            image=row["image"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
