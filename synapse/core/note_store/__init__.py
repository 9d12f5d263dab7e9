"""
Note storage.
"""
from synapse.core.note_store.base import NoteStore
from synapse.core.note_store.sqlite_store import SQLiteNoteStore

__all__ = [
    "NoteStore",
    "SQLiteNoteStore",
]
