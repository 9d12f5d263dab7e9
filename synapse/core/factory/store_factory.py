"""
Factory for creating note stores.
"""

from synapse.config import StorageConfig
from synapse.core.note_store.base import NoteStore
from synapse.core.note_store.sqlite_store import SQLiteNoteStore


class NoteStoreFactory:
    """Factory for creating note stores from configuration."""

    @staticmethod
    def create(config: StorageConfig) -> NoteStore:
        """
        Create note store from configuration.

        Args:
            config: Storage configuration

        Returns:
            NoteStore instance (not yet initialized)
        """
        return SQLiteNoteStore(db_path=config.db_path)
