"""Utility modules for Synapse."""

from synapse.utils.dates import end_of_day, parse_day, start_of_day
from synapse.utils.exceptions import (
    ConfigurationError,
    EmbeddingError,
    EmptyInputError,
    ErrorKind,
    QueryError,
    StorageError,
    SynapseError,
    ValidationError,
)
from synapse.utils.id_generator import generate_note_id
from synapse.utils.logger import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # ID Generators
    "generate_note_id",
    # Dates
    "parse_day",
    "start_of_day",
    "end_of_day",
    # Exceptions
    "ErrorKind",
    "SynapseError",
    "ValidationError",
    "EmptyInputError",
    "QueryError",
    "StorageError",
    "EmbeddingError",
    "ConfigurationError",
]
