"""
Custom exception hierarchy for Synapse.

Provides structured error types for better error handling and debugging.
All exceptions inherit from SynapseError for easy catching, and each one
carries an ErrorKind so the HTTP layer can map it to a status code.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Categories of failure reported to callers."""

    EMPTY_INPUT = "EmptyInput"
    QUERY_ERROR = "QueryError"
    STORAGE_FAILURE = "StorageFailure"
    EXTERNAL_DEGRADED = "ExternalDegraded"
    CONFIGURATION = "Configuration"
    INTERNAL = "Internal"


class SynapseError(Exception):
    """
    Base exception for all Synapse errors.
    All custom exceptions should inherit from this class.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, context: dict | None = None):
        """
        Initialize Synapse error.
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class ValidationError(SynapseError):
    """
    Validation errors.
    Raised when caller-supplied input is invalid.
    """

    pass


class EmptyInputError(ValidationError):
    """
    Raised when the caller supplied no usable content (blank text, no image).
    """

    kind = ErrorKind.EMPTY_INPUT


class QueryError(ValidationError):
    """
    Raised for malformed or empty search queries (blank query, bad date).
    """

    kind = ErrorKind.QUERY_ERROR


class StorageError(SynapseError):
    """
    Note store operation errors.
    Raised when the persistence layer is unavailable or rejects a write.
    """

    kind = ErrorKind.STORAGE_FAILURE


class EmbeddingError(SynapseError):
    """
    Embedding generation errors.
    Raised by embedders; the vectorizer absorbs them into a degraded result.
    """

    kind = ErrorKind.EXTERNAL_DEGRADED


class ConfigurationError(SynapseError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    kind = ErrorKind.CONFIGURATION
