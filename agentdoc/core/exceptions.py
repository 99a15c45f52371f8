"""
Exception hierarchy for AgentDoc.

Layered domain errors for ingestion, retrieval and generation. Every
exception carries a details dict so log lines and API error bodies
keep the identifiers involved.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AgentDocException(Exception):
    """Base exception for all AgentDoc errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(AgentDocException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class FileTooLargeError(ValidationError):
    """Raised when an upload exceeds the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"File exceeds the {limit} byte limit",
            field="file",
            details={"size": size, "limit": limit},
        )


class NotFoundError(AgentDocException):
    """Raised when a record does not exist."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            f"{resource} not found: {resource_id}",
            {"resource": resource, "resource_id": resource_id},
        )


class ScopeNotOwnedError(NotFoundError):
    """
    Raised when a document or collection is missing or owned by someone else.

    Deliberately indistinguishable from a plain not-found so callers cannot
    probe for the existence of other users' records.
    """


class DatabaseError(AgentDocException):
    """Raised when a relational store operation fails."""


class DocumentProcessingError(AgentDocException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when a file is neither PDF nor DOCX."""

    def __init__(self, file_name: str, mime_type: str | None = None) -> None:
        super().__init__(
            f"Unsupported file type: {file_name}",
            details={"file_name": file_name, "mime_type": mime_type},
        )


class ExtractionDegradedError(DocumentProcessingError):
    """Raised when structural parsing fails and placeholder text is used."""


class EmbeddingUnavailableError(DocumentProcessingError):
    """Raised when no real embedding could be produced for ingestion."""


class VectorStoreError(AgentDocException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (ensure, upsert, search, scroll, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class VectorStoreUnavailableError(VectorStoreError):
    """Raised when the vector store is unreachable or not configured."""


class ToolArgumentOutOfRangeError(AgentDocException):
    """Raised when preview-source is asked for an index outside 1..n."""

    def __init__(self, source_id: int, available: int) -> None:
        super().__init__(
            f"Invalid source ID: {source_id}",
            {"source_id": source_id, "available": available},
        )


class GenerationUnavailableError(AgentDocException):
    """Raised when the language model is not configured or fails mid-request."""
