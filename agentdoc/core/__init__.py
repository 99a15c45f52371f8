"""
Core business logic module.

Contains the exception hierarchy, document ingestion, retrieval and the
chat agent. Submodules are imported directly to keep import order free
of cycles.
"""

from agentdoc.core.exceptions import (
    AgentDocException,
    DatabaseError,
    EmbeddingUnavailableError,
    ExtractionDegradedError,
    GenerationUnavailableError,
    NotFoundError,
    ScopeNotOwnedError,
    ToolArgumentOutOfRangeError,
    UnsupportedFormatError,
    ValidationError,
    VectorStoreError,
    VectorStoreUnavailableError,
)

__all__ = [
    "AgentDocException",
    "DatabaseError",
    "EmbeddingUnavailableError",
    "ExtractionDegradedError",
    "GenerationUnavailableError",
    "NotFoundError",
    "ScopeNotOwnedError",
    "ToolArgumentOutOfRangeError",
    "UnsupportedFormatError",
    "ValidationError",
    "VectorStoreError",
    "VectorStoreUnavailableError",
]
