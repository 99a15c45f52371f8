"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - build_async_engine(), build_session_factory(), get_async_engine(): Connection management
  - Document, Chunk, Collection and chat models with their CRUD singletons

Dependencies: sqlalchemy, agentdoc.configs
System role: Persistent storage for documents, chunks, collections and chat transcripts
"""

from agentdoc.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from agentdoc.boundary.db.connection import (
    build_async_engine,
    build_session_factory,
    get_async_engine,
)
from agentdoc.boundary.db.models import (
    ChatHistoryModel,
    ChatMessageModel,
    ChunkModel,
    CollectionModel,
    DocumentCollectionModel,
    DocumentModel,
    DocumentStatus,
    MessageRole,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    "build_async_engine",
    "build_session_factory",
    "get_async_engine",
    "ChatHistoryModel",
    "ChatMessageModel",
    "ChunkModel",
    "CollectionModel",
    "DocumentCollectionModel",
    "DocumentModel",
    "DocumentStatus",
    "MessageRole",
]
