"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Uploaded file and its ingestion state
  - ChunkModel: Extracted text slice with keywords and vector id
  - CollectionModel, DocumentCollectionModel: Document grouping
  - ChatHistoryModel, ChatMessageModel, MessageRole: Chat transcripts

Dependencies: sqlalchemy, agentdoc.boundary.db.base
System role: Database model definitions for domain entities
"""

from agentdoc.boundary.db.models.document_model import DocumentModel, DocumentStatus
from agentdoc.boundary.db.models.chunk_model import ChunkModel
from agentdoc.boundary.db.models.collection_model import (
    CollectionModel,
    DocumentCollectionModel,
)
from agentdoc.boundary.db.models.chat_model import (
    ChatHistoryModel,
    ChatMessageModel,
    MessageRole,
)

__all__ = [
    "DocumentModel",
    "DocumentStatus",
    "ChunkModel",
    "CollectionModel",
    "DocumentCollectionModel",
    "ChatHistoryModel",
    "ChatMessageModel",
    "MessageRole",
]
