"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from agentdoc.boundary.db.CRUD import document_crud, chunk_crud

    document = await document_crud.get_owned(db, document_id, owner_id)
"""

from agentdoc.boundary.db.CRUD.base_crud import BaseCRUD
from agentdoc.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud
from agentdoc.boundary.db.CRUD.chunk_crud import ChunkCRUD, ChunkWithSource, chunk_crud
from agentdoc.boundary.db.CRUD.collection_crud import (
    CollectionCRUD,
    DocumentCollectionCRUD,
    collection_crud,
    document_collection_crud,
)
from agentdoc.boundary.db.CRUD.chat_history_crud import (
    ChatHistoryCRUD,
    ChatMessageCRUD,
    chat_history_crud,
    chat_message_crud,
)

__all__ = [
    "BaseCRUD",
    "DocumentCRUD",
    "document_crud",
    "ChunkCRUD",
    "ChunkWithSource",
    "chunk_crud",
    "CollectionCRUD",
    "DocumentCollectionCRUD",
    "collection_crud",
    "document_collection_crud",
    "ChatHistoryCRUD",
    "ChatMessageCRUD",
    "chat_history_crud",
    "chat_message_crud",
]
