"""Service orchestrators."""

from .chat_service import ChatService
from .collection_service import CollectionService
from .document_service import DocumentService

__all__ = [
    "ChatService",
    "CollectionService",
    "DocumentService",
]
