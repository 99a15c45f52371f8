"""API-specific dependencies."""

from .dependencies import (
    OWNER_HEADER,
    ServiceContainer,
    build_services,
    get_chat_service,
    get_collection_service,
    get_db,
    get_document_service,
    get_owner_id,
    get_services,
)

__all__ = [
    "OWNER_HEADER",
    "ServiceContainer",
    "build_services",
    "get_chat_service",
    "get_collection_service",
    "get_db",
    "get_document_service",
    "get_owner_id",
    "get_services",
]
