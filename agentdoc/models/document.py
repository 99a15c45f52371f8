"""
Document domain models and schemas.

Request/response schemas for document and collection operations.

Dependencies: pydantic
System role: Document API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from agentdoc.boundary.db.models.document_model import DocumentStatus


class DocumentResponse(BaseModel):
    """Document with its ingestion status."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    file_name: str
    file_size: int
    file_type: str
    status: DocumentStatus
    page_count: int | None = None
    error_message: str | None = None
    created_at: datetime


class DocumentListResponse(BaseModel):
    """Owner's documents, newest first."""

    documents: list[DocumentResponse]
    total: int


class UploadResponse(BaseModel):
    """Returned as soon as the document row exists."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: uuid.UUID = Field(alias="documentId")
    status: str


class RelatedDocument(BaseModel):
    """Another owned document whose chunks are close to this one's."""

    document_id: uuid.UUID
    score: float


class RelatedDocumentsResponse(BaseModel):
    document_id: uuid.UUID
    related: list[RelatedDocument]


class CreateCollectionRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class CollectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None = None
    created_at: datetime


class AddDocumentsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document_ids: list[uuid.UUID] = Field(min_length=1, alias="documentIds")


class AddDocumentsResponse(BaseModel):
    collection_id: uuid.UUID
    added: int = Field(description="New links created")
    skipped: int = Field(description="Already linked or not owned")


class UpdateCollectionRequest(BaseModel):
    """Full replacement of a collection's editable fields."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class CollectionDetailResponse(CollectionResponse):
    """Collection with its member documents."""

    documents: list[DocumentResponse]


class RemoveDocumentsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    document_ids: list[uuid.UUID] = Field(min_length=1, alias="documentIds")


class RemoveDocumentsResponse(BaseModel):
    collection_id: uuid.UUID
    removed: int = Field(description="Links deleted; documents not in the collection are ignored")
