"""
Document API endpoints.

Routes:
- POST /documents - Upload a PDF or DOCX and start ingestion
- GET /documents - List the caller's documents
- GET /documents/{document_id} - Document status and page count
- DELETE /documents/{document_id} - Delete document, chunks and vectors
- GET /documents/{document_id}/related - Documents with similar content

Dependencies: agentdoc.application.services, agentdoc.models
System role: Document HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile, status

from agentdoc.api.deps import (
    ServiceContainer,
    get_document_service,
    get_owner_id,
    get_services,
)
from agentdoc.api.routers.router_utils import handle_agentdoc_errors, process_document_background
from agentdoc.application.services.document_service import DocumentService
from agentdoc.models.document import (
    DocumentListResponse,
    DocumentResponse,
    RelatedDocumentsResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=UploadResponse, status_code=status.HTTP_202_ACCEPTED)
@handle_agentdoc_errors
async def upload_document(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    collection_id: UUID | None = Form(default=None, alias="collectionId"),
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
    services: ServiceContainer = Depends(get_services),
) -> UploadResponse:
    """
    Accept an upload and return as soon as the document row exists.

    Ingestion runs as a background task; poll GET /documents/{id} for the
    terminal status.

    Raises:
        HTTPException(415): Not a PDF or DOCX
        HTTPException(413): File over the size limit
        HTTPException(404): Collection not found
    """
    file_name = file.filename or "document"
    data = await file.read()

    document, file_type = await document_service.create_document(
        owner_id=owner_id,
        file_name=file_name,
        data=data,
        content_type=file.content_type,
        collection_id=collection_id,
    )

    background_tasks.add_task(
        process_document_background,
        services.pipeline,
        document.id,
        data,
        file_name,
        file_type,
        document.title,
    )
    logger.info(
        "Document upload accepted",
        extra={"document_id": str(document.id), "owner_id": owner_id, "file_name": file_name},
    )
    return UploadResponse(document_id=document.id, status=document.status.value)


@router.get("", response_model=DocumentListResponse)
@handle_agentdoc_errors
async def list_documents(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    documents = await document_service.list_documents(owner_id, limit=limit, offset=offset)
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(d) for d in documents],
        total=len(documents),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
@handle_agentdoc_errors
async def get_document(
    document_id: UUID,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await document_service.get_document(owner_id, document_id)
    return DocumentResponse.model_validate(document)


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_agentdoc_errors
async def delete_document(
    document_id: UUID,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document with its chunks, collection links and vectors.

    Vector cleanup is best-effort; the document is removed regardless.
    """
    await document_service.delete_document(owner_id, document_id)


@router.get("/{document_id}/related", response_model=RelatedDocumentsResponse)
@handle_agentdoc_errors
async def related_documents(
    document_id: UUID,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> RelatedDocumentsResponse:
    related = await document_service.related_documents(owner_id, document_id)
    return RelatedDocumentsResponse(document_id=document_id, related=related)
