"""
Collection API endpoints.

Routes:
- POST /collections - Create a collection
- GET /collections/{collection_id} - Collection with member documents
- PUT /collections/{collection_id} - Replace name and description
- DELETE /collections/{collection_id} - Delete collection (documents are kept)
- POST /collections/{collection_id}/documents - Add owned documents
- DELETE /collections/{collection_id}/documents - Remove documents

Dependencies: agentdoc.application.services, agentdoc.models
System role: Collection HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from agentdoc.api.deps import get_collection_service, get_owner_id
from agentdoc.api.routers.router_utils import handle_agentdoc_errors
from agentdoc.application.services.collection_service import CollectionService
from agentdoc.models.document import (
    AddDocumentsRequest,
    AddDocumentsResponse,
    CollectionDetailResponse,
    CollectionResponse,
    CreateCollectionRequest,
    DocumentResponse,
    RemoveDocumentsRequest,
    RemoveDocumentsResponse,
    UpdateCollectionRequest,
)

router = APIRouter(prefix="/collections", tags=["collections"])


@router.post("", response_model=CollectionResponse, status_code=status.HTTP_201_CREATED)
@handle_agentdoc_errors
async def create_collection(
    request: CreateCollectionRequest,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> CollectionResponse:
    collection = await collection_service.create_collection(
        owner_id,
        name=request.name,
        description=request.description,
    )
    return CollectionResponse.model_validate(collection)


@router.get("/{collection_id}", response_model=CollectionDetailResponse)
@handle_agentdoc_errors
async def get_collection(
    collection_id: UUID,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> CollectionDetailResponse:
    """
    Raises:
        HTTPException(404): Collection not found
    """
    collection, documents = await collection_service.get_collection(owner_id, collection_id)
    return CollectionDetailResponse(
        **CollectionResponse.model_validate(collection).model_dump(),
        documents=[DocumentResponse.model_validate(d) for d in documents],
    )


@router.put("/{collection_id}", response_model=CollectionResponse)
@handle_agentdoc_errors
async def update_collection(
    collection_id: UUID,
    request: UpdateCollectionRequest,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> CollectionResponse:
    collection = await collection_service.update_collection(
        owner_id,
        collection_id,
        name=request.name,
        description=request.description,
    )
    return CollectionResponse.model_validate(collection)


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
@handle_agentdoc_errors
async def delete_collection(
    collection_id: UUID,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> None:
    await collection_service.delete_collection(owner_id, collection_id)


@router.post("/{collection_id}/documents", response_model=AddDocumentsResponse)
@handle_agentdoc_errors
async def add_documents(
    collection_id: UUID,
    request: AddDocumentsRequest,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> AddDocumentsResponse:
    """
    Link documents to a collection; already-linked or foreign documents are skipped.

    Raises:
        HTTPException(404): Collection not found
    """
    added, skipped = await collection_service.add_documents(
        owner_id, collection_id, request.document_ids
    )
    return AddDocumentsResponse(collection_id=collection_id, added=added, skipped=skipped)


@router.delete("/{collection_id}/documents", response_model=RemoveDocumentsResponse)
@handle_agentdoc_errors
async def remove_documents(
    collection_id: UUID,
    request: RemoveDocumentsRequest,
    owner_id: str = Depends(get_owner_id),
    collection_service: CollectionService = Depends(get_collection_service),
) -> RemoveDocumentsResponse:
    """
    Unlink documents from a collection; non-members are ignored.

    Raises:
        HTTPException(404): Collection not found
    """
    removed = await collection_service.remove_documents(
        owner_id, collection_id, request.document_ids
    )
    return RemoveDocumentsResponse(collection_id=collection_id, removed=removed)
