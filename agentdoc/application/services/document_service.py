"""
Document service orchestrator.

Validates uploads and creates the PROCESSING document row, exposes
owner-scoped status and listing, deletes documents together with their
chunks and vectors, and finds related documents.

Ingestion itself runs detached in DocumentPipeline; this service only
prepares the row it works on.

Dependencies: agentdoc.boundary.db, agentdoc.boundary.vdb, agentdoc.core
System role: Document management orchestration
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD import collection_crud, document_collection_crud, document_crud
from agentdoc.boundary.db.models import DocumentModel, DocumentStatus
from agentdoc.configs.ingestion import IngestionSettings
from agentdoc.core.document_processing.tasks import (
    SUPPORTED_TYPES,
    VectorStoreTask,
    resolve_file_type,
    strip_extension,
)
from agentdoc.core.exceptions import FileTooLargeError, NotFoundError, ScopeNotOwnedError, ValidationError
from agentdoc.core.retriever import RelatedDocumentFinder
from agentdoc.models.document import RelatedDocument

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document lifecycle operations for one request.

    Args:
        db: AsyncSession for document metadata
        vector_store_task: Vector cleanup on delete
        related_finder: Vector-neighbour lookup, if available
        ingestion_config: Upload limits
    """

    def __init__(
        self,
        db: AsyncSession,
        vector_store_task: VectorStoreTask,
        related_finder: RelatedDocumentFinder | None = None,
        ingestion_config: IngestionSettings | None = None,
    ) -> None:
        self.db = db
        self.vector_store_task = vector_store_task
        self.related_finder = related_finder
        self.ingestion_config = ingestion_config or IngestionSettings()

    async def create_document(
        self,
        owner_id: str,
        file_name: str,
        data: bytes,
        content_type: str | None = None,
        collection_id: UUID | None = None,
    ) -> tuple[DocumentModel, str]:
        """
        Validate an upload and create its PROCESSING document.

        Steps:
        1. Resolve the file type from MIME type or extension
        2. Check size limits
        3. Verify the optional collection is the caller's
        4. Create the document row (and collection link) and commit

        Args:
            owner_id: Uploading user
            file_name: Original file name
            data: Raw file bytes
            content_type: Declared MIME type
            collection_id: Collection to add the document to

        Returns:
            tuple: (document, file_type) where file_type is 'pdf' or 'docx'

        Raises:
            UnsupportedFormatError: Neither PDF nor DOCX
            FileTooLargeError: Over the configured size limit
            ValidationError: Empty file
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        file_type = resolve_file_type(file_name, content_type)

        size = len(data)
        if size == 0:
            raise ValidationError("Uploaded file is empty", field="file")
        if size > self.ingestion_config.max_file_size_bytes:
            raise FileTooLargeError(size, self.ingestion_config.max_file_size_bytes)

        if collection_id is not None:
            collection = await collection_crud.get_owned(self.db, collection_id, owner_id)
            if collection is None:
                raise ScopeNotOwnedError("Collection", str(collection_id))

        document = await document_crud.create(
            self.db,
            owner_id=owner_id,
            title=strip_extension(file_name),
            file_name=file_name,
            file_size=size,
            file_type=content_type or SUPPORTED_TYPES[file_type][0],
            status=DocumentStatus.PROCESSING,
        )
        if collection_id is not None:
            await document_collection_crud.link(self.db, document.id, collection_id)
        await self.db.commit()

        logger.info(
            f"{__name__}:create_document - Document created",
            extra={"document_id": str(document.id), "file_type": file_type, "size": size},
        )
        return document, file_type

    async def get_document(self, owner_id: str, document_id: UUID) -> DocumentModel:
        """
        Raises:
            NotFoundError: Missing or owned by someone else
        """
        document = await document_crud.get_owned(self.db, document_id, owner_id)
        if document is None:
            raise NotFoundError("Document", str(document_id))
        return document

    async def list_documents(
        self,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        return await document_crud.list_by_owner(self.db, owner_id, limit=limit, offset=offset)

    async def delete_document(self, owner_id: str, document_id: UUID) -> None:
        """
        Delete a document, its chunks, collection links and vectors.

        Vector removal is best-effort and runs first; the relational delete
        proceeds even if it fails.

        Raises:
            NotFoundError: Missing or owned by someone else
        """
        document = await self.get_document(owner_id, document_id)

        removed = await self.vector_store_task.remove_document(str(document.id))
        if removed is None:
            logger.warning(
                f"{__name__}:delete_document - Vector points not removed",
                extra={"document_id": str(document.id)},
            )

        await document_crud.delete_with_dependents(self.db, document.id)
        await self.db.commit()
        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": str(document.id), "vectors_removed": removed},
        )

    async def related_documents(self, owner_id: str, document_id: UUID) -> list[RelatedDocument]:
        """
        Other owned documents with chunks close to this one's.

        Raises:
            ScopeNotOwnedError: Missing or owned by someone else
        """
        if self.related_finder is None:
            await self.get_document(owner_id, document_id)
            return []
        return await self.related_finder.find(self.db, owner_id, document_id)
