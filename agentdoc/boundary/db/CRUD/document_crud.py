"""
Document CRUD operations.

Owner-scoped reads, lifecycle status transitions and the dependent-row
delete used when a user removes a document.

Dependencies: sqlalchemy, agentdoc.boundary.db.models
System role: Document persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD.base_crud import BaseCRUD
from agentdoc.boundary.db.models.chunk_model import ChunkModel
from agentdoc.boundary.db.models.collection_model import DocumentCollectionModel
from agentdoc.boundary.db.models.document_model import DocumentModel, DocumentStatus


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def get_owned(
        self,
        session: AsyncSession,
        document_id: UUID,
        owner_id: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to owner_id.

        Returns:
            DocumentModel, or None when missing or owned by someone else
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == document_id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        """List an owner's documents, newest first."""
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_ids_by_owner(self, session: AsyncSession, owner_id: str) -> list[UUID]:
        """Return ids of every document owned by owner_id."""
        stmt = select(DocumentModel.id).where(DocumentModel.owner_id == owner_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def filter_owned_ids(
        self,
        session: AsyncSession,
        owner_id: str,
        document_ids: Sequence[UUID],
    ) -> list[UUID]:
        """Keep only the ids in document_ids that owner_id owns."""
        if not document_ids:
            return []
        stmt = select(DocumentModel.id).where(
            DocumentModel.owner_id == owner_id,
            DocumentModel.id.in_(list(document_ids)),
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def mark_completed(
        self,
        session: AsyncSession,
        document_id: UUID,
        page_count: int,
    ) -> DocumentModel | None:
        """Transition a document to COMPLETED with its observed page count."""
        return await self.update_by_id(
            session,
            document_id,
            status=DocumentStatus.COMPLETED,
            page_count=page_count,
            error_message=None,
        )

    async def mark_failed(
        self,
        session: AsyncSession,
        document_id: UUID,
        error_message: str,
    ) -> DocumentModel | None:
        """Transition a document to FAILED, keeping a truncated error message."""
        return await self.update_by_id(
            session,
            document_id,
            status=DocumentStatus.FAILED,
            error_message=error_message[:2048],
        )

    async def delete_with_dependents(self, session: AsyncSession, document_id: UUID) -> bool:
        """
        Delete a document together with its chunks and collection links.

        Dependents are removed explicitly so the delete behaves the same on
        backends that do not enforce ON DELETE CASCADE.

        Returns:
            True if the document row existed
        """
        await session.execute(delete(ChunkModel).where(ChunkModel.document_id == document_id))
        await session.execute(
            delete(DocumentCollectionModel).where(
                DocumentCollectionModel.document_id == document_id
            )
        )
        return await self.delete_by_id(session, document_id)


document_crud = DocumentCRUD()
