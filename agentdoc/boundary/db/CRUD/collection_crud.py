"""
Collection CRUD operations.

Owner-scoped collection lookup, member listing, idempotent document
membership and the link-aware collection delete.

Dependencies: sqlalchemy, agentdoc.boundary.db.models
System role: Collection persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD.base_crud import BaseCRUD
from agentdoc.boundary.db.models.chat_model import ChatHistoryModel
from agentdoc.boundary.db.models.collection_model import (
    CollectionModel,
    DocumentCollectionModel,
)
from agentdoc.boundary.db.models.document_model import DocumentModel


class CollectionCRUD(BaseCRUD[CollectionModel]):
    """CRUD operations for CollectionModel."""

    def __init__(self) -> None:
        super().__init__(CollectionModel)

    async def get_owned(
        self,
        session: AsyncSession,
        collection_id: UUID,
        owner_id: str,
    ) -> CollectionModel | None:
        """Retrieve a collection only if it belongs to owner_id."""
        stmt = select(CollectionModel).where(
            CollectionModel.id == collection_id,
            CollectionModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_document_ids(self, session: AsyncSession, collection_id: UUID) -> list[UUID]:
        """Ids of every document linked to the collection."""
        stmt = select(DocumentCollectionModel.document_id).where(
            DocumentCollectionModel.collection_id == collection_id
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def list_documents(self, session: AsyncSession, collection_id: UUID) -> Sequence[DocumentModel]:
        """Member documents, most recently linked first."""
        stmt = (
            select(DocumentModel)
            .join(DocumentCollectionModel, DocumentCollectionModel.document_id == DocumentModel.id)
            .where(DocumentCollectionModel.collection_id == collection_id)
            .order_by(DocumentCollectionModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_with_links(self, session: AsyncSession, collection_id: UUID) -> bool:
        """
        Delete a collection and its membership rows.

        Member documents are kept. Chat histories scoped to the collection
        lose their scope instead of being removed.

        Returns:
            True if the collection row existed
        """
        await session.execute(
            delete(DocumentCollectionModel).where(
                DocumentCollectionModel.collection_id == collection_id
            )
        )
        await session.execute(
            update(ChatHistoryModel)
            .where(ChatHistoryModel.collection_id == collection_id)
            .values(collection_id=None)
        )
        return await self.delete_by_id(session, collection_id)


class DocumentCollectionCRUD(BaseCRUD[DocumentCollectionModel]):
    """CRUD operations for the document/collection association."""

    def __init__(self) -> None:
        super().__init__(DocumentCollectionModel)

    async def link(
        self,
        session: AsyncSession,
        document_id: UUID,
        collection_id: UUID,
    ) -> bool:
        """
        Link a document to a collection unless the pair already exists.

        Returns:
            True if a new row was created, False if the pair was present
        """
        stmt = select(DocumentCollectionModel.id).where(
            DocumentCollectionModel.document_id == document_id,
            DocumentCollectionModel.collection_id == collection_id,
        )
        existing = await session.execute(stmt)
        if existing.scalar_one_or_none() is not None:
            return False
        await self.create(session, document_id=document_id, collection_id=collection_id)
        return True

    async def unlink(
        self,
        session: AsyncSession,
        collection_id: UUID,
        document_ids: list[UUID],
    ) -> int:
        """
        Remove documents from a collection; pairs that do not exist are ignored.

        Returns:
            Number of links removed
        """
        if not document_ids:
            return 0
        stmt = delete(DocumentCollectionModel).where(
            DocumentCollectionModel.collection_id == collection_id,
            DocumentCollectionModel.document_id.in_(document_ids),
        )
        result = await session.execute(stmt)
        return result.rowcount


collection_crud = CollectionCRUD()
document_collection_crud = DocumentCollectionCRUD()
