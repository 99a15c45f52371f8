"""
Chunk CRUD operations.

Bulk insert for the ingestion pipeline and the scope-filtered read used
by the relational retrieval tier.

Dependencies: sqlalchemy, agentdoc.boundary.db.models
System role: Chunk persistence operations
"""

from typing import NamedTuple, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD.base_crud import BaseCRUD
from agentdoc.boundary.db.models.chunk_model import ChunkModel
from agentdoc.boundary.db.models.document_model import DocumentModel


class ChunkWithSource(NamedTuple):
    """Chunk row plus the title and file name of its document."""

    chunk: ChunkModel
    title: str
    file_name: str


class ChunkCRUD(BaseCRUD[ChunkModel]):
    """CRUD operations for ChunkModel."""

    def __init__(self) -> None:
        super().__init__(ChunkModel)

    async def list_by_document(
        self,
        session: AsyncSession,
        document_id: UUID,
    ) -> Sequence[ChunkModel]:
        """Chunks of one document in page order."""
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.page)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_for_documents(
        self,
        session: AsyncSession,
        document_ids: Sequence[UUID],
        limit: int,
    ) -> list[ChunkWithSource]:
        """
        Read up to limit chunks belonging to any of document_ids.

        No relevance ordering is applied; rows come back in storage order.

        Args:
            session: Async database session
            document_ids: Allowed document ids (already ownership-checked)
            limit: Maximum rows

        Returns:
            Chunk rows joined with their document's title and file name
        """
        if not document_ids:
            return []
        stmt = (
            select(ChunkModel, DocumentModel.title, DocumentModel.file_name)
            .join(DocumentModel, DocumentModel.id == ChunkModel.document_id)
            .where(ChunkModel.document_id.in_(list(document_ids)))
            .limit(limit)
        )
        result = await session.execute(stmt)
        return [ChunkWithSource(chunk, title, file_name) for chunk, title, file_name in result.all()]


chunk_crud = ChunkCRUD()
