"""
Scoped retrieval with a three-tier fallback chain.

Scope (one document, one collection, or everything the caller owns) is
resolved to an allowed document id set exactly once, with ownership
checked before any store is touched. Tiers then run strictly in order,
each only when the previous produced nothing:

  1. vector   - embed the query and search the vector index within the scope
  2. relational - read chunk rows for the scope, storage order, no ranking
  3. static   - fixed demo passages so chat always has something to cite

Dependencies: sqlalchemy, agentdoc.boundary, agentdoc.core.document_processing
System role: RAG retrieval business logic
"""

import logging
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD import chunk_crud, collection_crud, document_crud
from agentdoc.boundary.vdb import (
    FieldCondition,
    ScoredPoint,
    VectorFilter,
    VectorStoreClient,
    document_filter,
)
from agentdoc.core.document_processing.embedding_client import EmbeddingClient
from agentdoc.core.exceptions import ScopeNotOwnedError, ValidationError
from agentdoc.models.document import RelatedDocument
from agentdoc.models.passage import Passage
from agentdoc.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

STATIC_PASSAGES: tuple[Passage, ...] = (
    Passage(
        id="mock-1",
        text=(
            "This is a sample document chunk that demonstrates how Agent DOC works. "
            "It provides information about documents that have been uploaded to the system."
        ),
        document_id="mock-doc-1",
        page=1,
        title="Sample Document",
        file="Sample Document.pdf",
    ),
    Passage(
        id="mock-2",
        text=(
            "Agent DOC is a document retrieval system that uses AI to answer questions "
            "about your documents. It can process PDF files and extract relevant information."
        ),
        document_id="mock-doc-2",
        page=1,
        title="Agent DOC Guide",
        file="Agent DOC Guide.pdf",
    ),
)


class RetrievalTier(str, Enum):
    """Tier of the fallback chain that produced the passages."""

    VECTOR = "vector"
    RELATIONAL = "relational"
    STATIC = "static"


class RetrievalScope(BaseModel):
    """Who is asking and over which documents."""

    owner_id: str
    document_id: UUID | None = None
    collection_id: UUID | None = None


class RetrievalResult(BaseModel):
    """Passages and the tier that produced them."""

    passages: list[Passage] = Field(min_length=1)
    tier: RetrievalTier
    allowed_document_ids: list[UUID] = Field(default_factory=list)


def passage_from_point(point: ScoredPoint) -> Passage:
    """Map a vector hit onto a Passage, defaulting missing metadata."""
    payload = point.payload
    metadata = payload.get("metadata") or {}
    return Passage(
        id=point.id,
        text=payload.get("text", ""),
        document_id=str(payload.get("documentId", "")),
        page=metadata.get("page") or 1,
        title=metadata.get("title") or "Document",
        file=metadata.get("file") or "document.pdf",
        section=metadata.get("section"),
        score=point.score,
    )


async def resolve_scope(db: AsyncSession, scope: RetrievalScope) -> list[UUID]:
    """
    Resolve a scope to the document ids the caller may read.

    Raises:
        ValidationError: Both a document and a collection were given
        ScopeNotOwnedError: The document or collection is missing or not the caller's
    """
    if scope.document_id is not None and scope.collection_id is not None:
        raise ValidationError(
            "A scope is either a document or a collection, not both",
            field="scope",
        )

    if scope.document_id is not None:
        document = await document_crud.get_owned(db, scope.document_id, scope.owner_id)
        if document is None:
            raise ScopeNotOwnedError("Document", str(scope.document_id))
        return [document.id]

    if scope.collection_id is not None:
        collection = await collection_crud.get_owned(db, scope.collection_id, scope.owner_id)
        if collection is None:
            raise ScopeNotOwnedError("Collection", str(scope.collection_id))
        member_ids = await collection_crud.list_document_ids(db, collection.id)
        return await document_crud.filter_owned_ids(db, scope.owner_id, member_ids)

    return await document_crud.list_ids_by_owner(db, scope.owner_id)


def scope_filter(document_ids: list[UUID]) -> VectorFilter:
    """Vector filter restricting hits to the given documents."""
    return VectorFilter(
        must=[FieldCondition(key="documentId", match_any=[str(d) for d in document_ids])]
    )


class Retriever:
    """
    Retrieval orchestrator.

    Args:
        vector_store: Shared vector store (may be the unavailable variant)
        embedding_client: Shared embedding client
        collection_name: Vector collection to search
        top_k: Passages per query
    """

    def __init__(
        self,
        vector_store: VectorStoreClient,
        embedding_client: EmbeddingClient,
        collection_name: str = "docs",
        top_k: int = 5,
    ) -> None:
        self._vector_store = vector_store
        self._embedding_client = embedding_client
        self.collection_name = collection_name
        self.top_k = top_k

    async def retrieve(self, db: AsyncSession, query: str, scope: RetrievalScope) -> RetrievalResult:
        """
        Retrieve up to top_k passages for a query; never returns an empty list.

        Raises:
            ScopeNotOwnedError: Raised before any tier runs
        """
        allowed_ids = await resolve_scope(db, scope)
        log_extra = {"owner_id": scope.owner_id, "allowed_documents": len(allowed_ids)}

        passages = await self._vector_tier(query, allowed_ids)
        if passages:
            logger.info(f"{__name__}:retrieve - Vector tier hit", extra={**log_extra, "passages": len(passages)})
            return RetrievalResult(passages=passages, tier=RetrievalTier.VECTOR, allowed_document_ids=allowed_ids)

        passages = await self._relational_tier(db, allowed_ids)
        if passages:
            logger.warning(
                f"{__name__}:retrieve - Falling back to relational tier",
                extra={**log_extra, "passages": len(passages)},
            )
            return RetrievalResult(passages=passages, tier=RetrievalTier.RELATIONAL, allowed_document_ids=allowed_ids)

        logger.warning(f"{__name__}:retrieve - Falling back to static passages", extra=log_extra)
        return RetrievalResult(
            passages=[p.model_copy() for p in STATIC_PASSAGES],
            tier=RetrievalTier.STATIC,
            allowed_document_ids=allowed_ids,
        )

    async def _vector_tier(self, query: str, allowed_ids: list[UUID]) -> list[Passage]:
        if not allowed_ids or not self._vector_store.is_available:
            return []

        embedding = await self._embedding_client.embed(query)
        if embedding.degraded:
            logger.warning(f"{__name__}:_vector_tier - Query embedding degraded, skipping vector search")
            return []

        try:
            hits = await self._vector_store.search(
                self.collection_name,
                embedding.vector,
                scope_filter(allowed_ids),
                limit=self.top_k,
            )
            return [passage_from_point(hit) for hit in hits]
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_vector_tier - Vector search failed",
                e,
                level=logging.WARNING,
            )
            return []

    async def _relational_tier(self, db: AsyncSession, allowed_ids: list[UUID]) -> list[Passage]:
        if not allowed_ids:
            return []
        try:
            rows = await chunk_crud.list_for_documents(db, allowed_ids, limit=self.top_k)
        except SQLAlchemyError as e:
            await db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:_relational_tier - Chunk read failed",
                e,
                level=logging.WARNING,
            )
            return []

        return [
            Passage(
                id=str(row.chunk.id),
                text=row.chunk.text,
                document_id=str(row.chunk.document_id),
                page=row.chunk.page,
                title=row.title,
                file=row.file_name,
                section=row.chunk.section,
            )
            for row in rows
        ]


class RelatedDocumentFinder:
    """
    Find other owned documents whose chunks are near a document's chunks.

    Uses the chunks' stored vectors, so nothing is re-embedded.
    """

    def __init__(
        self,
        vector_store: VectorStoreClient,
        collection_name: str = "docs",
        score_threshold: float = 0.8,
        sample_size: int = 5,
    ) -> None:
        self._vector_store = vector_store
        self.collection_name = collection_name
        self.score_threshold = score_threshold
        self.sample_size = sample_size

    async def find(self, db: AsyncSession, owner_id: str, document_id: UUID) -> list[RelatedDocument]:
        """
        Related documents, best score first.

        Raises:
            ScopeNotOwnedError: The document is missing or not the caller's
        """
        document = await document_crud.get_owned(db, document_id, owner_id)
        if document is None:
            raise ScopeNotOwnedError("Document", str(document_id))

        other_ids = [d for d in await document_crud.list_ids_by_owner(db, owner_id) if d != document_id]
        if not other_ids:
            return []

        points = await self._vector_store.scroll(
            self.collection_name,
            document_filter(str(document_id)),
            limit=self.sample_size,
            with_vectors=True,
        )

        neighbour_filter = VectorFilter(
            must=scope_filter(other_ids).must,
            must_not=[FieldCondition(key="documentId", match_value=str(document_id))],
        )
        best: dict[str, float] = {}
        for point in points:
            if not point.vector:
                continue
            hits = await self._vector_store.search(
                self.collection_name, point.vector, neighbour_filter, limit=self.sample_size
            )
            for hit in hits:
                if hit.score <= self.score_threshold:
                    continue
                related_id = str(hit.payload.get("documentId", ""))
                if related_id and hit.score > best.get(related_id, 0.0):
                    best[related_id] = hit.score

        logger.info(
            f"{__name__}:find - Related documents",
            extra={"document_id": str(document_id), "related": len(best)},
        )
        return [
            RelatedDocument(document_id=UUID(doc_id), score=score)
            for doc_id, score in sorted(best.items(), key=lambda item: item[1], reverse=True)
        ]
