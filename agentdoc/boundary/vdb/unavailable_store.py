"""
Unavailable vector store.

Stand-in used when no vector store is configured. Reads are empty,
deletes report unavailability and upserts raise so ingestion falls back
to its degraded path.

Dependencies: agentdoc.boundary.vdb, agentdoc.core.exceptions
System role: Null-object vector store
"""

import logging

from agentdoc.boundary.vdb.vector_schemas import (
    RecordPoint,
    ScoredPoint,
    VectorFilter,
    VectorPoint,
)
from agentdoc.boundary.vdb.vector_store_client import VectorStoreClient
from agentdoc.core.exceptions import VectorStoreUnavailableError

logger = logging.getLogger(__name__)


class UnavailableVectorStore(VectorStoreClient):
    """Vector store that is never reachable."""

    def __init__(self, reason: str = "Vector store not configured") -> None:
        self.reason = reason

    @property
    def is_available(self) -> bool:
        return False

    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        return False

    async def upsert(self, collection: str, points: list[VectorPoint]) -> None:
        raise VectorStoreUnavailableError(
            self.reason,
            operation="upsert",
            details={"collection": collection, "points": len(points)},
        )

    async def search(
        self,
        collection: str,
        vector: list[float],
        vector_filter: VectorFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredPoint]:
        return []

    async def scroll(
        self,
        collection: str,
        vector_filter: VectorFilter | None = None,
        limit: int = 100,
        with_vectors: bool = False,
    ) -> list[RecordPoint]:
        return []

    async def delete_by_filter(self, collection: str, vector_filter: VectorFilter) -> int | None:
        logger.warning(
            f"{__name__}:delete_by_filter - Skipped, store unavailable",
            extra={"collection": collection, "reason": self.reason},
        )
        return None
