"""
Vector store client interface.

Abstract nearest-neighbour store used by ingestion, retrieval and
document deletion. Implementations: Qdrant over REST, in-memory for
local development and tests, and an unavailable variant used when no
store is configured.

Contract: when the store is unreachable, ensure_collection returns
False, search/scroll return empty lists and delete_by_filter returns
None. Only upsert raises, so ingestion can detect the failure.

Dependencies: agentdoc.boundary.vdb.vector_schemas
System role: Vector store abstraction injected into orchestrators
"""

from abc import ABC, abstractmethod

from agentdoc.boundary.vdb.vector_schemas import (
    RecordPoint,
    ScoredPoint,
    VectorFilter,
    VectorPoint,
)


class VectorStoreClient(ABC):
    """Abstract vector store."""

    @property
    def is_available(self) -> bool:
        return True

    @abstractmethod
    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        """
        Create the collection if absent; no-op if present.

        Returns:
            True when the collection exists afterwards, False if the store is unavailable
        """

    @abstractmethod
    async def upsert(self, collection: str, points: list[VectorPoint]) -> None:
        """
        Insert or replace points by id.

        Raises:
            VectorStoreUnavailableError: Store unreachable or not configured
            VectorStoreError: Store rejected the request
        """

    @abstractmethod
    async def search(
        self,
        collection: str,
        vector: list[float],
        vector_filter: VectorFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredPoint]:
        """Return up to limit points ordered by decreasing similarity."""

    @abstractmethod
    async def scroll(
        self,
        collection: str,
        vector_filter: VectorFilter | None = None,
        limit: int = 100,
        with_vectors: bool = False,
    ) -> list[RecordPoint]:
        """Enumerate up to limit points matching the filter, in id order."""

    @abstractmethod
    async def delete_by_filter(self, collection: str, vector_filter: VectorFilter) -> int | None:
        """
        Delete matching points via scroll-then-delete.

        Returns:
            Number of points deleted, or None if the store is unavailable
        """

    async def close(self) -> None:
        """Release network resources."""
