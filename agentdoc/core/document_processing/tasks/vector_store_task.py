"""
Vector store task.

Ensures the fixed collection exists and upserts a document's points in
one batch. Also performs the best-effort cleanup of a document's points.

Dependencies: agentdoc.boundary.vdb
System role: Vector persistence stage of document ingestion pipeline
"""

import logging

from agentdoc.boundary.vdb import VectorPoint, VectorStoreClient, document_filter
from agentdoc.core.exceptions import VectorStoreUnavailableError
from agentdoc.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class VectorStoreTask:
    """Upload and remove a document's vector points."""

    def __init__(
        self,
        store: VectorStoreClient,
        collection_name: str = "docs",
        dimension: int = 1536,
        distance: str = "Cosine",
    ) -> None:
        self._store = store
        self.collection_name = collection_name
        self.dimension = dimension
        self.distance = distance

    async def upload(self, points: list[VectorPoint]) -> int:
        """
        Ensure the collection and upsert all points.

        Returns:
            int: Number of points upserted

        Raises:
            VectorStoreUnavailableError: Collection could not be ensured
            VectorStoreError: Upsert rejected
        """
        if not await self._store.ensure_collection(self.collection_name, self.dimension, self.distance):
            raise VectorStoreUnavailableError(
                "Vector collection unavailable",
                operation="ensure",
                details={"collection": self.collection_name},
            )
        await self._store.upsert(self.collection_name, points)
        return len(points)

    async def remove_document(self, document_id: str) -> int | None:
        """
        Best-effort removal of every point belonging to a document.

        Never raises: failures are logged and reported as None.
        """
        try:
            return await self._store.delete_by_filter(self.collection_name, document_filter(document_id))
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:remove_document - Vector cleanup failed",
                e,
                level=logging.WARNING,
                document_id=document_id,
            )
            return None
