"""
In-memory vector store.

Brute-force cosine similarity over numpy arrays, for local development
without a Qdrant server and for tests. Filter semantics match Qdrant's
must / must_not / match-any clauses.

Dependencies: numpy, agentdoc.boundary.vdb
System role: Local development vector store
"""

import logging

import numpy as np

from agentdoc.boundary.vdb.vector_schemas import (
    RecordPoint,
    ScoredPoint,
    VectorFilter,
    VectorPoint,
)
from agentdoc.boundary.vdb.vector_store_client import VectorStoreClient
from agentdoc.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class _Collection:
    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self.points: dict[str, tuple[np.ndarray, dict]] = {}


class InMemoryVectorStore(VectorStoreClient):
    """Process-local vector store keyed by collection name."""

    def __init__(self) -> None:
        self._collections: dict[str, _Collection] = {}

    def count(self, collection: str) -> int:
        """Number of points stored in a collection (0 if absent)."""
        store = self._collections.get(collection)
        return len(store.points) if store else 0

    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        if name not in self._collections:
            logger.info(
                f"{__name__}:ensure_collection - Creating collection",
                extra={"collection": name, "dimension": dimension, "distance": distance},
            )
            self._collections[name] = _Collection(dimension)
        return True

    def _get(self, collection: str, operation: str) -> _Collection:
        store = self._collections.get(collection)
        if store is None:
            raise VectorStoreError(
                f"Collection not found: {collection}",
                operation=operation,
            )
        return store

    async def upsert(self, collection: str, points: list[VectorPoint]) -> None:
        store = self._get(collection, "upsert")
        for point in points:
            if len(point.vector) != store.dimension:
                raise VectorStoreError(
                    "Vector dimension mismatch",
                    operation="upsert",
                    details={"expected": store.dimension, "got": len(point.vector)},
                )
        for point in points:
            store.points[point.id] = (
                np.asarray(point.vector, dtype=np.float32),
                point.payload.to_wire(),
            )

    async def search(
        self,
        collection: str,
        vector: list[float],
        vector_filter: VectorFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredPoint]:
        store = self._collections.get(collection)
        if store is None or not store.points:
            return []

        candidates = [
            (point_id, vec, payload)
            for point_id, (vec, payload) in store.points.items()
            if vector_filter is None or vector_filter.matches(payload)
        ]
        if not candidates:
            return []

        query = np.asarray(vector, dtype=np.float32)
        matrix = np.stack([vec for _, vec, _ in candidates])
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
        scores = (matrix @ query) / np.where(norms == 0, 1.0, norms)

        order = np.argsort(-scores, kind="stable")[:limit]
        return [
            ScoredPoint(id=candidates[i][0], score=float(scores[i]), payload=dict(candidates[i][2]))
            for i in order
        ]

    async def scroll(
        self,
        collection: str,
        vector_filter: VectorFilter | None = None,
        limit: int = 100,
        with_vectors: bool = False,
    ) -> list[RecordPoint]:
        store = self._collections.get(collection)
        if store is None:
            return []
        records = []
        for point_id in sorted(store.points):
            vec, payload = store.points[point_id]
            if vector_filter is not None and not vector_filter.matches(payload):
                continue
            records.append(
                RecordPoint(
                    id=point_id,
                    payload=dict(payload),
                    vector=vec.tolist() if with_vectors else None,
                )
            )
            if len(records) >= limit:
                break
        return records

    async def delete_by_filter(self, collection: str, vector_filter: VectorFilter) -> int | None:
        store = self._collections.get(collection)
        if store is None:
            return 0
        point_ids = [
            point_id
            for point_id, (_, payload) in store.points.items()
            if vector_filter.matches(payload)
        ]
        for point_id in point_ids:
            del store.points[point_id]
        return len(point_ids)
