"""
Qdrant vector store over the REST API.

Talks to Qdrant with an httpx.AsyncClient: collection existence check
and creation, point upsert, filtered search, paginated scroll and
scroll-then-delete. Transport errors are reported as unavailability.

Dependencies: httpx, agentdoc.boundary.vdb, agentdoc.core.exceptions
System role: Production vector store client
"""

import logging
from typing import Any

import httpx

from agentdoc.boundary.vdb.vector_schemas import (
    RecordPoint,
    ScoredPoint,
    VectorFilter,
    VectorPoint,
)
from agentdoc.boundary.vdb.vector_store_client import VectorStoreClient
from agentdoc.core.exceptions import VectorStoreError, VectorStoreUnavailableError
from agentdoc.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class QdrantVectorStore(VectorStoreClient):
    """
    Qdrant REST client.

    Args:
        base_url: Qdrant HTTP endpoint, e.g. http://localhost:6333
        api_key: Optional API key sent as the api-key header
        timeout: Request timeout in seconds
        scroll_page_size: Page size used while enumerating points
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        scroll_page_size: int = 100,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["api-key"] = api_key
        self.base_url = base_url.rstrip("/")
        self.scroll_page_size = scroll_page_size
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.TransportError as e:
            raise VectorStoreUnavailableError(
                f"Qdrant unreachable at {self.base_url}",
                operation=operation,
                details={"error": str(e)},
            ) from e

        if response.status_code >= 400:
            raise VectorStoreError(
                f"Qdrant returned HTTP {response.status_code}",
                operation=operation,
                details={"path": path, "body": response.text[:500]},
            )
        return response.json()

    async def ensure_collection(self, name: str, dimension: int, distance: str = "Cosine") -> bool:
        try:
            raw = await self._request("GET", f"/collections/{name}/exists", "ensure")
            if raw.get("result", {}).get("exists"):
                return True

            logger.info(
                f"{__name__}:ensure_collection - Creating collection",
                extra={"collection": name, "dimension": dimension, "distance": distance},
            )
            await self._request(
                "PUT",
                f"/collections/{name}",
                "ensure",
                json={"vectors": {"size": dimension, "distance": distance}},
            )
            return True
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:ensure_collection - Store unavailable",
                e,
                level=logging.WARNING,
                collection=name,
            )
            return False

    async def upsert(self, collection: str, points: list[VectorPoint]) -> None:
        if not points:
            return
        body = {
            "points": [
                {"id": p.id, "vector": p.vector, "payload": p.payload.to_wire()}
                for p in points
            ]
        }
        await self._request(
            "PUT",
            f"/collections/{collection}/points",
            "upsert",
            json=body,
            params={"wait": "true"},
        )
        logger.info(
            f"{__name__}:upsert - Upserted points",
            extra={"collection": collection, "points": len(points)},
        )

    async def search(
        self,
        collection: str,
        vector: list[float],
        vector_filter: VectorFilter | None = None,
        limit: int = 5,
    ) -> list[ScoredPoint]:
        body: dict[str, Any] = {"vector": vector, "limit": limit, "with_payload": True}
        if vector_filter is not None:
            body["filter"] = vector_filter.to_qdrant()
        try:
            raw = await self._request(
                "POST", f"/collections/{collection}/points/search", "search", json=body
            )
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:search - Store unavailable, returning no hits",
                e,
                level=logging.WARNING,
                collection=collection,
            )
            return []

        return [
            ScoredPoint(id=str(hit["id"]), score=hit["score"], payload=hit.get("payload") or {})
            for hit in raw.get("result", [])
        ]

    async def _scroll_page(
        self,
        collection: str,
        vector_filter: VectorFilter | None,
        limit: int,
        with_vectors: bool,
        offset: Any = None,
    ) -> tuple[list[RecordPoint], Any]:
        body: dict[str, Any] = {
            "limit": limit,
            "with_payload": True,
            "with_vector": with_vectors,
        }
        if vector_filter is not None:
            body["filter"] = vector_filter.to_qdrant()
        if offset is not None:
            body["offset"] = offset

        raw = await self._request(
            "POST", f"/collections/{collection}/points/scroll", "scroll", json=body
        )
        result = raw.get("result", {})
        records = [
            RecordPoint(
                id=str(point["id"]),
                payload=point.get("payload") or {},
                vector=point.get("vector") if with_vectors else None,
            )
            for point in result.get("points", [])
        ]
        return records, result.get("next_page_offset")

    async def scroll(
        self,
        collection: str,
        vector_filter: VectorFilter | None = None,
        limit: int = 100,
        with_vectors: bool = False,
    ) -> list[RecordPoint]:
        try:
            records, _ = await self._scroll_page(collection, vector_filter, limit, with_vectors)
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:scroll - Store unavailable, returning no points",
                e,
                level=logging.WARNING,
                collection=collection,
            )
            return []
        return records

    async def delete_by_filter(self, collection: str, vector_filter: VectorFilter) -> int | None:
        try:
            # Step 1: enumerate matching ids page by page
            point_ids: list[str] = []
            offset = None
            while True:
                records, offset = await self._scroll_page(
                    collection, vector_filter, self.scroll_page_size, False, offset
                )
                point_ids.extend(r.id for r in records)
                if offset is None:
                    break

            if not point_ids:
                return 0

            # Step 2: delete by explicit id list
            await self._request(
                "POST",
                f"/collections/{collection}/points/delete",
                "delete",
                json={"points": point_ids},
                params={"wait": "true"},
            )
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:delete_by_filter - Store unavailable, nothing deleted",
                e,
                level=logging.WARNING,
                collection=collection,
            )
            return None

        logger.info(
            f"{__name__}:delete_by_filter - Deleted points",
            extra={"collection": collection, "points": len(point_ids)},
        )
        return len(point_ids)
