"""
Tests for QdrantVectorStore against a scripted httpx.MockTransport.

System role: Verification of the Qdrant REST wire contract
"""

import json

import httpx
import pytest

from agentdoc.boundary.vdb import (
    QdrantVectorStore,
    VectorPayload,
    VectorPayloadMetadata,
    VectorPoint,
    document_filter,
)
from agentdoc.core.exceptions import VectorStoreError, VectorStoreUnavailableError


class FakeQdrant:
    """Records requests and answers them from a route table."""

    def __init__(self, routes: dict[tuple[str, str], list[dict] | dict]) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        answer = self.routes.get((request.method, request.url.path))
        if answer is None:
            return httpx.Response(404, json={"status": {"error": "not found"}})
        if isinstance(answer, list):
            answer = answer.pop(0)
        return httpx.Response(200, json=answer)

    def bodies(self, method: str, path: str) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]


def make_store(fake: FakeQdrant, **kwargs) -> QdrantVectorStore:
    return QdrantVectorStore(
        "http://qdrant:6333",
        api_key="secret",
        transport=httpx.MockTransport(fake),
        **kwargs,
    )


def make_point(point_id: str) -> VectorPoint:
    return VectorPoint(
        id=point_id,
        vector=[0.1, 0.2],
        payload=VectorPayload(text="t", document_id="doc-1", metadata=VectorPayloadMetadata(page=1)),
    )


class TestEnsureCollection:
    """Test suite for ensure_collection."""

    async def test_existing_collection_is_not_recreated(self) -> None:
        fake = FakeQdrant({("GET", "/collections/docs/exists"): {"result": {"exists": True}}})
        store = make_store(fake)

        assert await store.ensure_collection("docs", 1536) is True
        assert [r.method for r in fake.requests] == ["GET"]
        assert fake.requests[0].headers["api-key"] == "secret"
        await store.close()

    async def test_missing_collection_is_created(self) -> None:
        fake = FakeQdrant(
            {
                ("GET", "/collections/docs/exists"): {"result": {"exists": False}},
                ("PUT", "/collections/docs"): {"result": True},
            }
        )
        store = make_store(fake)

        assert await store.ensure_collection("docs", 1536) is True
        assert fake.bodies("PUT", "/collections/docs") == [
            {"vectors": {"size": 1536, "distance": "Cosine"}}
        ]
        await store.close()

    async def test_unreachable_returns_false(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = QdrantVectorStore("http://qdrant:6333", transport=httpx.MockTransport(refuse))

        assert await store.ensure_collection("docs", 1536) is False
        await store.close()


class TestPoints:
    """Test suite for upsert, search, scroll and delete."""

    async def test_upsert_sends_wire_payload(self) -> None:
        fake = FakeQdrant({("PUT", "/collections/docs/points"): {"result": {"status": "completed"}}})
        store = make_store(fake)

        await store.upsert("docs", [make_point("p1")])

        assert fake.requests[0].url.params["wait"] == "true"
        assert fake.bodies("PUT", "/collections/docs/points") == [
            {
                "points": [
                    {
                        "id": "p1",
                        "vector": [0.1, 0.2],
                        "payload": {"text": "t", "documentId": "doc-1", "metadata": {"page": 1}},
                    }
                ]
            }
        ]
        await store.close()

    async def test_upsert_unreachable_raises(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store = QdrantVectorStore("http://qdrant:6333", transport=httpx.MockTransport(refuse))

        with pytest.raises(VectorStoreUnavailableError):
            await store.upsert("docs", [make_point("p1")])
        await store.close()

    async def test_upsert_rejected_raises_store_error(self) -> None:
        store = make_store(FakeQdrant({}))

        with pytest.raises(VectorStoreError):
            await store.upsert("docs", [make_point("p1")])
        await store.close()

    async def test_search_maps_hits_and_sends_filter(self) -> None:
        fake = FakeQdrant(
            {
                ("POST", "/collections/docs/points/search"): {
                    "result": [{"id": "p1", "score": 0.93, "payload": {"text": "hello"}}]
                }
            }
        )
        store = make_store(fake)

        hits = await store.search("docs", [0.1, 0.2], document_filter("doc-1"), limit=3)

        assert [(h.id, h.score, h.payload["text"]) for h in hits] == [("p1", 0.93, "hello")]
        body = fake.bodies("POST", "/collections/docs/points/search")[0]
        assert body["limit"] == 3
        assert body["filter"] == {"must": [{"key": "documentId", "match": {"value": "doc-1"}}]}
        await store.close()

    async def test_search_error_returns_empty(self) -> None:
        store = make_store(FakeQdrant({}))

        assert await store.search("docs", [0.1]) == []
        await store.close()

    async def test_delete_scrolls_every_page_then_deletes(self) -> None:
        fake = FakeQdrant(
            {
                ("POST", "/collections/docs/points/scroll"): [
                    {"result": {"points": [{"id": "p1"}, {"id": "p2"}], "next_page_offset": "p3"}},
                    {"result": {"points": [{"id": "p3"}], "next_page_offset": None}},
                ],
                ("POST", "/collections/docs/points/delete"): {"result": {"status": "completed"}},
            }
        )
        store = make_store(fake, scroll_page_size=2)

        deleted = await store.delete_by_filter("docs", document_filter("doc-1"))

        assert deleted == 3
        scroll_bodies = fake.bodies("POST", "/collections/docs/points/scroll")
        assert "offset" not in scroll_bodies[0]
        assert scroll_bodies[1]["offset"] == "p3"
        assert fake.bodies("POST", "/collections/docs/points/delete") == [{"points": ["p1", "p2", "p3"]}]
        await store.close()

    async def test_delete_without_matches_skips_delete_call(self) -> None:
        fake = FakeQdrant(
            {("POST", "/collections/docs/points/scroll"): {"result": {"points": [], "next_page_offset": None}}}
        )
        store = make_store(fake)

        assert await store.delete_by_filter("docs", document_filter("doc-1")) == 0
        assert fake.bodies("POST", "/collections/docs/points/delete") == []
        await store.close()

    async def test_delete_unavailable_returns_none(self) -> None:
        store = make_store(FakeQdrant({}))

        assert await store.delete_by_filter("docs", document_filter("doc-1")) is None
        await store.close()
