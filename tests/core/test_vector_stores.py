"""
Tests for vector schemas, the in-memory store, the unavailable store
and the store factory.

System role: Verification of the vector store contract
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from agentdoc.boundary.vdb import (
    FieldCondition,
    InMemoryVectorStore,
    QdrantVectorStore,
    UnavailableVectorStore,
    VectorFilter,
    VectorPayload,
    VectorPayloadMetadata,
    VectorPoint,
    create_vector_store,
    document_filter,
)
from agentdoc.configs.vector_store import VectorStoreSettings
from agentdoc.core.exceptions import VectorStoreError, VectorStoreUnavailableError


def make_point(point_id: str, vector: list[float], document_id: str, page: int = 1) -> VectorPoint:
    return VectorPoint(
        id=point_id,
        vector=vector,
        payload=VectorPayload(
            text=f"text of {point_id}",
            document_id=document_id,
            metadata=VectorPayloadMetadata(page=page, title="Report", file="report.pdf"),
        ),
    )


@pytest.fixture
async def seeded_store() -> InMemoryVectorStore:
    store = InMemoryVectorStore()
    await store.ensure_collection("docs", 3)
    await store.upsert(
        "docs",
        [
            make_point("p-a1", [1.0, 0.0, 0.0], "doc-a"),
            make_point("p-a2", [0.9, 0.1, 0.0], "doc-a", page=2),
            make_point("p-b1", [0.0, 1.0, 0.0], "doc-b"),
            make_point("p-c1", [0.0, 0.0, 1.0], "doc-c"),
        ],
    )
    return store


class TestVectorSchemas:
    """Test suite for payloads and filters."""

    def test_payload_wire_format_uses_camel_case(self) -> None:
        payload = VectorPayload(
            text="hello",
            document_id="doc-1",
            metadata=VectorPayloadMetadata(page=3),
        )

        assert payload.to_wire() == {"text": "hello", "documentId": "doc-1", "metadata": {"page": 3}}

    def test_field_condition_requires_exactly_one_match(self) -> None:
        with pytest.raises(PydanticValidationError):
            FieldCondition(key="documentId")
        with pytest.raises(PydanticValidationError):
            FieldCondition(key="documentId", match_value="a", match_any=["b"])

    def test_filter_to_qdrant(self) -> None:
        vector_filter = VectorFilter(
            must=[FieldCondition(key="documentId", match_any=["a", "b"])],
            must_not=[FieldCondition(key="documentId", match_value="b")],
        )

        assert vector_filter.to_qdrant() == {
            "must": [{"key": "documentId", "match": {"any": ["a", "b"]}}],
            "must_not": [{"key": "documentId", "match": {"value": "b"}}],
        }

    def test_filter_matches_dotted_keys(self) -> None:
        payload = {"documentId": "a", "metadata": {"page": 2}}

        assert FieldCondition(key="metadata.page", match_value=2).matches(payload)
        assert not FieldCondition(key="metadata.missing", match_value=2).matches(payload)
        assert VectorFilter().matches(payload)
        assert not VectorFilter(must_not=[FieldCondition(key="documentId", match_value="a")]).matches(payload)


class TestInMemoryVectorStore:
    """Test suite for InMemoryVectorStore."""

    async def test_search_orders_by_similarity(self, seeded_store) -> None:
        hits = await seeded_store.search("docs", [1.0, 0.0, 0.0], limit=2)

        assert [h.id for h in hits] == ["p-a1", "p-a2"]
        assert hits[0].score == pytest.approx(1.0)
        assert hits[0].score >= hits[1].score

    async def test_search_respects_filter(self, seeded_store) -> None:
        hits = await seeded_store.search(
            "docs",
            [1.0, 0.0, 0.0],
            VectorFilter(must=[FieldCondition(key="documentId", match_any=["doc-b", "doc-c"])]),
        )

        assert {h.payload["documentId"] for h in hits} == {"doc-b", "doc-c"}

    async def test_search_missing_collection_is_empty(self) -> None:
        assert await InMemoryVectorStore().search("nope", [1.0]) == []

    async def test_upsert_replaces_by_id(self, seeded_store) -> None:
        await seeded_store.upsert("docs", [make_point("p-a1", [0.0, 1.0, 0.0], "doc-a")])

        assert seeded_store.count("docs") == 4
        records = await seeded_store.scroll("docs", document_filter("doc-a"), with_vectors=True)
        assert records[0].vector == [0.0, 1.0, 0.0]

    async def test_upsert_rejects_wrong_dimension(self, seeded_store) -> None:
        with pytest.raises(VectorStoreError):
            await seeded_store.upsert("docs", [make_point("p-x", [1.0, 0.0], "doc-x")])

    async def test_upsert_into_missing_collection_raises(self) -> None:
        with pytest.raises(VectorStoreError):
            await InMemoryVectorStore().upsert("docs", [make_point("p", [1.0], "d")])

    async def test_scroll_is_id_ordered_and_limited(self, seeded_store) -> None:
        records = await seeded_store.scroll("docs", limit=3)

        assert [r.id for r in records] == ["p-a1", "p-a2", "p-b1"]
        assert all(r.vector is None for r in records)

    async def test_delete_by_filter(self, seeded_store) -> None:
        deleted = await seeded_store.delete_by_filter("docs", document_filter("doc-a"))

        assert deleted == 2
        assert seeded_store.count("docs") == 2
        assert await seeded_store.scroll("docs", document_filter("doc-a")) == []

    async def test_ensure_collection_is_idempotent(self, seeded_store) -> None:
        assert await seeded_store.ensure_collection("docs", 3) is True
        assert seeded_store.count("docs") == 4


class TestUnavailableVectorStore:
    """Test suite for the null-object store."""

    async def test_reads_are_empty_and_upsert_raises(self) -> None:
        store = UnavailableVectorStore()

        assert store.is_available is False
        assert await store.ensure_collection("docs", 3) is False
        assert await store.search("docs", [1.0]) == []
        assert await store.scroll("docs") == []
        assert await store.delete_by_filter("docs", document_filter("a")) is None
        with pytest.raises(VectorStoreUnavailableError):
            await store.upsert("docs", [make_point("p", [1.0], "d")])


class TestCreateVectorStore:
    """Test suite for create_vector_store."""

    def test_memory(self) -> None:
        store = create_vector_store(VectorStoreSettings(store_type="memory"))

        assert isinstance(store, InMemoryVectorStore)

    def test_disabled(self) -> None:
        store = create_vector_store(VectorStoreSettings(store_type="disabled"))

        assert isinstance(store, UnavailableVectorStore)

    def test_qdrant_without_url_is_unavailable(self) -> None:
        store = create_vector_store(VectorStoreSettings(store_type="qdrant", qdrant_url=None))

        assert isinstance(store, UnavailableVectorStore)

    async def test_qdrant_with_url(self) -> None:
        store = create_vector_store(
            VectorStoreSettings(store_type="qdrant", qdrant_url="http://localhost:6333/")
        )

        assert isinstance(store, QdrantVectorStore)
        assert store.base_url == "http://localhost:6333"
        await store.close()
