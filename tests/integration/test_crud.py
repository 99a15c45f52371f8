"""
Integration tests for CRUD operations against SQLite.

System role: Verification of owner-scoped persistence primitives
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from agentdoc.boundary.db import DocumentStatus, MessageRole
from agentdoc.boundary.db.CRUD import (
    chat_history_crud,
    chat_message_crud,
    chunk_crud,
    collection_crud,
    document_collection_crud,
    document_crud,
)


def chunk_row(document_id, vector_id: str, page: int = 1) -> dict:
    return {
        "document_id": document_id,
        "text": f"text {vector_id}",
        "page": page,
        "section": f"Page {page}",
        "keywords": ["alpha", "beta"],
        "vector_id": vector_id,
    }


class TestDocumentCRUD:
    """Test suite for DocumentCRUD."""

    async def test_get_owned_hides_other_owners(self, db_session, make_document) -> None:
        document = await make_document("user-1")

        assert (await document_crud.get_owned(db_session, document.id, "user-1")).id == document.id
        assert await document_crud.get_owned(db_session, document.id, "user-2") is None

    async def test_filter_owned_ids(self, db_session, make_document) -> None:
        mine = await make_document("user-1")
        theirs = await make_document("user-2")

        kept = await document_crud.filter_owned_ids(db_session, "user-1", [mine.id, theirs.id, uuid.uuid4()])

        assert kept == [mine.id]
        assert await document_crud.filter_owned_ids(db_session, "user-1", []) == []

    async def test_status_transitions(self, db_session, make_document) -> None:
        # Arrange
        document = await make_document("user-1")

        # Act
        completed = await document_crud.mark_completed(db_session, document.id, page_count=4)
        await db_session.commit()

        # Assert
        assert completed.status == DocumentStatus.COMPLETED
        assert completed.page_count == 4

        failed = await document_crud.mark_failed(db_session, document.id, "x" * 5000)
        assert failed.status == DocumentStatus.FAILED
        assert len(failed.error_message) == 2048

    async def test_mark_completed_unknown_document(self, db_session) -> None:
        assert await document_crud.mark_completed(db_session, uuid.uuid4(), page_count=1) is None

    async def test_delete_with_dependents(self, db_session, make_document, make_collection) -> None:
        # Arrange
        document = await make_document("user-1")
        keep = await make_document("user-1")
        collection = await make_collection("user-1", [document.id, keep.id])
        await chunk_crud.create_many(db_session, [chunk_row(document.id, "v-1"), chunk_row(keep.id, "v-2")])
        await db_session.commit()

        # Act
        deleted = await document_crud.delete_with_dependents(db_session, document.id)
        await db_session.commit()

        # Assert
        assert deleted is True
        assert await document_crud.get_by_id(db_session, document.id) is None
        assert await chunk_crud.list_by_document(db_session, document.id) == []
        assert await collection_crud.list_document_ids(db_session, collection.id) == [keep.id]
        assert len(await chunk_crud.list_by_document(db_session, keep.id)) == 1


class TestChunkCRUD:
    """Test suite for ChunkCRUD."""

    async def test_list_for_documents_joins_source(self, db_session, make_document) -> None:
        document = await make_document("user-1", title="Thesis", file_name="thesis.pdf")
        await chunk_crud.create_many(db_session, [chunk_row(document.id, "v-1"), chunk_row(document.id, "v-2", 2)])
        await db_session.commit()

        rows = await chunk_crud.list_for_documents(db_session, [document.id], limit=10)

        assert len(rows) == 2
        assert {(r.title, r.file_name) for r in rows} == {("Thesis", "thesis.pdf")}
        assert rows[0].chunk.keywords == ["alpha", "beta"]

    async def test_list_for_documents_respects_limit_and_scope(self, db_session, make_document) -> None:
        first = await make_document("user-1")
        other = await make_document("user-1")
        await chunk_crud.create_many(
            db_session,
            [chunk_row(first.id, f"a-{i}") for i in range(3)] + [chunk_row(other.id, "b-1")],
        )
        await db_session.commit()

        rows = await chunk_crud.list_for_documents(db_session, [first.id], limit=2)

        assert len(rows) == 2
        assert {r.chunk.document_id for r in rows} == {first.id}
        assert await chunk_crud.list_for_documents(db_session, [], limit=2) == []

    async def test_vector_id_is_unique(self, db_session, make_document) -> None:
        document = await make_document("user-1")

        with pytest.raises(IntegrityError):
            await chunk_crud.create_many(db_session, [chunk_row(document.id, "dup"), chunk_row(document.id, "dup")])


class TestCollectionCRUD:
    """Test suite for collections and membership."""

    async def test_link_is_idempotent(self, db_session, make_document, make_collection) -> None:
        document = await make_document("user-1")
        collection = await make_collection("user-1")

        assert await document_collection_crud.link(db_session, document.id, collection.id) is True
        assert await document_collection_crud.link(db_session, document.id, collection.id) is False
        assert await collection_crud.list_document_ids(db_session, collection.id) == [document.id]

    async def test_get_owned(self, db_session, make_collection) -> None:
        collection = await make_collection("user-1")

        assert await collection_crud.get_owned(db_session, collection.id, "user-2") is None

    async def test_unlink_only_named_documents(self, db_session, make_document, make_collection) -> None:
        first = await make_document("user-1")
        second = await make_document("user-1")
        collection = await make_collection("user-1", [first.id, second.id])

        removed = await document_collection_crud.unlink(db_session, collection.id, [first.id, uuid.uuid4()])

        assert removed == 1
        assert await collection_crud.list_document_ids(db_session, collection.id) == [second.id]
        assert await document_collection_crud.unlink(db_session, collection.id, []) == 0

    async def test_delete_with_links_clears_chat_scope(self, db_session, make_document, make_collection) -> None:
        # Arrange
        document = await make_document("user-1")
        collection = await make_collection("user-1", [document.id])
        history = await chat_history_crud.create(
            db_session, owner_id="user-1", query="Why?", collection_id=collection.id
        )
        await db_session.commit()

        # Act
        deleted = await collection_crud.delete_with_links(db_session, collection.id)
        await db_session.commit()

        # Assert
        assert deleted is True
        assert await collection_crud.list_document_ids(db_session, collection.id) == []
        assert await document_crud.get_owned(db_session, document.id, "user-1") is not None
        await db_session.refresh(history)
        assert history.collection_id is None


class TestChatHistoryCRUD:
    """Test suite for chat persistence."""

    async def test_append_and_list_in_order(self, db_session) -> None:
        history = await chat_history_crud.create(db_session, owner_id="user-1", query="Why?")

        await chat_message_crud.append(db_session, history.id, MessageRole.USER, "Why?")
        await chat_message_crud.append(db_session, history.id, MessageRole.ASSISTANT, "Because.")
        await db_session.commit()

        messages = await chat_message_crud.list_by_history(db_session, history.id)
        assert [(m.role, m.content) for m in messages] == [
            (MessageRole.USER, "Why?"),
            (MessageRole.ASSISTANT, "Because."),
        ]
