"""
Tests for DocumentService.

System role: Verification of upload validation, status, listing,
deletion and related-document lookup
"""

import uuid

import pytest
from sqlalchemy import func, select

from agentdoc.boundary.db import ChunkModel, DocumentCollectionModel, DocumentModel, DocumentStatus
from agentdoc.boundary.db.CRUD import chunk_crud, collection_crud
from agentdoc.application.services import DocumentService
from agentdoc.boundary.vdb import VectorPayload, VectorPayloadMetadata, VectorPoint, UnavailableVectorStore
from agentdoc.configs.ingestion import IngestionSettings
from agentdoc.core.document_processing.tasks import VectorStoreTask
from agentdoc.core.exceptions import (
    FileTooLargeError,
    NotFoundError,
    ScopeNotOwnedError,
    UnsupportedFormatError,
    ValidationError,
)
from agentdoc.core.retriever import RelatedDocumentFinder


@pytest.fixture
def document_service(db_session, memory_store) -> DocumentService:
    return DocumentService(
        db_session,
        VectorStoreTask(memory_store),
        RelatedDocumentFinder(memory_store),
        IngestionSettings(max_file_size_bytes=1024),
    )


async def count_rows(session_factory, model) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model))


class TestCreateDocument:
    """Test suite for upload validation and row creation."""

    async def test_creates_processing_document(self, document_service, session_factory) -> None:
        # Act
        document, file_type = await document_service.create_document(
            "user-1", "Annual Report.pdf", b"%PDF-1.4 body", "application/pdf"
        )

        # Assert
        assert file_type == "pdf"
        assert document.status == DocumentStatus.PROCESSING
        assert document.title == "Annual Report"
        assert document.file_size == len(b"%PDF-1.4 body")
        assert await count_rows(session_factory, DocumentModel) == 1

    async def test_docx_by_extension_gets_canonical_mime(self, document_service) -> None:
        document, file_type = await document_service.create_document("user-1", "notes.docx", b"PK..")

        assert file_type == "docx"
        assert document.file_type.endswith("wordprocessingml.document")

    async def test_unsupported_type_rejected(self, document_service, session_factory) -> None:
        with pytest.raises(UnsupportedFormatError):
            await document_service.create_document("user-1", "notes.txt", b"hello", "text/plain")

        assert await count_rows(session_factory, DocumentModel) == 0

    async def test_too_large_rejected(self, document_service) -> None:
        with pytest.raises(FileTooLargeError) as exc_info:
            await document_service.create_document("user-1", "big.pdf", b"x" * 1025, "application/pdf")

        assert exc_info.value.details == {"field": "file", "size": 1025, "limit": 1024}

    async def test_empty_file_rejected(self, document_service) -> None:
        with pytest.raises(ValidationError):
            await document_service.create_document("user-1", "empty.pdf", b"", "application/pdf")

    async def test_links_owned_collection(self, document_service, make_collection, session_factory) -> None:
        collection = await make_collection("user-1")

        document, _ = await document_service.create_document(
            "user-1", "a.pdf", b"data", collection_id=collection.id
        )

        async with session_factory() as session:
            assert await collection_crud.list_document_ids(session, collection.id) == [document.id]

    async def test_foreign_collection_rejected_before_insert(
        self, document_service, make_collection, session_factory
    ) -> None:
        collection = await make_collection("someone-else")

        with pytest.raises(ScopeNotOwnedError):
            await document_service.create_document("user-1", "a.pdf", b"data", collection_id=collection.id)

        assert await count_rows(session_factory, DocumentModel) == 0


class TestReadDocuments:
    """Test suite for status and listing."""

    async def test_get_owned_document(self, document_service, make_document) -> None:
        document = await make_document("user-1", status=DocumentStatus.COMPLETED, page_count=3)

        found = await document_service.get_document("user-1", document.id)

        assert found.status == DocumentStatus.COMPLETED
        assert found.page_count == 3

    async def test_get_foreign_document_is_not_found(self, document_service, make_document) -> None:
        document = await make_document("someone-else")

        with pytest.raises(NotFoundError):
            await document_service.get_document("user-1", document.id)

    async def test_list_is_newest_first_and_owner_scoped(self, document_service, make_document) -> None:
        first = await make_document("user-1", title="first")
        second = await make_document("user-1", title="second")
        await make_document("someone-else")

        documents = await document_service.list_documents("user-1")

        assert [d.id for d in documents] == [second.id, first.id]

    async def test_list_pagination(self, document_service, make_document) -> None:
        for i in range(3):
            await make_document("user-1", title=f"doc-{i}")

        page = await document_service.list_documents("user-1", limit=2, offset=2)

        assert [d.title for d in page] == ["doc-0"]


class TestDeleteDocument:
    """Test suite for document deletion."""

    async def test_removes_rows_links_and_vectors(
        self, document_service, make_document, make_collection, memory_store, db_session, session_factory
    ) -> None:
        # Arrange
        document = await make_document("user-1")
        await make_collection("user-1", [document.id])
        await chunk_crud.create_many(
            db_session,
            [{"document_id": document.id, "text": "t", "page": 1, "section": "Page 1", "keywords": [], "vector_id": "v-1"}],
        )
        await db_session.commit()
        await memory_store.ensure_collection("docs", 2)
        await memory_store.upsert(
            "docs",
            [
                VectorPoint(
                    id="v-1",
                    vector=[1.0, 0.0],
                    payload=VectorPayload(text="t", document_id=str(document.id), metadata=VectorPayloadMetadata(page=1)),
                )
            ],
        )

        # Act
        await document_service.delete_document("user-1", document.id)

        # Assert
        assert await count_rows(session_factory, DocumentModel) == 0
        assert await count_rows(session_factory, ChunkModel) == 0
        assert await count_rows(session_factory, DocumentCollectionModel) == 0
        assert memory_store.count("docs") == 0

    async def test_vector_outage_does_not_block_delete(self, db_session, make_document, session_factory) -> None:
        document = await make_document("user-1")
        service = DocumentService(db_session, VectorStoreTask(UnavailableVectorStore()))

        await service.delete_document("user-1", document.id)

        assert await count_rows(session_factory, DocumentModel) == 0

    async def test_foreign_document_is_untouched(self, document_service, make_document, session_factory) -> None:
        document = await make_document("someone-else")

        with pytest.raises(NotFoundError):
            await document_service.delete_document("user-1", document.id)

        assert await count_rows(session_factory, DocumentModel) == 1


class TestRelatedDocuments:
    """Test suite for related-document lookup through the service."""

    async def test_without_finder_returns_empty_for_owned(self, db_session, make_document) -> None:
        document = await make_document("user-1")
        service = DocumentService(db_session, VectorStoreTask(UnavailableVectorStore()))

        assert await service.related_documents("user-1", document.id) == []

    async def test_unknown_document_rejected(self, document_service) -> None:
        with pytest.raises(ScopeNotOwnedError):
            await document_service.related_documents("user-1", uuid.uuid4())
