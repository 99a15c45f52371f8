"""
Tests for the document REST endpoints.

Runs the real application lifespan against file-backed SQLite and the
in-memory vector store. With no LLM credentials configured, ingestion
takes the degraded placeholder path.

System role: Verification of the document HTTP API
"""

import uuid

from agentdoc.core.document_processing import PLACEHOLDER_SECTION

PDF_MIME = "application/pdf"


def upload(client, headers, data: bytes, file_name: str = "report.pdf", content_type: str = PDF_MIME, **form):
    return client.post(
        "/api/v1/documents",
        headers=headers,
        files={"file": (file_name, data, content_type)},
        data=form,
    )


class TestUploadDocument:
    """Test suite for POST /documents."""

    def test_upload_returns_processing_then_completes(self, client, auth_headers, pdf_factory) -> None:
        # Act
        response = upload(client, auth_headers, pdf_factory(["Hello world"]))

        # Assert
        assert response.status_code == 202
        body = response.json()
        assert body["status"] == "PROCESSING"
        document_id = body["documentId"]

        # Background ingestion has run by the time the client returns
        status_response = client.get(f"/api/v1/documents/{document_id}", headers=auth_headers)
        assert status_response.status_code == 200
        document = status_response.json()
        assert document["status"] == "COMPLETED"
        assert document["page_count"] == 1
        assert document["title"] == "report"

    def test_placeholder_chunk_is_indexed(self, client, auth_headers, pdf_factory) -> None:
        response = upload(client, auth_headers, pdf_factory(["Hello world"]), file_name="notes.pdf")

        services = client.app.state.services
        assert services.vector_store.count("docs") == 1
        record = client.portal.call(services.vector_store.scroll, "docs")[0]
        assert record.payload["documentId"] == response.json()["documentId"]
        assert record.payload["metadata"]["section"] == PLACEHOLDER_SECTION

    def test_missing_owner_header_is_unauthorized(self, client, pdf_factory) -> None:
        response = upload(client, {}, pdf_factory(["x"]))

        assert response.status_code == 401

    def test_unsupported_format(self, client, auth_headers) -> None:
        response = upload(client, auth_headers, b"plain text", file_name="notes.txt", content_type="text/plain")

        assert response.status_code == 415

    def test_too_large(self, client, auth_headers) -> None:
        response = upload(client, auth_headers, b"x" * (64 * 1024 + 1))

        assert response.status_code == 413

    def test_foreign_collection_is_not_found(self, client, auth_headers, pdf_factory) -> None:
        created = client.post("/api/v1/collections", headers={"X-User-Id": "someone-else"}, json={"name": "theirs"})

        response = upload(client, auth_headers, pdf_factory(["x"]), collectionId=created.json()["id"])

        assert response.status_code == 404
        assert client.get("/api/v1/documents", headers=auth_headers).json()["total"] == 0


class TestReadDocuments:
    """Test suite for GET /documents and GET /documents/{id}."""

    def test_list_is_owner_scoped(self, client, auth_headers, pdf_factory) -> None:
        upload(client, auth_headers, pdf_factory(["a"]), file_name="a.pdf")
        upload(client, auth_headers, pdf_factory(["b"]), file_name="b.pdf")
        upload(client, {"X-User-Id": "someone-else"}, pdf_factory(["c"]), file_name="c.pdf")

        body = client.get("/api/v1/documents", headers=auth_headers).json()

        assert body["total"] == 2
        assert [d["file_name"] for d in body["documents"]] == ["b.pdf", "a.pdf"]

    def test_other_owners_document_is_not_found(self, client, auth_headers, pdf_factory) -> None:
        document_id = upload(client, auth_headers, pdf_factory(["a"])).json()["documentId"]

        response = client.get(f"/api/v1/documents/{document_id}", headers={"X-User-Id": "someone-else"})

        assert response.status_code == 404

    def test_unknown_document(self, client, auth_headers) -> None:
        response = client.get(f"/api/v1/documents/{uuid.uuid4()}", headers=auth_headers)

        assert response.status_code == 404


class TestDeleteDocument:
    """Test suite for DELETE /documents/{id}."""

    def test_delete_removes_document_and_vectors(self, client, auth_headers, pdf_factory) -> None:
        # Arrange
        document_id = upload(client, auth_headers, pdf_factory(["a"])).json()["documentId"]

        # Act
        response = client.delete(f"/api/v1/documents/{document_id}", headers=auth_headers)

        # Assert
        assert response.status_code == 204
        assert client.get(f"/api/v1/documents/{document_id}", headers=auth_headers).status_code == 404
        assert client.app.state.services.vector_store.count("docs") == 0

    def test_delete_foreign_document(self, client, auth_headers, pdf_factory) -> None:
        document_id = upload(client, auth_headers, pdf_factory(["a"])).json()["documentId"]

        response = client.delete(f"/api/v1/documents/{document_id}", headers={"X-User-Id": "someone-else"})

        assert response.status_code == 404


class TestRelatedDocuments:
    """Test suite for GET /documents/{id}/related."""

    def test_related_response_shape(self, client, auth_headers, pdf_factory) -> None:
        document_id = upload(client, auth_headers, pdf_factory(["a"])).json()["documentId"]

        response = client.get(f"/api/v1/documents/{document_id}/related", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"document_id": document_id, "related": []}
