"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite database, session factory, document/collection
factories, deterministic embeddings, vector stores, PDF builders and a
scripted chat model
Dependencies: pytest, pytest-asyncio, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import uuid
from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from langchain_core.embeddings import DeterministicFakeEmbedding
from langchain_core.messages import AIMessageChunk
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from agentdoc.api.main import create_app
from agentdoc.boundary.db import Base, DocumentModel, DocumentStatus, build_session_factory
from agentdoc.boundary.db.CRUD import collection_crud, document_collection_crud, document_crud
from agentdoc.boundary.vdb import InMemoryVectorStore
from agentdoc.configs import Settings
from agentdoc.configs.database import DatabaseSettings
from agentdoc.configs.ingestion import IngestionSettings
from agentdoc.configs.llm import LLMSettings
from agentdoc.configs.vector_store import VectorStoreSettings
from agentdoc.core.document_processing import EmbeddingClient

EMBEDDING_DIMENSION = 1536


def build_pdf(page_texts: list[str]) -> bytes:
    """
    Build a minimal PDF with one Helvetica text line per page.

    Texts must be plain ASCII without parentheses or backslashes.
    """
    page_ids = [4 + 2 * i for i in range(len(page_texts))]
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(page_texts)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_id, text in zip(page_ids, page_texts):
        content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode()
        )
        objects.append(b"<< /Length " + str(len(content)).encode() + b" >>\nstream\n" + content + b"\nendstream")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def pdf_factory() -> Callable[[list[str]], bytes]:
    """Builder for PDFs with known page texts."""
    return build_pdf


@pytest.fixture
async def engine():
    """
    In-memory SQLite async engine with the full schema.

    StaticPool keeps one connection so every session sees the same data.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db_session(session_factory):
    """Session for arranging and asserting; closed after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def owner_id() -> str:
    return "user-1"


@pytest.fixture
def make_document(session_factory):
    """
    Factory creating committed document rows.

    Returns:
        async callable(owner_id, **fields) -> DocumentModel
    """

    async def _make(owner_id: str = "user-1", **fields) -> DocumentModel:
        values = {
            "title": "report",
            "file_name": "report.pdf",
            "file_size": 1024,
            "file_type": "application/pdf",
            "status": DocumentStatus.PROCESSING,
        }
        values.update(fields)
        async with session_factory() as session:
            document = await document_crud.create(session, owner_id=owner_id, **values)
            await session.commit()
        return document

    return _make


@pytest.fixture
def make_collection(session_factory):
    """
    Factory creating a committed collection, optionally with members.

    Returns:
        async callable(owner_id, document_ids=None, name=...) -> CollectionModel
    """

    async def _make(owner_id: str = "user-1", document_ids: list[uuid.UUID] | None = None, name: str = "papers"):
        async with session_factory() as session:
            collection = await collection_crud.create(session, owner_id=owner_id, name=name)
            for document_id in document_ids or []:
                await document_collection_crud.link(session, document_id, collection.id)
            await session.commit()
        return collection

    return _make


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    return DeterministicFakeEmbedding(size=EMBEDDING_DIMENSION)


@pytest.fixture
def embedding_client(fake_embeddings) -> EmbeddingClient:
    """Embedding client backed by deterministic fake embeddings."""
    return EmbeddingClient(fake_embeddings, dimension=EMBEDDING_DIMENSION, seed=7)


@pytest.fixture
def degraded_embedding_client() -> EmbeddingClient:
    """Embedding client with no provider: every call degrades."""
    return EmbeddingClient(None, dimension=EMBEDDING_DIMENSION, seed=7)


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


class ScriptedChatModel:
    """
    Chat model stand-in that streams pre-scripted chunk rounds.

    Each astream call consumes the next round. Round items may be strings
    (text chunks), dicts (preview_source calls: source_id, call_id, index),
    exceptions (raised mid-stream) or ready AIMessageChunks. bind_tools returns a bound
    copy sharing the script so tests can see which rounds offered tools.
    """

    def __init__(self, rounds: list[list], calls: list | None = None, tools: list | None = None) -> None:
        self.rounds = rounds
        self.calls = calls if calls is not None else []
        self.tools = tools

    def bind_tools(self, tools, **kwargs) -> "ScriptedChatModel":
        return ScriptedChatModel(self.rounds, self.calls, tools=list(tools))

    async def astream(self, messages, **kwargs):
        self.calls.append({"messages": list(messages), "tools": self.tools})
        for item in self.rounds.pop(0):
            if isinstance(item, Exception):
                raise item
            if isinstance(item, str):
                item = text_chunk(item)
            elif isinstance(item, dict):
                item = tool_call_chunk(**item)
            yield item


def text_chunk(text: str) -> AIMessageChunk:
    return AIMessageChunk(content=text)


def tool_call_chunk(source_id, call_id: str = "call-1", index: int = 0) -> AIMessageChunk:
    return AIMessageChunk(
        content="",
        tool_call_chunks=[
            {"name": "preview_source", "args": json.dumps({"source_id": source_id}), "id": call_id, "index": index}
        ],
    )


@pytest.fixture
def scripted_model():
    """Factory: scripted_model(round1_chunks, round2_chunks, ...) -> ScriptedChatModel."""

    def _make(*rounds: list) -> ScriptedChatModel:
        return ScriptedChatModel([list(r) for r in rounds])

    return _make


@pytest.fixture
def app_settings(tmp_path, monkeypatch) -> Settings:
    """
    Settings for a fully wired app: file-backed SQLite, in-memory vectors,
    no LLM credentials.
    """
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}", create_tables=True),
        vector_store=VectorStoreSettings(store_type="memory"),
        llm=LLMSettings(google_api_key=None),
        ingestion=IngestionSettings(max_file_size_bytes=64 * 1024),
    )


@pytest.fixture
def client(app_settings):
    """TestClient running the real lifespan (services built on startup)."""
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-User-Id": "user-1"}
