"""
Dependency injection container.

Process-wide collaborators (vector store, embedding client, chat model,
pipeline, retriever) are constructed once at startup by build_services()
and kept on app.state. Request-scoped services are built from them by
the FastAPI dependency functions below.

Dependencies: fastapi, agentdoc.configs, agentdoc.application, agentdoc.boundary, agentdoc.core
System role: DI container for service injection
"""

import logging
import os
from collections.abc import AsyncGenerator

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from starlette.requests import HTTPConnection

from agentdoc.application.services import ChatService, CollectionService, DocumentService
from agentdoc.boundary.db import build_async_engine, build_session_factory
from agentdoc.boundary.vdb import VectorStoreClient, create_vector_store
from agentdoc.configs import Settings
from agentdoc.core.agentic_system.agent.rag_agent import RAGAgent, create_chat_model
from agentdoc.core.document_processing import DocumentPipeline, EmbeddingClient
from agentdoc.core.document_processing.embeddings_wrapper import FixedDimensionEmbeddings
from agentdoc.core.document_processing.tasks import VectorStoreTask
from agentdoc.core.retriever import RelatedDocumentFinder, Retriever

logger = logging.getLogger(__name__)

OWNER_HEADER = "X-User-Id"


class ServiceContainer:
    """
    Shared collaborators for the whole process.

    Args:
        settings: Application settings
        engine: Async database engine
        vector_store: Configured store (possibly the unavailable variant)
        embedding_client: Embedding client (possibly unconfigured)
        chat_model: LangChain chat model, or None when generation is disabled
    """

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        vector_store: VectorStoreClient,
        embedding_client: EmbeddingClient,
        chat_model=None,
    ) -> None:
        vector_config = settings.vector_store
        self.settings = settings
        self.engine = engine
        self.session_factory: async_sessionmaker[AsyncSession] = build_session_factory(engine)
        self.vector_store = vector_store
        self.embedding_client = embedding_client

        self.vector_store_task = VectorStoreTask(
            vector_store,
            collection_name=vector_config.collection_name,
            dimension=vector_config.dimension,
            distance=vector_config.distance,
        )
        self.pipeline = DocumentPipeline(
            self.session_factory,
            embedding_client,
            vector_store,
            vector_config=vector_config,
            ingestion_config=settings.ingestion,
        )
        self.retriever = Retriever(
            vector_store,
            embedding_client,
            collection_name=vector_config.collection_name,
            top_k=vector_config.top_k,
        )
        self.related_finder = RelatedDocumentFinder(
            vector_store,
            collection_name=vector_config.collection_name,
            score_threshold=vector_config.related_score_threshold,
        )
        self.rag_agent = (
            RAGAgent(chat_model, max_tool_rounds=settings.llm.max_tool_rounds)
            if chat_model is not None
            else None
        )

    async def close(self) -> None:
        await self.vector_store.close()
        await self.engine.dispose()


def build_services(settings: Settings) -> ServiceContainer:
    """
    Construct every shared collaborator from settings.

    Missing credentials or endpoints select degraded variants instead of
    failing startup.
    """
    api_key = settings.llm.google_api_key or os.getenv("GOOGLE_API_KEY")
    embeddings = None
    if api_key:
        embeddings = FixedDimensionEmbeddings(
            model=settings.llm.embedding_model,
            output_dimensionality=settings.vector_store.dimension,
            google_api_key=api_key,
        )
    else:
        logger.warning(f"{__name__}:build_services - No Google API key, embeddings will degrade")

    return ServiceContainer(
        settings=settings,
        engine=build_async_engine(settings.database),
        vector_store=create_vector_store(settings.vector_store),
        embedding_client=EmbeddingClient(embeddings, dimension=settings.vector_store.dimension),
        chat_model=create_chat_model(settings.llm),
    )


def get_services(connection: HTTPConnection) -> ServiceContainer:
    """Shared container from app.state (works for HTTP and WebSocket)."""
    return connection.app.state.services


async def get_db(
    services: ServiceContainer = Depends(get_services),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped async session.

    Yields:
        AsyncSession: Session closed when the request completes
    """
    async with services.session_factory() as session:
        yield session


def get_owner_id(x_user_id: str | None = Header(default=None, alias=OWNER_HEADER)) -> str:
    """
    Authenticated owner id forwarded by the gateway.

    Raises:
        HTTPException(401): Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {OWNER_HEADER} header",
        )
    return x_user_id.strip()


def get_document_service(
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> DocumentService:
    return DocumentService(
        db=db,
        vector_store_task=services.vector_store_task,
        related_finder=services.related_finder,
        ingestion_config=services.settings.ingestion,
    )


def get_collection_service(db: AsyncSession = Depends(get_db)) -> CollectionService:
    return CollectionService(db=db)


def get_chat_service(
    db: AsyncSession = Depends(get_db),
    services: ServiceContainer = Depends(get_services),
) -> ChatService:
    """Chat service for one WebSocket connection."""
    return ChatService(db=db, retriever=services.retriever, rag_agent=services.rag_agent)
