"""
FastAPI application with assembled routers.

Builds the shared service container at startup, registers the REST and
WebSocket routers and configures middleware.

Dependencies: fastapi, uvicorn, agentdoc.api.routers, agentdoc.observability
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agentdoc.api.deps import build_services
from agentdoc.boundary.db.create_tables import create_all_tables
from agentdoc.configs import Settings, get_settings
from agentdoc.observability import configure_logging
from agentdoc.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    chat_stream_router,
    collections_router,
    documents_router,
    health_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup constructs every shared client exactly once; shutdown closes
    the vector store client and disposes the database engine.
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    logger.info(f"{__name__}:lifespan - Building services", extra={"environment": settings.environment})
    services = build_services(settings)
    if settings.database.create_tables:
        await create_all_tables(services.engine)
    app.state.services = services
    logger.info(
        f"{__name__}:lifespan - Services ready",
        extra={
            "vector_store_available": services.vector_store.is_available,
            "embeddings_configured": services.embedding_client.is_configured,
            "generation_enabled": services.rag_agent is not None,
        },
    )

    yield

    await services.close()
    logger.info(f"{__name__}:lifespan - Services closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Settings to build services from; defaults to the cached settings

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="AgentDoc RAG API",
        description="Document ingestion and grounded chat over owned documents",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # REST routers under /api/v1; the WebSocket lives at /ws/chat
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(collections_router, prefix="/api/v1")
    app.include_router(chat_stream_router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "agentdoc.api.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
