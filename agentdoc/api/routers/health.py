"""
Health check API endpoints.

Routes: GET /health, GET /health/db, GET /health/vector-store

Dependencies: agentdoc.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from agentdoc.api.deps import ServiceContainer, get_services


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(services: ServiceContainer = Depends(get_services)) -> HealthResponse:
    """Database health check."""
    try:
        async with services.session_factory() as db:
            await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return HealthResponse(status="unhealthy", message=f"Database unreachable: {type(e).__name__}")
    return HealthResponse(status="healthy", message="Database connection OK")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(services: ServiceContainer = Depends(get_services)) -> HealthResponse:
    """
    Vector store health check.

    A disabled or unconfigured store reports degraded: retrieval still
    works through the relational and static tiers.
    """
    if not services.vector_store.is_available:
        return HealthResponse(status="degraded", message="Vector store unavailable")
    return HealthResponse(status="healthy", message="Vector store accessible")
