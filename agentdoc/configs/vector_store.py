"""
Vector store configuration settings.

Selects the nearest-neighbour backend and fixes the wire contract
shared by every point: collection name, dimension and distance metric.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-memory for dev, Qdrant for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["qdrant", "memory", "disabled"] = Field(
        default="qdrant",
        description="Backend: 'qdrant' (REST), 'memory' for local dev, 'disabled' for none",
    )
    qdrant_url: str | None = Field(
        default=None,
        description="Qdrant base URL, e.g. http://localhost:6333",
    )
    qdrant_api_key: str | None = Field(default=None, description="Qdrant API key")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    collection_name: str = Field(default="docs", description="Fixed vector collection name")
    dimension: int = Field(default=1536, description="Embedding vector dimension")
    distance: str = Field(default="Cosine", description="Distance metric")

    top_k: int = Field(default=5, description="Number of passages to retrieve")
    scroll_page_size: int = Field(
        default=100,
        description="Page size when enumerating point ids before delete",
    )
    related_score_threshold: float = Field(
        default=0.8,
        description="Minimum similarity for a related-document hit",
    )
