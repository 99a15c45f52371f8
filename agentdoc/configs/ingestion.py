"""
Ingestion configuration settings.

Upload limits and pipeline fan-out for document processing.

Dependencies: pydantic, pydantic_settings
System role: Document ingestion configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Upload validation and ingestion pipeline configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    max_file_size_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted upload (10 MiB)",
    )
    embedding_concurrency: int = Field(
        default=4,
        ge=1,
        description="Concurrent embedding batches per ingestion run",
    )
    embedding_batch_size: int = Field(
        default=16,
        ge=1,
        description="Chunks per embedding call",
    )
    keyword_limit: int = Field(default=10, description="Keywords kept per chunk")
