"""
Pipeline result model for document ingestion.

Outcome of one ingestion run, including which attempt produced it.

Dependencies: pydantic
System role: Return type for DocumentPipeline.run()
"""

from enum import Enum

from pydantic import BaseModel, Field

from agentdoc.boundary.db.models.document_model import DocumentStatus

from .chunk import TextSegment


class IngestionMode(str, Enum):
    """Which attempt of the two-attempt ingestion produced the result."""

    PRIMARY = "primary"
    DEGRADED = "degraded"


class ExtractionResult(BaseModel):
    """Segments extracted from one file plus what was learned about it."""

    segments: list[TextSegment] = Field(min_length=1)
    page_count: int = Field(ge=1)

    @property
    def degraded(self) -> bool:
        return any(s.degraded for s in self.segments)


class PipelineResult(BaseModel):
    """Result of document ingestion."""

    document_id: str = Field(description="Document identifier")
    status: DocumentStatus = Field(description="Terminal document status")
    mode: IngestionMode | None = Field(
        default=None,
        description="Attempt that completed the document; None when FAILED",
    )
    chunk_count: int = Field(default=0, description="Chunks persisted")
    page_count: int | None = Field(default=None, description="Observed page count")
    errors: list[str] = Field(default_factory=list, description="Errors per failed attempt")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")

    @property
    def degraded(self) -> bool:
        return self.mode == IngestionMode.DEGRADED
