"""
Chunk domain models.

TextSegment is what extraction produces; ChunkRecord adds keywords, the
deterministic vector id and the embedding, and converts to both the
relational row and the vector point.

Dependencies: pydantic, uuid
System role: Document chunk data structures
"""

import uuid

from pydantic import BaseModel, Field

from agentdoc.boundary.vdb.vector_schemas import (
    VectorPayload,
    VectorPayloadMetadata,
    VectorPoint,
)

# Fixed namespace so vector ids are reproducible from (document_id, ordinal)
VECTOR_ID_NAMESPACE = uuid.UUID("6f1c2b7e-3d4a-5e8f-9a0b-1c2d3e4f5a6b")


def build_vector_id(document_id: uuid.UUID | str, ordinal: int | str) -> str:
    """
    Derive the vector index id of a chunk.

    Qdrant only accepts UUIDs or unsigned integers as point ids, so the
    "{document_id}:{ordinal}" key is hashed into a UUIDv5.

    Args:
        document_id: Owning document
        ordinal: 1-based chunk position, or a label such as "mock-1"

    Returns:
        str: UUID string, stable across runs
    """
    return str(uuid.uuid5(VECTOR_ID_NAMESPACE, f"{document_id}:{ordinal}"))


class TextSegment(BaseModel):
    """One extracted unit of a document (a page, for PDF)."""

    text: str
    page: int = Field(ge=1, description="1-based page number")
    section: str
    degraded: bool = Field(
        default=False,
        description="True when the text is a placeholder for content that could not be read",
    )


class ChunkRecord(BaseModel):
    """Chunk ready to be persisted and indexed."""

    vector_id: str
    document_id: uuid.UUID
    text: str
    page: int
    section: str | None = None
    keywords: list[str] = Field(default_factory=list)
    embedding: list[float] | None = None

    def to_row(self) -> dict:
        """Field values for ChunkModel."""
        return {
            "document_id": self.document_id,
            "text": self.text,
            "page": self.page,
            "section": self.section,
            "keywords": self.keywords,
            "vector_id": self.vector_id,
        }

    def to_point(self, title: str, file_name: str) -> VectorPoint:
        """Vector point carrying this chunk's embedding and payload."""
        if self.embedding is None:
            raise ValueError(f"Chunk {self.vector_id} has no embedding")
        return VectorPoint(
            id=self.vector_id,
            vector=self.embedding,
            payload=VectorPayload(
                text=self.text,
                document_id=str(self.document_id),
                metadata=VectorPayloadMetadata(
                    page=self.page,
                    section=self.section,
                    title=title,
                    file=file_name,
                ),
            ),
        )
