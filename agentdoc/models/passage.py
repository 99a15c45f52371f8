"""
Passage domain model.

A retrieved text span offered to the language model as a citable source.

Dependencies: pydantic
System role: Retrieval output and citation data structure
"""

from pydantic import BaseModel, ConfigDict, Field


class Passage(BaseModel):
    """Passage returned by retrieval: {id, text, documentId, page, title, file}."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Vector point id, chunk id, or a static fallback id")
    text: str
    document_id: str = Field(alias="documentId")
    page: int = 1
    title: str = "Document"
    file: str = "document.pdf"
    section: str | None = None
    score: float | None = Field(default=None, description="Similarity, vector tier only")


class SourcePreview(BaseModel):
    """Out-of-band preview of a cited source: {sourceId, text, file, page, title}."""

    model_config = ConfigDict(populate_by_name=True)

    source_id: int = Field(alias="sourceId")
    text: str
    file: str
    page: int
    title: str
