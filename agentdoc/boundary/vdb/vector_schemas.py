"""
Vector database schemas.

Pydantic models for the vector store wire contract: point payloads,
metadata filters and search results. Payload keys keep the camelCase
names the index is queried by (documentId).

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VectorPayloadMetadata(BaseModel):
    """Per-point metadata shown next to a cited passage."""

    page: int = Field(description="1-based page number")
    section: str | None = Field(default=None, description="Section label")
    title: str | None = Field(default=None, description="Document display title")
    file: str | None = Field(default=None, description="Original file name")


class VectorPayload(BaseModel):
    """Payload stored with every point: {text, documentId, metadata}."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    document_id: str = Field(alias="documentId")
    metadata: VectorPayloadMetadata

    def to_wire(self) -> dict[str, Any]:
        """Serialize with wire field names and without empty metadata keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class VectorPoint(BaseModel):
    """Point to upsert: id, embedding and payload."""

    id: str = Field(description="Chunk vector id (UUID string)")
    vector: list[float]
    payload: VectorPayload


class FieldCondition(BaseModel):
    """
    Single filter clause on a payload key.

    Exactly one of match_value (exact match) or match_any (any of a list)
    must be set.
    """

    key: str
    match_value: str | int | None = None
    match_any: list[str | int] | None = None

    @model_validator(mode="after")
    def _one_match(self) -> "FieldCondition":
        if (self.match_value is None) == (self.match_any is None):
            raise ValueError("FieldCondition needs exactly one of match_value or match_any")
        return self

    def to_qdrant(self) -> dict[str, Any]:
        if self.match_any is not None:
            return {"key": self.key, "match": {"any": self.match_any}}
        return {"key": self.key, "match": {"value": self.match_value}}

    def matches(self, payload: dict[str, Any]) -> bool:
        """Evaluate the clause against a payload dict (dotted keys allowed)."""
        value: Any = payload
        for part in self.key.split("."):
            if not isinstance(value, dict) or part not in value:
                return False
            value = value[part]
        if self.match_any is not None:
            return value in self.match_any
        return value == self.match_value


class VectorFilter(BaseModel):
    """Conjunction of must clauses plus optional must_not clauses."""

    must: list[FieldCondition] = Field(default_factory=list)
    must_not: list[FieldCondition] = Field(default_factory=list)

    def to_qdrant(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.must:
            body["must"] = [c.to_qdrant() for c in self.must]
        if self.must_not:
            body["must_not"] = [c.to_qdrant() for c in self.must_not]
        return body

    def matches(self, payload: dict[str, Any]) -> bool:
        return all(c.matches(payload) for c in self.must) and not any(
            c.matches(payload) for c in self.must_not
        )


class ScoredPoint(BaseModel):
    """Single result from vector search."""

    id: str
    score: float
    payload: dict[str, Any] = Field(default_factory=dict)


class RecordPoint(BaseModel):
    """Point returned by scroll, optionally with its vector."""

    id: str
    payload: dict[str, Any] = Field(default_factory=dict)
    vector: list[float] | None = None


def document_filter(document_id: str) -> VectorFilter:
    """Filter matching every point of one document."""
    return VectorFilter(must=[FieldCondition(key="documentId", match_value=document_id)])
