"""
Chunk ORM model.

One page/section-scoped slice of a document's text. Immutable once
written; removed together with its document.

Dependencies: sqlalchemy, agentdoc.boundary.db.base
System role: Relational twin of each vector point
"""

import uuid

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from agentdoc.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class ChunkModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Chunk ORM model.

    Attributes:
        document_id: Owning document
        text: Extracted text body
        page: 1-based page number
        section: Section label (e.g. "Page 3")
        keywords: Top keywords, ordered by frequency
        vector_id: Point id in the vector index, unique across the index
    """

    __tablename__ = "chunks"

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    page: Mapped[int] = mapped_column(Integer, nullable=False)
    section: Mapped[str | None] = mapped_column(String(255), nullable=True)
    keywords: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    vector_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
