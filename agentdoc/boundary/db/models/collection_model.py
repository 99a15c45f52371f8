"""
Collection ORM models.

A Collection is a user-owned named grouping of documents. Membership is
a many-to-many association with one row per (document, collection) pair.

Dependencies: sqlalchemy, agentdoc.boundary.db.base
System role: Retrieval scope grouping
"""

import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from agentdoc.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin


class CollectionModel(Base, UUIDMixin, TimestampMixin):
    """Named, user-owned grouping of documents."""

    __tablename__ = "collections"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class DocumentCollectionModel(Base, UUIDMixin, CreatedAtMixin):
    """Association row linking one document to one collection."""

    __tablename__ = "document_collections"
    __table_args__ = (
        UniqueConstraint("document_id", "collection_id", name="uq_document_collection"),
    )

    document_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
    )
    collection_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("collections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
