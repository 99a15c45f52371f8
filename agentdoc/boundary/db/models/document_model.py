"""
Document ORM model.

Represents an uploaded file and its ingestion lifecycle. Rows are created
at upload time and only the ingestion pipeline changes status and
page_count afterwards.

Dependencies: sqlalchemy, agentdoc.boundary.db.base
System role: Document persistence for ingestion tracking
"""

import enum

from sqlalchemy import Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from agentdoc.boundary.db.base import Base, TimestampMixin, UUIDMixin


class DocumentStatus(str, enum.Enum):
    """
    Document processing lifecycle states.

    PROCESSING: Row created, background ingestion running
    COMPLETED: Chunks persisted (real or placeholder), ready for chat
    FAILED: Both ingestion attempts failed; error_message has details
    """

    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class DocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion state.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Authenticated user that uploaded the file
        title: Display title (file name without extension)
        file_name: Original file name
        file_size: Size in bytes
        file_type: Declared MIME type
        status: PROCESSING, COMPLETED or FAILED
        page_count: Number of pages once known
        error_message: Populated when status is FAILED
    """

    __tablename__ = "documents"

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(DocumentStatus, native_enum=False),
        nullable=False,
        default=DocumentStatus.PROCESSING,
    )
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str | None] = mapped_column(
        String(2048),
        nullable=True,
        doc="Error details if processing failed",
    )
