"""
Chat history ORM models.

ChatHistory is one conversation thread created per submitted question;
ChatMessage rows are appended to it and never rewritten.

Dependencies: sqlalchemy, agentdoc.boundary.db.base
System role: Chat transcript persistence
"""

import enum
import uuid

from sqlalchemy import CheckConstraint, Enum, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from agentdoc.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class MessageRole(str, enum.Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatHistoryModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Conversation thread scoped to a user and optionally one document or collection.

    Attributes:
        owner_id: Authenticated user
        document_id: Document scope (exclusive with collection_id)
        collection_id: Collection scope (exclusive with document_id)
        query: Question that opened the thread
    """

    __tablename__ = "chat_histories"
    __table_args__ = (
        CheckConstraint(
            "document_id IS NULL OR collection_id IS NULL",
            name="ck_chat_history_single_scope",
        ),
    )

    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    document_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("documents.id", ondelete="SET NULL"),
        nullable=True,
    )
    collection_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("collections.id", ondelete="SET NULL"),
        nullable=True,
    )
    query: Mapped[str] = mapped_column(Text, nullable=False)


class ChatMessageModel(Base, UUIDMixin, CreatedAtMixin):
    """Single append-only message in a ChatHistory."""

    __tablename__ = "chat_messages"

    chat_history_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("chat_histories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, native_enum=False),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
