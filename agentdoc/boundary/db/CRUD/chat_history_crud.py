"""
Chat history CRUD operations.

Creates conversation threads and appends messages to them. Messages are
never updated.

Dependencies: sqlalchemy, agentdoc.boundary.db.models
System role: Chat transcript persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD.base_crud import BaseCRUD
from agentdoc.boundary.db.models.chat_model import (
    ChatHistoryModel,
    ChatMessageModel,
    MessageRole,
)


class ChatHistoryCRUD(BaseCRUD[ChatHistoryModel]):
    """CRUD operations for ChatHistoryModel."""

    def __init__(self) -> None:
        super().__init__(ChatHistoryModel)


class ChatMessageCRUD(BaseCRUD[ChatMessageModel]):
    """CRUD operations for ChatMessageModel."""

    def __init__(self) -> None:
        super().__init__(ChatMessageModel)

    async def append(
        self,
        session: AsyncSession,
        chat_history_id: UUID,
        role: MessageRole,
        content: str,
    ) -> ChatMessageModel:
        """Append one message to a chat history."""
        return await self.create(
            session,
            chat_history_id=chat_history_id,
            role=role,
            content=content,
        )

    async def list_by_history(
        self,
        session: AsyncSession,
        chat_history_id: UUID,
    ) -> Sequence[ChatMessageModel]:
        """Messages of a chat history in creation order."""
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.chat_history_id == chat_history_id)
            .order_by(ChatMessageModel.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


chat_history_crud = ChatHistoryCRUD()
chat_message_crud = ChatMessageCRUD()
