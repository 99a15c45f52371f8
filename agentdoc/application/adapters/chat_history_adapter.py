"""
Chat history adapter.

Owns one ChatHistory thread: creates it for a user question, appends
messages by role, and converts the client's running message list into
LangChain messages for the agent.

Dependencies: langchain_core.messages, agentdoc.boundary.db.CRUD
System role: Chat history business logic adapter
"""

from uuid import UUID

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD.chat_history_crud import chat_history_crud, chat_message_crud
from agentdoc.boundary.db.models.chat_model import ChatHistoryModel, MessageRole
from agentdoc.core.exceptions import DatabaseError
from agentdoc.models.chat import ChatMessageIn


def to_langchain_messages(messages: list[ChatMessageIn]) -> list[BaseMessage]:
    """Map client messages onto HumanMessage/AIMessage in order."""
    return [
        HumanMessage(content=m.content) if m.role == "user" else AIMessage(content=m.content)
        for m in messages
    ]


class ChatHistoryAdapter:
    """
    Append-only access to a single chat thread.

    Commits after every append so the user message survives a stream that
    is later aborted.
    """

    def __init__(self, db: AsyncSession, history: ChatHistoryModel) -> None:
        self.db = db
        self.history = history

    @property
    def history_id(self) -> UUID:
        return self.history.id

    @classmethod
    async def start(
        cls,
        db: AsyncSession,
        owner_id: str,
        query: str,
        document_id: UUID | None = None,
        collection_id: UUID | None = None,
    ) -> "ChatHistoryAdapter":
        """
        Create the thread for one submitted question.

        Args:
            db: AsyncSession for database operations
            owner_id: Asking user
            query: The question that opened the thread
            document_id: Document scope, if any
            collection_id: Collection scope, if any
        """
        history = await chat_history_crud.create(
            db,
            owner_id=owner_id,
            query=query,
            document_id=document_id,
            collection_id=collection_id,
        )
        return cls(db, history)

    async def add_user_message(self, content: str) -> None:
        await self._append(MessageRole.USER, content)

    async def add_ai_message(self, content: str) -> None:
        await self._append(MessageRole.ASSISTANT, content)

    async def _append(self, role: MessageRole, content: str) -> None:
        try:
            await chat_message_crud.append(self.db, self.history.id, role, content)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise DatabaseError(
                "Could not store chat message",
                {"chat_history_id": str(self.history.id), "role": role.value},
            ) from e
