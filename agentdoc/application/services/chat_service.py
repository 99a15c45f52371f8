"""
Chat service for grounded, streamed Q&A.

Orchestrates one chat turn: scoped retrieval, chat history persistence,
RAG agent streaming and the final assistant message. The user message
is committed before streaming starts; the assistant message only after
the stream has been fully collected, so an aborted stream never leaves
a truncated answer behind.

Dependencies: agentdoc.core, agentdoc.application.adapters, agentdoc.boundary.db
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing

from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.application.adapters.chat_history_adapter import (
    ChatHistoryAdapter,
    to_langchain_messages,
)
from agentdoc.core.agentic_system.agent.rag_agent import RAGAgent
from agentdoc.core.exceptions import GenerationUnavailableError
from agentdoc.core.retriever import RetrievalScope, Retriever
from agentdoc.models.chat import ChatRequest
from agentdoc.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for conversational Q&A.

    Args:
        db: AsyncSession used for retrieval and chat persistence
        retriever: Shared three-tier retriever
        rag_agent: Streaming agent, or None when no chat model is configured
    """

    def __init__(
        self,
        db: AsyncSession,
        retriever: Retriever,
        rag_agent: RAGAgent | None,
    ) -> None:
        self.db = db
        self.retriever = retriever
        self.rag_agent = rag_agent

    async def stream_chat(
        self,
        owner_id: str,
        request: ChatRequest,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream one answer for the last user message of the request.

        Flow:
        1. Resolve scope and retrieve passages (ownership checked first)
        2. Create the chat history and commit the user message
        3. Emit the context event
        4. Stream tokens and source previews from the agent
        5. Commit the assistant message and emit the complete event

        Args:
            owner_id: Authenticated caller
            request: Running message list and optional scope

        Yields:
            StreamEvent: context, token, source and complete events

        Raises:
            ScopeNotOwnedError: Scope is not the caller's (before anything is stored)
            GenerationUnavailableError: No chat model, or the model failed mid-stream
        """
        logger.info(
            f"{__name__}:stream_chat - START",
            extra={"owner_id": owner_id, "messages": len(request.messages)},
        )

        # Step 1: retrieval (raises before any row is written)
        scope = RetrievalScope(
            owner_id=owner_id,
            document_id=request.document_id,
            collection_id=request.collection_id,
        )
        retrieval = await self.retriever.retrieve(self.db, request.query, scope)
        logger.info(
            f"{__name__}:stream_chat - Retrieved passages",
            extra={"tier": retrieval.tier.value, "passages": len(retrieval.passages)},
        )

        if self.rag_agent is None:
            raise GenerationUnavailableError("No chat model is configured")

        # Step 2: chat history and user message, committed before streaming
        chat = await ChatHistoryAdapter.start(
            self.db,
            owner_id=owner_id,
            query=request.query,
            document_id=request.document_id,
            collection_id=request.collection_id,
        )
        await chat.add_user_message(request.query)
        chat_history_id = str(chat.history_id)

        # Step 3: context
        yield StreamEvent(
            event=StreamEventType.CONTEXT,
            data={
                "chatHistoryId": chat_history_id,
                "tier": retrieval.tier.value,
                "passages": [p.model_dump(by_alias=True, mode="json") for p in retrieval.passages],
            },
        )

        # Step 4: stream
        answer_parts: list[str] = []
        stream = self.rag_agent.astream(retrieval.passages, to_langchain_messages(request.messages))
        try:
            async with aclosing(stream):
                async for event in stream:
                    if event.event == StreamEventType.TOKEN:
                        answer_parts.append(event.data["token"])
                    yield event
        except GeneratorExit:
            logger.warning(
                f"{__name__}:stream_chat - Stream aborted, assistant message not stored",
                extra={"chat_history_id": chat_history_id, "tokens": len(answer_parts)},
            )
            raise

        # Step 5: assistant message only for a completed stream
        full_answer = "".join(answer_parts)
        await chat.add_ai_message(full_answer)
        logger.info(
            f"{__name__}:stream_chat - END",
            extra={"chat_history_id": chat_history_id, "answer_len": len(full_answer)},
        )
        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={"chatHistoryId": chat_history_id, "fullAnswer": full_answer},
        )
