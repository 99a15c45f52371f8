"""
RAG chat agent implementation.

Streams a grounded answer over a fixed set of retrieved passages. The
model may call the preview_source tool a bounded number of times; each
successful call is surfaced to the client as a source event while the
answer text streams as token events.

Dependencies: langchain_core, langchain_google_genai
System role: RAG chat agent orchestration
"""

import json
import logging
import os
from collections.abc import AsyncGenerator
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, AIMessageChunk, BaseMessage, ToolMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from agentdoc.configs.llm import LLMSettings
from agentdoc.core.agentic_system.agent.rag_agent_prompt import RAG_AGENT_PROMPT, format_context
from agentdoc.core.agentic_system.agent.rag_agent_schema import ToolRequest
from agentdoc.core.agentic_system.agent.rag_agent_tool import PREVIEW_SOURCE_TOOL, dispatch_tool_call
from agentdoc.core.exceptions import GenerationUnavailableError
from agentdoc.models.passage import Passage
from agentdoc.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


def create_chat_model(settings: LLMSettings) -> BaseChatModel | None:
    """
    Build the Gemini chat model, or None when no API key is configured.

    Args:
        settings: LLM configuration

    Returns:
        BaseChatModel | None: Streaming chat model
    """
    api_key = settings.google_api_key or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        logger.warning(f"{__name__}:create_chat_model - No Google API key, chat generation disabled")
        return None
    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        temperature=settings.temperature,
        google_api_key=api_key,
    )


def chunk_text(chunk: AIMessageChunk) -> str:
    """Text of a streamed chunk; content may be a str or a list of parts."""
    if not chunk.content:
        return ""
    if isinstance(chunk.content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else "")
            for item in chunk.content
        )
    return str(chunk.content)


class RAGAgent:
    """
    Streaming RAG agent with a preview-source tool.

    Args:
        model: LangChain chat model supporting bind_tools and astream
        max_tool_rounds: Tool round trips allowed before the model must answer
    """

    def __init__(self, model: BaseChatModel, max_tool_rounds: int = 2) -> None:
        self._model = model
        self._model_with_tools = model.bind_tools([PREVIEW_SOURCE_TOOL])
        self.max_tool_rounds = max_tool_rounds

    def build_messages(self, passages: list[Passage], history: list[BaseMessage]) -> list[BaseMessage]:
        """System prompt with numbered excerpts followed by the conversation."""
        return RAG_AGENT_PROMPT.format_messages(
            context=format_context(passages),
            messages=history,
        )

    async def astream(
        self,
        passages: list[Passage],
        history: list[BaseMessage],
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream answer tokens and tool-call previews.

        Args:
            passages: Passages the [sourceN] labels refer to
            history: Conversation so far, ending with the user's question

        Yields:
            StreamEvent: token and source events

        Raises:
            GenerationUnavailableError: The model failed mid-stream
        """
        messages = self.build_messages(passages, history)
        token_index = 0

        for round_number in range(self.max_tool_rounds + 1):
            # Last round runs without tools so the model has to answer
            model = self._model_with_tools if round_number < self.max_tool_rounds else self._model
            logger.info(
                f"{__name__}:astream - Step {round_number + 1}: Starting LLM stream",
                extra={"passages": len(passages), "messages": len(messages)},
            )

            gathered: AIMessageChunk | None = None
            try:
                async for chunk in model.astream(messages):
                    gathered = chunk if gathered is None else gathered + chunk
                    token = chunk_text(chunk)
                    if token:
                        yield StreamEvent(
                            event=StreamEventType.TOKEN,
                            data={"token": token, "index": token_index},
                        )
                        token_index += 1
            except GenerationUnavailableError:
                raise
            except Exception as e:
                logger.error(f"{__name__}:astream - Model stream failed: {type(e).__name__}: {e}", exc_info=True)
                raise GenerationUnavailableError(
                    "Language model failed during generation",
                    {"error_type": type(e).__name__},
                ) from e

            if gathered is None or not gathered.tool_calls:
                logger.info(f"{__name__}:astream - Completed", extra={"tokens": token_index})
                return

            messages.append(AIMessage(content=gathered.content, tool_calls=gathered.tool_calls))
            for event, tool_message in self._run_tools(gathered.tool_calls, passages):
                if event is not None:
                    yield event
                messages.append(tool_message)

        logger.warning(f"{__name__}:astream - Tool round limit reached", extra={"rounds": self.max_tool_rounds})

    def _run_tools(
        self,
        tool_calls: list[dict[str, Any]],
        passages: list[Passage],
    ) -> list[tuple[StreamEvent | None, ToolMessage]]:
        results = []
        for call in tool_calls:
            request = ToolRequest(id=call.get("id"), name=call["name"], arguments=call.get("args") or {})
            response = dispatch_tool_call(request, passages)
            if response.ok:
                event = StreamEvent(event=StreamEventType.SOURCE, data=response.result)
                content = json.dumps(response.result)
            else:
                event = None
                content = response.error
            results.append(
                (
                    event,
                    ToolMessage(
                        content=content,
                        tool_call_id=request.id or request.name,
                        name=request.name,
                        status="success" if response.ok else "error",
                    ),
                )
            )
        return results
