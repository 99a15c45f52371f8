"""
RAG chat agent module.

Dependencies: langchain_core, langchain_google_genai
System role: Agent module exports
"""

from agentdoc.core.agentic_system.agent.rag_agent import RAGAgent, chunk_text, create_chat_model
from agentdoc.core.agentic_system.agent.rag_agent_prompt import RAG_AGENT_PROMPT, format_context
from agentdoc.core.agentic_system.agent.rag_agent_schema import PreviewSourceArgs, ToolRequest, ToolResponse
from agentdoc.core.agentic_system.agent.rag_agent_tool import (
    PREVIEW_SOURCE_TOOL,
    dispatch_tool_call,
    preview_source,
)

__all__ = [
    "RAGAgent",
    "RAG_AGENT_PROMPT",
    "PREVIEW_SOURCE_TOOL",
    "PreviewSourceArgs",
    "ToolRequest",
    "ToolResponse",
    "chunk_text",
    "create_chat_model",
    "dispatch_tool_call",
    "format_context",
    "preview_source",
]
