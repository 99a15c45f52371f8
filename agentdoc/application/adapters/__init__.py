"""Supporting adapters."""

from .chat_history_adapter import ChatHistoryAdapter, to_langchain_messages

__all__ = ["ChatHistoryAdapter", "to_langchain_messages"]
