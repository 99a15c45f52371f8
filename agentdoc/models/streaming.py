"""
Streaming event schemas for WebSocket chat.

Defines event types and payloads for real-time chat streaming.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONNECTED = "connected"
    CONTEXT = "context"
    TOKEN = "token"
    SOURCE = "source"
    COMPLETE = "complete"
    ERROR = "error"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    CHAT = "chat"
    PING = "ping"


class StreamEvent(BaseModel):
    """
    Streaming event.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    @classmethod
    def error(cls, message: str, code: str = "error") -> "StreamEvent":
        return cls(event=StreamEventType.ERROR, data={"message": message, "code": code})
