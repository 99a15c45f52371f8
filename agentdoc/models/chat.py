"""
Chat domain models and schemas.

Request schema for a chat turn: the running message list plus an
optional document or collection scope.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChatMessageIn(BaseModel):
    """One message of the running conversation."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request schema for a streamed chat turn."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessageIn] = Field(min_length=1)
    document_id: UUID | None = Field(default=None, alias="documentId")
    collection_id: UUID | None = Field(default=None, alias="collectionId")

    @model_validator(mode="after")
    def _single_scope(self) -> "ChatRequest":
        if self.document_id is not None and self.collection_id is not None:
            raise ValueError("documentId and collectionId are mutually exclusive")
        if self.messages[-1].role != "user" or not self.messages[-1].content.strip():
            raise ValueError("The last message must be a non-empty user message")
        return self

    @property
    def query(self) -> str:
        return self.messages[-1].content
