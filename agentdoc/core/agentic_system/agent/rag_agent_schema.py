"""
RAG agent tool-call schemas.

Tool calls are modelled as a tagged request/response exchange: the model
emits a ToolRequest (name plus arguments) and receives a ToolResponse
carrying either a result or an error, never both.

Dependencies: pydantic
System role: Tool dispatch contracts for the RAG agent
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class PreviewSourceArgs(BaseModel):
    """Show the full text and origin of one cited source."""

    source_id: int = Field(description="Number N of the [sourceN] label to preview, starting at 1")


class ToolRequest(BaseModel):
    """Tool invocation emitted by the model."""

    id: str | None = Field(default=None, description="Provider tool-call id")
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResponse(BaseModel):
    """Outcome of one tool invocation: result xor error."""

    id: str | None = None
    name: str
    result: dict[str, Any] | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _result_xor_error(self) -> "ToolResponse":
        if (self.result is None) == (self.error is None):
            raise ValueError("ToolResponse needs exactly one of result or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None
