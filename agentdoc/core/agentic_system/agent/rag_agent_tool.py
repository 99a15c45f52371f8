"""
RAG agent preview-source tool.

Declares the preview_source tool offered to the model and dispatches
ToolRequests against the passages of the current turn. Dispatch is a
pure function so it can be tested without a model.

Dependencies: pydantic, agentdoc.models
System role: Tool definition and dispatch for the RAG agent
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from agentdoc.core.agentic_system.agent.rag_agent_schema import (
    PreviewSourceArgs,
    ToolRequest,
    ToolResponse,
)
from agentdoc.core.exceptions import ToolArgumentOutOfRangeError
from agentdoc.models.passage import Passage, SourcePreview

logger = logging.getLogger(__name__)

PREVIEW_SOURCE_TOOL_NAME = "preview_source"

PREVIEW_SOURCE_TOOL: dict[str, Any] = {
    "type": "function",
    "function": {
        "name": PREVIEW_SOURCE_TOOL_NAME,
        "description": "Show the original text, file and page of a cited source.",
        "parameters": {
            "type": "object",
            "properties": {
                "source_id": {
                    "type": "integer",
                    "description": "Number N of the [sourceN] label to preview, starting at 1",
                }
            },
            "required": ["source_id"],
        },
    },
}


def preview_source(source_id: int, passages: list[Passage]) -> SourcePreview:
    """
    Look up the passage labelled [source{source_id}].

    Raises:
        ToolArgumentOutOfRangeError: source_id is outside 1..len(passages)
    """
    if source_id < 1 or source_id > len(passages):
        raise ToolArgumentOutOfRangeError(source_id, len(passages))
    passage = passages[source_id - 1]
    return SourcePreview(
        source_id=source_id,
        text=passage.text,
        file=passage.file,
        page=passage.page,
        title=passage.title,
    )


def dispatch_tool_call(request: ToolRequest, passages: list[Passage]) -> ToolResponse:
    """
    Execute one tool request.

    Failures become error responses returned to the model; nothing raises.

    Args:
        request: Tool name and arguments emitted by the model
        passages: Passages the [sourceN] labels refer to

    Returns:
        ToolResponse: Preview payload or error message
    """
    if request.name != PREVIEW_SOURCE_TOOL_NAME:
        return ToolResponse(id=request.id, name=request.name, error=f"Unknown tool: {request.name}")

    try:
        args = PreviewSourceArgs.model_validate(request.arguments)
        preview = preview_source(args.source_id, passages)
    except PydanticValidationError as e:
        return ToolResponse(id=request.id, name=request.name, error=f"Invalid arguments: {e.errors()[0]['msg']}")
    except ToolArgumentOutOfRangeError as e:
        logger.info(f"{__name__}:dispatch_tool_call - {e.message}", extra=e.details)
        return ToolResponse(id=request.id, name=request.name, error=e.message)

    return ToolResponse(
        id=request.id,
        name=request.name,
        result=preview.model_dump(by_alias=True),
    )
