"""
Tests for preview_source dispatch.

System role: Verification of tagged tool request/response handling
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from agentdoc.core.agentic_system.agent import (
    ToolRequest,
    ToolResponse,
    dispatch_tool_call,
    preview_source,
)
from agentdoc.core.exceptions import ToolArgumentOutOfRangeError
from agentdoc.models.passage import Passage


@pytest.fixture
def passages() -> list[Passage]:
    return [
        Passage(id="a", text="First excerpt", document_id="doc-1", page=2, title="Alpha", file="alpha.pdf"),
        Passage(id="b", text="Second excerpt", document_id="doc-2", page=7, title="Beta", file="beta.docx"),
    ]


class TestPreviewSource:
    """Test suite for preview_source."""

    def test_one_based_lookup(self, passages) -> None:
        preview = preview_source(2, passages)

        assert preview.model_dump(by_alias=True) == {
            "sourceId": 2,
            "text": "Second excerpt",
            "file": "beta.docx",
            "page": 7,
            "title": "Beta",
        }

    @pytest.mark.parametrize("source_id", [0, 3, -1])
    def test_out_of_range(self, passages, source_id) -> None:
        with pytest.raises(ToolArgumentOutOfRangeError) as exc_info:
            preview_source(source_id, passages)

        assert exc_info.value.message == f"Invalid source ID: {source_id}"


class TestDispatchToolCall:
    """Test suite for dispatch_tool_call."""

    def test_success_returns_result(self, passages) -> None:
        # Arrange
        request = ToolRequest(id="call-1", name="preview_source", arguments={"source_id": 1})

        # Act
        response = dispatch_tool_call(request, passages)

        # Assert
        assert response.ok
        assert response.id == "call-1"
        assert response.result["sourceId"] == 1
        assert response.result["title"] == "Alpha"
        assert response.error is None

    def test_out_of_range_is_error_response(self, passages) -> None:
        response = dispatch_tool_call(
            ToolRequest(name="preview_source", arguments={"source_id": 5}), passages
        )

        assert not response.ok
        assert response.error == "Invalid source ID: 5"

    def test_unknown_tool(self, passages) -> None:
        response = dispatch_tool_call(ToolRequest(name="delete_everything"), passages)

        assert response.error == "Unknown tool: delete_everything"

    def test_missing_argument(self, passages) -> None:
        response = dispatch_tool_call(ToolRequest(name="preview_source", arguments={}), passages)

        assert response.error.startswith("Invalid arguments:")

    def test_response_requires_result_xor_error(self) -> None:
        with pytest.raises(PydanticValidationError):
            ToolResponse(name="preview_source")
        with pytest.raises(PydanticValidationError):
            ToolResponse(name="preview_source", result={"a": 1}, error="boom")
