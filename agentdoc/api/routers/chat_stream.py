"""
WebSocket streaming chat endpoint.

Provides real-time token streaming for grounded chat answers.

Routes: WS /ws/chat

Dependencies: agentdoc.application.services.chat_service
System role: WebSocket streaming HTTP API
"""

import json
import logging
from contextlib import aclosing

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PydanticValidationError

from agentdoc.api.deps import OWNER_HEADER, get_chat_service
from agentdoc.api.routers.router_utils import error_event
from agentdoc.application.services.chat_service import ChatService
from agentdoc.core.exceptions import AgentDocException
from agentdoc.models.chat import ChatRequest
from agentdoc.models.streaming import ClientEventType, StreamEvent, StreamEventType

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


def resolve_ws_owner(websocket: WebSocket) -> str | None:
    """Owner id from the X-User-Id header, or the userId query parameter for browsers."""
    owner_id = websocket.headers.get(OWNER_HEADER) or websocket.query_params.get("userId")
    return owner_id.strip() if owner_id and owner_id.strip() else None


@router.websocket("/ws/chat")
async def websocket_chat(
    websocket: WebSocket,
    chat_service: ChatService = Depends(get_chat_service),
) -> None:
    """
    WebSocket endpoint for streaming chat responses.

    Client sends:
        {"event": "chat", "data": {"messages": [...], "documentId": "...", "collectionId": "..."}}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"userId": "..."}}
        {"event": "context", "data": {"chatHistoryId": "...", "tier": "...", "passages": [...]}}
        {"event": "token", "data": {"token": "...", "index": 0}}
        {"event": "source", "data": {"sourceId": 1, "text": "...", "file": "...", "page": 1, "title": "..."}}
        {"event": "complete", "data": {"chatHistoryId": "...", "fullAnswer": "..."}}
        {"event": "error", "data": {"code": "...", "message": "..."}}
    """
    owner_id = resolve_ws_owner(websocket)
    if owner_id is None:
        logger.warning("WebSocket rejected: missing owner id")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info("WebSocket connection established", extra={"owner_id": owner_id, "client_host": websocket.client})
    await websocket.send_json(
        StreamEvent(event=StreamEventType.CONNECTED, data={"userId": owner_id}).to_dict()
    )

    try:
        while True:
            raw_data = await websocket.receive_text()
            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning("Failed to parse JSON", extra={"owner_id": owner_id, "error_msg": str(e)})
                await websocket.send_json(StreamEvent.error("Invalid JSON format", "INVALID_JSON").to_dict())
                continue

            event_type = data.get("event") if isinstance(data, dict) else None

            if event_type == ClientEventType.PING.value:
                await websocket.send_json({"event": "pong"})
                continue

            if event_type != ClientEventType.CHAT.value:
                logger.warning("Unknown event type received", extra={"owner_id": owner_id, "event_type": str(event_type)})
                await websocket.send_json(
                    StreamEvent.error(f"Unknown event type: {event_type}", "UNKNOWN_EVENT").to_dict()
                )
                continue

            try:
                request = ChatRequest.model_validate(data.get("data") or {})
            except PydanticValidationError as e:
                await websocket.send_json(
                    StreamEvent.error(e.errors()[0]["msg"], "VALIDATION_ERROR").to_dict()
                )
                continue

            await _stream_answer(websocket, chat_service, owner_id, request)

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected", extra={"owner_id": owner_id})


async def _stream_answer(
    websocket: WebSocket,
    chat_service: ChatService,
    owner_id: str,
    request: ChatRequest,
) -> None:
    """
    Forward one chat turn to the client.

    A disconnect while sending closes the service stream, which then skips
    storing the assistant message.
    """
    event_count = 0
    stream = chat_service.stream_chat(owner_id, request)
    try:
        async with aclosing(stream):
            async for event in stream:
                event_count += 1
                await websocket.send_json(event.to_dict())
    except WebSocketDisconnect:
        raise
    except AgentDocException as e:
        await chat_service.db.rollback()
        logger.warning(
            "Chat stream failed",
            extra={"owner_id": owner_id, "error_type": type(e).__name__, "error_msg": e.message},
        )
        await websocket.send_json(error_event(e).to_dict())
        return
    except Exception as e:
        await chat_service.db.rollback()
        logger.exception(
            "Unexpected error during chat stream",
            extra={"owner_id": owner_id, "error_type": type(e).__name__, "error_msg": str(e)},
        )
        await websocket.send_json(error_event(e).to_dict())
        return

    logger.info("Chat stream completed", extra={"owner_id": owner_id, "total_events": event_count})
