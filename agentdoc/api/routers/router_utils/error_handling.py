"""
Router error handling utilities.

Maps the domain exception hierarchy onto HTTP status codes for REST
endpoints (via a decorator) and onto error stream events for the
WebSocket endpoint.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from agentdoc.core.exceptions import (
    AgentDocException,
    DatabaseError,
    FileTooLargeError,
    GenerationUnavailableError,
    NotFoundError,
    UnsupportedFormatError,
    ValidationError,
)
from agentdoc.models.streaming import StreamEvent

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Checked in order; subclasses before their bases
ERROR_STATUS: tuple[tuple[type[AgentDocException], int, str], ...] = (
    (FileTooLargeError, status.HTTP_413_CONTENT_TOO_LARGE, "FILE_TOO_LARGE"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (UnsupportedFormatError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE, "UNSUPPORTED_FORMAT"),
    (GenerationUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE, "GENERATION_UNAVAILABLE"),
    (DatabaseError, status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR"),
)


def error_status(exc: AgentDocException) -> tuple[int, str]:
    """HTTP status and error code for a domain exception."""
    for exc_type, status_code, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"


def error_event(exc: Exception) -> StreamEvent:
    """
    Error stream event for the WebSocket channel.

    Unexpected exceptions get a generic message so internals are not leaked.
    """
    if isinstance(exc, AgentDocException):
        _, code = error_status(exc)
        return StreamEvent.error(exc.message, code)
    return StreamEvent.error("Failed to process chat message", "PROCESSING_ERROR")


def handle_agentdoc_errors(func: F) -> F:
    """
    Decorator translating domain exceptions into HTTPExceptions.

    Client errors are logged at WARNING, server errors with a traceback.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except AgentDocException as e:
            status_code, code = error_status(e)
            log = logger.warning if status_code < 500 else logger.error
            log(
                f"{func.__name__} - {e.message}",
                extra={"error_type": type(e).__name__, "code": code, **e.details},
            )
            raise HTTPException(status_code=status_code, detail=e.message) from e

        except Exception as e:
            logger.exception(
                f"{func.__name__} - Unexpected failure",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            ) from e

    return wrapper  # type: ignore
