"""
Router utility functions.

Contains helpers extracted from router endpoints to keep them clean.
"""

from agentdoc.api.routers.router_utils.document_utils import process_document_background
from agentdoc.api.routers.router_utils.error_handling import (
    error_event,
    error_status,
    handle_agentdoc_errors,
)

__all__ = [
    "error_event",
    "error_status",
    "handle_agentdoc_errors",
    "process_document_background",
]
