"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from agentdoc.observability.logger import configure_logging

__all__ = ["configure_logging"]
