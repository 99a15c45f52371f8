"""
Task modules for the document ingestion pipeline.

Exports: ExtractionTask, EmbeddingTask, VectorStoreTask and file type helpers
"""

from .embedding_task import EmbeddingTask
from .extraction_task import (
    DEGRADED_SECTION,
    SUPPORTED_TYPES,
    ExtractionTask,
    resolve_file_type,
    strip_extension,
)
from .vector_store_task import VectorStoreTask

__all__ = [
    "DEGRADED_SECTION",
    "SUPPORTED_TYPES",
    "EmbeddingTask",
    "ExtractionTask",
    "VectorStoreTask",
    "resolve_file_type",
    "strip_extension",
]
