"""
Document processing package.

Extraction, keyword derivation, embeddings and the ingestion pipeline.
"""

from .embedding_client import EmbeddingBatch, EmbeddingClient, EmbeddingResult
from .entrypoint import PLACEHOLDER_SECTION, PLACEHOLDER_TEXT, DocumentPipeline
from .keywords import extract_keywords
from .models import IngestionMode, PipelineResult

__all__ = [
    "DocumentPipeline",
    "EmbeddingBatch",
    "EmbeddingClient",
    "EmbeddingResult",
    "IngestionMode",
    "PLACEHOLDER_SECTION",
    "PLACEHOLDER_TEXT",
    "PipelineResult",
    "extract_keywords",
]
