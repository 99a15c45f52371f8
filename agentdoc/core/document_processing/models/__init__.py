"""
Models for the document ingestion pipeline.

Exports: TextSegment, ChunkRecord, build_vector_id, ExtractionResult,
IngestionMode, PipelineResult
"""

from .chunk import ChunkRecord, TextSegment, build_vector_id
from .pipeline_result import ExtractionResult, IngestionMode, PipelineResult

__all__ = [
    "ChunkRecord",
    "TextSegment",
    "build_vector_id",
    "ExtractionResult",
    "IngestionMode",
    "PipelineResult",
]
