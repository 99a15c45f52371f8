"""
Document router helpers.

Background ingestion entry point scheduled by the upload endpoint.
"""

import logging
from uuid import UUID

from agentdoc.core.document_processing import DocumentPipeline

logger = logging.getLogger(__name__)


async def process_document_background(
    pipeline: DocumentPipeline,
    document_id: UUID,
    data: bytes,
    file_name: str,
    file_type: str,
    title: str,
) -> None:
    """
    Run ingestion detached from the upload request.

    The pipeline opens its own sessions and always leaves the document
    COMPLETED or FAILED; anything escaping it is logged here because
    there is no caller left to report to.

    Args:
        pipeline: Shared ingestion pipeline
        document_id: Document row in PROCESSING
        data: Uploaded bytes
        file_name: Original file name
        file_type: 'pdf' or 'docx'
        title: Display title
    """
    logger.info(
        "Starting background document processing",
        extra={"document_id": str(document_id), "file_name": file_name, "file_type": file_type},
    )
    try:
        result = await pipeline.run(document_id, data, file_name, file_type, title=title)
    except Exception as e:
        logger.exception(
            "Document processing crashed",
            extra={"document_id": str(document_id), "error_type": type(e).__name__, "error_msg": str(e)},
        )
        return

    logger.info(
        "Document processing finished",
        extra={
            "document_id": str(document_id),
            "status": result.status.value,
            "ingestion_mode": result.mode.value if result.mode else None,
            "chunk_count": result.chunk_count,
            "processing_time_ms": round(result.processing_time_ms, 2),
        },
    )
