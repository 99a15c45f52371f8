"""
Document ingestion pipeline.

Drives extraction, keyword derivation, embedding, vector upsert and chunk
persistence for one uploaded document, then records the terminal status.

Ingestion is a two-attempt state machine:
  PRIMARY  - real extraction and real embeddings; any failure discards the attempt
  DEGRADED - one placeholder chunk for the file, indexed best-effort
If both attempts fail the document is marked FAILED. Nothing is retried.

Dependencies: sqlalchemy, fastapi.concurrency, task modules, agentdoc.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from pathlib import PurePath
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agentdoc.boundary.db.CRUD import chunk_crud, document_crud
from agentdoc.boundary.db.models import DocumentStatus
from agentdoc.boundary.vdb import VectorStoreClient
from agentdoc.configs.ingestion import IngestionSettings
from agentdoc.configs.vector_store import VectorStoreSettings
from agentdoc.core.exceptions import NotFoundError, VectorStoreError
from agentdoc.observability.log_utils import log_exception_with_context

from .embedding_client import EmbeddingClient
from .keywords import extract_keywords
from .models import ChunkRecord, IngestionMode, PipelineResult, build_vector_id
from .tasks import EmbeddingTask, ExtractionTask, VectorStoreTask, strip_extension

logger = logging.getLogger(__name__)

PLACEHOLDER_SECTION = "Document [placeholder]"
PLACEHOLDER_TEXT = (
    "This is a mock representation of {file_name}. In a production environment, "
    "this would contain actual content from the document."
)


class DocumentPipeline:
    """
    Ingest one document end to end.

    Each run opens its own database sessions from session_factory because
    it runs detached from the request that created the document.

    Args:
        session_factory: Async session factory
        embedding_client: Shared embedding client
        vector_store: Shared vector store
        vector_config: Collection name, dimension and distance
        ingestion_config: Batch size, concurrency and keyword limit
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        embedding_client: EmbeddingClient,
        vector_store: VectorStoreClient,
        vector_config: VectorStoreSettings | None = None,
        ingestion_config: IngestionSettings | None = None,
    ) -> None:
        vector_config = vector_config or VectorStoreSettings()
        self._ingestion_config = ingestion_config or IngestionSettings()
        self._session_factory = session_factory
        self._embedding_client = embedding_client

        self._extraction_task = ExtractionTask()
        self._embedding_task = EmbeddingTask(
            embedding_client,
            batch_size=self._ingestion_config.embedding_batch_size,
            concurrency=self._ingestion_config.embedding_concurrency,
        )
        self._vector_store_task = VectorStoreTask(
            vector_store,
            collection_name=vector_config.collection_name,
            dimension=vector_config.dimension,
            distance=vector_config.distance,
        )

    async def run(
        self,
        document_id: UUID,
        data: bytes,
        file_name: str,
        file_type: str,
        title: str | None = None,
    ) -> PipelineResult:
        """
        Ingest a document and leave it COMPLETED or FAILED.

        Args:
            document_id: Existing document row in PROCESSING
            data: Raw file bytes
            file_name: Original file name
            file_type: 'pdf' or 'docx'
            title: Display title stored in vector payloads (defaults to file name stem)

        Returns:
            PipelineResult: Terminal status and the attempt that produced it
        """
        start_time = time.perf_counter()
        title = title or strip_extension(file_name)
        errors: list[str] = []

        for mode in (IngestionMode.PRIMARY, IngestionMode.DEGRADED):
            log_extra = {
                "document_id": str(document_id),
                "ingestion_mode": mode.value,
                "degraded": mode is IngestionMode.DEGRADED,
            }
            logger.info(f"{__name__}:run - Starting {mode.value} attempt", extra=log_extra)

            try:
                if mode is IngestionMode.PRIMARY:
                    chunk_count, page_count = await self._run_primary(
                        document_id, data, file_name, file_type, title
                    )
                else:
                    chunk_count, page_count = await self._run_degraded(
                        document_id, file_name, file_type, title
                    )
            except Exception as e:
                errors.append(f"{mode.value}: {type(e).__name__}: {e}")
                log_exception_with_context(
                    logger,
                    f"{__name__}:run - {mode.value} attempt failed",
                    e,
                    level=logging.WARNING if mode is IngestionMode.PRIMARY else logging.ERROR,
                    **log_extra,
                )
                await self._vector_store_task.remove_document(str(document_id))
                continue

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.info(
                f"{__name__}:run - Document completed",
                extra={**log_extra, "chunks": chunk_count, "pages": page_count, "elapsed_ms": round(elapsed_ms, 2)},
            )
            return PipelineResult(
                document_id=str(document_id),
                status=DocumentStatus.COMPLETED,
                mode=mode,
                chunk_count=chunk_count,
                page_count=page_count,
                errors=errors,
                processing_time_ms=elapsed_ms,
            )

        await self._mark_failed(document_id, errors[-1])
        return PipelineResult(
            document_id=str(document_id),
            status=DocumentStatus.FAILED,
            errors=errors,
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    async def _run_primary(
        self,
        document_id: UUID,
        data: bytes,
        file_name: str,
        file_type: str,
        title: str,
    ) -> tuple[int, int]:
        # Step 1: extract (CPU-bound, off the event loop)
        extraction = await run_in_threadpool(self._extraction_task.extract, data, file_name, file_type)
        if extraction.degraded:
            logger.warning(
                f"{__name__}:_run_primary - Extraction degraded",
                extra={"document_id": str(document_id), "segments": len(extraction.segments)},
            )

        # Step 2: chunk records with keywords and deterministic vector ids
        records = [
            ChunkRecord(
                vector_id=build_vector_id(document_id, ordinal),
                document_id=document_id,
                text=segment.text,
                page=segment.page,
                section=segment.section,
                keywords=extract_keywords(segment.text, self._ingestion_config.keyword_limit),
            )
            for ordinal, segment in enumerate(extraction.segments, start=1)
        ]

        # Step 3: embeddings (bounded fan-out, must all be real)
        vectors = await self._embedding_task.embed([r.text for r in records], str(document_id))
        for record, vector in zip(records, vectors):
            record.embedding = vector

        # Step 4: ensure collection and upsert in one batch
        await self._vector_store_task.upload([r.to_point(title, file_name) for r in records])

        # Step 5: persist chunks and complete the document in one transaction
        page_count = max(r.page for r in records)
        await self._persist(document_id, records, page_count)
        return len(records), page_count

    async def _run_degraded(
        self,
        document_id: UUID,
        file_name: str,
        file_type: str,
        title: str,
    ) -> tuple[int, int]:
        extension = PurePath(file_name).suffix.lstrip(".").lower() or file_type
        record = ChunkRecord(
            vector_id=build_vector_id(document_id, "mock-1"),
            document_id=document_id,
            text=PLACEHOLDER_TEXT.format(file_name=file_name),
            page=1,
            section=PLACEHOLDER_SECTION,
            keywords=["mock", "document", extension],
        )

        embedding = await self._embedding_client.embed(record.text)
        record.embedding = embedding.vector
        if embedding.degraded:
            logger.warning(
                f"{__name__}:_run_degraded - Placeholder uses fallback embedding",
                extra={
                    "document_id": str(document_id),
                    "ingestion_mode": IngestionMode.DEGRADED.value,
                    "degraded": True,
                },
            )
        try:
            await self._vector_store_task.upload([record.to_point(title, file_name)])
        except VectorStoreError as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_run_degraded - Placeholder not indexed",
                e,
                level=logging.WARNING,
                document_id=str(document_id),
                embedding_degraded=embedding.degraded,
            )

        await self._persist(document_id, [record], page_count=1)
        return 1, 1

    async def _persist(self, document_id: UUID, records: list[ChunkRecord], page_count: int) -> None:
        async with self._session_factory() as db:
            await chunk_crud.create_many(db, [r.to_row() for r in records])
            if await document_crud.mark_completed(db, document_id, page_count) is None:
                raise NotFoundError("Document", str(document_id))
            await db.commit()

    async def _mark_failed(self, document_id: UUID, error_message: str) -> None:
        try:
            async with self._session_factory() as db:
                await document_crud.mark_failed(db, document_id, error_message)
                await db.commit()
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:_mark_failed - Could not record failure",
                e,
                document_id=str(document_id),
            )
            return
        logger.error(
            f"{__name__}:_mark_failed - Document failed",
            extra={"document_id": str(document_id), "error_msg": error_message},
        )
