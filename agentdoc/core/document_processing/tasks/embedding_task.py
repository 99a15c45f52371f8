"""
Embedding task.

Embeds chunk texts in batches with bounded concurrency. Ingestion only
accepts real embeddings, so a degraded batch aborts the attempt.

Dependencies: asyncio, agentdoc.core.document_processing.embedding_client
System role: Second stage of document ingestion pipeline
"""

import asyncio
import logging

from agentdoc.core.exceptions import EmbeddingUnavailableError

from ..embedding_client import EmbeddingBatch, EmbeddingClient

logger = logging.getLogger(__name__)


class EmbeddingTask:
    """
    Generate embeddings for chunk texts.

    Args:
        client: Shared embedding client
        batch_size: Texts per provider call
        concurrency: Maximum provider calls in flight
    """

    def __init__(self, client: EmbeddingClient, batch_size: int = 16, concurrency: int = 4) -> None:
        if batch_size < 1 or concurrency < 1:
            raise ValueError("batch_size and concurrency must be >= 1")
        self._client = client
        self._batch_size = batch_size
        self._semaphore_size = concurrency

    async def embed(self, texts: list[str], document_id: str | None = None) -> list[list[float]]:
        """
        Embed texts, preserving order.

        Returns:
            list[list[float]]: One vector per text

        Raises:
            EmbeddingUnavailableError: Any batch fell back to non-semantic vectors
        """
        if not texts:
            return []

        semaphore = asyncio.Semaphore(self._semaphore_size)
        batches = [texts[i : i + self._batch_size] for i in range(0, len(texts), self._batch_size)]

        async def run(batch: list[str]) -> EmbeddingBatch:
            async with semaphore:
                return await self._client.embed_many(batch)

        results = await asyncio.gather(*(run(batch) for batch in batches))

        degraded = sum(1 for r in results if r.degraded)
        if degraded:
            raise EmbeddingUnavailableError(
                "Embedding provider unavailable",
                document_id=document_id,
                details={"degraded_batches": degraded, "batches": len(batches)},
            )

        logger.info(
            f"{__name__}:embed - Embedded texts",
            extra={"document_id": document_id, "texts": len(texts), "batches": len(batches)},
        )
        return [vector for result in results for vector in result.vectors]
