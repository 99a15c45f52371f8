"""
Embedding client with degraded fallback.

Wraps any LangChain Embeddings model. Provider errors, missing
credentials and wrong-sized vectors never reach the caller: a random
vector of the same dimension is returned instead and the result is
flagged as degraded so callers can log it or refuse it.

Dependencies: langchain_core, numpy, fastapi.concurrency
System role: Text-to-vector conversion for ingestion and retrieval
"""

import logging

import numpy as np
from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings
from pydantic import BaseModel

logger = logging.getLogger(__name__)

EMBEDDING_DIMENSION = 1536


class EmbeddingResult(BaseModel):
    """Single embedding and whether it is a non-semantic fallback."""

    vector: list[float]
    degraded: bool = False


class EmbeddingBatch(BaseModel):
    """Embeddings for several texts, in input order."""

    vectors: list[list[float]]
    degraded: bool = False


class EmbeddingClient:
    """
    Convert text into fixed-size vectors.

    Args:
        embeddings: LangChain embeddings model, or None when unconfigured
        dimension: Expected vector size
        seed: Seed for the fallback generator (tests pass one for repeatability)
    """

    def __init__(
        self,
        embeddings: Embeddings | None,
        dimension: int = EMBEDDING_DIMENSION,
        seed: int | None = None,
    ) -> None:
        self._embeddings = embeddings
        self.dimension = dimension
        self._rng = np.random.default_rng(seed)

    @property
    def is_configured(self) -> bool:
        return self._embeddings is not None

    def fallback_vector(self) -> list[float]:
        """Uniform random vector in [-1, 1) with the configured dimension."""
        return self._rng.uniform(-1.0, 1.0, size=self.dimension).tolist()

    def _valid(self, vector: list[float]) -> bool:
        return len(vector) == self.dimension

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed one text.

        Returns:
            EmbeddingResult: Real vector, or a fallback with degraded=True
        """
        if self._embeddings is None:
            return EmbeddingResult(vector=self.fallback_vector(), degraded=True)
        try:
            vector = await run_in_threadpool(self._embeddings.embed_query, text)
        except Exception as e:
            logger.debug(f"{__name__}:embed - Provider error: {type(e).__name__}: {e}")
            return EmbeddingResult(vector=self.fallback_vector(), degraded=True)
        if not self._valid(vector):
            logger.debug(f"{__name__}:embed - Unexpected dimension {len(vector)}")
            return EmbeddingResult(vector=self.fallback_vector(), degraded=True)
        return EmbeddingResult(vector=list(vector))

    async def embed_many(self, texts: list[str]) -> EmbeddingBatch:
        """
        Embed several texts in one provider call.

        The whole batch is degraded if the call fails or any vector has the
        wrong size, so callers never mix real and fallback vectors.

        Returns:
            EmbeddingBatch: One vector per input text
        """
        if not texts:
            return EmbeddingBatch(vectors=[])
        if self._embeddings is None:
            return EmbeddingBatch(vectors=[self.fallback_vector() for _ in texts], degraded=True)
        try:
            vectors = await run_in_threadpool(self._embeddings.embed_documents, texts)
        except Exception as e:
            logger.debug(f"{__name__}:embed_many - Provider error: {type(e).__name__}: {e}")
            return EmbeddingBatch(vectors=[self.fallback_vector() for _ in texts], degraded=True)
        if len(vectors) != len(texts) or not all(self._valid(v) for v in vectors):
            logger.debug(f"{__name__}:embed_many - Provider returned malformed batch")
            return EmbeddingBatch(vectors=[self.fallback_vector() for _ in texts], degraded=True)
        return EmbeddingBatch(vectors=[list(v) for v in vectors])
