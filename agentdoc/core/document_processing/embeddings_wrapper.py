"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

gemini-embedding-001 returns 3072 dimensions unless truncation is
requested on every call, so this wrapper injects output_dimensionality
into each embed call to match the vector index (1536).

Dependencies: langchain_google_genai, python-dotenv
System role: Embedding dimension consistency for the vector index
"""

import logging
from typing import Any

from dotenv import load_dotenv
from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)
load_dotenv()


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """GoogleGenerativeAIEmbeddings that always requests a fixed dimension."""

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs: Any,
    ) -> None:
        """
        Args:
            model: Google embedding model ID
            output_dimensionality: Dimension requested on every call
            **kwargs: Passed to GoogleGenerativeAIEmbeddings (e.g. google_api_key)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(self, texts: list[str], **kwargs: Any) -> list[list[float]]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_documents(texts, **kwargs)

    def embed_query(self, text: str, **kwargs: Any) -> list[float]:
        kwargs.setdefault("output_dimensionality", self._output_dimensionality)
        return super().embed_query(text, **kwargs)
