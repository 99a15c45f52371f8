"""
Vector store factory.

Builds the configured VectorStoreClient once at process start. Selection
follows VECTOR_STORE_STORE_TYPE: 'qdrant' (requires VECTOR_STORE_QDRANT_URL),
'memory' for local development, or 'disabled'.

Dependencies: agentdoc.boundary.vdb, agentdoc.configs
System role: Vector store instantiation and selection
"""

import logging

from agentdoc.boundary.vdb.memory_store import InMemoryVectorStore
from agentdoc.boundary.vdb.qdrant_store import QdrantVectorStore
from agentdoc.boundary.vdb.unavailable_store import UnavailableVectorStore
from agentdoc.boundary.vdb.vector_store_client import VectorStoreClient
from agentdoc.configs.vector_store import VectorStoreSettings

logger = logging.getLogger(__name__)


def create_vector_store(config: VectorStoreSettings) -> VectorStoreClient:
    """
    Create the vector store selected by configuration.

    A missing Qdrant URL yields the unavailable variant instead of failing
    startup, so the rest of the system keeps working in degraded mode.

    Args:
        config: Vector store settings

    Returns:
        VectorStoreClient: Configured store

    Raises:
        ValueError: If store_type is unknown
    """
    store_type = config.store_type.lower()

    if store_type == "qdrant":
        if not config.qdrant_url:
            logger.warning(
                f"{__name__}:create_vector_store - Qdrant URL missing, vector store disabled"
            )
            return UnavailableVectorStore("Qdrant URL not configured")
        logger.info(
            f"{__name__}:create_vector_store - Creating Qdrant store",
            extra={"url": config.qdrant_url, "collection": config.collection_name},
        )
        return QdrantVectorStore(
            base_url=config.qdrant_url,
            api_key=config.qdrant_api_key,
            timeout=config.timeout,
            scroll_page_size=config.scroll_page_size,
        )

    if store_type == "memory":
        logger.info(f"{__name__}:create_vector_store - Creating in-memory store (local dev mode)")
        return InMemoryVectorStore()

    if store_type == "disabled":
        logger.info(f"{__name__}:create_vector_store - Vector store disabled by configuration")
        return UnavailableVectorStore("Vector store disabled")

    raise ValueError(
        f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
        f"Must be 'qdrant', 'memory' or 'disabled'."
    )
