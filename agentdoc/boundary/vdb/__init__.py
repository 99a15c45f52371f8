"""
Vector store boundary.

Exports the VectorStoreClient interface, its Qdrant, in-memory and
unavailable implementations, the factory and the wire schemas.
"""

from agentdoc.boundary.vdb.memory_store import InMemoryVectorStore
from agentdoc.boundary.vdb.qdrant_store import QdrantVectorStore
from agentdoc.boundary.vdb.unavailable_store import UnavailableVectorStore
from agentdoc.boundary.vdb.vector_schemas import (
    FieldCondition,
    RecordPoint,
    ScoredPoint,
    VectorFilter,
    VectorPayload,
    VectorPayloadMetadata,
    VectorPoint,
    document_filter,
)
from agentdoc.boundary.vdb.vector_store_client import VectorStoreClient
from agentdoc.boundary.vdb.vector_store_factory import create_vector_store

__all__ = [
    "FieldCondition",
    "InMemoryVectorStore",
    "QdrantVectorStore",
    "RecordPoint",
    "ScoredPoint",
    "UnavailableVectorStore",
    "VectorFilter",
    "VectorPayload",
    "VectorPayloadMetadata",
    "VectorPoint",
    "VectorStoreClient",
    "create_vector_store",
    "document_filter",
]
