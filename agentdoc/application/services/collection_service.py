"""
Collection service.

Manages the caller's collections and their membership. Adding is
idempotent: existing pairs and documents the caller does not own are
skipped rather than rejected. Removing ignores documents that are not
members. Every operation checks collection ownership first.

Dependencies: agentdoc.boundary.db
System role: Collection management orchestration
"""

import logging
from typing import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from agentdoc.boundary.db.CRUD import collection_crud, document_collection_crud, document_crud
from agentdoc.boundary.db.models import CollectionModel, DocumentModel
from agentdoc.core.exceptions import ScopeNotOwnedError

logger = logging.getLogger(__name__)


class CollectionService:
    """Collection operations for one request."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _get_owned(self, owner_id: str, collection_id: UUID) -> CollectionModel:
        collection = await collection_crud.get_owned(self.db, collection_id, owner_id)
        if collection is None:
            raise ScopeNotOwnedError("Collection", str(collection_id))
        return collection

    async def create_collection(
        self,
        owner_id: str,
        name: str,
        description: str | None = None,
    ) -> CollectionModel:
        collection = await collection_crud.create(
            self.db,
            owner_id=owner_id,
            name=name,
            description=description,
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:create_collection - Collection created",
            extra={"collection_id": str(collection.id)},
        )
        return collection

    async def get_collection(
        self,
        owner_id: str,
        collection_id: UUID,
    ) -> tuple[CollectionModel, Sequence[DocumentModel]]:
        """
        Collection with its member documents.

        Raises:
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        collection = await self._get_owned(owner_id, collection_id)
        documents = await collection_crud.list_documents(self.db, collection.id)
        return collection, documents

    async def update_collection(
        self,
        owner_id: str,
        collection_id: UUID,
        name: str,
        description: str | None = None,
    ) -> CollectionModel:
        """
        Replace name and description.

        Raises:
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        collection = await self._get_owned(owner_id, collection_id)
        updated = await collection_crud.update_by_id(
            self.db,
            collection.id,
            name=name,
            description=description,
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:update_collection - Collection updated",
            extra={"collection_id": str(collection_id)},
        )
        return updated

    async def delete_collection(self, owner_id: str, collection_id: UUID) -> None:
        """
        Delete a collection and its links; member documents are kept.

        Raises:
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        collection = await self._get_owned(owner_id, collection_id)
        await collection_crud.delete_with_links(self.db, collection.id)
        await self.db.commit()
        logger.info(
            f"{__name__}:delete_collection - Collection deleted",
            extra={"collection_id": str(collection_id)},
        )

    async def add_documents(
        self,
        owner_id: str,
        collection_id: UUID,
        document_ids: list[UUID],
    ) -> tuple[int, int]:
        """
        Link owned documents to an owned collection.

        Returns:
            tuple: (added, skipped)

        Raises:
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        collection = await self._get_owned(owner_id, collection_id)

        requested = list(dict.fromkeys(document_ids))
        owned = set(await document_crud.filter_owned_ids(self.db, owner_id, requested))

        added = 0
        for document_id in requested:
            if document_id in owned and await document_collection_crud.link(
                self.db, document_id, collection.id
            ):
                added += 1
        await self.db.commit()

        skipped = len(requested) - added
        logger.info(
            f"{__name__}:add_documents - Documents linked",
            extra={"collection_id": str(collection_id), "added": added, "skipped": skipped},
        )
        return added, skipped

    async def remove_documents(
        self,
        owner_id: str,
        collection_id: UUID,
        document_ids: list[UUID],
    ) -> int:
        """
        Unlink documents from an owned collection.

        The documents themselves are untouched, but collection-scoped
        retrieval stops returning their chunks.

        Returns:
            int: Links removed

        Raises:
            ScopeNotOwnedError: Collection missing or not the caller's
        """
        collection = await self._get_owned(owner_id, collection_id)
        removed = await document_collection_crud.unlink(
            self.db, collection.id, list(dict.fromkeys(document_ids))
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:remove_documents - Documents unlinked",
            extra={"collection_id": str(collection_id), "removed": removed},
        )
        return removed
