"""Postgres-backed catalog store.

Writes only ever insert: every change, deletions included, is a new row in
a ``*_write`` table, and the ``all_*`` views expose the latest non-deleted
version of each record.
"""

import asyncio
import logging
import uuid
from typing import Any, Mapping, Optional, Protocol

import asyncpg

from stamp_health.config import PostgresConfig
from stamp_health.adapters.postgres.models import (
    CatalogItem,
    ItemComment,
    ItemRating,
    RatingSummary,
)
from stamp_health.exceptions import ServiceNotStartedError

logger = logging.getLogger(__name__)


class Executor(Protocol):
    """Subset of asyncpg.Pool / asyncpg.Connection used by deletions."""

    async def execute(self, query: str, *args: Any) -> str:
        ...

    async def fetchrow(self, query: str, *args: Any) -> Optional[Mapping[str, Any]]:
        ...


class Deletion(Protocol):
    """Soft-deletes one kind of catalog record by inserting a tombstone."""

    kind: str

    async def delete(self, db: Executor, record_id: uuid.UUID) -> bool:
        ...


class CatalogItemDeletion:
    kind = "catalog_item"

    async def delete(self, db: Executor, record_id: uuid.UUID) -> bool:
        await db.execute(
            "INSERT INTO ao.catalog_items_write (catalog_item_id, deleted) VALUES ($1, TRUE)",
            record_id,
        )
        return True


class CommentDeletion:
    kind = "comment"

    async def delete(self, db: Executor, record_id: uuid.UUID) -> bool:
        # Comments are copied forward so the tombstone keeps the item reference
        record = await db.fetchrow(
            "SELECT comment_id, catalog_item_id, author_name, text "
            "FROM ao.all_comments WHERE comment_id = $1",
            record_id,
        )
        if record is None:
            return False
        await db.execute(
            "INSERT INTO ao.item_comments_write "
            "(comment_id, catalog_item_id, author_name, text, creation_date, deleted) "
            "VALUES ($1, $2, $3, $4, now(), TRUE)",
            record["comment_id"],
            record["catalog_item_id"],
            record["author_name"],
            record["text"],
        )
        return True


class RatingDeletion:
    kind = "rating"

    async def delete(self, db: Executor, record_id: uuid.UUID) -> bool:
        await db.execute(
            "INSERT INTO ao.item_ratings_write (rating_id, deleted) VALUES ($1, TRUE)",
            record_id,
        )
        return True


DELETIONS: dict[str, Deletion] = {
    handler.kind: handler
    for handler in (CatalogItemDeletion(), CommentDeletion(), RatingDeletion())
}


class CatalogDatabase:
    """Catalog items, comments and ratings on an asyncpg pool."""

    def __init__(self, config: PostgresConfig) -> None:
        self._config = config
        self._pool: Optional[asyncpg.Pool] = None
        self._started = False
        self._connect_lock = asyncio.Lock()

    @property
    def pool(self) -> asyncpg.Pool:
        """Native asyncpg pool."""
        if self._pool is None:
            raise ServiceNotStartedError("CatalogDatabase not started. Call start() first.")
        return self._pool

    async def start(self) -> None:
        """Open the pool.

        An unreachable server does not fail startup: the pool is created on
        the next use instead, and until then ``is_healthy`` reports False.
        """
        self._started = True
        try:
            await self._get_pool()
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.warning("Postgres unavailable at startup, will retry on use: %s", e)

    async def stop(self) -> None:
        self._started = False
        if self._pool:
            await self._pool.close()
            self._pool = None

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is not None:
            return self._pool
        if not self._started:
            raise ServiceNotStartedError("CatalogDatabase not started. Call start() first.")
        async with self._connect_lock:
            if self._pool is None:
                cfg = self._config
                self._pool = await asyncpg.create_pool(
                    host=cfg.host,
                    port=cfg.port,
                    database=cfg.database,
                    user=cfg.user,
                    password=cfg.password,
                    min_size=cfg.min_connections,
                    max_size=cfg.max_connections,
                )
        return self._pool

    async def is_healthy(self) -> bool:
        """True when a pooled connection can run a trivial query."""
        if self._pool is None and not self._started:
            return False
        pool = await self._get_pool()
        return await pool.fetchval("SELECT 1") == 1

    async def add_catalog_item(self, item: CatalogItem) -> None:
        pool = await self._get_pool()
        await pool.execute(
            "INSERT INTO ao.catalog_items_write "
            "(catalog_item_id, name, description, price, image_url, last_updated) "
            "VALUES ($1, $2, $3, $4, $5, $6)",
            item.id,
            item.name,
            item.description,
            item.price,
            item.image_url,
            item.last_updated,
        )

    async def upsert_catalog_item(self, item: CatalogItem) -> bool:
        """Write a new version of item.

        Returns True when an earlier version existed, False when the item is new.
        """
        existing = await self.get_catalog_item(item.id)
        await self.add_catalog_item(item)
        return existing is not None

    async def add_comment(self, comment: ItemComment) -> None:
        pool = await self._get_pool()
        await pool.execute(
            "INSERT INTO ao.item_comments_write "
            "(comment_id, catalog_item_id, author_name, text, creation_date) "
            "VALUES ($1, $2, $3, $4, $5)",
            comment.id,
            comment.catalog_item_id,
            comment.author_name,
            comment.text,
            comment.creation_date,
        )

    async def add_rating(self, rating: ItemRating) -> None:
        pool = await self._get_pool()
        await pool.execute(
            "INSERT INTO ao.item_ratings_write (rating_id, catalog_item_id, rating, creation_date) "
            "VALUES ($1, $2, $3, $4)",
            rating.id,
            rating.catalog_item_id,
            rating.rating,
            rating.creation_date,
        )

    async def list_catalog_items(self, limit: int) -> list[CatalogItem]:
        pool = await self._get_pool()
        rows = await pool.fetch(
            "SELECT catalog_item_id, name, description, price, image_url, last_updated "
            "FROM ao.all_catalog_items ORDER BY name LIMIT $1",
            limit,
        )
        return [CatalogItem.from_record(row) for row in rows]

    async def get_catalog_item(self, item_id: uuid.UUID) -> Optional[CatalogItem]:
        pool = await self._get_pool()
        row = await pool.fetchrow(
            "SELECT catalog_item_id, name, description, price, image_url, last_updated "
            "FROM ao.all_catalog_items WHERE catalog_item_id = $1",
            item_id,
        )
        return CatalogItem.from_record(row) if row is not None else None

    async def get_comments(self, catalog_item_id: uuid.UUID, limit: int) -> list[ItemComment]:
        pool = await self._get_pool()
        rows = await pool.fetch(
            "SELECT comment_id, catalog_item_id, author_name, text, creation_date "
            "FROM ao.all_comments WHERE catalog_item_id = $1 LIMIT $2",
            catalog_item_id,
            limit,
        )
        return [ItemComment.from_record(row) for row in rows]

    async def get_comment(self, comment_id: uuid.UUID) -> Optional[ItemComment]:
        pool = await self._get_pool()
        row = await pool.fetchrow(
            "SELECT comment_id, catalog_item_id, author_name, text, creation_date "
            "FROM ao.all_comments WHERE comment_id = $1",
            comment_id,
        )
        return ItemComment.from_record(row) if row is not None else None

    async def get_rating(self, rating_id: uuid.UUID) -> Optional[ItemRating]:
        pool = await self._get_pool()
        row = await pool.fetchrow(
            "SELECT rating_id, catalog_item_id, rating, creation_date "
            "FROM ao.all_ratings WHERE rating_id = $1",
            rating_id,
        )
        return ItemRating.from_record(row) if row is not None else None

    async def get_average_rating(self, catalog_item_id: uuid.UUID) -> Optional[RatingSummary]:
        """Average rating and vote count, or None when the item has no ratings."""
        pool = await self._get_pool()
        row = await pool.fetchrow(
            "SELECT AVG(rating::float) AS average_rating, COUNT(*) AS number_of_votes "
            "FROM ao.all_ratings WHERE catalog_item_id = $1 GROUP BY catalog_item_id",
            catalog_item_id,
        )
        if row is None:
            return None
        return RatingSummary(
            average_rating=float(row["average_rating"]),
            number_of_votes=int(row["number_of_votes"]),
        )

    async def delete_item(self, kind: str, record_id: uuid.UUID) -> bool:
        """Soft-delete a record of the given kind.

        Returns False when the record could not be found (already deleted or
        never existed); raises KeyError for an unknown kind.
        """
        handler = DELETIONS[kind]
        deleted = await handler.delete(await self._get_pool(), record_id)
        if not deleted:
            logger.debug("No %s %s to delete", kind, record_id)
        return deleted
