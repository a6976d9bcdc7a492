"""Redis implementation of BotConfigStore.

Each document is stored as JSON under its own key. A sorted set scored by
creation time indexes merchant ids for listing. Revision-checked saves use
WATCH/MULTI so a concurrent writer aborts the transaction.

Key structure:
- {prefix}:doc:{merchant_id} - document JSON
- {prefix}:index - merchant ids scored by created_at
"""

import redis.asyncio as redis
from redis.exceptions import RedisError, WatchError

from botadmin.botconfig.models import BotConfigDocument, utc_now
from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.errors import (
    DuplicateDocumentError,
    RevisionConflictError,
    StoreConnectionError,
)
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)


class RedisBotConfigStore(BotConfigStore):
    """Redis-backed document store."""

    def __init__(self, client: redis.Redis, key_prefix: str = "botconfig") -> None:
        """Initialize the store.

        Args:
            client: Redis client (decode_responses=True expected)
            key_prefix: Namespace for all keys written by this store
        """
        self._client = client
        self._prefix = key_prefix

    def _doc_key(self, merchant_id: str) -> str:
        return f"{self._prefix}:doc:{merchant_id}"

    @property
    def _index_key(self) -> str:
        return f"{self._prefix}:index"

    @staticmethod
    def _serialize(document: BotConfigDocument) -> str:
        return document.model_dump_json(by_alias=True)

    @staticmethod
    def _deserialize(data: str | bytes) -> BotConfigDocument:
        return BotConfigDocument.model_validate_json(data)

    async def get(self, merchant_id: str) -> BotConfigDocument | None:
        try:
            data = await self._client.get(self._doc_key(merchant_id))
        except RedisError as e:
            logger.error("redis_get_error", merchant_id=merchant_id, error=str(e))
            raise StoreConnectionError(f"Failed to get config: {e}", cause=e) from e

        return self._deserialize(data) if data else None

    async def create(self, document: BotConfigDocument) -> BotConfigDocument:
        try:
            created = await self._client.set(
                self._doc_key(document.id), self._serialize(document), nx=True
            )
            if not created:
                raise DuplicateDocumentError(document.id)
            await self._client.zadd(
                self._index_key, {document.id: document.created_at.timestamp()}
            )
        except RedisError as e:
            logger.error("redis_create_error", merchant_id=document.id, error=str(e))
            raise StoreConnectionError(f"Failed to create config: {e}", cause=e) from e

        logger.info("config_document_created", merchant_id=document.id)
        return document.model_copy(deep=True)

    async def save(
        self,
        document: BotConfigDocument,
        *,
        expected_revision: int | None = None,
    ) -> BotConfigDocument:
        key = self._doc_key(document.id)
        try:
            async with self._client.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                data = await pipe.get(key)
                current = self._deserialize(data) if data else None

                if expected_revision is not None:
                    actual = current.revision if current else None
                    if actual != expected_revision:
                        await pipe.unwatch()
                        raise RevisionConflictError(document.id, expected_revision, actual)

                stored = document.model_copy(deep=True)
                stored.revision = (current.revision + 1) if current else 0
                stored.updated_at = utc_now()

                pipe.multi()
                pipe.set(key, self._serialize(stored))
                pipe.zadd(self._index_key, {stored.id: stored.created_at.timestamp()})
                await pipe.execute()
        except WatchError as e:
            logger.warning("redis_save_conflict", merchant_id=document.id)
            raise RevisionConflictError(document.id, expected_revision, None) from e
        except RedisError as e:
            logger.error("redis_save_error", merchant_id=document.id, error=str(e))
            raise StoreConnectionError(f"Failed to save config: {e}", cause=e) from e

        logger.debug(
            "config_document_saved",
            merchant_id=stored.id,
            revision=stored.revision,
        )
        return stored

    async def delete(self, merchant_id: str) -> BotConfigDocument | None:
        key = self._doc_key(merchant_id)
        try:
            data = await self._client.get(key)
            if not data:
                return None
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.delete(key)
                pipe.zrem(self._index_key, merchant_id)
                await pipe.execute()
        except RedisError as e:
            logger.error("redis_delete_error", merchant_id=merchant_id, error=str(e))
            raise StoreConnectionError(f"Failed to delete config: {e}", cause=e) from e

        logger.info("config_document_deleted", merchant_id=merchant_id)
        return self._deserialize(data)

    async def list(
        self,
        *,
        search: str | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[BotConfigDocument], int]:
        try:
            merchant_ids = await self._client.zrevrange(self._index_key, 0, -1)
            if search:
                needle = search.lower()
                merchant_ids = [m for m in merchant_ids if needle in m.lower()]

            page_ids = merchant_ids[offset : offset + limit]
            if not page_ids:
                return [], len(merchant_ids)

            payloads = await self._client.mget([self._doc_key(m) for m in page_ids])
        except RedisError as e:
            logger.error("redis_list_error", error=str(e))
            raise StoreConnectionError(f"Failed to list configs: {e}", cause=e) from e

        documents = [self._deserialize(p) for p in payloads if p]
        return documents, len(merchant_ids)
