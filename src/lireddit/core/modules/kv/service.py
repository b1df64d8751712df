from datetime import timedelta
from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from lireddit.core.core import Service
from lireddit.core.db import database_errors
from lireddit.core.modules.kv.models import KeyValueEntry
from lireddit.utils import now


class KeyValueService(Service):
    """MongoDB-backed key/value store with per-entry expiry."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("kv")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        # TTL index: MongoDB removes entries once expires_at has passed
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    async def get(self, key: str) -> str | None:
        # The TTL monitor runs periodically, so expired entries are filtered here too
        with database_errors("kv.get"):
            doc = await self._collection.find_one({"_id": key, "expires_at": {"$gt": now()}})
        if doc is None:
            return None
        return KeyValueEntry.model_validate(doc).value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        entry = KeyValueEntry(id=key, value=value, expires_at=now() + timedelta(seconds=ttl_seconds))
        with database_errors("kv.set"):
            await self._collection.replace_one({"_id": key}, entry.to_mongo(), upsert=True)

    async def delete(self, key: str) -> None:
        with database_errors("kv.delete"):
            await self._collection.delete_one({"_id": key})

    async def pop(self, key: str) -> str | None:
        with database_errors("kv.pop"):
            doc = await self._collection.find_one_and_delete({"_id": key, "expires_at": {"$gt": now()}})
        if doc is None:
            return None
        return KeyValueEntry.model_validate(doc).value
