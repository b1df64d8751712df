"""Key/value store models."""

from datetime import datetime
from typing import Protocol

from pydantic import Field

from lireddit.core.db import MongoModel


class KeyValueStore(Protocol):
    """String key/value store where every entry carries an expiry."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def pop(self, key: str) -> str | None:
        """Remove the entry and return its value in one step."""
        ...


class KeyValueEntry(MongoModel):
    """Stored entry, keyed by its full (prefixed) key.

    Indexed on expires_at (TTL, expire at the given time).
    """

    id: str = Field(alias="_id", serialization_alias="id")
    value: str
    expires_at: datetime


class Keyspace:
    """View of a KeyValueStore restricted to keys that share a prefix."""

    def __init__(self, store: KeyValueStore, prefix: str) -> None:
        self._store = store
        self.prefix = prefix

    def full_key(self, key: str) -> str:
        return self.prefix + key

    async def get(self, key: str) -> str | None:
        return await self._store.get(self.full_key(key))

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._store.set(self.full_key(key), value, ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._store.delete(self.full_key(key))

    async def pop(self, key: str) -> str | None:
        return await self._store.pop(self.full_key(key))
