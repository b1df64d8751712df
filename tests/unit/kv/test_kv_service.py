"""Tests for KeyValueService against an in-memory collection."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from lireddit.core.modules.kv.service import KeyValueService
from lireddit.errors import InfrastructureError
from lireddit.utils import now


class InMemoryCollection:
    """Understands the `_id` equality and `expires_at` `$gt` filters KeyValueService sends."""

    def __init__(self) -> None:
        self.documents: dict[str, dict] = {}
        self.failing = False

    def _check(self) -> None:
        if self.failing:
            raise ServerSelectionTimeoutError("no servers")

    def _match(self, query: dict) -> dict | None:
        doc = self.documents.get(query["_id"])
        if doc is None:
            return None
        if "expires_at" in query and not doc["expires_at"] > query["expires_at"]["$gt"]:
            return None
        return doc

    async def find_one(self, query: dict) -> dict | None:
        self._check()
        return self._match(query)

    async def replace_one(self, query: dict, document: dict, upsert: bool = False) -> None:
        self._check()
        self.documents[query["_id"]] = document

    async def delete_one(self, query: dict) -> None:
        self._check()
        self.documents.pop(query["_id"], None)

    async def find_one_and_delete(self, query: dict) -> dict | None:
        self._check()
        doc = self._match(query)
        if doc is not None:
            del self.documents[query["_id"]]
        return doc


@pytest.fixture
def collection():
    return InMemoryCollection()


@pytest.fixture
def service(collection):
    database = MagicMock()
    database.get_collection.return_value = collection
    return KeyValueService(database)


def store_expired(collection, key: str, value: str) -> None:
    collection.documents[key] = {"_id": key, "value": value, "expires_at": now() - timedelta(seconds=1)}


class TestKeyValueService:
    """Tests for KeyValueService get, set, delete and pop."""

    @pytest.mark.asyncio
    async def test_set_then_get(self, service, collection):
        await service.set("forget-password:abc", "42", 60)

        assert await service.get("forget-password:abc") == "42"
        expires_at = collection.documents["forget-password:abc"]["expires_at"]
        assert now() < expires_at <= now() + timedelta(seconds=60)

    @pytest.mark.asyncio
    async def test_set_replaces_value(self, service):
        await service.set("sess:abc", '{"userId": 1}', 60)
        await service.set("sess:abc", '{"userId": 2}', 60)

        assert await service.get("sess:abc") == '{"userId": 2}'

    @pytest.mark.asyncio
    async def test_expired_entry_reads_as_missing(self, service, collection):
        """Test that an entry past its expiry looks like an unknown key before the TTL monitor removes it."""
        store_expired(collection, "forget-password:old", "42")

        assert await service.get("forget-password:old") is None
        assert await service.get("forget-password:old") == await service.get("forget-password:never-issued")

    @pytest.mark.asyncio
    async def test_delete(self, service):
        await service.set("sess:abc", "x", 60)
        await service.delete("sess:abc")

        assert await service.get("sess:abc") is None

    @pytest.mark.asyncio
    async def test_pop_returns_value_once(self, service):
        await service.set("forget-password:abc", "42", 60)

        assert await service.pop("forget-password:abc") == "42"
        assert await service.pop("forget-password:abc") is None

    @pytest.mark.asyncio
    async def test_pop_of_expired_entry(self, service, collection):
        store_expired(collection, "forget-password:old", "42")

        assert await service.pop("forget-password:old") is None

    @pytest.mark.asyncio
    async def test_database_failure_is_infrastructure_error(self, service, collection):
        collection.failing = True

        with pytest.raises(InfrastructureError):
            await service.get("sess:abc")
