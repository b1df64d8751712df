from typing import Any

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from lireddit.core.core import Service
from lireddit.core.db import database_errors
from lireddit.core.modules.counter.models import Counter, CounterType


class CounterService(Service):
    """Service for managing auto-incrementing sequences."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("counters")

    async def get_next_sequence(self, counter_type: CounterType) -> int:
        """Atomically increment and return the next sequence number for a type."""
        with database_errors("counter.next"):
            result = await self._collection.find_one_and_update(
                {"_id": counter_type},
                {"$inc": {"seq": 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )

        # If it was just created (upserted), seq will be 1
        return Counter.model_validate(result).seq
