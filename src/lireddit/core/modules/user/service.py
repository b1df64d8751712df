from typing import Any

import structlog
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError

from lireddit.core.core import Service
from lireddit.core.db import database_errors
from lireddit.core.modules.counter.models import CounterType
from lireddit.core.modules.user.models import User
from lireddit.errors import ConflictError
from lireddit.utils import now

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Persistent user repository. Rows are read from the database on every call."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("username", 1)], unique=True)
        await self._collection.create_index([("email", 1)], unique=True)

    async def get_user(self, user_id: int) -> User | None:
        return await self._find_one({"_id": user_id})

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._find_one({"username": username})

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._find_one({"email": email})

    async def create_user(self, username: str, email: str, password_hash: str) -> User:
        """Insert a new user.

        Raises:
            ConflictError: If the username or email is already registered
            InfrastructureError: If the database write fails for any other reason
        """
        user_id = await self.core.services.counter.get_next_sequence(CounterType.USER)
        user = User(id=user_id, username=username, email=email, password_hash=password_hash)
        try:
            with database_errors("user.insert"):
                await self._collection.insert_one(user.to_mongo())
        except DuplicateKeyError as e:
            raise ConflictError("Username or email already registered") from e
        logger.debug("user_inserted", user_id=user.id)
        return user

    async def update_password(self, user_id: int, password_hash: str) -> User | None:
        """Replace the stored hash. Returns the updated user, or None if it no longer exists."""
        with database_errors("user.update_password"):
            doc = await self._collection.find_one_and_update(
                {"_id": user_id},
                {"$set": {"password_hash": password_hash, "updated_at": now()}},
                return_document=ReturnDocument.AFTER,
            )
        return None if doc is None else User.model_validate(doc)

    async def _find_one(self, query: dict[str, Any]) -> User | None:
        with database_errors("user.find"):
            doc = await self._collection.find_one(query)
        return None if doc is None else User.model_validate(doc)
