from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from pydantic import BaseModel, ConfigDict
from pymongo.errors import DuplicateKeyError, PyMongoError

from lireddit.errors import InfrastructureError


class MongoModel(BaseModel):
    """Base for documents stored in MongoDB. Subclasses declare `id` aliased to `_id`."""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = data.pop("id")  # Rename id → _id for MongoDB
        return data


@contextmanager
def database_errors(operation: str) -> Iterator[None]:
    """Re-raise driver failures as InfrastructureError.

    DuplicateKeyError passes through untouched so callers can map it to a conflict.
    """
    try:
        yield
    except DuplicateKeyError:
        raise
    except PyMongoError as e:
        raise InfrastructureError(f"Database operation failed: {operation}") from e
