"""Auto-incrementing counters for sequential numbering."""

from enum import StrEnum

from pydantic import Field

from lireddit.core.db import MongoModel


class CounterType(StrEnum):
    """Entities that draw their ids from a sequence."""

    USER = "user"


class Counter(MongoModel):
    """Atomic counter, one document per counter type.

    Uses MongoDB atomic operations to prevent duplicates.
    The counter type is the document _id.
    """

    id: CounterType = Field(alias="_id", serialization_alias="id")
    seq: int = 0  # Current value; next number will be seq + 1
