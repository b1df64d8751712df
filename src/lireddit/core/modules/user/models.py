from datetime import datetime

from pydantic import BaseModel, Field

from lireddit.core.db import MongoModel
from lireddit.utils import now


class User(MongoModel):
    """User domain model with credentials.

    Indexed on username - unique, email - unique.
    """

    id: int = Field(alias="_id", serialization_alias="id")
    username: str
    email: str
    password_hash: str  # bcrypt hash
    created_at: datetime = Field(default_factory=now)
    updated_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    created_at: datetime = Field(..., description="Account creation time")
    updated_at: datetime = Field(..., description="Last account update time")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
