"""Session management models."""

import secrets
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

SessionId = NewType("SessionId", str)

COOKIE_NAME = "qid"
SESSION_PREFIX = "sess:"


def new_session_id() -> SessionId:
    return SessionId(secrets.token_urlsafe(32))


class SessionRecord(BaseModel):
    """Serialized form of a session in the key/value store."""

    user_id: int | None = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


class Session(BaseModel):
    """Per-request handle on a server-side session.

    A session without user_id is anonymous. Nothing is written to the store
    until the session is modified, so anonymous visitors leave no records.
    """

    id: SessionId = Field(default_factory=new_session_id)
    user_id: int | None = None
    modified: bool = False
    destroyed: bool = False

    def log_in(self, user_id: int) -> None:
        self.user_id = user_id
        self.modified = True

    def to_record(self) -> SessionRecord:
        return SessionRecord(user_id=self.user_id)
