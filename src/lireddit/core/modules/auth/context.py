"""Request-scoped handles passed explicitly into every workflow operation."""

from dataclasses import dataclass
from typing import Protocol

from lireddit.core.modules.kv.models import KeyValueStore
from lireddit.core.modules.session.models import Session
from lireddit.core.modules.session.service import SessionStore
from lireddit.core.modules.user.models import User


class UserRepository(Protocol):
    async def get_user(self, user_id: int) -> User | None: ...

    async def get_user_by_username(self, username: str) -> User | None: ...

    async def get_user_by_email(self, email: str) -> User | None: ...

    async def create_user(self, username: str, email: str, password_hash: str) -> User: ...

    async def update_password(self, user_id: int, password_hash: str) -> User | None: ...


class Mailer(Protocol):
    async def send_email(self, to: str, html: str, subject: str) -> None: ...


@dataclass
class RequestContext:
    session: Session
    sessions: SessionStore
    users: UserRepository
    cache: KeyValueStore
    mailer: Mailer
