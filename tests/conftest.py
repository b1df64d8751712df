"""Shared pytest fixtures and in-memory stand-ins for the storage services."""

import asyncio

import pytest

from lireddit.config import Config
from lireddit.core.modules.auth.context import RequestContext
from lireddit.core.modules.auth.workflow import AuthWorkflow
from lireddit.core.modules.session.models import Session
from lireddit.core.modules.session.service import SessionStore
from lireddit.core.modules.user.models import User
from lireddit.core.modules.user.passwords import hash_password
from lireddit.errors import ConflictError, InfrastructureError
from lireddit.utils import now

FRONTEND_URL = "http://localhost:3000"
RESET_TOKEN_TTL = 3 * 24 * 60 * 60
SESSION_TTL = 60 * 60


class InMemoryKeyValueStore:
    """Dict-backed KeyValueStore that records reads and can be switched to fail."""

    def __init__(self) -> None:
        self.entries: dict[str, tuple[str, int]] = {}  # key -> (value, ttl_seconds)
        self.reads: list[str] = []
        self.failing = False

    def _check(self) -> None:
        if self.failing:
            raise InfrastructureError("store unavailable")

    async def get(self, key: str) -> str | None:
        self._check()
        self.reads.append(key)
        entry = self.entries.get(key)
        return None if entry is None else entry[0]

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self.entries[key] = (value, ttl_seconds)

    async def delete(self, key: str) -> None:
        self._check()
        self.entries.pop(key, None)

    async def pop(self, key: str) -> str | None:
        self._check()
        self.reads.append(key)
        entry = self.entries.pop(key, None)
        return None if entry is None else entry[0]

    def keys_with_prefix(self, prefix: str) -> list[str]:
        return [key for key in self.entries if key.startswith(prefix)]


class InMemoryUserRepository:
    """UserRepository that enforces unique usernames and emails and records lookups."""

    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.lookups: list[tuple[str, object]] = []
        self._next_id = 1

    def add(self, username: str, email: str, password: str) -> User:
        user = User(id=self._next_id, username=username, email=email, password_hash=hash_password(password))
        self._next_id += 1
        self.users[user.id] = user
        return user

    async def get_user(self, user_id: int) -> User | None:
        self.lookups.append(("id", user_id))
        return self.users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        self.lookups.append(("username", username))
        return next((u for u in self.users.values() if u.username == username), None)

    async def get_user_by_email(self, email: str) -> User | None:
        self.lookups.append(("email", email))
        return next((u for u in self.users.values() if u.email == email), None)

    async def create_user(self, username: str, email: str, password_hash: str) -> User:
        if any(u.username == username or u.email == email for u in self.users.values()):
            raise ConflictError("Username or email already registered")
        user = User(id=self._next_id, username=username, email=email, password_hash=password_hash)
        self._next_id += 1
        self.users[user.id] = user
        return user

    async def update_password(self, user_id: int, password_hash: str) -> User | None:
        # yield like a database round-trip would
        await asyncio.sleep(0)
        user = self.users.get(user_id)
        if user is None:
            return None
        updated = user.model_copy(update={"password_hash": password_hash, "updated_at": now()})
        self.users[user_id] = updated
        return updated


class RecordingMailer:
    """Mailer that keeps sent messages instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []  # (to, html, subject)
        self.failing = False

    async def send_email(self, to: str, html: str, subject: str) -> None:
        if self.failing:
            raise InfrastructureError("Failed to send email")
        self.sent.append((to, html, subject))


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def sessions(kv):
    return SessionStore(kv, SESSION_TTL)


@pytest.fixture
def ctx(kv, users, mailer, sessions):
    """Context of an anonymous request."""
    return RequestContext(session=Session(), sessions=sessions, users=users, cache=kv, mailer=mailer)


@pytest.fixture
def workflow():
    return AuthWorkflow(frontend_url=FRONTEND_URL, reset_token_ttl_seconds=RESET_TOKEN_TTL)


@pytest.fixture
def alice(users):
    """A registered user with password 'wonderland'."""
    return users.add("alice", "alice@example.com", "wonderland")


@pytest.fixture
def config():
    return Config(
        database_url="mongodb://localhost:27017/lireddit_test",
        host="127.0.0.1",
        port=8000,
        debug=False,
        session_secret_key="test-secret",
        frontend_url=FRONTEND_URL,
    )
