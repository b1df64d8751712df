"""Tests for the session store."""

import json

import pytest

from lireddit.core.modules.session.models import SESSION_PREFIX, Session, SessionId
from lireddit.core.modules.session.service import SessionStore


class TestLoad:
    """Tests for SessionStore.load."""

    @pytest.mark.asyncio
    async def test_no_cookie_gives_anonymous_session(self, sessions):
        session = await sessions.load(None)
        assert session.user_id is None
        assert session.modified is False

    @pytest.mark.asyncio
    async def test_unknown_id_gets_fresh_id(self, sessions):
        """Test that an unknown session id is not reused."""
        session = await sessions.load(SessionId("forged"))
        assert session.id != "forged"
        assert session.user_id is None

    @pytest.mark.asyncio
    async def test_stored_session_is_restored(self, sessions, kv):
        await kv.set(SESSION_PREFIX + "abc", '{"userId": 7}', 60)

        session = await sessions.load(SessionId("abc"))
        assert session.id == "abc"
        assert session.user_id == 7

    @pytest.mark.asyncio
    async def test_corrupt_record_is_anonymous(self, sessions, kv):
        await kv.set(SESSION_PREFIX + "abc", "not json", 60)

        session = await sessions.load(SessionId("abc"))
        assert session.user_id is None


class TestSave:
    """Tests for SessionStore.save."""

    @pytest.mark.asyncio
    async def test_unmodified_session_is_not_written(self, sessions, kv):
        """Test that anonymous visitors leave no records."""
        await sessions.save(Session())
        assert kv.entries == {}

    @pytest.mark.asyncio
    async def test_logged_in_session_is_written_with_ttl(self, kv):
        store = SessionStore(kv, 1234)
        session = Session()
        session.log_in(5)

        await store.save(session)

        value, ttl = kv.entries[SESSION_PREFIX + session.id]
        assert json.loads(value) == {"userId": 5}
        assert ttl == 1234

    @pytest.mark.asyncio
    async def test_destroyed_session_is_not_written(self, sessions, kv):
        session = Session()
        session.log_in(5)
        await sessions.destroy(session)

        await sessions.save(session)
        assert kv.entries == {}


class TestDestroy:
    """Tests for SessionStore.destroy."""

    @pytest.mark.asyncio
    async def test_destroy_removes_record(self, sessions, kv):
        session = Session()
        session.log_in(5)
        await sessions.save(session)

        await sessions.destroy(session)

        assert kv.entries == {}
        assert session.user_id is None
        assert session.destroyed is True
