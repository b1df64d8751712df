import structlog
from pydantic import ValidationError as PydanticValidationError

from lireddit.core.modules.kv.models import Keyspace, KeyValueStore
from lireddit.core.modules.session.models import SESSION_PREFIX, Session, SessionId, SessionRecord

logger = structlog.get_logger(__name__)


class SessionStore:
    """Loads, saves and destroys sessions in the `sess:` keyspace."""

    def __init__(self, store: KeyValueStore, ttl_seconds: int) -> None:
        self._keyspace = Keyspace(store, SESSION_PREFIX)
        self._ttl_seconds = ttl_seconds

    async def load(self, session_id: SessionId | None) -> Session:
        """Return the stored session, or a fresh anonymous one for a missing or unknown id."""
        if session_id is None:
            return Session()

        raw = await self._keyspace.get(session_id)
        if raw is None:
            return Session()

        try:
            record = SessionRecord.model_validate_json(raw)
        except PydanticValidationError:
            logger.warning("session_record_corrupt")
            return Session()
        return Session(id=session_id, user_id=record.user_id)

    async def save(self, session: Session) -> None:
        """Persist a modified session. Unmodified and destroyed sessions are left alone."""
        if session.destroyed or not session.modified:
            return
        await self._keyspace.set(session.id, session.to_record().model_dump_json(by_alias=True), self._ttl_seconds)

    async def destroy(self, session: Session) -> None:
        await self._keyspace.delete(session.id)
        session.user_id = None
        session.destroyed = True
