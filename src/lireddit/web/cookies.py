"""Signed session cookie."""

from fastapi import Response
from itsdangerous import BadSignature, Signer

from lireddit.config import Config
from lireddit.core.modules.session.models import COOKIE_NAME, SessionId


class SessionCookie:
    """Carries the session id to the client, signed so it cannot be forged."""

    def __init__(self, secret_key: str, secure: bool, max_age: int) -> None:
        self._signer = Signer(secret_key, salt="lireddit-session")
        self._secure = secure
        self._max_age = max_age

    @classmethod
    def from_config(cls, config: Config) -> "SessionCookie":
        return cls(config.session_secret_key, config.session_cookie_secure, config.session_ttl_seconds)

    def sign(self, session_id: SessionId) -> str:
        return self._signer.sign(session_id).decode("utf-8")

    def unsign(self, value: str | None) -> SessionId | None:
        """Return the session id, or None if the cookie is missing or tampered with."""
        if not value:
            return None
        try:
            return SessionId(self._signer.unsign(value).decode("utf-8"))
        except BadSignature:
            return None

    def set(self, response: Response, session_id: SessionId) -> None:
        response.set_cookie(
            key=COOKIE_NAME,
            value=self.sign(session_id),
            httponly=True,
            samesite="lax",
            secure=self._secure,
            max_age=self._max_age,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(COOKIE_NAME, httponly=True, samesite="lax", secure=self._secure)
