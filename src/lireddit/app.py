from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from lireddit.config import Config
from lireddit.core.core import Core
from lireddit.core.modules.auth.context import RequestContext
from lireddit.core.modules.auth.models import UsernamePasswordInput, UserResponse
from lireddit.core.modules.auth.workflow import AuthWorkflow
from lireddit.core.modules.session.models import SessionId
from lireddit.core.modules.session.service import SessionStore
from lireddit.core.modules.user.models import UserView


class App:
    """Facade for all application operations, binds each request to a RequestContext."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)
        services = self._core.services
        self._sessions = SessionStore(services.kv, config.session_ttl_seconds)
        self._auth = AuthWorkflow(
            frontend_url=config.frontend_url,
            reset_token_ttl_seconds=config.forgot_password_ttl_seconds,
        )

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def open_context(self, session_id: SessionId | None) -> RequestContext:
        """Load the caller's session and bundle it with the storage handles."""
        services = self._core.services
        return RequestContext(
            session=await self._sessions.load(session_id),
            sessions=self._sessions,
            users=services.user,
            cache=services.kv,
            mailer=services.mail,
        )

    async def commit_context(self, ctx: RequestContext) -> None:
        """Persist session changes made while handling the request."""
        await ctx.sessions.save(ctx.session)

    async def me(self, ctx: RequestContext) -> UserView | None:
        """Get the logged-in user, or None for anonymous callers."""
        user = await self._auth.me(ctx)
        return None if user is None else UserView.from_domain(user)

    async def register(self, ctx: RequestContext, email: str, username: str, password: str) -> UserResponse:
        """Create an account and log it in."""
        options = UsernamePasswordInput(email=email, username=username, password=password)
        return await self._auth.register(ctx, options)

    async def login(self, ctx: RequestContext, username_or_email: str, password: str) -> UserResponse:
        """Authenticate by username or email and log in."""
        return await self._auth.login(ctx, username_or_email, password)

    async def logout(self, ctx: RequestContext) -> bool:
        """Destroy the current session."""
        return await self._auth.logout(ctx)

    async def forgot_password(self, ctx: RequestContext, email: str) -> bool:
        """Email a password reset link if the address is registered."""
        return await self._auth.forgot_password(ctx, email)

    async def change_password(self, ctx: RequestContext, token: str, new_password: str) -> UserResponse:
        """Set a new password using a reset token and log in."""
        return await self._auth.change_password(ctx, token, new_password)
