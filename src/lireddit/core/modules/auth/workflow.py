"""Registration, login, logout and password recovery."""

from uuid import uuid4

import structlog

from lireddit.core.modules.auth.context import RequestContext
from lireddit.core.modules.auth.models import UserFailure, UsernamePasswordInput, UserResponse, UserSuccess
from lireddit.core.modules.auth.validators import (
    RegisterValidator,
    validate_new_password,
    validate_password_size,
    validate_register,
)
from lireddit.core.modules.kv.models import Keyspace
from lireddit.core.modules.mail.templates import RESET_PASSWORD_SUBJECT, render_reset_password_email
from lireddit.core.modules.user.models import User
from lireddit.core.modules.user.passwords import hash_password, verify_password
from lireddit.errors import ConflictError, InfrastructureError

logger = structlog.get_logger(__name__)

FORGOT_PASSWORD_PREFIX = "forget-password:"


class AuthWorkflow:
    """Authentication operations.

    Every operation takes the RequestContext of the current request. Business-rule
    failures come back as UserFailure; only infrastructure failures raise.
    """

    def __init__(
        self,
        frontend_url: str,
        reset_token_ttl_seconds: int,
        validator: RegisterValidator = validate_register,
    ) -> None:
        self._frontend_url = frontend_url
        self._reset_token_ttl_seconds = reset_token_ttl_seconds
        self._validator = validator

    def _reset_tokens(self, ctx: RequestContext) -> Keyspace:
        return Keyspace(ctx.cache, FORGOT_PASSWORD_PREFIX)

    async def me(self, ctx: RequestContext) -> User | None:
        """Current user, or None for anonymous sessions and users that no longer exist."""
        if ctx.session.user_id is None:
            return None
        return await ctx.users.get_user(ctx.session.user_id)

    async def register(self, ctx: RequestContext, options: UsernamePasswordInput) -> UserResponse:
        errors = self._validator(options) or validate_password_size(options.password, "password")
        if errors:
            return UserFailure(errors=errors)

        password_hash = hash_password(options.password)
        try:
            user = await ctx.users.create_user(options.username, options.email, password_hash)
        except ConflictError:
            return UserFailure.single("username", "username already taken")

        # log in the user
        ctx.session.log_in(user.id)
        logger.info("user_registered", user_id=user.id)
        return UserSuccess.of(user)

    async def login(self, ctx: RequestContext, username_or_email: str, password: str) -> UserResponse:
        if "@" in username_or_email:
            user = await ctx.users.get_user_by_email(username_or_email)
        else:
            user = await ctx.users.get_user_by_username(username_or_email)

        if user is None:
            return UserFailure.single("usernameOrEmail", "username or email doesn't exist")

        if not verify_password(password, user.password_hash):
            logger.info("login_failed", user_id=user.id)
            return UserFailure.single("password", "incorrect password")

        ctx.session.log_in(user.id)
        logger.debug("user_logged_in", user_id=user.id)
        return UserSuccess.of(user)

    async def logout(self, ctx: RequestContext) -> bool:
        """Destroy the session. Store failures are logged and reported as False."""
        try:
            await ctx.sessions.destroy(ctx.session)
        except InfrastructureError:
            logger.exception("logout_failed", user_id=ctx.session.user_id)
            return False
        return True

    async def forgot_password(self, ctx: RequestContext, email: str) -> bool:
        """Send a reset link if the email is registered. Always True so emails cannot be enumerated."""
        user = await ctx.users.get_user_by_email(email)
        if user is None:
            # email not in database
            return True

        token = str(uuid4())
        await self._reset_tokens(ctx).set(token, str(user.id), self._reset_token_ttl_seconds)

        html = render_reset_password_email(self._frontend_url, token)
        await ctx.mailer.send_email(email, html, RESET_PASSWORD_SUBJECT)
        logger.info("password_reset_requested", user_id=user.id)
        return True

    async def change_password(self, ctx: RequestContext, token: str, new_password: str) -> UserResponse:
        errors = validate_new_password(new_password)
        if errors:
            return UserFailure(errors=errors)

        # taking the token removes it, so concurrent requests cannot both use it
        user_id = await self._reset_tokens(ctx).pop(token)
        if user_id is None:
            return UserFailure.single("token", "token expired")

        user = await ctx.users.update_password(int(user_id), hash_password(new_password))
        if user is None:
            return UserFailure.single("token", "user no longer exists")

        # log in user after change password
        ctx.session.log_in(user.id)
        logger.info("password_changed", user_id=user.id)
        return UserSuccess.of(user)
