from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field

from lireddit.core.modules.auth.models import UserResponse
from lireddit.core.modules.user.models import UserView
from lireddit.web.deps import AppDep, ContextDep, SessionCookieDep, finish_request
from lireddit.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class RegisterRequest(BaseModel):
    """Registration request."""

    email: str = Field(..., description="Email address")
    username: str = Field(..., description="Username")
    password: str = Field(..., description="Password")


class LoginRequest(BaseModel):
    """Authentication request."""

    username_or_email: str = Field(..., alias="usernameOrEmail", description="Username, or email if it contains @")
    password: str = Field(..., description="Password for authentication")

    model_config = ConfigDict(populate_by_name=True)


class ForgotPasswordRequest(BaseModel):
    """Password reset request."""

    email: str = Field(..., description="Email address of the account")


class ChangePasswordRequest(BaseModel):
    """Password change with a reset token."""

    token: str = Field(..., description="Token from the password reset email")
    new_password: str = Field(..., alias="newPassword", description="New password")

    model_config = ConfigDict(populate_by_name=True)


INFRASTRUCTURE_FAILURE = {"model": ErrorResponse, "description": "Backing service unavailable"}


@router.get(
    "/auth/me",
    summary="Get current user",
    description="Return the logged-in user, or null for anonymous sessions.",
    operation_id="me",
)
async def me(app: AppDep, ctx: ContextDep) -> UserView | None:
    return await app.me(ctx)


@router.post(
    "/auth/register",
    summary="Register",
    description="Create an account and log it in. Rejected input is reported as field errors.",
    operation_id="register",
    responses={503: INFRASTRUCTURE_FAILURE},
)
async def register(
    data: RegisterRequest, app: AppDep, ctx: ContextDep, session_cookie: SessionCookieDep, response: Response
) -> UserResponse:
    result = await app.register(ctx, data.email, data.username, data.password)
    await finish_request(app, ctx, session_cookie, response)
    return result


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Log in with username or email and password.",
    operation_id="login",
    responses={503: INFRASTRUCTURE_FAILURE},
)
async def login(
    data: LoginRequest, app: AppDep, ctx: ContextDep, session_cookie: SessionCookieDep, response: Response
) -> UserResponse:
    result = await app.login(ctx, data.username_or_email, data.password)
    await finish_request(app, ctx, session_cookie, response)
    return result


@router.post(
    "/auth/logout",
    summary="End session",
    description="Destroy the current session. Returns false if the session store failed.",
    operation_id="logout",
)
async def logout(app: AppDep, ctx: ContextDep, session_cookie: SessionCookieDep, response: Response) -> bool:
    ok = await app.logout(ctx)
    await finish_request(app, ctx, session_cookie, response)
    return ok


@router.post(
    "/auth/forgot-password",
    summary="Request password reset",
    description="Email a reset link if the address is registered. Always returns true.",
    operation_id="forgotPassword",
    responses={503: INFRASTRUCTURE_FAILURE},
)
async def forgot_password(data: ForgotPasswordRequest, app: AppDep, ctx: ContextDep) -> bool:
    return await app.forgot_password(ctx, data.email)


@router.post(
    "/auth/change-password",
    summary="Change password",
    description="Set a new password with a reset token and log in.",
    operation_id="changePassword",
    responses={503: INFRASTRUCTURE_FAILURE},
)
async def change_password(
    data: ChangePasswordRequest, app: AppDep, ctx: ContextDep, session_cookie: SessionCookieDep, response: Response
) -> UserResponse:
    result = await app.change_password(ctx, data.token, data.new_password)
    await finish_request(app, ctx, session_cookie, response)
    return result
