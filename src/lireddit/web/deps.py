from typing import Annotated, cast

from fastapi import Depends, Request, Response
from fastapi.security import APIKeyCookie

from lireddit.app import App
from lireddit.config import Config
from lireddit.core.modules.auth.context import RequestContext
from lireddit.core.modules.session.models import COOKIE_NAME
from lireddit.web.cookies import SessionCookie

# Security schemes
cookie_scheme = APIKeyCookie(name=COOKIE_NAME, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_session_cookie(request: Request) -> SessionCookie:
    return SessionCookie.from_config(cast(Config, request.app.state.config))


async def get_request_context(
    app: Annotated[App, Depends(get_app)],
    session_cookie: Annotated[SessionCookie, Depends(get_session_cookie)],
    cookie_value: Annotated[str | None, Depends(cookie_scheme)] = None,
) -> RequestContext:
    """Open a RequestContext for the session named by the cookie (anonymous if absent or invalid)."""
    return await app.open_context(session_cookie.unsign(cookie_value))


async def finish_request(app: App, ctx: RequestContext, session_cookie: SessionCookie, response: Response) -> None:
    """Persist session changes and sync the cookie with them."""
    await app.commit_context(ctx)
    if ctx.session.destroyed:
        session_cookie.clear(response)
    elif ctx.session.modified:
        session_cookie.set(response, ctx.session.id)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ContextDep = Annotated[RequestContext, Depends(get_request_context)]
SessionCookieDep = Annotated[SessionCookie, Depends(get_session_cookie)]
