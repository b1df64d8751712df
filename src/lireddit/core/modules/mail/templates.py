"""Liquid templates for outgoing emails."""

import structlog
from liquid import Environment

logger = structlog.get_logger(__name__)

RESET_PASSWORD_SUBJECT = "Change password"
RESET_PASSWORD_TEMPLATE = '<a href="{{ frontend_url }}/change-password/{{ token }}"> reset password </a>'

_env = Environment()


def render_reset_password_email(frontend_url: str, token: str) -> str:
    """Render the HTML body of the password reset email.

    Raises:
        ValueError: If template rendering fails
    """
    try:
        tmpl = _env.from_string(RESET_PASSWORD_TEMPLATE)
        return tmpl.render(frontend_url=frontend_url.rstrip("/"), token=token)
    except Exception as e:
        logger.exception("template_render_failed", template="reset_password")
        raise ValueError(f"Failed to render template: {e}") from e
