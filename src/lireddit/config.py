from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str
    port: int
    debug: bool
    session_secret_key: str  # Signs the session cookie value
    session_cookie_secure: bool = False  # Set to True in production with HTTPS
    session_ttl_seconds: int = 10 * 365 * 24 * 60 * 60  # 10 years
    forgot_password_ttl_seconds: int = 3 * 24 * 60 * 60  # 3 days
    cors_origins: list[str] = []
    frontend_url: str  # URL of the frontend application, used in password reset links
    # Outgoing mail; when smtp_host is unset emails are written to the log instead
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from: str = "lireddit <noreply@lireddit.local>"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "LIREDDIT_",
        "extra": "ignore",
    }
