from functools import cache

from mycad_core.utils.config import EnvSettings, load_config
from pydantic import Field

DEFAULT_FROM = '"MyCAD" <no-reply@mycad.app>'
DEFAULT_APP_URL = "https://mycad.app"


class AppConfig(EnvSettings):
    """Settings needed to render emails. Every value has a default."""

    smtp_from: str = Field(DEFAULT_FROM, alias="SMTP_FROM")
    app_url: str = Field(DEFAULT_APP_URL, alias="APP_URL")


class SMTPConfig(EnvSettings):
    """Settings needed to send emails.

    Loaded only when an email is sent, so the health check works
    without an SMTP server.
    """

    smtp_host: str = Field(..., alias="SMTP_HOST")
    smtp_user: str = Field(..., alias="SMTP_USER")
    smtp_pass: str = Field(..., alias="SMTP_PASS", repr=False)
    smtp_port: int = Field(587, alias="SMTP_PORT")
    smtp_secure: bool = Field(False, alias="SMTP_SECURE")  # implicit TLS
    smtp_timeout: float = Field(30.0, alias="SMTP_TIMEOUT")
    smtp_from: str = Field(DEFAULT_FROM, alias="SMTP_FROM")


@cache
def get_config() -> AppConfig:
    return load_config(AppConfig)


@cache
def get_smtp_config() -> SMTPConfig:
    """Raises `MissingConfigError` if SMTP_HOST, SMTP_USER or SMTP_PASS is undefined."""
    return load_config(SMTPConfig)
