"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from imgsrc_client.domain.models import Credentials

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    imgsrc_login: str
    imgsrc_password_md5: str | None = None
    imgsrc_password: str | None = None
    imgsrc_root_host: str = "imgsrc.ru"
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    upload_max_attempts: int = Field(default=3, ge=1)
    upload_retry_delay_seconds: float = Field(default=0.0, ge=0)
    upload_base64: bool = False
    cache_responses: bool = False
    cache_dir: str = ".imgsrc"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_credentials(settings: Settings) -> Credentials:
    """Build credentials, preferring an explicit MD5 digest."""
    if settings.imgsrc_password_md5:
        return Credentials(settings.imgsrc_login, settings.imgsrc_password_md5.strip())
    if settings.imgsrc_password:
        return Credentials.from_password(
            settings.imgsrc_login, settings.imgsrc_password
        )
    raise ValueError("Set IMGSRC_PASSWORD_MD5 or IMGSRC_PASSWORD")
