"""
Application configuration with layered settings.

Sources, lowest to highest priority: JSON file defaults, ``.env`` file,
process environment. Nested sections use ``__`` in variable names, e.g.
``MAILER_SES__KEYS__ACCESS``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from mailer import validate

ENV_PREFIX = "MAILER_"
CONFIG_FILE_ENV = f"{ENV_PREFIX}CONFIG_FILE"
DEFAULT_CONFIG_FILE = Path(__file__).resolve().parents[2] / "config" / "default.json"


def _check(predicate, value: str, what: str) -> str:
    if not predicate(value):
        raise ValueError(f"invalid {what}")
    return value


class SenderSettings(BaseModel):
    """Sender identity shared by every provider."""

    address: str = "noreply@example.com"
    name: str = "Mailer"

    @field_validator("address")
    @classmethod
    def _address(cls, v: str) -> str:
        return _check(validate.email_address, v, "sender address")

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return _check(validate.sender_name, v, "sender name")


class AwsKeys(BaseModel):
    """Static AWS credential pair. Both halves are required together."""

    access: str
    secret: str

    @field_validator("access")
    @classmethod
    def _access(cls, v: str) -> str:
        return _check(validate.aws_access, v, "AWS access key id")

    @field_validator("secret")
    @classmethod
    def _secret(cls, v: str) -> str:
        return _check(validate.aws_secret, v, "AWS secret access key")


class SesSettings(BaseModel):
    region: str = "us-east-1"
    keys: Optional[AwsKeys] = None

    @field_validator("region")
    @classmethod
    def _region(cls, v: str) -> str:
        return _check(validate.aws_region, v, "AWS region")


class SmtpSettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=25, ge=1, le=65535)
    user: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = False
    # Transport timeout passed to smtplib; not part of the send contract.
    timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("host")
    @classmethod
    def _host(cls, v: str) -> str:
        return _check(validate.host, v, "SMTP host")

    @model_validator(mode="after")
    def _credentials_pair(self) -> SmtpSettings:
        if (self.user is None) != (self.password is None):
            raise ValueError("SMTP user and password must be set together")
        return self


class SendgridSettings(BaseModel):
    key: str

    @field_validator("key")
    @classmethod
    def _key(cls, v: str) -> str:
        return _check(validate.sendgrid_api_key, v, "SendGrid API key")


class AuthDbSettings(BaseModel):
    """Upstream account database address."""

    baseuri: str = "http://127.0.0.1:8000/"

    @field_validator("baseuri")
    @classmethod
    def _baseuri(cls, v: str) -> str:
        return _check(validate.base_uri, v, "auth db base URI")


class Settings(BaseSettings):
    """Application settings loaded once at startup."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Default provider for requests that do not name one
    provider: str = "ses"

    sender: SenderSettings = Field(default_factory=SenderSettings)
    ses: SesSettings = Field(default_factory=SesSettings)
    smtp: SmtpSettings = Field(default_factory=SmtpSettings)
    sendgrid: Optional[SendgridSettings] = None
    authdb: AuthDbSettings = Field(default_factory=AuthDbSettings)

    debug: bool = False
    log_level: str = "INFO"

    @field_validator("provider")
    @classmethod
    def _provider(cls, v: str) -> str:
        return _check(validate.provider, v, "provider")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        json_file = Path(os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE))
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
            file_secret_settings,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, loaded and validated on first use."""
    return Settings()
