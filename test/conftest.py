"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Sequence

import pytest
from fastapi.testclient import TestClient

from mailer.config import ENV_PREFIX, Settings
from mailer.main import create_app
from mailer.providers.interface import Provider, ProviderError, ProviderName


@contextmanager
def clean_environment(keys: Sequence[str]) -> Iterator[None]:
    """Remove ``keys`` from the environment and restore them on exit.

    Variables set inside the block are cleared again on exit, including
    when the block raises.
    """
    saved = {key: os.environ.pop(key) for key in keys if key in os.environ}
    try:
        yield
    finally:
        for key in keys:
            os.environ.pop(key, None)
        os.environ.update(saved)


MAILER_ENV_KEYS = (
    "MAILER_CONFIG_FILE",
    "MAILER_PROVIDER",
    "MAILER_SENDER__ADDRESS",
    "MAILER_SENDER__NAME",
    "MAILER_SES__REGION",
    "MAILER_SES__KEYS__ACCESS",
    "MAILER_SES__KEYS__SECRET",
    "MAILER_SMTP__HOST",
    "MAILER_SMTP__PORT",
    "MAILER_SMTP__USER",
    "MAILER_SMTP__PASSWORD",
    "MAILER_SMTP__USE_TLS",
    "MAILER_SENDGRID__KEY",
    "MAILER_AUTHDB__BASEURI",
    "MAILER_LOG_LEVEL",
)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run the test with no MAILER_* variables set."""
    keys = set(MAILER_ENV_KEYS) | {k for k in os.environ if k.startswith(ENV_PREFIX)}
    with clean_environment(sorted(keys)):
        yield


@pytest.fixture
def settings(clean_env: None) -> Settings:
    return Settings(provider="mock")


class RecordingProvider(Provider):
    """Provider double that records calls and can be told to fail."""

    def __init__(self, name: ProviderName = ProviderName.SES, fail_with: str | None = None) -> None:
        self.name = name
        self.fail_with = fail_with
        self.calls: list[dict] = []

    def send_sync(self, to, cc, subject, body_text, body_html=None) -> str:
        self.calls.append(
            {
                "to": to,
                "cc": list(cc),
                "subject": subject,
                "body_text": body_text,
                "body_html": body_html,
            }
        )
        if self.fail_with is not None:
            raise ProviderError(self.fail_with, provider=self.name.value)
        return self.tag(f"{len(self.calls):04d}")


@pytest.fixture
def client(settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
