"""
Mock email provider for tests and local development.
"""

from __future__ import annotations

from typing import Sequence

from mailer.providers.interface import Provider, ProviderName

MOCK_MESSAGE_ID = "deadbeef"


class MockProvider(Provider):
    """Deterministic test double: never performs I/O, always succeeds."""

    name = ProviderName.MOCK

    def send_sync(
        self,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        return self.tag(MOCK_MESSAGE_ID)
