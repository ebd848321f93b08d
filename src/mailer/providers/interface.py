"""
Email provider interface definition.

A provider transmits one email per call and returns a message id prefixed
with its own tag, e.g. ``ses:0100018c...``.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence

import anyio

from mailer.shared.exceptions import ProviderError

__all__ = ["Provider", "ProviderError", "ProviderName"]


class ProviderName(str, Enum):
    """Supported provider names, also used as message id tags."""

    MOCK = "mock"
    SES = "ses"
    SMTP = "smtp"


class Provider(ABC):
    """Abstract interface for email providers.

    ``send_sync`` performs exactly one delivery attempt and blocks for the
    duration of any network I/O. ``send`` is the entrypoint used by request
    handlers: it runs ``send_sync`` in a worker thread so concurrent requests
    do not block each other.

    Failures are raised as ``ProviderError``; SDK exceptions never escape.
    """

    name: ProviderName

    async def send(
        self,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        """Send an email (async). Delegates to ``send_sync`` in a thread."""
        return await anyio.to_thread.run_sync(
            self.send_sync, to, cc, subject, body_text, body_html
        )

    @abstractmethod
    def send_sync(
        self,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        """Send an email and return the tagged message id.

        Raises:
            ProviderError: If the transport fails or the message is rejected.
        """
        ...

    def tag(self, message_id: str) -> str:
        return f"{self.name.value}:{message_id}"
