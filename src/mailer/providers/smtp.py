"""
SMTP relay email provider.

Opens a fresh connection per send; no connection state is shared between
requests.
"""

from __future__ import annotations

import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr
from typing import Sequence
from uuid import uuid4

from mailer.config import SenderSettings, SmtpSettings
from mailer.providers.interface import Provider, ProviderError, ProviderName

logger = logging.getLogger(__name__)


class SmtpProvider(Provider):
    """SMTP-based email provider.

    Supports STARTTLS and authentication. Settings guarantee user and
    password are configured together or not at all.
    """

    name = ProviderName.SMTP

    def __init__(self, config: SmtpSettings, sender: SenderSettings) -> None:
        self._config = config
        self._sender = sender

    def _build_message(
        self,
        message_id: str,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None,
    ) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self._sender.name, self._sender.address))
        msg["To"] = to
        if cc:
            msg["Cc"] = ", ".join(cc)
        msg["Message-ID"] = f"<{message_id}@{self._config.host}>"

        msg.set_content(body_text)
        if body_html:
            msg.add_alternative(body_html, subtype="html")
        return msg

    def send_sync(
        self,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        message_id = uuid4().hex
        recipients = [to, *cc]

        try:
            # Header values with CR/LF are rejected here with ValueError
            msg = self._build_message(message_id, to, cc, subject, body_text, body_html)
            with smtplib.SMTP(
                self._config.host,
                self._config.port,
                timeout=self._config.timeout_seconds,
            ) as server:
                if self._config.use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self._config.user is not None and self._config.password is not None:
                    server.login(self._config.user, self._config.password)
                server.send_message(
                    msg,
                    from_addr=self._sender.address,
                    to_addrs=recipients,
                )
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error(
                "SMTP send failed",
                extra={
                    "host": self._config.host,
                    "port": self._config.port,
                    "error": str(e),
                },
            )
            raise ProviderError(f"SMTP error: {e}", provider=self.name.value) from e

        return self.tag(message_id)
