"""
Amazon SES email provider adapter.

Uses the boto3 ``ses`` client. When no static key pair is configured the
client falls back to the default credential chain (environment, shared
config, instance role).
"""

from __future__ import annotations

import logging
from email.utils import formataddr
from typing import Any, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from mailer.config import SenderSettings, SesSettings
from mailer.providers.interface import Provider, ProviderError, ProviderName

logger = logging.getLogger(__name__)

CHARSET = "UTF-8"


class SesProvider(Provider):
    """Amazon SES provider adapter."""

    name = ProviderName.SES

    def __init__(
        self,
        config: SesSettings,
        sender: SenderSettings,
        client: Any | None = None,
    ) -> None:
        self._config = config
        self._source = formataddr((sender.name, sender.address))
        self._client = client or self._create_client(config)

    @staticmethod
    def _create_client(config: SesSettings) -> Any:
        kwargs: dict[str, str] = {"region_name": config.region}
        if config.keys is not None:
            kwargs["aws_access_key_id"] = config.keys.access
            kwargs["aws_secret_access_key"] = config.keys.secret
        return boto3.client("ses", **kwargs)

    def send_sync(
        self,
        to: str,
        cc: Sequence[str],
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> str:
        destination: dict[str, list[str]] = {"ToAddresses": [to]}
        if cc:
            destination["CcAddresses"] = list(cc)

        body: dict[str, Any] = {"Text": {"Charset": CHARSET, "Data": body_text}}
        if body_html:
            body["Html"] = {"Charset": CHARSET, "Data": body_html}

        try:
            response = self._client.send_email(
                Source=self._source,
                Destination=destination,
                Message={
                    "Subject": {"Charset": CHARSET, "Data": subject},
                    "Body": body,
                },
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "SES send failed",
                extra={"region": self._config.region, "error": str(e)},
            )
            raise ProviderError(str(e), provider=self.name.value) from e

        return self.tag(response["MessageId"])
