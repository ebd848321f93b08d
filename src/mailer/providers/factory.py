"""
Email provider factory.

Builds every supported provider once from validated settings. The resulting
mapping is read-only and shared by all requests.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping

from mailer.config import Settings
from mailer.providers.interface import Provider, ProviderName
from mailer.providers.mock import MockProvider
from mailer.providers.ses import SesProvider
from mailer.providers.smtp import SmtpProvider
from mailer.shared.logging import mask

logger = logging.getLogger(__name__)


def build_providers(settings: Settings) -> Mapping[str, Provider]:
    """Create one instance of each provider keyed by provider name."""
    keys = settings.ses.keys
    logger.info(
        "Email providers configured",
        extra={
            "default_provider": settings.provider,
            "sender_address": settings.sender.address,
            "ses_region": settings.ses.region,
            "ses_access_key": mask(keys.access if keys else None),
            "smtp_host": settings.smtp.host,
            "smtp_port": settings.smtp.port,
            "smtp_user": settings.smtp.user or "",
            "smtp_use_tls": settings.smtp.use_tls,
        },
    )

    providers: dict[str, Provider] = {
        ProviderName.MOCK.value: MockProvider(),
        ProviderName.SES.value: SesProvider(settings.ses, settings.sender),
        ProviderName.SMTP.value: SmtpProvider(settings.smtp, settings.sender),
    }
    return MappingProxyType(providers)
