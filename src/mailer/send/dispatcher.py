"""
Send dispatcher.

Validates a parsed request, resolves the named provider and performs a
single delivery attempt. Two states only: validating, then sending.
"""

from __future__ import annotations

from typing import Mapping

from mailer import validate
from mailer.providers.interface import Provider
from mailer.send.schemas import SendRequest
from mailer.shared.exceptions import ProviderError, ValidationError
from mailer.shared.logging import get_logger

logger = get_logger(__name__)


class Dispatcher:
    """Resolve requests to providers and invoke them.

    Args:
        providers: Read-only provider name -> instance mapping built at startup.
        default_provider: Name used when a request does not specify one.
    """

    def __init__(self, providers: Mapping[str, Provider], default_provider: str) -> None:
        self._providers = providers
        self._default_provider = default_provider

    def _validate(self, request: SendRequest) -> str:
        if not validate.email_address(request.to):
            raise ValidationError("to")

        for index, address in enumerate(request.cc):
            if not validate.email_address(address):
                raise ValidationError(f"cc[{index}]")

        provider_name = request.provider if request.provider is not None else self._default_provider
        if not validate.provider(provider_name):
            raise ValidationError("provider")

        return provider_name

    def resolve(self, request: SendRequest) -> Provider:
        """Validate the request and return the provider that should send it.

        Raises:
            ValidationError: If an address or the provider name is invalid,
                or the provider is valid but not configured.
        """
        try:
            provider_name = self._validate(request)
        except ValidationError as e:
            logger.warning("Send request rejected", extra={"field": e.field})
            raise

        provider = self._providers.get(provider_name)
        if provider is None:
            logger.warning(
                "Provider not configured",
                extra={"provider": provider_name, "configured": sorted(self._providers)},
            )
            raise ValidationError("provider", f"Provider '{provider_name}' is not configured")
        return provider

    async def dispatch(self, request: SendRequest) -> str:
        """Validate, resolve and send; return the tagged message id.

        Raises:
            ValidationError: Request failed validation; no provider was called.
            ProviderError: The provider failed to deliver.
        """
        provider = self.resolve(request)

        try:
            message_id = await provider.send(
                request.to,
                request.cc,
                request.subject,
                request.body.text,
                request.body.html,
            )
        except ProviderError as e:
            logger.error(
                "Email send failed",
                extra={"provider": provider.name.value, "error": e.description},
            )
            raise

        logger.info(
            "Email sent",
            extra={
                "provider": provider.name.value,
                "message_id": message_id,
                "cc_count": len(request.cc),
            },
        )
        return message_id
