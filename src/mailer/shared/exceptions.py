"""
Custom exceptions for the application.
"""

from http import HTTPStatus


class AppError(Exception):
    """Base exception for application errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, code: str = "APP_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """A field failed one of the validator predicates.

    ``field`` is kept for logging only; responses never expose it.
    """

    status_code = HTTPStatus.BAD_REQUEST

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid value for '{field}'", "VALIDATION_ERROR")
        self.field = field


class ProviderError(AppError):
    """A provider failed to deliver a message.

    ``description`` is safe to log and to return to callers: providers build
    it from transport error text and never include credentials.
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, description: str, provider: str | None = None) -> None:
        super().__init__(description, "PROVIDER_ERROR")
        self.description = description
        self.provider = provider
