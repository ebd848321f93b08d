"""
Map exceptions to JSON error responses.

Every error body has the shape ``{"code": <status>, "message": <str>}``.
Validation details are logged but never returned.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mailer.shared.exceptions import AppError, ProviderError
from mailer.shared.logging import get_logger

logger = get_logger(__name__)


def error_response(status_code: int, message: str | None = None) -> JSONResponse:
    """Build an error response, defaulting to the standard reason phrase."""
    status_code = int(status_code)
    return JSONResponse(
        status_code=status_code,
        content={"code": status_code, "message": message or HTTPStatus(status_code).phrase},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the application's exception handlers."""

    # Missing fields, wrong types and malformed JSON are all client errors
    @app.exception_handler(RequestValidationError)
    async def _request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(
            "Malformed request",
            extra={
                "errors": [
                    {"field": ".".join(str(loc) for loc in error["loc"]), "type": error["type"]}
                    for error in exc.errors()
                ]
            },
        )
        return error_response(HTTPStatus.BAD_REQUEST)

    @app.exception_handler(ProviderError)
    async def _provider(request: Request, exc: ProviderError) -> JSONResponse:
        logger.warning(
            "Request failed",
            extra={"path": request.url.path, "code": exc.code, "provider": exc.provider},
        )
        return error_response(exc.status_code, exc.description)

    @app.exception_handler(AppError)
    async def _app_error(request: Request, exc: AppError) -> JSONResponse:
        logger.info(
            "Request rejected",
            extra={"path": request.url.path, "code": exc.code, "detail": exc.message},
        )
        return error_response(exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def _http(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return error_response(exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return error_response(HTTPStatus.INTERNAL_SERVER_ERROR)
