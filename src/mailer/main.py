"""
FastAPI application entry point.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Mapping
from uuid import uuid4

from fastapi import FastAPI, Request, Response

from mailer import __version__
from mailer.config import Settings, get_settings
from mailer.providers.factory import build_providers
from mailer.providers.interface import Provider
from mailer.send.dispatcher import Dispatcher
from mailer.send.router import router as send_router
from mailer.shared.errors import register_error_handlers
from mailer.shared.logging import get_logger, request_id_var, setup_logging

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(
    settings: Settings | None = None,
    providers: Mapping[str, Provider] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded eagerly: an invalid configuration raises here and
    the process never starts serving.

    Args:
        settings: Pre-built settings; loaded from file + environment if omitted.
        providers: Provider mapping; built from ``settings`` if omitted.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        setup_logging(settings.log_level)
        logger.info(
            "Application starting",
            extra={"default_provider": settings.provider, "version": __version__},
        )
        yield
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="Mailer API",
        description="Transactional email sending service",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.state.settings = settings
    app.state.dispatcher = Dispatcher(
        providers if providers is not None else build_providers(settings),
        default_provider=settings.provider,
    )

    register_error_handlers(app)

    @app.middleware("http")
    async def _request_id(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    app.include_router(send_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app
