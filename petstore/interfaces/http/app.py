"""
FastAPI application factory for the pet catalog.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from petstore import __version__
from petstore.application.interfaces.services import IPetService
from petstore.infrastructure.config import AppConfig
from petstore.infrastructure.container import Container
from petstore.infrastructure.logging import correlation_context

from .errors import register_exception_handlers
from .routes import router

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


def create_app(service: IPetService | None = None, config: AppConfig | None = None) -> FastAPI:
    """
    Build the HTTP application.

    Args:
        service: Pre-built pet service; when given, no container is started
        config: Configuration for the container; read from the environment if omitted

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if service is not None:
            app.state.pet_service = service
            yield
            return

        container = Container(config)
        try:
            await container.start()
            app.state.container = container
            app.state.pet_service = container.pet_service
            yield
        finally:
            await container.stop()

    app = FastAPI(title="Petstore", version=__version__, lifespan=lifespan)
    if service is not None:
        # Usable without running the lifespan
        app.state.pet_service = service

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        with correlation_context(request.headers.get(CORRELATION_ID_HEADER)) as correlation_id:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response

    register_exception_handlers(app)
    app.include_router(router)
    return app
