"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cooking_companion.api.admin import router as admin_router
from cooking_companion.api.cooking import router as cooking_router
from cooking_companion.app_logging import configure_logging
from cooking_companion.containers import AppContainer
from cooking_companion.domain.errors import (
    CookingError,
    InvalidQuantityError,
    InvalidSelectionError,
    NotFoundError,
    SessionAlreadyResolvedError,
)

_ERROR_STATUS: dict[type[CookingError], tuple[int, str]] = {
    NotFoundError: (404, "Not Found"),
    InvalidSelectionError: (400, "Bad Request"),
    InvalidQuantityError: (422, "Invalid Quantity"),
    SessionAlreadyResolvedError: (409, "Conflict"),
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(cooking_router)
    app.include_router(admin_router)

    @app.exception_handler(CookingError)
    async def cooking_error_handler(
        request: Request, exc: CookingError
    ) -> JSONResponse:
        status_code, error = _error_status(exc)
        if isinstance(exc, InvalidQuantityError):
            logger.error("Rejected %s %s: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s -> %s: %s", request.method, request.url.path, error, exc)
        return JSONResponse(
            status_code=status_code,
            content={"error": error, "message": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_status(exc: CookingError) -> tuple[int, str]:
    """Map a domain error to an HTTP status and label."""
    for error_type, mapped in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return mapped
    return 400, "Bad Request"
