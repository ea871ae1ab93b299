"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fityo.api.days import router as days_router
from fityo.api.foods import router as foods_router
from fityo.api.logs import router as logs_router
from fityo.app_logging import configure_logging
from fityo.containers import AppContainer
from fityo.domain.errors import (
    ConfirmationRequired,
    FityoError,
    FoodNotFound,
    InvalidDate,
    LastMealError,
    NotAuthenticated,
    StorageFailure,
    TemplateNotFound,
)

_ERROR_STATUS: dict[type[FityoError], int] = {
    NotAuthenticated: status.HTTP_401_UNAUTHORIZED,
    InvalidDate: status.HTTP_403_FORBIDDEN,
    FoodNotFound: status.HTTP_404_NOT_FOUND,
    TemplateNotFound: status.HTTP_404_NOT_FOUND,
    LastMealError: status.HTTP_409_CONFLICT,
    ConfirmationRequired: status.HTTP_409_CONFLICT,
    StorageFailure: status.HTTP_502_BAD_GATEWAY,
}


def error_status(exc: FityoError) -> int:
    """Return the HTTP status reported for an application error."""
    for error_type, code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Fityo")
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(logs_router)
    app.include_router(days_router)

    @app.exception_handler(FityoError)
    async def handle_fityo_error(request: Request, exc: FityoError) -> JSONResponse:
        code = error_status(exc)
        if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("Storage failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
