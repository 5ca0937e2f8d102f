"""FastAPI application factory."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.common.logging_config import get_logger
from shortener.errors import (
    ExhaustedRetriesError,
    InvalidInputError,
    NotFoundError,
    ShortenerError,
    UnavailableError,
)

from .api import api_router
from .web import web_router
from .middleware.logging import LoggingMiddleware


# Any other ShortenerError maps to 500
ERROR_STATUS = (
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (UnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ExhaustedRetriesError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)

ERROR_MESSAGES = {
    status.HTTP_400_BAD_REQUEST: "Invalid request",
    status.HTTP_404_NOT_FOUND: "Not found",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Failed to create short URL",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service temporarily unavailable",
}


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ERROR_MESSAGES.get(status_code, "Request failed"), "detail": detail},
    )


def _status_for(exc: ShortenerError) -> int:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Map the shortener error taxonomy onto HTTP responses."""
    logger = get_logger("web")

    @app.exception_handler(ShortenerError)
    async def handle_shortener_error(request: Request, exc: ShortenerError):
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return _error_response(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        messages = "; ".join(error.get("msg", "") for error in exc.errors())
        return _error_response(status.HTTP_400_BAD_REQUEST, messages or "Malformed request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))


def create_app(service_instance, config) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: URLShortenerService instance (may be set later in lifespan)
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Shortlinks",
        description="URL shortening service",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_error_handlers(app)

    app.include_router(api_router, prefix="/api/v1", tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
