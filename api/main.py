"""FastAPI application factory and main entrypoint."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from api import __version__
from api.config import get_settings
from api.exceptions import MapperError
from api.logging import setup_logging
from api.middleware import LoggingMiddleware, RequestIDMiddleware
from api.routers import health, v1

setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    logger.info("Starting Execution Mapper API", env=settings.env, version=__version__)
    yield


def error_response(
    status_code: int,
    code: str,
    message: str,
    field: str | None = None,
    details: dict[str, Any] | None = None,
) -> ORJSONResponse:
    """Build the ``{"error": {...}}`` envelope shared by every handler."""
    error: dict[str, Any] = {"code": code, "message": message}
    if field:
        error["field"] = field
    if details:
        error["details"] = details
    return ORJSONResponse(status_code=status_code, content={"error": error})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Execution Mapper",
        description="Turn SEO/AEO audit issues into phased execution plans",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # First added = last executed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api")
    app.include_router(v1.router, prefix="/v1")

    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MapperError)
    async def mapper_error_handler(request: Request, exc: MapperError) -> ORJSONResponse:
        logger.warning(
            "Application error",
            error_code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return error_response(exc.status_code, exc.code, exc.message, exc.field, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        errors = exc.errors()
        first_error = errors[0] if errors else {}
        # Drop the leading "body" location segment
        field = ".".join(str(loc) for loc in first_error.get("loc", [])[1:])

        logger.warning("Validation error", path=request.url.path, error_count=len(errors))
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "validation_error",
            first_error.get("msg", "Validation error"),
            field=field,
            details={"error_count": len(errors)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )


app = create_app()
