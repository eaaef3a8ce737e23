"""FastAPI application factory and main entrypoint."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response

from analyzer import __version__
from api.config import get_settings
from api.exceptions import AnalyzerError, ErrorCategory
from api.logging import setup_logging
from api.metrics import (
    MetricsMiddleware,
    get_metrics,
    get_metrics_content_type,
    record_analysis_failure,
)
from api.rate_limit import InMemoryRateLimiter
from api.sentry import capture_exception, init_sentry

# Initialize logging
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(
        "api_starting",
        env=settings.env,
        debug=settings.debug,
        version=__version__,
        narrative_enabled=settings.narrative_enabled,
        rate_limit_enabled=settings.rate_limit_enabled,
    )
    init_sentry(settings)
    yield
    logger.info("api_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="AI Readiness Analyzer",
        description="Score how ready a web page is to be cited by AI search assistants",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    app.state.rate_limiter = InMemoryRateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    # First added = innermost; CORS is added last so it runs first
    from api.middleware import LoggingMiddleware, RequestIDMiddleware, SecurityHeadersMiddleware

    if settings.metrics_enabled:
        app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    from api.routers import health, v1

    app.include_router(health.router, prefix="/api")
    app.include_router(v1.router, prefix="/v1")

    if settings.metrics_enabled:

        @app.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus scrape endpoint."""
            return Response(content=get_metrics(), media_type=get_metrics_content_type())

    return app


def _error_response(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    details: dict | None = None,
) -> ORJSONResponse:
    error: dict = {"code": code, "message": message, "category": category.value}
    if details:
        error["details"] = details
    return ORJSONResponse(status_code=status_code, content={"error": error})


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(AnalyzerError)
    async def analyzer_error_handler(request: Request, exc: AnalyzerError) -> ORJSONResponse:
        logger.warning(
            "request_failed",
            error_code=exc.code,
            category=exc.category.value,
            message=exc.message,
            path=request.url.path,
        )
        record_analysis_failure(exc.category.value, exc.code)
        response = ORJSONResponse(status_code=exc.status_code, content={"error": exc.to_dict()})
        retry_after = exc.details.get("retry_after")
        if retry_after is not None:
            response.headers["Retry-After"] = str(retry_after)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        errors = exc.errors()
        first_error = errors[0] if errors else {"msg": "Validation error"}
        logger.warning("request_validation_failed", path=request.url.path, errors=len(errors))
        return _error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "validation_error",
            str(first_error.get("msg", "Validation error")),
            ErrorCategory.INVALID_INPUT,
            {"fields": [".".join(str(loc) for loc in e.get("loc", [])[1:]) for e in errors]},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            "unhandled_exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )
        capture_exception(exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An internal analysis error occurred. Please try again.",
            ErrorCategory.INTERNAL,
        )


app = create_app()
