"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, startup seeding and route registration.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from pydantic import ValidationError

from botadmin import __version__
from botadmin.api.dependencies import (
    get_config_service,
    get_config_store,
    reset_dependencies,
)
from botadmin.api.exceptions import BotAdminAPIError, InternalError, from_domain_error
from botadmin.api.middleware.auth import JWTSecretNotConfiguredError, get_jwt_secret
from botadmin.api.models.errors import ErrorCode, ErrorDetail, ErrorResponse
from botadmin.api.routes import register_routes
from botadmin.botconfig.errors import BotConfigError
from botadmin.botconfig.stores.errors import StoreError
from botadmin.config import get_settings
from botadmin.config.settings import Settings
from botadmin.observability.logging import get_logger, setup_logging
from botadmin.observability.middleware import RequestContextMiddleware

logger = get_logger(__name__)


async def seed_merchants(settings: Settings) -> list[str]:
    """Create factory documents for the configured merchants that lack one.

    Returns:
        Merchant ids that were actually seeded
    """
    service = get_config_service(get_config_store(settings))
    seeded = []
    for merchant_id in settings.seed.merchant_ids:
        created = await service.seed_default(
            merchant_id, source=settings.seed.default_document
        )
        if created is not None:
            seeded.append(merchant_id)
    return seeded


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
    settings = get_settings()
    try:
        get_jwt_secret(settings)
    except JWTSecretNotConfiguredError:
        logger.warning(
            "auth_secret_not_configured",
            env_var=settings.auth.secret_env_var,
        )

    if settings.seed.merchant_ids:
        seeded = await seed_merchants(settings)
        logger.info("startup_seed_completed", seeded=seeded)

    yield

    await reset_dependencies()
    logger.info("app_shutdown")


def _validation_details(errors: list[dict]) -> list[ErrorDetail]:
    return [
        ErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
        )
        for error in errors
    ]


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a fully configured FastAPI app with:
    - CORS middleware
    - Request context middleware
    - Global exception handlers
    - OpenTelemetry instrumentation (when tracing is enabled)
    - All API routes registered

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()
    log_config = settings.observability.logging
    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    app = FastAPI(
        title="Bot Admin API",
        description="Per-merchant chatbot configuration management",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    register_routes(app, metrics_enabled=settings.observability.metrics.enabled)

    if settings.observability.tracing.enabled:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        environment=settings.environment,
        debug=settings.debug,
        store_backend=settings.storage.bot_config.backend,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(BotAdminAPIError)
    async def botadmin_api_error_handler(
        request: Request, exc: BotAdminAPIError
    ) -> JSONResponse:
        """Handle BotAdminAPIError and its subclasses."""
        logger.warning(
            "api_error",
            error_code=exc.error_code.value,
            message=exc.message,
            path=request.url.path,
        )

        response = ErrorResponse(
            code=exc.error_code,
            message=exc.message,
            errors=exc.details,
        )
        return JSONResponse(status_code=exc.status_code, content=response.to_content())

    @app.exception_handler(BotConfigError)
    async def botconfig_error_handler(
        request: Request, exc: BotConfigError
    ) -> JSONResponse:
        """Handle configuration domain errors via their API counterpart."""
        return await botadmin_api_error_handler(request, from_domain_error(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle FastAPI request validation errors."""
        logger.warning(
            "request_validation_error",
            error_count=len(exc.errors()),
            path=request.url.path,
        )

        response = ErrorResponse(
            code=ErrorCode.INVALID_REQUEST,
            message="Request validation failed",
            errors=_validation_details(list(exc.errors())),
        )
        return JSONResponse(status_code=400, content=response.to_content())

    @app.exception_handler(ValidationError)
    async def pydantic_validation_error_handler(
        request: Request, exc: ValidationError
    ) -> JSONResponse:
        """Handle pydantic errors raised while building documents."""
        logger.warning(
            "pydantic_validation_error",
            error_count=exc.error_count(),
            path=request.url.path,
        )

        response = ErrorResponse(
            code=ErrorCode.INVALID_REQUEST,
            message="Data validation failed",
            errors=_validation_details(exc.errors()),
        )
        return JSONResponse(status_code=400, content=response.to_content())

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        """Handle persistence failures."""
        logger.error(
            "store_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        return await botadmin_api_error_handler(
            request, InternalError("Configuration storage is unavailable")
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        response = ErrorResponse(
            code=ErrorCode.INTERNAL_ERROR,
            message="An unexpected error occurred",
        )
        return JSONResponse(status_code=500, content=response.to_content())

    logger.debug("exception_handlers_registered")


# Create the app instance for uvicorn
app = create_app()
