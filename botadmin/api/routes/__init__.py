"""API route registration.

Helpers for registering API routers with the FastAPI application.
"""

from fastapi import APIRouter, FastAPI

from botadmin.observability.logging import get_logger

logger = get_logger(__name__)


def create_v1_router() -> APIRouter:
    """Create the v1 API router with all versioned routes."""
    router = APIRouter(prefix="/v1")

    from botadmin.api.routes.bot_config import router as bot_config_router

    router.include_router(bot_config_router, tags=["Bot Configuration"])

    logger.debug("v1_router_created", routes=["bot-config"])

    return router


def register_routes(app: FastAPI, *, metrics_enabled: bool = True) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        metrics_enabled: Whether to expose GET /metrics
    """
    app.include_router(create_v1_router())

    # Health routes live at root level
    from botadmin.api.routes.health import metrics_router
    from botadmin.api.routes.health import router as health_router

    app.include_router(health_router, tags=["Health"])
    if metrics_enabled:
        app.include_router(metrics_router, tags=["Health"])

    logger.info("routes_registered")
