"""Health check and metrics endpoints."""

import time

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from botadmin import __version__
from botadmin.api.dependencies import BotConfigStoreDep
from botadmin.api.models.health import ComponentHealth, HealthResponse
from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.errors import StoreError
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()
metrics_router = APIRouter()


async def _check_store_health(store: BotConfigStore, name: str) -> ComponentHealth:
    """Probe a store with a one-item listing."""
    start = time.perf_counter()
    try:
        await store.list(limit=1)
    except StoreError as e:
        logger.warning("health_check_store_failed", component=name, error=str(e))
        return ComponentHealth(
            name=name,
            status="unhealthy",
            latency_ms=(time.perf_counter() - start) * 1000,
            message=str(e),
        )

    return ComponentHealth(
        name=name,
        status="healthy",
        latency_ms=(time.perf_counter() - start) * 1000,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(config_store: BotConfigStoreDep) -> HealthResponse:
    """Report service health along with each backing component."""
    components = [await _check_store_health(config_store, "config_store")]
    healthy = all(c.status == "healthy" for c in components)

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        components=components,
    )


@metrics_router.get("/metrics")
async def get_metrics() -> Response:
    """Expose Prometheus metrics in text format for scraping."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
