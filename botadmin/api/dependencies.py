"""Dependency injection for API routes.

Provides FastAPI dependencies for settings, the configuration store and the
configuration service. Instances are created once and reused; tests
override them via `app.dependency_overrides`.
"""

import os
from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends

from botadmin.botconfig.service import BotConfigService
from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.inmemory import InMemoryBotConfigStore
from botadmin.botconfig.stores.redis import RedisBotConfigStore
from botadmin.config import get_settings
from botadmin.config.settings import Settings
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)

_redis_client: redis.Redis | None = None
_config_store: BotConfigStore | None = None


def get_redis_client(settings: Settings) -> redis.Redis:
    """Get the shared Redis client, creating it on first use."""
    global _redis_client
    if _redis_client is None:
        url = (
            settings.storage.bot_config.connection_url
            or os.environ.get("REDIS_URL", "redis://localhost:6379")
        )
        _redis_client = redis.from_url(url, decode_responses=True)
        logger.info("redis_client_created", url=url.split("@")[-1])  # Log without credentials
    return _redis_client


def get_config_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BotConfigStore:
    """Get the BotConfigStore selected by `storage.bot_config.backend`."""
    global _config_store
    if _config_store is None:
        store_config = settings.storage.bot_config
        if store_config.backend == "redis":
            _config_store = RedisBotConfigStore(
                get_redis_client(settings),
                key_prefix=store_config.key_prefix,
            )
        else:
            _config_store = InMemoryBotConfigStore()
        logger.info("config_store_initialized", store_type=store_config.backend)
    return _config_store


def get_config_service(
    store: Annotated[BotConfigStore, Depends(get_config_store)],
) -> BotConfigService:
    """Get a BotConfigService bound to the configured store."""
    return BotConfigService(store)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
BotConfigStoreDep = Annotated[BotConfigStore, Depends(get_config_store)]
BotConfigServiceDep = Annotated[BotConfigService, Depends(get_config_service)]


async def reset_dependencies() -> None:
    """Reset all cached dependencies, closing connections first."""
    global _redis_client, _config_store

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None

    _config_store = None
    get_settings.cache_clear()
