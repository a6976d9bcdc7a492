"""Configuration loading for botadmin.

Configuration is loaded from TOML files with environment variable overrides.

Usage:
    from botadmin.config import get_settings

    settings = get_settings()
    port = settings.api.port
"""

from functools import lru_cache

from botadmin.config.loader import load_config
from botadmin.config.settings import Settings, set_toml_config
from botadmin.observability.logging import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{BOTADMIN_ENV}.toml (environment overrides)
    4. BOTADMIN_* environment variables (runtime overrides)

    Without a config/default.toml only defaults and environment variables
    apply. The result is cached; call `get_settings.cache_clear()` to reload.
    """
    try:
        set_toml_config(load_config())
    except FileNotFoundError:
        logger.warning("config_file_not_found", msg="Using default configuration")
        set_toml_config({})

    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
