"""Configuration model exports.

    from botadmin.config.models import APIConfig, StorageConfig
"""

from botadmin.config.models.api import APIConfig
from botadmin.config.models.auth import AuthConfig
from botadmin.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from botadmin.config.models.seed import SeedConfig
from botadmin.config.models.storage import BotConfigStoreConfig, StorageConfig

__all__ = [
    "APIConfig",
    "AuthConfig",
    "BotConfigStoreConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "SeedConfig",
    "StorageConfig",
    "TracingConfig",
]
