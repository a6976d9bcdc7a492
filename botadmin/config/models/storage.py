"""Storage backend configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

BackendType = Literal["inmemory", "redis"]


class BotConfigStoreConfig(BaseModel):
    """Configuration for the bot configuration document store."""

    backend: BackendType = Field(default="inmemory", description="Backend type")
    connection_url: str | None = Field(
        default=None,
        description="Connection URL (falls back to REDIS_URL for redis)",
    )
    key_prefix: str = Field(
        default="botconfig",
        min_length=1,
        description="Key namespace for documents in Redis",
    )


class StorageConfig(BaseModel):
    """Storage configuration for all stores."""

    bot_config: BotConfigStoreConfig = Field(
        default_factory=BotConfigStoreConfig,
        description="Bot configuration document store",
    )
