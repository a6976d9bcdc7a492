"""Bot configuration document stores."""

from botadmin.botconfig.store import BotConfigStore
from botadmin.botconfig.stores.errors import (
    DuplicateDocumentError,
    RevisionConflictError,
    StoreConnectionError,
    StoreError,
)
from botadmin.botconfig.stores.inmemory import InMemoryBotConfigStore
from botadmin.botconfig.stores.redis import RedisBotConfigStore

__all__ = [
    "BotConfigStore",
    "DuplicateDocumentError",
    "InMemoryBotConfigStore",
    "RedisBotConfigStore",
    "RevisionConflictError",
    "StoreConnectionError",
    "StoreError",
]
