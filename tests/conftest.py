"""Shared test fixtures for the botadmin test suite."""

import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

os.environ.setdefault("BOTADMIN_ENV", "test")

from botadmin.botconfig.models import Actor, BotConfigDocument  # noqa: E402
from botadmin.botconfig.seed import build_default_document  # noqa: E402
from botadmin.botconfig.stores.inmemory import InMemoryBotConfigStore  # noqa: E402

MERCHANT_ID = "merchant_12345"
JWT_SECRET = "test-secret-key"


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "debug = true",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            original = self.original_env[key]
            if original is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"BOTADMIN_DEBUG": "true"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from botadmin.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def document() -> BotConfigDocument:
    """Factory document for the default merchant."""
    return build_default_document(MERCHANT_ID)


@pytest.fixture
def actor() -> Actor:
    """Authenticated caller."""
    return Actor(id="user-1", name="Jane Doe", email="jane@example.com", role="merchant")


@pytest.fixture
def store() -> InMemoryBotConfigStore:
    """Empty in-memory document store."""
    return InMemoryBotConfigStore()


@pytest.fixture
async def seeded_store(
    store: InMemoryBotConfigStore,
    document: BotConfigDocument,
) -> InMemoryBotConfigStore:
    """In-memory store holding the default merchant's factory document."""
    await store.create(document)
    return store


@pytest.fixture
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> str:
    """Install the JWT signing secret in the environment."""
    monkeypatch.setenv("BOTADMIN_JWT_SECRET", JWT_SECRET)
    return JWT_SECRET
