"""Unit tests for the application factory and global error handling."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from botadmin.api.app import create_app
from botadmin.api.dependencies import get_config_store, reset_dependencies
from botadmin.botconfig.stores.errors import StoreConnectionError
from botadmin.botconfig.stores.inmemory import InMemoryBotConfigStore


@pytest.fixture(autouse=True)
async def clean_dependencies() -> None:
    await reset_dependencies()


class TestErrorHandlers:
    """Tests for the global exception handlers."""

    def test_store_error_is_internal_error(self, store: InMemoryBotConfigStore) -> None:
        store.get = AsyncMock(  # type: ignore[method-assign]
            side_effect=StoreConnectionError("connection refused")
        )
        app = create_app()
        app.dependency_overrides[get_config_store] = lambda: store

        response = TestClient(app).get("/v1/bot-config/minimal/m1")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "code": "INTERNAL_ERROR",
            "message": "Configuration storage is unavailable",
        }

    def test_unexpected_error_hides_details(self, store: InMemoryBotConfigStore) -> None:
        store.get = AsyncMock(side_effect=KeyError("boom"))  # type: ignore[method-assign]
        app = create_app()
        app.dependency_overrides[get_config_store] = lambda: store

        response = TestClient(app, raise_server_exceptions=False).get(
            "/v1/bot-config/minimal/m1"
        )

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "boom" not in response.text

    def test_query_validation_error(self, store: InMemoryBotConfigStore) -> None:
        app = create_app()
        app.dependency_overrides[get_config_store] = lambda: store

        response = TestClient(app).get("/v1/bot-config", params={"limit": 0})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "INVALID_REQUEST"
        assert body["errors"][0]["field"] == "query.limit"


class TestCreateApp:
    """Tests for settings-driven app wiring."""

    def test_metrics_can_be_disabled(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOTADMIN_OBSERVABILITY__METRICS__ENABLED", "false")

        response = TestClient(create_app()).get("/metrics")

        assert response.status_code == 404

    def test_startup_seeds_configured_merchants(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Merchants listed in seed.merchant_ids get a factory document at startup."""
        monkeypatch.setenv("BOTADMIN_SEED__MERCHANT_IDS", '["merchant_seeded"]')

        with TestClient(create_app()) as client:
            response = client.get("/v1/bot-config/minimal/merchant_seeded")

        assert response.status_code == 200
        assert response.json()["config"]["chatbot_name"] == "Assistant"
