"""
Tests for application wiring and the console entry point.
"""
import pytest

from config import Config
from domain.result import Failure, Success
from main import build_app, run
from services.storage import MemoryStore


def make_config(**overrides):
    values = {"STORAGE_BACKEND": "memory", "TAX_RATE": 0.2}
    values.update(overrides)
    return Config(_env_file=None, **values)


class TestConfig:
    def test_defaults_and_normalization(self):
        cfg = make_config(API_BASE_URL=" https://example.com/api/ ", LOG_LEVEL="debug")
        assert cfg.API_BASE_URL == "https://example.com/api"
        assert cfg.LOG_LEVEL == "DEBUG"

    def test_extra_headers(self):
        cfg = make_config(API_EXTRA_HEADERS="ngrok-skip-browser-warning:true, X-Client: staff")
        assert cfg.API_EXTRA_HEADERS_DICT == {"ngrok-skip-browser-warning": "true", "X-Client": "staff"}

    @pytest.mark.parametrize("field, value", [
        ("API_BASE_URL", "ftp://example.com"),
        ("TAX_RATE", 1.0),
        ("STORAGE_BACKEND", "sqlite"),
        ("API_RETRY_ATTEMPTS", 0),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValueError):
            make_config(**{field: value})


@pytest.mark.asyncio
class TestApp:
    async def test_waiter_screen_uses_configured_tax(self, fake_api):
        app = build_app(make_config(), MemoryStore(), api=fake_api)
        assert app.waiter_screen().cart.tax_rate == 0.2

    async def test_run_logs_in_and_loads_shift_summary(self, fake_api, user_json, menu_item_json, order_json):
        fake_api.respond("POST", "/auth/login", Success({"token": "jwt", "user": user_json(role="chef")}))
        fake_api.respond("GET", "/menu", Success([menu_item_json("m1")]))
        fake_api.respond("GET", "/orders", Success([order_json(status="confirmed")]))
        fake_api.respond("GET", "/orders/stats", Failure.permission("Forbidden"))
        app = build_app(
            make_config(STAFF_EMAIL="chef@example.com", STAFF_PASSWORD="secret"), MemoryStore(), api=fake_api
        )

        assert await run(app) == 0
        assert app.auth.token == "jwt"
        assert fake_api.paths("GET") == ["/menu", "/orders", "/orders", "/orders/stats"]

    async def test_run_without_credentials_fails(self, fake_api):
        app = build_app(make_config(STAFF_EMAIL="", STAFF_PASSWORD=""), MemoryStore(), api=fake_api)
        assert await run(app) == 1
        assert fake_api.calls == []
