"""Unit tests for configuration loading."""

import pytest
from pydantic import ValidationError

from flexdata.core.config import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.api_prefix == "/api/v1"
    assert settings.admin_prefix == "/admin/v1"
    assert settings.order_key_step == 1000.0
    assert settings.default_theme_color == "#2563EB"
    assert settings.is_development


def test_environment_variables_use_prefix(monkeypatch):
    monkeypatch.setenv("FLEXDATA_ORDER_KEY_STEP", "50")
    monkeypatch.setenv("FLEXDATA_EXTERNAL_URL", "https://cms.example.com/")

    settings = Settings(_env_file=None)

    assert settings.order_key_step == 50.0
    assert settings.external_url == "https://cms.example.com"


def test_cors_origins_accept_comma_separated_string():
    settings = Settings(_env_file=None, cors_origins="https://a.example, https://b.example")

    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_sqlite_rejects_multiple_workers():
    with pytest.raises(ValidationError, match="SQLite does not support multiple worker"):
        Settings(_env_file=None, workers=2, database_url="sqlite+aiosqlite:///./x.db")


def test_order_key_step_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, order_key_step=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()
