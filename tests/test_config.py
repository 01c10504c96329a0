# tests/test_config.py

import pytest

from core.config import Settings
from core.errors import ValidationError

ENV_NAMES = (
    "OPENWEATHER_API_KEY",
    "EXCHANGE_API_KEY",
    "GOOGLE_TRANSLATE_API_KEY",
    "PROVIDER_TIMEOUT_SECONDS",
    "MAX_CONCURRENT_CALLS",
    "AGGREGATION_BUDGET_SECONDS",
    "MOCK_SEED",
    "HOST",
    "PORT",
    "SPAWN_TOOL_SERVERS",
    "LOG_LEVEL",
    "AGENT_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    settings = Settings.from_env()

    assert settings.openweather_api_key is None
    assert settings.exchange_api_key is None
    assert settings.google_translate_api_key is None
    assert settings.port == 3000
    assert settings.provider_timeout == 10.0
    assert settings.mock_seed is None
    assert settings.spawn_tool_servers is False


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("OPENWEATHER_API_KEY", "  abc  ")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("MOCK_SEED", "42")
    monkeypatch.setenv("SPAWN_TOOL_SERVERS", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.openweather_api_key == "abc"
    assert settings.port == 8080
    assert settings.mock_seed == 42
    assert settings.spawn_tool_servers is True
    assert settings.log_level == "DEBUG"


def test_blank_key_counts_as_unset(monkeypatch):
    monkeypatch.setenv("EXCHANGE_API_KEY", "   ")
    assert Settings.from_env().exchange_api_key is None


def test_bad_number_is_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "eighty")
    with pytest.raises(ValidationError, match="PORT must be an integer"):
        Settings.from_env()


def test_non_positive_timeout_is_rejected(monkeypatch):
    monkeypatch.setenv("PROVIDER_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings.from_env()


def test_settings_are_frozen():
    settings = Settings()
    with pytest.raises(AttributeError):
        settings.port = 1
