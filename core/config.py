# =============================================================================
# core/config.py  —  Process-wide settings
# =============================================================================
#
# Everything configurable lives in environment variables (optionally loaded
# from a .env file).  Settings are read ONCE, frozen, and shared read-only by
# every request.
#
# API KEYS:
#   OPENWEATHER_API_KEY, EXCHANGE_API_KEY, GOOGLE_TRANSLATE_API_KEY.
#   An unset key switches that domain to its mock provider.
# =============================================================================

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from core.errors import ValidationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_str(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from None


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    """Read-only configuration shared by the tool server, web app and agent."""

    # --- Provider credentials (None → mock provider) ---
    openweather_api_key: Optional[str] = None
    exchange_api_key: Optional[str] = None
    google_translate_api_key: Optional[str] = None

    # --- Upstream endpoints ---
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    exchange_base_url: str = "https://v6.exchangerate-api.com/v6"
    google_translate_base_url: str = "https://translation.googleapis.com/language/translate/v2"

    # --- Aggregation ---
    provider_timeout: float = 10.0     # per branch, seconds
    max_concurrent_calls: int = 8      # fan-out cap per aggregation
    aggregation_budget: float = 30.0   # shared deadline per aggregation, seconds

    # --- Mock data ---
    mock_seed: Optional[int] = None

    # --- HTTP front end ---
    host: str = "127.0.0.1"
    port: int = 3000
    spawn_tool_servers: bool = False

    # --- Misc ---
    log_level: str = "INFO"
    agent_model: str = "openrouter/openai/gpt-4o"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current environment."""
        seed_raw = _env_str("MOCK_SEED")
        settings = cls(
            openweather_api_key=_env_str("OPENWEATHER_API_KEY"),
            exchange_api_key=_env_str("EXCHANGE_API_KEY"),
            google_translate_api_key=_env_str("GOOGLE_TRANSLATE_API_KEY"),
            openweather_base_url=_env_str("OPENWEATHER_BASE_URL") or cls.openweather_base_url,
            exchange_base_url=_env_str("EXCHANGE_BASE_URL") or cls.exchange_base_url,
            google_translate_base_url=(
                _env_str("GOOGLE_TRANSLATE_BASE_URL") or cls.google_translate_base_url
            ),
            provider_timeout=_env_float("PROVIDER_TIMEOUT_SECONDS", cls.provider_timeout),
            max_concurrent_calls=_env_int("MAX_CONCURRENT_CALLS", cls.max_concurrent_calls),
            aggregation_budget=_env_float("AGGREGATION_BUDGET_SECONDS", cls.aggregation_budget),
            mock_seed=_env_int("MOCK_SEED", 0) if seed_raw is not None else None,
            host=_env_str("HOST") or cls.host,
            port=_env_int("PORT", cls.port),
            spawn_tool_servers=_env_bool("SPAWN_TOOL_SERVERS"),
            log_level=(_env_str("LOG_LEVEL") or cls.log_level).upper(),
            agent_model=_env_str("AGENT_MODEL") or cls.agent_model,
        )
        if settings.provider_timeout <= 0:
            raise ValidationError("PROVIDER_TIMEOUT_SECONDS must be positive")
        if settings.max_concurrent_calls < 1:
            raise ValidationError("MAX_CONCURRENT_CALLS must be at least 1")
        return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (if present) and return the process-wide Settings."""
    load_dotenv()
    return Settings.from_env()
