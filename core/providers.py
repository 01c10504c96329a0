# =============================================================================
# core/providers.py  —  Provider selection
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds the live or mock implementation of each provider capability ONCE,
#   at startup, from the Settings:
#
#     OPENWEATHER_API_KEY       set → OpenWeatherProvider     else mock
#     EXCHANGE_API_KEY          set → ExchangeRateApiProvider else mock
#     GOOGLE_TRANSLATE_API_KEY  set → GoogleTranslateProvider else mock
#
#   All live providers share one pooled httpx.AsyncClient, which ProviderSet
#   owns and closes.
# =============================================================================

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

import httpx

from core.aggregator import Aggregator
from core.config import Settings
from core.currency import CurrencyProvider, ExchangeRateApiProvider, MockCurrencyProvider
from core.destinations import DestinationGuide
from core.inventory import TravelInventory
from core.orchestrator import TravelOrchestrator
from core.translation import (
    GoogleTranslateProvider,
    MockTranslationProvider,
    TranslationProvider,
)
from core.weather import MockWeatherProvider, OpenWeatherProvider, WeatherProvider

logger = logging.getLogger(__name__)


@dataclass
class ProviderSet:
    """Everything an operation needs, wired together."""

    weather: WeatherProvider
    currency: CurrencyProvider
    translation: TranslationProvider
    guide: DestinationGuide
    inventory: TravelInventory
    aggregator: Aggregator
    orchestrator: TravelOrchestrator
    client: Optional[httpx.AsyncClient] = None
    owns_client: bool = field(default=False, repr=False)

    @property
    def modes(self) -> dict[str, str]:
        """Which implementation backs each domain ("live" or "mock")."""
        return {
            "weather": self.weather.mode,
            "currency": self.currency.mode,
            "translation": self.translation.mode,
        }

    async def aclose(self) -> None:
        if self.client is not None and self.owns_client:
            await self.client.aclose()


def build_providers(
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
    rng: Optional[random.Random] = None,
) -> ProviderSet:
    """Pick live or mock providers by credential presence.

    Args:
        settings: Process-wide configuration.
        client: Shared HTTP client for live providers.  Created (and later
            closed by ProviderSet.aclose) when a live provider needs one
            and none is given.
        rng: Random source for mock data.  Defaults to one seeded with
            MOCK_SEED, when set.
    """
    rng = rng or random.Random(settings.mock_seed)
    owns_client = False

    needs_client = any((
        settings.openweather_api_key,
        settings.exchange_api_key,
        settings.google_translate_api_key,
    ))
    if needs_client and client is None:
        client = httpx.AsyncClient(
            timeout=settings.provider_timeout,
            limits=httpx.Limits(max_connections=settings.max_concurrent_calls * 2),
        )
        owns_client = True

    fallback_weather = MockWeatherProvider(rng)

    if settings.openweather_api_key:
        weather: WeatherProvider = OpenWeatherProvider(
            settings.openweather_api_key,
            client,
            base_url=settings.openweather_base_url,
            timeout=settings.provider_timeout,
        )
    else:
        logger.info("OPENWEATHER_API_KEY not set; using mock weather data")
        weather = fallback_weather

    if settings.exchange_api_key:
        currency: CurrencyProvider = ExchangeRateApiProvider(
            settings.exchange_api_key,
            client,
            base_url=settings.exchange_base_url,
            timeout=settings.provider_timeout,
            rng=rng,
        )
    else:
        logger.info("EXCHANGE_API_KEY not set; using mock exchange rates")
        currency = MockCurrencyProvider(rng)

    if settings.google_translate_api_key:
        translation: TranslationProvider = GoogleTranslateProvider(
            settings.google_translate_api_key,
            client,
            base_url=settings.google_translate_base_url,
            timeout=settings.provider_timeout,
        )
    else:
        logger.info("GOOGLE_TRANSLATE_API_KEY not set; using mock translations")
        translation = MockTranslationProvider()

    guide = DestinationGuide(rng)
    inventory = TravelInventory(rng)
    aggregator = Aggregator.from_settings(settings)
    orchestrator = TravelOrchestrator(
        weather=weather,
        currency=currency,
        guide=guide,
        inventory=inventory,
        aggregator=aggregator,
        fallback_weather=fallback_weather,
    )

    return ProviderSet(
        weather=weather,
        currency=currency,
        translation=translation,
        guide=guide,
        inventory=inventory,
        aggregator=aggregator,
        orchestrator=orchestrator,
        client=client,
        owns_client=owns_client,
    )
