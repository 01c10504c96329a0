# tests/conftest.py

import random
from typing import Optional

import pytest

from core.aggregator import Aggregator
from core.config import Settings
from core.errors import ProviderError
from core.operations import TravelOperations
from core.providers import build_providers
from core.weather import MockWeatherProvider, WeatherProvider


class FailingWeatherProvider(WeatherProvider):
    """Raises ProviderError for the listed destinations (all when None)."""

    mode = "live"

    def __init__(self, fail_for: Optional[set] = None, message: str = "boom"):
        self.fail_for = fail_for
        self.message = message
        self.calls = []
        self._mock = MockWeatherProvider(random.Random(0))

    def _fails(self, destination):
        return self.fail_for is None or destination in self.fail_for

    async def get_weather(self, destination, start=None, end=None, units="metric"):
        self.calls.append(destination)
        if self._fails(destination):
            raise ProviderError("OpenWeatherMap", self.message)
        return await self._mock.get_weather(destination, start, end, units)

    async def get_alerts(self, destination):
        if self._fails(destination):
            raise ProviderError("OpenWeatherMap", self.message)
        return await self._mock.get_alerts(destination)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def aggregator():
    return Aggregator(timeout=5.0, limit=8, budget=10.0)


@pytest.fixture
def providers():
    return build_providers(Settings(), rng=random.Random(1234))


@pytest.fixture
def operations(providers):
    return TravelOperations(providers)


@pytest.fixture
def failing_weather_cls():
    return FailingWeatherProvider
