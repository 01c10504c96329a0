# tests/test_weather.py

import random
from datetime import date, timedelta

import httpx
import pytest

from core.errors import ProviderError
from core.models import DestinationFailure, DestinationWeather
from core.weather import (
    MockWeatherProvider,
    OpenWeatherProvider,
    compare_destination_weather,
    date_range,
)

BASE_URL = "https://weather.test/data/2.5"


def test_date_range_is_inclusive():
    days = date_range(date(2024, 6, 1), date(2024, 6, 8))
    assert len(days) == 8
    assert days[0] == date(2024, 6, 1)
    assert days[-1] == date(2024, 6, 8)


async def test_mock_forecast_has_one_entry_per_day():
    provider = MockWeatherProvider(random.Random(5))
    snapshot = await provider.get_weather("Tokyo", date(2024, 6, 1), date(2024, 6, 8))

    dates = [day.date for day in snapshot.forecast]
    expected = [(date(2024, 6, 1) + timedelta(days=i)).isoformat() for i in range(8)]
    assert dates == expected
    assert snapshot.units == "metric"


async def test_mock_values_stay_in_realistic_ranges():
    provider = MockWeatherProvider(random.Random(11))
    snapshot = await provider.get_weather("Paris", date(2024, 7, 1), date(2024, 7, 10))
    current = snapshot.current

    assert 15 <= current.temperature <= 29
    assert 40 <= current.humidity <= 79
    assert 5 <= current.wind_speed <= 24
    for day in snapshot.forecast:
        assert current.temperature - 5 <= day.temperature <= current.temperature + 4


async def test_mock_without_dates_has_no_forecast():
    snapshot = await MockWeatherProvider(random.Random(1)).get_weather("Paris")
    assert snapshot.forecast == []


async def test_mock_imperial_converts_units():
    metric = await MockWeatherProvider(random.Random(3)).get_weather("Rome")
    imperial = await MockWeatherProvider(random.Random(3)).get_weather("Rome", units="imperial")

    assert imperial.units == "imperial"
    assert imperial.current.temperature == round(metric.current.temperature * 9 / 5 + 32)
    assert imperial.current.wind_speed == round(metric.current.wind_speed * 0.621371)


async def test_mock_alerts():
    alerts = await MockWeatherProvider().get_alerts("Paris")
    assert alerts.alerts == []
    assert alerts.message == "No active weather alerts"


# -----------------------------------------------------------------------------
# OpenWeatherMap over a mock transport
# -----------------------------------------------------------------------------
def _slot(stamp, temp, description):
    return {"dt_txt": stamp, "main": {"temp": temp}, "weather": [{"description": description}]}


def _openweather_handler(request: httpx.Request) -> httpx.Response:
    assert request.url.params["appid"] == "secret"
    assert request.url.params["q"] == "Paris"
    if request.url.path.endswith("/weather"):
        return httpx.Response(200, json={
            "main": {"temp": 18.5, "humidity": 70},
            "weather": [{"description": "scattered clouds"}],
            "wind": {"speed": 4.1},
        })
    if request.url.path.endswith("/forecast"):
        assert request.url.params["cnt"] == "40"
        return httpx.Response(200, json={"list": [
            _slot("2024-06-01 09:00:00", 16.0, "mist"),
            _slot("2024-06-01 12:00:00", 21.0, "clear sky"),
            _slot("2024-06-01 15:00:00", 22.0, "few clouds"),
            _slot("2024-06-02 12:00:00", 19.0, "light rain"),
            _slot("2024-06-03 12:00:00", 25.0, "clear sky"),
        ]})
    return httpx.Response(404, json={"message": "not found"})


def _live(handler) -> OpenWeatherProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenWeatherProvider("secret", client, base_url=BASE_URL, timeout=2.0)


async def test_openweather_current_and_daily_forecast():
    provider = _live(_openweather_handler)
    snapshot = await provider.get_weather("Paris", date(2024, 6, 1), date(2024, 6, 2))

    assert snapshot.current.temperature == 18.5
    assert snapshot.current.conditions == "scattered clouds"
    assert snapshot.current.humidity == 70
    assert [(d.date, d.temperature, d.conditions) for d in snapshot.forecast] == [
        ("2024-06-01", 21.0, "clear sky"),
        ("2024-06-02", 19.0, "light rain"),
    ]


async def test_openweather_upstream_error_becomes_provider_error():
    provider = _live(lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"}))

    with pytest.raises(ProviderError) as excinfo:
        await provider.get_weather("Paris")

    assert excinfo.value.provider == "OpenWeatherMap"
    assert excinfo.value.message == "city not found"


async def test_openweather_malformed_payload():
    provider = _live(lambda request: httpx.Response(200, json={"weather": []}))

    with pytest.raises(ProviderError, match="malformed payload"):
        await provider.get_weather("Paris")


async def test_openweather_non_json_body():
    provider = _live(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ProviderError, match="malformed JSON payload"):
        await provider.get_weather("Paris")


async def test_openweather_alerts_not_in_free_tier():
    provider = _live(_openweather_handler)
    alerts = await provider.get_alerts("Paris")
    assert alerts.message == "Weather alerts not available in free tier"


# -----------------------------------------------------------------------------
# Multi-destination comparison
# -----------------------------------------------------------------------------
async def test_compare_destination_weather_isolates_failures(aggregator, failing_weather_cls):
    provider = failing_weather_cls(fail_for={"Atlantis"})

    results = await compare_destination_weather(
        provider, aggregator, ["Paris", "Atlantis", "Tokyo"], date(2024, 6, 1)
    )

    assert [r.destination for r in results] == ["Paris", "Atlantis", "Tokyo"]
    assert isinstance(results[0], DestinationWeather)
    assert isinstance(results[2], DestinationWeather)
    assert isinstance(results[1], DestinationFailure)
    assert results[1].error.startswith("Unable to fetch weather data")
    assert "boom" in results[1].error
