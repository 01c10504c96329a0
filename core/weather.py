# =============================================================================
# core/weather.py  —  Weather Provider Capability
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Provides current conditions and a daily forecast for a destination,
#   either from the LIVE OpenWeatherMap API or from randomized MOCK data,
#   plus weather alerts and a multi-destination comparison.
#
# DATA SOURCE TOGGLE:
#   core/providers.py builds OpenWeatherProvider when OPENWEATHER_API_KEY is
#   set and MockWeatherProvider otherwise.  Both return the same
#   WeatherSnapshot dataclass, so nothing downstream knows which one ran.
#
# FORECAST SHAPE:
#   forecast holds exactly one entry per calendar day from start to end
#   (both inclusive), oldest first.  No dates → no forecast, current only.
# =============================================================================

import asyncio
import logging
import random
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import Optional

import httpx

from core.models import (
    CurrentWeather,
    DayForecast,
    DestinationWeather,
    WeatherAlerts,
    WeatherSnapshot,
)
from core.upstream import malformed, request_json

logger = logging.getLogger(__name__)

UNITS = ("metric", "imperial")

_MOCK_CONDITIONS = ["Sunny", "Partly Cloudy", "Cloudy", "Light Rain", "Clear"]


def _celsius_to_fahrenheit(celsius: float) -> int:
    """Convert Celsius to Fahrenheit, rounded to nearest integer."""
    return round(celsius * 9 / 5 + 32)


def _kmh_to_mph(kmh: float) -> int:
    """Convert km/h to mph, rounded to nearest integer."""
    return round(kmh * 0.621371)


def date_range(start: date, end: date) -> list[date]:
    """Every calendar day from start to end, both inclusive."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


# =============================================================================
# The capability interface
# =============================================================================
class WeatherProvider(ABC):
    """Weather data for travel planning."""

    name = "weather"
    mode = "abstract"

    @abstractmethod
    async def get_weather(
        self,
        destination: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        units: str = "metric",
    ) -> WeatherSnapshot:
        """Current conditions, plus a daily forecast when both dates are given."""

    @abstractmethod
    async def get_alerts(self, destination: str) -> WeatherAlerts:
        """Active weather alerts (possibly none)."""


# =============================================================================
# MOCK PROVIDER
# =============================================================================
class MockWeatherProvider(WeatherProvider):
    """Randomized weather with a realistic shape.

    Base temperature 15–29 °C, daily temperatures within ±5 of it, humidity
    40–79 %, wind 5–24 km/h.  Pass a seeded random.Random for repeatable
    output.
    """

    mode = "mock"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def get_weather(self, destination, start=None, end=None, units="metric"):
        rng = self._rng
        base_temp = rng.randint(15, 29)
        current = CurrentWeather(
            temperature=base_temp,
            conditions=rng.choice(_MOCK_CONDITIONS),
            humidity=rng.randint(40, 79),
            wind_speed=rng.randint(5, 24),
        )

        forecast = []
        if start and end:
            for day in date_range(start, end):
                forecast.append(DayForecast(
                    date=day.isoformat(),
                    temperature=base_temp + rng.randint(0, 9) - 5,
                    conditions=rng.choice(_MOCK_CONDITIONS),
                ))

        if units == "imperial":
            current.temperature = _celsius_to_fahrenheit(current.temperature)
            current.wind_speed = _kmh_to_mph(current.wind_speed)
            for day in forecast:
                day.temperature = _celsius_to_fahrenheit(day.temperature)

        return WeatherSnapshot(current=current, forecast=forecast, units=units)

    async def get_alerts(self, destination):
        return WeatherAlerts(destination=destination, message="No active weather alerts")


# =============================================================================
# LIVE PROVIDER: OpenWeatherMap
# =============================================================================
class OpenWeatherProvider(WeatherProvider):
    """OpenWeatherMap 2.5 API (current weather + 5 day / 3 hour forecast).

    The forecast endpoint returns 3-hourly slots; we keep the slot closest
    to midday for each requested day.  Days beyond the 5-day horizon are
    simply absent from the live forecast.
    """

    mode = "live"
    provider_name = "OpenWeatherMap"

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _get(self, path: str, **params) -> dict:
        return await request_json(
            self._client,
            self.provider_name,
            "GET",
            f"{self._base_url}{path}",
            timeout=self._timeout,
            params={**params, "appid": self._api_key},
        )

    async def get_weather(self, destination, start=None, end=None, units="metric"):
        if start and end:
            current_data, forecast_data = await asyncio.gather(
                self._get("/weather", q=destination, units=units),
                self._get("/forecast", q=destination, units=units, cnt=40),
            )
        else:
            current_data = await self._get("/weather", q=destination, units=units)
            forecast_data = None

        try:
            current = CurrentWeather(
                temperature=current_data["main"]["temp"],
                conditions=current_data["weather"][0]["description"],
                humidity=current_data["main"]["humidity"],
                wind_speed=current_data["wind"]["speed"],
            )
            forecast = (
                _daily_forecast(forecast_data["list"], start, end)
                if forecast_data is not None else []
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise malformed(self.provider_name, exc) from exc

        return WeatherSnapshot(current=current, forecast=forecast, units=units)

    async def get_alerts(self, destination):
        # Alerts need the paid One Call 3.0 API.
        return WeatherAlerts(
            destination=destination,
            message="Weather alerts not available in free tier",
        )


def _daily_forecast(slots: list[dict], start: date, end: date) -> list[DayForecast]:
    """Collapse 3-hourly forecast slots into one entry per day in [start, end]."""
    best: dict[date, tuple[int, dict]] = {}
    for slot in slots:
        moment = datetime.strptime(slot["dt_txt"], "%Y-%m-%d %H:%M:%S")
        day = moment.date()
        if not (start <= day <= end):
            continue
        distance = abs(moment.hour - 12)
        if day not in best or distance < best[day][0]:
            best[day] = (distance, slot)

    return [
        DayForecast(
            date=day.isoformat(),
            temperature=slot["main"]["temp"],
            conditions=slot["weather"][0]["description"],
        )
        for day, (_, slot) in sorted(best.items())
    ]


# =============================================================================
# Multi-destination comparison
# =============================================================================
async def compare_destination_weather(
    provider: WeatherProvider,
    aggregator,
    destinations: list[str],
    on_date: Optional[date] = None,
) -> list:
    """Weather for several destinations, one slot per input, in input order.

    When on_date is given and the forecast covers it, that day's temperature
    and conditions replace the current ones.  A destination whose lookup
    fails becomes a DestinationFailure; the others are unaffected.
    """

    async def fetch(destination: str) -> DestinationWeather:
        snapshot = await provider.get_weather(destination, on_date, on_date)
        temperature = snapshot.current.temperature
        conditions = snapshot.current.conditions
        if on_date is not None:
            for day in snapshot.forecast:
                if day.date == on_date.isoformat():
                    temperature, conditions = day.temperature, day.conditions
        return DestinationWeather(
            destination=destination,
            temperature=temperature,
            conditions=conditions,
            humidity=snapshot.current.humidity,
            wind_speed=snapshot.current.wind_speed,
        )

    return await aggregator.per_destination(
        destinations, fetch, "Unable to fetch weather data"
    )
