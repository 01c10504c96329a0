# =============================================================================
# core/operations.py  —  The 14 travel operations behind one dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   TravelOperations.call(name, arguments) is the single entry point used by
#   both the MCP tool server and the HTTP front end:
#
#     1. validate arguments into the operation's request type
#        (core/requests.py)
#     2. run the operation against the providers / orchestrator
#     3. return a JSON-ready payload (camelCase keys)
#
#   Errors propagate as core.errors exceptions; each surface decides how to
#   present them.
# =============================================================================

import logging
from typing import Any, Awaitable, Callable, Optional

from core.currency import convert_budget
from core.providers import ProviderSet
from core.requests import parse_request
from core.serialization import to_payload
from core.weather import compare_destination_weather

logger = logging.getLogger(__name__)

# Which data domain each operation belongs to, for error messages.
OPERATION_DOMAINS: dict[str, str] = {
    "plan_trip": "Travel planning",
    "get_travel_insights": "Travel planning",
    "compare_destinations": "Travel planning",
    "get_travel_weather": "Weather API",
    "get_weather_alerts": "Weather API",
    "compare_destination_weather": "Weather API",
    "convert_currency": "Currency API",
    "get_destination_currency": "Currency API",
    "get_travel_budget_conversion": "Currency API",
    "get_currency_trends": "Currency API",
    "translate_text": "Translation API",
    "detect_language": "Translation API",
    "get_travel_phrases": "Translation API",
    "translate_destination_info": "Translation API",
}


class TravelOperations:
    """Validates, dispatches and serialises every travel operation."""

    def __init__(self, providers: ProviderSet):
        self.providers = providers
        self._handlers: dict[str, Callable[[Any], Awaitable[Any]]] = {
            "plan_trip": self._plan_trip,
            "get_travel_insights": self._get_travel_insights,
            "compare_destinations": self._compare_destinations,
            "get_travel_weather": self._get_travel_weather,
            "get_weather_alerts": self._get_weather_alerts,
            "compare_destination_weather": self._compare_destination_weather,
            "convert_currency": self._convert_currency,
            "get_destination_currency": self._get_destination_currency,
            "get_travel_budget_conversion": self._get_travel_budget_conversion,
            "get_currency_trends": self._get_currency_trends,
            "translate_text": self._translate_text,
            "detect_language": self._detect_language,
            "get_travel_phrases": self._get_travel_phrases,
            "translate_destination_info": self._translate_destination_info,
        }

    @property
    def names(self) -> list[str]:
        return list(self._handlers)

    async def call(self, name: str, arguments: Optional[dict] = None) -> Any:
        """Run operation ``name`` and return its JSON-ready result.

        Raises:
            ValidationError: unknown operation or invalid arguments.
            ProviderError: an upstream provider failed.
        """
        request = parse_request(name, arguments)
        logger.debug("Dispatching %s", name)
        return await self._handlers[name](request)

    # -------------------------------------------------------------------------
    # Orchestrator
    # -------------------------------------------------------------------------
    async def _plan_trip(self, req):
        prefs = req.preferences
        plan = await self.providers.orchestrator.plan_trip(
            destination=req.destination,
            start=req.start_date,
            end=req.end_date,
            origin=req.origin,
            budget=req.budget,
            travelers=req.travelers,
            activity_types=prefs.activity_types,
            accommodation_type=prefs.accommodation_type,
        )
        return to_payload(plan)

    async def _get_travel_insights(self, req):
        insights = await self.providers.orchestrator.get_travel_insights(
            req.destination, req.travel_date
        )
        return to_payload(insights)

    async def _compare_destinations(self, req):
        criteria = req.criteria
        results = await self.providers.orchestrator.compare_destinations(
            req.destinations,
            budget=criteria.budget,
            weather_preference=criteria.weather,
            activity_types=criteria.activities,
        )
        return to_payload(results)

    # -------------------------------------------------------------------------
    # Weather
    # -------------------------------------------------------------------------
    async def _get_travel_weather(self, req):
        start, end = req.date_range
        snapshot = await self.providers.weather.get_weather(
            req.destination, start, end, req.units
        )
        return to_payload(snapshot, destination=req.destination)

    async def _get_weather_alerts(self, req):
        return to_payload(await self.providers.weather.get_alerts(req.destination))

    async def _compare_destination_weather(self, req):
        results = await compare_destination_weather(
            self.providers.weather,
            self.providers.aggregator,
            req.destinations,
            req.on_date,
        )
        return to_payload(results)

    # -------------------------------------------------------------------------
    # Currency
    # -------------------------------------------------------------------------
    async def _convert_currency(self, req):
        quote = await self.providers.currency.convert(
            req.from_currency, req.to_currency, req.amount
        )
        return to_payload(quote)

    async def _get_destination_currency(self, req):
        return to_payload(self.providers.currency.lookup_destination(req.destination))

    async def _get_travel_budget_conversion(self, req):
        results = await convert_budget(
            self.providers.currency,
            self.providers.aggregator,
            req.budget,
            req.destinations,
            req.home_currency,
        )
        return to_payload(results)

    async def _get_currency_trends(self, req):
        trends = await self.providers.currency.get_trends(
            req.from_currency, req.to_currency, req.days
        )
        return to_payload(
            trends,
            average_rate=trends.average_rate,
            min_rate=trends.min_rate,
            max_rate=trends.max_rate,
        )

    # -------------------------------------------------------------------------
    # Translation
    # -------------------------------------------------------------------------
    async def _translate_text(self, req):
        result = await self.providers.translation.translate(
            req.text, req.target_language, req.source_language
        )
        return to_payload(result)

    async def _detect_language(self, req):
        return to_payload(await self.providers.translation.detect_language(req.text))

    async def _get_travel_phrases(self, req):
        phrases = await self.providers.translation.get_phrases(req.language, req.category)
        return to_payload(phrases)

    async def _translate_destination_info(self, req):
        content = await self.providers.translation.translate_destination_info(
            req.destination, req.target_language, req.content_type
        )
        return to_payload(content)
