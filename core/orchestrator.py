# =============================================================================
# core/orchestrator.py  —  Travel Orchestrator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The three composite operations that combine several providers into one
#   answer:
#
#     plan_trip             weather + flights + hotels + activities +
#                           currency + language + safety → TripPlan
#     get_travel_insights   best time, weather outlook, events, tips,
#                           visa and vaccination notes → TravelInsights
#     compare_destinations  per destination: weather + hotel cost + safety
#                           + activities → DestinationScore, best first
#
# CONCURRENCY:
#   Every independent lookup is fanned out through the Aggregator, so a
#   plan takes as long as its slowest branch, not the sum of them.
#
# DEGRADATION:
#   The weather branch of plan_trip / insights falls back to mock weather
#   when the live provider fails (logged at WARNING).  In a comparison, a
#   destination that fails becomes a DestinationFailure listed after the
#   scored destinations.
# =============================================================================

import logging
from datetime import date
from typing import Iterable, Optional

from core.aggregator import Aggregator, describe
from core.costs import compute_total_cost, count_nights
from core.currency import CurrencyProvider
from core.destinations import DestinationGuide
from core.errors import ValidationError
from core.inventory import TravelInventory
from core.models import (
    DestinationFailure,
    DestinationScore,
    TravelInsights,
    TripPlan,
    WeatherSnapshot,
)
from core.scoring import overall_score, rank_destinations
from core.weather import MockWeatherProvider, WeatherProvider

logger = logging.getLogger(__name__)


class TravelOrchestrator:
    """Composite travel operations over the provider capabilities."""

    def __init__(
        self,
        weather: WeatherProvider,
        currency: CurrencyProvider,
        guide: Optional[DestinationGuide] = None,
        inventory: Optional[TravelInventory] = None,
        aggregator: Optional[Aggregator] = None,
        fallback_weather: Optional[WeatherProvider] = None,
    ):
        self.weather = weather
        self.currency = currency
        self.guide = guide or DestinationGuide()
        self.inventory = inventory or TravelInventory()
        self.aggregator = aggregator or Aggregator()
        self.fallback_weather = fallback_weather or MockWeatherProvider()

    # -------------------------------------------------------------------------
    # Weather with mock fallback
    # -------------------------------------------------------------------------
    async def _weather_or_fallback(
        self,
        destination: str,
        outcome,
        start: Optional[date],
        end: Optional[date],
    ) -> WeatherSnapshot:
        if outcome.ok:
            return outcome.value
        logger.warning(
            "Weather lookup for %s failed (%s); using mock weather",
            destination, describe(outcome.error),
        )
        return await self.fallback_weather.get_weather(destination, start, end)

    # -------------------------------------------------------------------------
    # plan_trip
    # -------------------------------------------------------------------------
    async def plan_trip(
        self,
        destination: str,
        start: date,
        end: date,
        origin: Optional[str] = None,
        budget: Optional[float] = None,
        travelers: int = 1,
        activity_types: Optional[Iterable[str]] = None,
        accommodation_type: Optional[str] = None,
    ) -> TripPlan:
        """Build a complete trip plan.

        Raises:
            ValidationError: end is not after start, or travelers < 1.
        """
        if start >= end:
            raise ValidationError("End date must be after start date")
        if travelers < 1:
            raise ValidationError(f"travelers must be at least 1, got {travelers}")
        nights = count_nights(start, end)
        activity_types = list(activity_types or ())

        async def currency_code() -> str:
            return self.currency.lookup_destination(destination).code

        (
            weather_outcome,
            flights_outcome,
            hotels_outcome,
            activities_outcome,
            currency_outcome,
            language_outcome,
            safety_outcome,
        ) = await self.aggregator.gather(
            lambda: self.weather.get_weather(destination, start, end),
            lambda: self.inventory.flights(origin, destination, start, end, travelers),
            lambda: self.inventory.hotels(destination, start, end, travelers, accommodation_type),
            lambda: self.inventory.activities(destination, activity_types),
            currency_code,
            lambda: self.guide.language(destination),
            lambda: self.guide.safety_rating(destination),
        )

        weather = await self._weather_or_fallback(destination, weather_outcome, start, end)
        flights = flights_outcome.unwrap()
        hotels = hotels_outcome.unwrap()
        activities = activities_outcome.unwrap()

        total_cost = compute_total_cost(flights, hotels, activities, travelers)
        logger.info(
            "Planned %s: %d nights, %d traveler(s), total $%.2f",
            destination, nights, travelers, total_cost,
        )

        return TripPlan(
            destination=destination,
            weather=weather,
            flights=flights,
            hotels=hotels,
            activities=activities,
            total_cost=total_cost,
            currency=currency_outcome.unwrap(),
            language=language_outcome.unwrap(),
            safety_rating=safety_outcome.unwrap(),
            nights=nights,
            travelers=travelers,
            budget=budget,
            within_budget=None if budget is None else total_cost <= budget,
        )

    # -------------------------------------------------------------------------
    # get_travel_insights
    # -------------------------------------------------------------------------
    async def get_travel_insights(
        self,
        destination: str,
        travel_date: Optional[date] = None,
    ) -> TravelInsights:
        guide = self.guide
        (
            best_time,
            weather_outcome,
            events,
            tips,
            visa,
            vaccination,
        ) = await self.aggregator.gather(
            lambda: guide.best_time_to_visit(destination),
            lambda: self.weather.get_weather(destination, travel_date, travel_date),
            lambda: guide.local_events(destination, travel_date),
            lambda: guide.cultural_tips(destination),
            lambda: guide.visa_requirements(destination),
            lambda: guide.vaccination_requirements(destination),
        )

        outlook = await self._weather_or_fallback(
            destination, weather_outcome, travel_date, travel_date
        )
        return TravelInsights(
            destination=destination,
            best_time_to_visit=best_time.unwrap(),
            weather_outlook=outlook,
            local_events=events.unwrap(),
            cultural_tips=tips.unwrap(),
            visa_requirements=visa.unwrap(),
            vaccination_requirements=vaccination.unwrap(),
        )

    # -------------------------------------------------------------------------
    # compare_destinations
    # -------------------------------------------------------------------------
    async def compare_destinations(
        self,
        destinations: list[str],
        budget: Optional[float] = None,
        weather_preference: Optional[str] = None,
        activity_types: Optional[Iterable[str]] = None,
    ) -> list:
        """Score every destination and rank them, best first.

        Destinations that could not be scored follow the ranked ones, in
        input order, as DestinationFailure entries.
        """
        activity_types = list(activity_types or ())

        async def score(destination: str) -> DestinationScore:
            weather, hotel_cost, safety, activities = await self._gather_or_raise(
                lambda: self.weather.get_weather(destination),
                lambda: self.inventory.average_hotel_cost(destination),
                lambda: self.guide.safety_rating(destination),
                lambda: self.inventory.activities(destination, activity_types),
            )
            return DestinationScore(
                destination=destination,
                weather=weather.current,
                average_hotel_cost=hotel_cost,
                safety_rating=safety,
                activity_score=len(activities),
                overall_score=overall_score(
                    weather.current.conditions,
                    hotel_cost,
                    safety,
                    len(activities),
                    weather_preference,
                ),
                within_budget=None if budget is None else hotel_cost <= budget,
            )

        results = await self.aggregator.per_destination(
            destinations, score, "Unable to compare destination"
        )
        scored = [r for r in results if isinstance(r, DestinationScore)]
        failed = [r for r in results if isinstance(r, DestinationFailure)]
        return rank_destinations(scored) + failed

    async def _gather_or_raise(self, *calls):
        """Run calls concurrently; the first failure (in input order) is raised."""
        outcomes = await self.aggregator.gather(*calls)
        return [outcome.unwrap() for outcome in outcomes]
