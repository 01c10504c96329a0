# tests/test_orchestrator.py

import logging
import random
from datetime import date

import pytest

from core.currency import MockCurrencyProvider
from core.destinations import DestinationGuide
from core.errors import ValidationError
from core.inventory import TravelInventory
from core.models import DestinationFailure, DestinationScore
from core.orchestrator import TravelOrchestrator
from core.weather import MockWeatherProvider

START = date(2024, 6, 1)
END = date(2024, 6, 8)


def _orchestrator(aggregator, weather=None, seed=7):
    rng = random.Random(seed)
    return TravelOrchestrator(
        weather=weather or MockWeatherProvider(rng),
        currency=MockCurrencyProvider(rng),
        guide=DestinationGuide(rng),
        inventory=TravelInventory(rng),
        aggregator=aggregator,
        fallback_weather=MockWeatherProvider(random.Random(99)),
    )


class FixedCostInventory(TravelInventory):
    """Average hotel cost from a fixed table."""

    def __init__(self, costs):
        super().__init__()
        self.costs = costs

    async def average_hotel_cost(self, destination):
        return self.costs[destination]


# -----------------------------------------------------------------------------
# plan_trip
# -----------------------------------------------------------------------------
async def test_plan_trip_for_tokyo(aggregator):
    plan = await _orchestrator(aggregator).plan_trip("Tokyo", START, END, origin="London", travelers=2)

    assert plan.nights == 7
    assert [f.price for f in plan.flights] == [900, 840]
    assert plan.flights[0].origin == "London"
    assert plan.flights[1].destination == "London"
    assert [h.total_price for h in plan.hotels] == [1050, 840]
    assert all(h.duration == "7 nights" for h in plan.hotels)
    assert len(plan.activities) == 7
    assert plan.total_cost == 1740 + 1890 + 300 * 2
    assert plan.currency == "JPY"
    assert plan.language == "Japanese"
    assert 4 <= plan.safety_rating <= 5
    assert len(plan.weather.forecast) == 8
    assert plan.budget is None and plan.within_budget is None


async def test_plan_trip_without_origin(aggregator):
    plan = await _orchestrator(aggregator).plan_trip("Paris", START, END)
    assert plan.flights[0].origin == "Any"


@pytest.mark.parametrize("end", [START, date(2024, 5, 30)])
async def test_plan_trip_rejects_end_not_after_start(aggregator, end):
    with pytest.raises(ValidationError, match="End date must be after start date"):
        await _orchestrator(aggregator).plan_trip("Paris", START, end)


async def test_plan_trip_rejects_zero_travelers(aggregator):
    with pytest.raises(ValidationError):
        await _orchestrator(aggregator).plan_trip("Paris", START, END, travelers=0)


async def test_plan_trip_filters_activities(aggregator):
    plan = await _orchestrator(aggregator).plan_trip(
        "Paris", START, END, activity_types=["culinary", "nightlife"]
    )
    assert [a.type for a in plan.activities] == ["culinary", "nightlife"]
    assert plan.total_cost == 870 + 1890 + 80


async def test_plan_trip_uses_accommodation_preference(aggregator):
    plan = await _orchestrator(aggregator).plan_trip(
        "Paris", START, END, accommodation_type="hostel"
    )
    assert {h.type for h in plan.hotels} == {"hostel"}


@pytest.mark.parametrize("budget, expected", [(5000, True), (1000, False)])
async def test_plan_trip_budget_flag(aggregator, budget, expected):
    plan = await _orchestrator(aggregator).plan_trip("Paris", START, END, budget=budget)
    assert plan.budget == budget
    assert plan.within_budget is expected


async def test_plan_trip_falls_back_to_mock_weather(aggregator, failing_weather_cls, caplog):
    weather = failing_weather_cls()
    orchestrator = _orchestrator(aggregator, weather=weather)

    with caplog.at_level(logging.WARNING, logger="core.orchestrator"):
        plan = await orchestrator.plan_trip("Paris", START, END)

    assert weather.calls == ["Paris"]
    assert len(plan.weather.forecast) == 8
    assert "using mock weather" in caplog.text
    assert "boom" in caplog.text


# -----------------------------------------------------------------------------
# get_travel_insights
# -----------------------------------------------------------------------------
async def test_travel_insights_for_date(aggregator):
    insights = await _orchestrator(aggregator).get_travel_insights("Paris", date(2024, 9, 15))

    assert insights.destination == "Paris"
    assert [e.date for e in insights.local_events] == ["2024-09-15", "2024-09-15"]
    assert [d.date for d in insights.weather_outlook.forecast] == ["2024-09-15"]
    assert set(insights.cultural_tips) == {"greeting", "tipping", "dressCode"}
    assert insights.visa_requirements
    assert insights.vaccination_requirements


async def test_travel_insights_without_date(aggregator):
    insights = await _orchestrator(aggregator).get_travel_insights("Paris")

    assert insights.weather_outlook.forecast == []
    assert all(e.date is None for e in insights.local_events)


async def test_travel_insights_survive_weather_failure(aggregator, failing_weather_cls):
    orchestrator = _orchestrator(aggregator, weather=failing_weather_cls())
    insights = await orchestrator.get_travel_insights("Paris")
    assert insights.weather_outlook.current is not None


# -----------------------------------------------------------------------------
# compare_destinations
# -----------------------------------------------------------------------------
async def test_compare_destinations_ranks_best_first(aggregator):
    orchestrator = _orchestrator(aggregator)
    orchestrator.inventory = FixedCostInventory({"Paris": 240, "Tokyo": 110, "Bangkok": 180})

    results = await orchestrator.compare_destinations(["Paris", "Tokyo", "Bangkok"], budget=200)

    assert len(results) == 3
    assert all(isinstance(r, DestinationScore) for r in results)
    scores = [r.overall_score for r in results]
    assert scores == sorted(scores, reverse=True)
    by_name = {r.destination: r for r in results}
    assert by_name["Paris"].within_budget is False
    assert by_name["Tokyo"].within_budget is True
    assert all(r.activity_score == 7 for r in results)
    assert all(0 <= r.overall_score <= 100 for r in results)


async def test_compare_destinations_single_destination(aggregator):
    results = await _orchestrator(aggregator).compare_destinations(["Sydney"])
    assert [r.destination for r in results] == ["Sydney"]
    assert results[0].within_budget is None


async def test_compare_destinations_ties_keep_input_order(aggregator):
    orchestrator = _orchestrator(aggregator)
    orchestrator.inventory = FixedCostInventory({"A": 150, "B": 150, "C": 150})

    class SameWeather(MockWeatherProvider):
        async def get_weather(self, destination, start=None, end=None, units="metric"):
            snapshot = await super().get_weather(destination, start, end, units)
            snapshot.current.conditions = "Sunny"
            return snapshot

    class SameSafety(DestinationGuide):
        async def safety_rating(self, destination):
            return 5

    orchestrator.weather = SameWeather(random.Random(1))
    orchestrator.guide = SameSafety()

    results = await orchestrator.compare_destinations(["A", "B", "C"])

    assert [r.destination for r in results] == ["A", "B", "C"]
    assert len({r.overall_score for r in results}) == 1


async def test_compare_destinations_lists_failures_last(aggregator, failing_weather_cls):
    orchestrator = _orchestrator(aggregator, weather=failing_weather_cls(fail_for={"Paris"}))

    results = await orchestrator.compare_destinations(["Paris", "Tokyo", "London"])

    assert [type(r) for r in results] == [DestinationScore, DestinationScore, DestinationFailure]
    assert {r.destination for r in results[:2]} == {"Tokyo", "London"}
    assert results[2].destination == "Paris"
    assert results[2].error.startswith("Unable to compare destination")
