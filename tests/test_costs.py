# tests/test_costs.py

from datetime import date, datetime

import pytest

from core.costs import compute_total_cost, count_nights, hotel_total
from core.errors import ValidationError
from core.models import ActivityItem, FlightOption, HotelOption


def _flight(price):
    return FlightOption("Test Air", "TA1", "A", "B", "2024-06-01", "2024-06-01", price, "1h")


def _hotel(per_night, nights):
    return HotelOption("Inn", "hotel", 4.0, per_night, hotel_total(per_night, nights), f"{nights} nights")


def _activity(price):
    return ActivityItem("Tour", "sightseeing", price, "1 hour", 4.5)


def test_count_nights_whole_days():
    assert count_nights(date(2024, 6, 1), date(2024, 6, 8)) == 7


def test_count_nights_rounds_partial_days_up():
    assert count_nights(datetime(2024, 6, 1, 10), datetime(2024, 6, 2, 12)) == 2


@pytest.mark.parametrize("end", [date(2024, 6, 1), date(2024, 5, 30)])
def test_count_nights_rejects_non_positive_stays(end):
    with pytest.raises(ValidationError, match="End date must be after start date"):
        count_nights(date(2024, 6, 1), end)


def test_total_cost_multiplies_only_activities_by_travelers():
    flights = [_flight(900), _flight(840)]
    hotels = [_hotel(150, 7)]
    activities = [_activity(25), _activity(60)]

    total = compute_total_cost(flights, hotels, activities, travelers=2)

    assert total == 900 + 840 + 1050 + (25 + 60) * 2


def test_total_cost_of_nothing_is_zero():
    assert compute_total_cost([], [], [], travelers=3) == 0


def test_total_cost_requires_a_traveler():
    with pytest.raises(ValidationError):
        compute_total_cost([_flight(100)], [], [], travelers=0)
