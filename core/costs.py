# =============================================================================
# core/costs.py  —  Cost Calculator
# =============================================================================
#
# Pure arithmetic, no I/O.  Everything here is in USD; the local currency
# code on a TripPlan is only a label.
#
#   total = Σ flight.price + Σ hotel.total_price + Σ activity.price × travelers
#
# Flight prices already cover every traveler (fare × travelers) and hotel
# totals already cover every night, so only activities get multiplied here.
# =============================================================================

import math
from datetime import date, datetime
from typing import Iterable, Union

from core.errors import ValidationError
from core.models import ActivityItem, FlightOption, HotelOption

_SECONDS_PER_DAY = 24 * 60 * 60


def count_nights(start: Union[date, datetime], end: Union[date, datetime]) -> int:
    """Whole nights between two dates, partial days rounded up.

    Raises ValidationError unless end is after start.
    """
    if isinstance(start, datetime) or isinstance(end, datetime):
        seconds = (_as_datetime(end) - _as_datetime(start)).total_seconds()
        nights = math.ceil(seconds / _SECONDS_PER_DAY)
    else:
        nights = (end - start).days

    if nights < 1:
        raise ValidationError("End date must be after start date")
    return nights


def _as_datetime(value: Union[date, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def hotel_total(price_per_night: float, nights: int) -> float:
    return price_per_night * nights


def compute_total_cost(
    flights: Iterable[FlightOption],
    hotels: Iterable[HotelOption],
    activities: Iterable[ActivityItem],
    travelers: int = 1,
) -> float:
    """Total trip cost in USD."""
    if travelers < 1:
        raise ValidationError(f"travelers must be at least 1, got {travelers}")

    flight_cost = sum(flight.price for flight in flights)
    hotel_cost = sum(hotel.total_price for hotel in hotels)
    activity_cost = sum(activity.price for activity in activities) * travelers
    return flight_cost + hotel_cost + activity_cost
