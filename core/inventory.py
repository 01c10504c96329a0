# =============================================================================
# core/inventory.py  —  Travel inventory facade
# =============================================================================
#
# Bundles the flight, hotel and activity searches behind one async object
# so the orchestrator can fan them out like any other provider, and tests
# can swap in fixed-price doubles.
# =============================================================================

import random
from datetime import date
from typing import Iterable, Optional

from core.activities import find_activities
from core.flights import search_flights
from core.hotels import average_hotel_cost, search_hotels
from core.models import ActivityItem, FlightOption, HotelOption


class TravelInventory:
    name = "inventory"
    mode = "mock"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def flights(
        self,
        origin: Optional[str],
        destination: str,
        start: date,
        end: date,
        travelers: int = 1,
    ) -> list[FlightOption]:
        return search_flights(origin, destination, start, end, travelers)

    async def hotels(
        self,
        destination: str,
        start: date,
        end: date,
        travelers: int = 1,
        accommodation_type: Optional[str] = None,
    ) -> list[HotelOption]:
        return search_hotels(destination, start, end, travelers, accommodation_type)

    async def activities(
        self,
        destination: str,
        activity_types: Optional[Iterable[str]] = None,
    ) -> list[ActivityItem]:
        return find_activities(destination, activity_types)

    async def average_hotel_cost(self, destination: str) -> int:
        return average_hotel_cost(destination, self._rng)
