# =============================================================================
# core/hotels.py  —  Hotel search (mock inventory)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Returns hotel options for a stay and estimates the typical nightly
#   rate at a destination (used when comparing destinations).
#
# ACCOMMODATION TYPE:
#   Every option is labelled with the traveler's accommodation preference
#   ("hostel", "airbnb", ...), defaulting to "hotel".
#
# PRICING:
#   total_price = price_per_night × nights, for the whole party.
# =============================================================================

import random
from datetime import date
from typing import Optional

from core.costs import count_nights, hotel_total
from core.models import HotelOption

DEFAULT_ACCOMMODATION = "hotel"

# Average nightly rate range (USD) for destination comparisons.
AVERAGE_COST_RANGE = (100, 199)

_HOTELS = [
    {
        "name": "Grand Hotel Example",
        "rating": 4.5,
        "price_per_night": 150,
        "amenities": ["WiFi", "Pool", "Gym", "Restaurant"],
    },
    {
        "name": "Cozy Boutique Stay",
        "rating": 4.2,
        "price_per_night": 120,
        "amenities": ["WiFi", "Breakfast", "Spa"],
    },
]


def search_hotels(
    destination: str,
    check_in: date,
    check_out: date,
    travelers: int = 1,
    accommodation_type: Optional[str] = None,
) -> list[HotelOption]:
    """Hotels for a stay from check_in to check_out.

    Raises ValidationError (via count_nights) unless check_out is after
    check_in.
    """
    nights = count_nights(check_in, check_out)
    kind = accommodation_type or DEFAULT_ACCOMMODATION

    return [
        HotelOption(
            name=hotel["name"],
            type=kind,
            rating=hotel["rating"],
            price_per_night=hotel["price_per_night"],
            total_price=hotel_total(hotel["price_per_night"], nights),
            duration=f"{nights} night{'s' if nights != 1 else ''}",
            amenities=list(hotel["amenities"]),
        )
        for hotel in _HOTELS
    ]


def average_hotel_cost(destination: str, rng: Optional[random.Random] = None) -> int:
    """Typical nightly hotel rate at a destination, USD."""
    rng = rng or random.Random()
    low, high = AVERAGE_COST_RANGE
    return rng.randint(low, high)
