# =============================================================================
# core/flights.py  —  Flight search (mock inventory)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Returns a round trip as two flight legs: the outbound leg departs on the
#   start date and the return leg on the end date.
#
# PRICING:
#   Each leg has a per-person base fare.  The price on a FlightOption is the
#   fare for the WHOLE party (fare × travelers), so the cost calculator adds
#   flight prices as they are.
#
# REAL-WORLD NOTE:
#   In production this would wrap a flight API (Amadeus, Skyscanner).  The
#   fixed legs below keep trip totals predictable for planning and tests.
# =============================================================================

from datetime import date
from typing import Optional

from core.models import FlightOption

OUTBOUND_FARE = 450
RETURN_FARE = 420

# When the traveler did not say where they start from.
UNSPECIFIED_ORIGIN = "Any"


def search_flights(
    origin: Optional[str],
    destination: str,
    start: date,
    end: date,
    travelers: int = 1,
) -> list[FlightOption]:
    """Outbound and return flights for the whole party.

    Args:
        origin: Departure city, or None when unknown.
        destination: Arrival city.
        start: Outbound date.
        end: Return date.
        travelers: Party size; every price is scaled by it.

    Returns:
        [outbound, return], in travel order.
    """
    home = origin or UNSPECIFIED_ORIGIN

    outbound = FlightOption(
        airline="Example Airlines",
        flight_number="EX123",
        origin=home,
        destination=destination,
        departure=start.isoformat(),
        arrival=start.isoformat(),
        price=OUTBOUND_FARE * travelers,
        duration="3h 30m",
        rating=4.3,
    )

    # Return leg flies the route backwards.
    inbound = FlightOption(
        airline="Sample Airways",
        flight_number="SA456",
        origin=destination,
        destination=home,
        departure=end.isoformat(),
        arrival=end.isoformat(),
        price=RETURN_FARE * travelers,
        duration="3h 15m",
        rating=4.1,
    )

    return [outbound, inbound]
