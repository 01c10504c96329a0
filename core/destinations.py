# =============================================================================
# core/destinations.py  —  Destination guide
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Advisory facts about a destination: main language, safety rating, best
#   time to visit, local events, cultural tips, and visa / vaccination
#   notes.  These are generic placeholders; a real system would consult a
#   travel-advisory service.
#
# Lookups are exact and case-sensitive; unknown destinations get the
# "Local Language" default rather than an error.
# =============================================================================

import random
from datetime import date
from typing import Optional

from core.models import LocalEvent

DESTINATION_LANGUAGES: dict[str, str] = {
    "Paris": "French",
    "London": "English",
    "Tokyo": "Japanese",
    "New York": "English",
    "Sydney": "English",
    "Bangkok": "Thai",
    "Dubai": "Arabic",
    "Singapore": "English",
}

DEFAULT_LANGUAGE = "Local Language"

SAFETY_RATING_RANGE = (4, 5)

BEST_TIME_TO_VISIT = "Spring (March-May) and Fall (September-November)"
VISA_NOTE = "Check with local embassy for visa requirements"
VACCINATION_NOTE = "Consult travel clinic for recommended vaccinations"


def lookup_language(destination: str) -> str:
    return DESTINATION_LANGUAGES.get(destination, DEFAULT_LANGUAGE)


class DestinationGuide:
    """Advisory information about destinations.

    Methods are async so the orchestrator can fan them out alongside the
    real provider calls; a guide backed by a remote service drops in
    without touching the orchestrator.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    async def language(self, destination: str) -> str:
        return lookup_language(destination)

    async def safety_rating(self, destination: str) -> int:
        """Safety rating on a 0–5 scale."""
        low, high = SAFETY_RATING_RANGE
        return self._rng.randint(low, high)

    async def best_time_to_visit(self, destination: str) -> str:
        return BEST_TIME_TO_VISIT

    async def local_events(self, destination: str, travel_date: Optional[date] = None) -> list[LocalEvent]:
        when = travel_date.isoformat() if travel_date else None
        return [
            LocalEvent("Local Festival", when, "Traditional cultural festival"),
            LocalEvent("Food Market", when, "Weekly local food market"),
        ]

    async def cultural_tips(self, destination: str) -> dict[str, str]:
        # Keys are emitted verbatim in JSON, hence dressCode.
        return {
            "greeting": "Learn basic local greetings",
            "tipping": "Check local tipping customs",
            "dressCode": "Respect local dress codes for religious sites",
        }

    async def visa_requirements(self, destination: str) -> str:
        return VISA_NOTE

    async def vaccination_requirements(self, destination: str) -> str:
        return VACCINATION_NOTE
