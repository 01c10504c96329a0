# =============================================================================
# core/activities.py  —  Activity catalogue (mock inventory)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Lists things to do at a destination, optionally narrowed to the
#   activity types the traveler asked for.
#
# FILTERING:
#   Plain set membership on ActivityItem.type.  An empty or missing list of
#   types means "no preference": everything is returned.  Unknown types
#   simply match nothing.
# =============================================================================

from typing import Iterable, Optional

from core.models import ActivityItem

ACTIVITY_TYPES = (
    "sightseeing",
    "culinary",
    "adventure",
    "relaxation",
    "cultural",
    "nightlife",
)

_CATALOGUE = [
    ActivityItem("City Walking Tour", "sightseeing", 25, "3 hours", 4.8),
    ActivityItem("Local Food Experience", "culinary", 60, "2 hours", 4.9),
    ActivityItem("Adventure Park", "adventure", 45, "4 hours", 4.6),
    ActivityItem("Spa Afternoon", "relaxation", 80, "3 hours", 4.5),
    ActivityItem("Museum Pass", "cultural", 30, "1 day", 4.7),
    ActivityItem("Evening River Cruise", "sightseeing", 40, "2 hours", 4.4),
    ActivityItem("Night Market Crawl", "nightlife", 20, "3 hours", 4.3),
]


def find_activities(
    destination: str,
    activity_types: Optional[Iterable[str]] = None,
) -> list[ActivityItem]:
    """Activities at a destination, filtered by type when types are given."""
    wanted = set(activity_types or ())
    return [
        ActivityItem(a.name, a.type, a.price, a.duration, a.rating)
        for a in _CATALOGUE
        if not wanted or a.type in wanted
    ]
