# =============================================================================
# core/scoring.py  —  Destination Scoring Engine
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the facts gathered about one destination into a single 0–100
#   desirability score, and ranks destinations by it.
#
# SCORING BREAKDOWN:
#   Weather      0–30   30 if the preferred weather appears in the current
#                       conditions (case-insensitive substring), else 20
#   Cost         0–25   25 − averageHotelCost / 10, never below 0
#   Safety       0–25   safetyRating / 5 × 25, rating clamped to 0–5
#   Activities   0–20   5 per matching activity, capped at 20
#
#   The overall score is the sum, rounded half-up to an integer.
#
# Everything here is pure: same inputs, same score.
# =============================================================================

import math
from typing import Optional, Sequence

from core.models import DestinationScore

WEATHER_MATCH_POINTS = 30
WEATHER_DEFAULT_POINTS = 20
COST_MAX_POINTS = 25
SAFETY_MAX_POINTS = 25
ACTIVITY_POINTS_EACH = 5
ACTIVITY_MAX_POINTS = 20

MAX_SAFETY_RATING = 5


def weather_points(conditions: str, preference: Optional[str] = None) -> int:
    if preference and preference.lower() in (conditions or "").lower():
        return WEATHER_MATCH_POINTS
    return WEATHER_DEFAULT_POINTS


def cost_points(average_hotel_cost: float) -> float:
    # Cheaper is better; a free hotel cannot earn more than the maximum.
    return min(COST_MAX_POINTS, max(0.0, COST_MAX_POINTS - average_hotel_cost / 10))


def safety_points(safety_rating: float) -> float:
    rating = min(max(safety_rating, 0), MAX_SAFETY_RATING)
    return rating / MAX_SAFETY_RATING * SAFETY_MAX_POINTS


def activity_points(activity_count: int) -> int:
    return min(max(activity_count, 0) * ACTIVITY_POINTS_EACH, ACTIVITY_MAX_POINTS)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def overall_score(
    conditions: str,
    average_hotel_cost: float,
    safety_rating: float,
    activity_count: int,
    weather_preference: Optional[str] = None,
) -> int:
    """Overall desirability, an integer in [0, 100]."""
    total = (
        weather_points(conditions, weather_preference)
        + cost_points(average_hotel_cost)
        + safety_points(safety_rating)
        + activity_points(activity_count)
    )
    return min(max(round_half_up(total), 0), 100)


def rank_destinations(scores: Sequence[DestinationScore]) -> list[DestinationScore]:
    """Best first.  Ties keep their original order (sorted() is stable)."""
    return sorted(scores, key=lambda s: s.overall_score, reverse=True)
