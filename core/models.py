# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every piece of information that
# flows out of the core.  They carry no behavior beyond a few derived
# properties.  Inbound requests are validated separately (core/requests.py);
# everything here is already-valid, request-scoped data.
#
# SERIALIZATION:
#   Tools and the web front end turn these into JSON with
#   core.serialization.to_payload(), which renders field names in camelCase
#   (total_cost → totalCost).
#
# LIFETIME:
#   Every object is built fresh per request and never persisted or shared.
#   TripPlan is frozen: once assembled it is never mutated.
# =============================================================================

from dataclasses import dataclass, field
from typing import Optional


# -----------------------------------------------------------------------------
# Weather
# -----------------------------------------------------------------------------
@dataclass
class CurrentWeather:
    """Conditions right now at a destination."""

    temperature: float                 # °C (metric) or °F (imperial)
    conditions: str                    # "Sunny", "light rain", ...
    humidity: int                      # percent
    wind_speed: float                  # km/h-ish (metric) or mph (imperial)


@dataclass
class DayForecast:
    """One day of forecast, one entry per calendar day."""

    date: str                          # ISO format: "2024-06-01"
    temperature: float
    conditions: str


@dataclass
class WeatherSnapshot:
    """Current conditions plus a chronological daily forecast."""

    current: CurrentWeather
    forecast: list[DayForecast] = field(default_factory=list)
    units: str = "metric"


@dataclass
class WeatherAlerts:
    destination: str
    alerts: list[dict] = field(default_factory=list)
    message: str = "No active weather alerts"


@dataclass
class DestinationWeather:
    """Flat weather row used when comparing several destinations."""

    destination: str
    temperature: float
    conditions: str
    humidity: int
    wind_speed: float


# -----------------------------------------------------------------------------
# Currency
# -----------------------------------------------------------------------------
@dataclass
class CurrencyInfo:
    code: str                          # ISO 4217: "EUR"
    name: str                          # "Euro"
    symbol: str                        # "€"
    country: str                       # "France"


@dataclass
class ExchangeQuote:
    """A single conversion.  rate is always > 0."""

    from_currency: str
    to_currency: str
    rate: float
    timestamp: str                     # ISO 8601, UTC
    original_amount: float
    converted_amount: float


@dataclass
class BudgetConversion:
    """A travel budget expressed in one destination's local currency."""

    destination: str
    local_currency: CurrencyInfo
    budget_in_local_currency: float
    exchange_rate: float


@dataclass
class RatePoint:
    date: str
    rate: float


@dataclass
class CurrencyTrends:
    """Daily rates, oldest first, ending today."""

    from_currency: str
    to_currency: str
    days: int
    trends: list[RatePoint] = field(default_factory=list)

    @property
    def average_rate(self) -> float:
        if not self.trends:
            return 0.0
        return sum(p.rate for p in self.trends) / len(self.trends)

    @property
    def min_rate(self) -> float:
        return min((p.rate for p in self.trends), default=0.0)

    @property
    def max_rate(self) -> float:
        return max((p.rate for p in self.trends), default=0.0)


# -----------------------------------------------------------------------------
# Translation
# -----------------------------------------------------------------------------
@dataclass
class TranslationResult:
    original_text: str
    translated_text: str
    source_language: str
    target_language: str
    confidence: float = 0.95           # 0.0 – 1.0


@dataclass
class LanguageDetection:
    text: str
    language: str                      # ISO 639-1: "fr"
    confidence: float


@dataclass
class TravelPhrases:
    language: str
    category: str
    phrases: dict[str, str] = field(default_factory=dict)


@dataclass
class TranslatedContent:
    destination: str
    target_language: str
    content_type: str
    original_text: str
    translated_text: str


# -----------------------------------------------------------------------------
# Inventory: flat, independent line items
# -----------------------------------------------------------------------------
@dataclass
class FlightOption:
    """One flight leg.  price already covers every traveler."""

    airline: str
    flight_number: str
    origin: str
    destination: str
    departure: str                     # ISO date
    arrival: str                       # ISO date
    price: float
    duration: str                      # "3h 30m"
    rating: float = 4.0                # 0 – 5


@dataclass
class HotelOption:
    name: str
    type: str                          # "hotel", "hostel", "airbnb", ...
    rating: float                      # 0 – 5
    price_per_night: float
    total_price: float                 # price_per_night × nights
    duration: str                      # "7 nights"
    amenities: list[str] = field(default_factory=list)


@dataclass
class ActivityItem:
    name: str
    type: str                          # "sightseeing", "culinary", ...
    price: float                       # per person
    duration: str
    rating: float


# -----------------------------------------------------------------------------
# Insights
# -----------------------------------------------------------------------------
@dataclass
class LocalEvent:
    name: str
    date: Optional[str]
    description: str


@dataclass
class TravelInsights:
    """Advisory, non-numeric information about one destination."""

    destination: str
    best_time_to_visit: str
    weather_outlook: WeatherSnapshot
    local_events: list[LocalEvent] = field(default_factory=list)
    cultural_tips: dict[str, str] = field(default_factory=dict)
    visa_requirements: str = ""
    vaccination_requirements: str = ""


# -----------------------------------------------------------------------------
# TripPlan: the aggregate root of plan_trip
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TripPlan:
    """The complete answer to one trip-planning request."""

    destination: str
    weather: WeatherSnapshot
    flights: list[FlightOption]
    hotels: list[HotelOption]
    activities: list[ActivityItem]
    total_cost: float                  # USD
    currency: str                      # local currency code, display only
    language: str
    safety_rating: float               # 0 – 5
    nights: int
    travelers: int
    budget: Optional[float] = None
    within_budget: Optional[bool] = None


# -----------------------------------------------------------------------------
# Comparison
# -----------------------------------------------------------------------------
@dataclass
class DestinationScore:
    """Scored summary of one destination.  overall_score is 0 – 100."""

    destination: str
    weather: CurrentWeather
    average_hotel_cost: float
    safety_rating: float
    activity_score: int                # number of matching activities
    overall_score: int
    within_budget: Optional[bool] = None


@dataclass
class DestinationFailure:
    """Placeholder for a destination whose data could not be gathered."""

    destination: str
    error: str
