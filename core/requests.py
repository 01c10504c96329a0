# =============================================================================
# core/requests.py  —  Validated request types, one per operation
# =============================================================================
#
# Every operation's arguments are parsed into a frozen pydantic model
# BEFORE anything else runs.  A request that fails here never reaches a
# provider.
#
# NAMING:
#   Fields are snake_case in Python.  Each one also accepts its camelCase
#   wire name (startDate, targetLanguage, ...), and the currency pair uses
#   the wire names "from" / "to".  Either spelling works on any surface.
#
# ERRORS:
#   parse_request() turns pydantic's ValidationError into our own
#   core.errors.ValidationError, with one readable line per problem.
# =============================================================================

from datetime import date
from typing import Literal, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.errors import ValidationError

Units = Literal["metric", "imperial"]
PhraseCategory = Literal["basic", "emergency", "food", "transport", "accommodation"]
ContentType = Literal["guide", "menu", "signs", "emergency", "customs"]


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# -----------------------------------------------------------------------------
# Orchestrator
# -----------------------------------------------------------------------------
class TripPreferences(RequestModel):
    weather_preference: Optional[str] = None
    activity_types: list[str] = Field(default_factory=list)
    accommodation_type: Optional[str] = None
    transportation_preference: Optional[str] = None


class TripRequest(RequestModel):
    """plan_trip"""

    destination: str = Field(min_length=1)
    origin: Optional[str] = None
    start_date: date
    end_date: date
    budget: Optional[float] = Field(default=None, ge=0)
    travelers: int = Field(default=1, ge=1)
    preferences: TripPreferences = Field(default_factory=TripPreferences)

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.start_date >= self.end_date:
            raise ValueError("End date must be after start date")
        return self


class InsightsRequest(RequestModel):
    """get_travel_insights"""

    destination: str = Field(min_length=1)
    travel_date: Optional[date] = None


class ComparisonCriteria(RequestModel):
    budget: Optional[float] = Field(default=None, ge=0)
    weather: Optional[str] = None
    activities: list[str] = Field(default_factory=list)


class CompareDestinationsRequest(RequestModel):
    """compare_destinations"""

    destinations: list[str] = Field(min_length=1)
    criteria: ComparisonCriteria = Field(default_factory=ComparisonCriteria)


# -----------------------------------------------------------------------------
# Weather
# -----------------------------------------------------------------------------
class WeatherRequest(RequestModel):
    """get_travel_weather

    A single date (either one) asks for that day only.
    """

    destination: str = Field(min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    units: Units = "metric"

    @model_validator(mode="after")
    def _ordered_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self

    @property
    def date_range(self) -> tuple[Optional[date], Optional[date]]:
        start = self.start_date or self.end_date
        end = self.end_date or self.start_date
        return start, end


class WeatherAlertsRequest(RequestModel):
    """get_weather_alerts"""

    destination: str = Field(min_length=1)


class CompareWeatherRequest(RequestModel):
    """compare_destination_weather"""

    destinations: list[str] = Field(min_length=1)
    on_date: Optional[date] = Field(default=None, alias="date")


# -----------------------------------------------------------------------------
# Currency
# -----------------------------------------------------------------------------
class ConvertCurrencyRequest(RequestModel):
    """convert_currency"""

    from_currency: str = Field(min_length=1, alias="from")
    to_currency: str = Field(min_length=1, alias="to")
    amount: float = Field(default=1, ge=0)


class DestinationCurrencyRequest(RequestModel):
    """get_destination_currency"""

    destination: str = Field(min_length=1)


class BudgetConversionRequest(RequestModel):
    """get_travel_budget_conversion"""

    budget: float = Field(ge=0)
    destinations: list[str] = Field(min_length=1)
    home_currency: str = "USD"


class CurrencyTrendsRequest(RequestModel):
    """get_currency_trends"""

    from_currency: str = Field(min_length=1, alias="from")
    to_currency: str = Field(min_length=1, alias="to")
    days: int = Field(default=30, ge=7, le=365)


# -----------------------------------------------------------------------------
# Translation
# -----------------------------------------------------------------------------
class TranslateTextRequest(RequestModel):
    """translate_text"""

    text: str = Field(min_length=1)
    target_language: str = Field(min_length=1)
    source_language: Optional[str] = None


class DetectLanguageRequest(RequestModel):
    """detect_language"""

    text: str = Field(min_length=1)


class TravelPhrasesRequest(RequestModel):
    """get_travel_phrases"""

    language: str = Field(min_length=1)
    category: PhraseCategory = "basic"


class DestinationInfoRequest(RequestModel):
    """translate_destination_info"""

    destination: str = Field(min_length=1)
    target_language: str = Field(min_length=1)
    content_type: ContentType = "guide"


# Operation name → request type.  The operation names are the tool names.
REQUEST_MODELS: dict[str, type[RequestModel]] = {
    "plan_trip": TripRequest,
    "get_travel_insights": InsightsRequest,
    "compare_destinations": CompareDestinationsRequest,
    "get_travel_weather": WeatherRequest,
    "get_weather_alerts": WeatherAlertsRequest,
    "compare_destination_weather": CompareWeatherRequest,
    "convert_currency": ConvertCurrencyRequest,
    "get_destination_currency": DestinationCurrencyRequest,
    "get_travel_budget_conversion": BudgetConversionRequest,
    "get_currency_trends": CurrencyTrendsRequest,
    "translate_text": TranslateTextRequest,
    "detect_language": DetectLanguageRequest,
    "get_travel_phrases": TravelPhrasesRequest,
    "translate_destination_info": DestinationInfoRequest,
}


def _describe_errors(exc: pydantic.ValidationError) -> str:
    lines = []
    for error in exc.errors():
        message = error["msg"].removeprefix("Value error, ")
        location = ".".join(str(part) for part in error["loc"])
        lines.append(f"{location}: {message}" if location else message)
    return "; ".join(lines)


def parse_request(name: str, arguments: Optional[dict]) -> RequestModel:
    """Validate raw arguments for operation ``name``.

    Raises:
        ValidationError: unknown operation, or invalid arguments.
    """
    model = REQUEST_MODELS.get(name)
    if model is None:
        raise ValidationError(f"Unknown tool: {name}")
    try:
        return model.model_validate(arguments or {})
    except pydantic.ValidationError as exc:
        raise ValidationError(_describe_errors(exc)) from None
