# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the 14 travel operations as MCP tools.  Each tool is a thin
#   wrapper: it logs the call, hands the arguments to
#   core.operations.TravelOperations, and returns the JSON-ready result.
#
# HOW IT WORKS (the flow):
#   1. An MCP client (the ADK agent, or the web supervisor) calls a tool
#   2. FastMCP routes the call to the decorated function below
#   3. The function validates + dispatches through TravelOperations
#   4. The client receives a dict (or list of dicts) with camelCase keys
#
# TOOL GROUPS:
#   - Orchestration:  plan_trip, get_travel_insights, compare_destinations
#   - Weather:        get_travel_weather, get_weather_alerts,
#                     compare_destination_weather
#   - Currency:       convert_currency, get_destination_currency,
#                     get_travel_budget_conversion, get_currency_trends
#   - Translation:    translate_text, detect_language, get_travel_phrases,
#                     translate_destination_info
#   All tools are read-only and safe to retry.
#
# ERRORS:
#   Bad input and upstream failures are raised as ToolError, which FastMCP
#   returns as an error result (isError: true) instead of crashing the
#   session.  Upstream failures are prefixed with their domain, e.g.
#   "Weather API error: city not found".
#
# RUNNING THIS SERVER:
#   a) Standalone:  python -m tools.mcp_server   (or: travel-mcp)
#   b) Spawned by the ADK agent or the web front end over stdio
# =============================================================================

import json
import logging
import sys
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

# The tools layer depends on core/ and nothing else.
from core.config import get_settings
from core.errors import ProviderError, ValidationError
from core.operations import OPERATION_DOMAINS, TravelOperations
from core.providers import build_providers

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because stdout carries the MCP JSON protocol.  Anything
# printed to stdout would corrupt the message stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items() if v is not None)
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Any) -> Any:
    """Log the tool response as compact JSON in GREEN, then return it."""
    body = json.dumps(result, separators=(",", ":"), ensure_ascii=False)
    logging.info(f"{_GREEN}  ← {tool_name} response: {body}{_RESET}")
    return result


# =============================================================================
# Operations (built on first use)
# =============================================================================
# Providers are chosen once per process from the environment: live when an
# API key is set, mock otherwise.  Tests install their own with
# use_operations().
# =============================================================================
_operations: Optional[TravelOperations] = None


def get_operations() -> TravelOperations:
    global _operations
    if _operations is None:
        providers = build_providers(get_settings())
        _log_status(f"Providers: {providers.modes}")
        _operations = TravelOperations(providers)
    return _operations


def use_operations(operations: Optional[TravelOperations]) -> None:
    """Replace the operations backing every tool (None → rebuild lazily)."""
    global _operations
    _operations = operations


async def _run(tool_name: str, **params) -> Any:
    """Validate, dispatch and log one tool call."""
    _log_request(tool_name, **params)
    arguments = {k: v for k, v in params.items() if v is not None}

    try:
        result = await get_operations().call(tool_name, arguments)
    except ValidationError as exc:
        _log_status(f"Rejected: {exc}")
        raise ToolError(str(exc)) from exc
    except ProviderError as exc:
        _log_status(f"Upstream failure: {exc}")
        raise ToolError(f"{OPERATION_DOMAINS[tool_name]} error: {exc.message}") from exc

    return _log_response(tool_name, result)


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("smart-travel-orchestrator")


# =============================================================================
# ORCHESTRATION TOOLS
# =============================================================================
@mcp.tool()
async def plan_trip(
    destination: str,
    start_date: str,
    end_date: str,
    origin: Optional[str] = None,
    budget: Optional[float] = None,
    travelers: int = 1,
    preferences: Optional[dict] = None,
) -> dict:
    """Create a comprehensive travel plan with recommendations.

    Gathers weather, flights, hotels, activities, local currency, language
    and a safety rating in one call, and totals the trip cost.

    Args:
        destination: Destination city (e.g., "Tokyo").
        start_date: Start date, YYYY-MM-DD.
        end_date: End date, YYYY-MM-DD.  Must be after start_date.
        origin: Origin city (optional).
        budget: Total budget in USD (optional).  When given, the plan
            reports withinBudget.
        travelers: Number of travelers (default 1).
        preferences: Optional object with weatherPreference, activityTypes
            (list, e.g. ["sightseeing", "culinary"]), accommodationType
            ("hotel", "hostel", "airbnb", ...) and transportationPreference.

    Returns:
        destination, weather {current, forecast}, flights, hotels,
        activities, totalCost (USD), currency (local code), language,
        safetyRating (0-5), nights, travelers, budget, withinBudget.
    """
    return await _run(
        "plan_trip",
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        origin=origin,
        budget=budget,
        travelers=travelers,
        preferences=preferences,
    )


@mcp.tool()
async def get_travel_insights(destination: str, travel_date: Optional[str] = None) -> dict:
    """Get travel insights and recommendations for a destination.

    Args:
        destination: Destination to analyze.
        travel_date: Planned travel date, YYYY-MM-DD (optional).

    Returns:
        bestTimeToVisit, weatherOutlook, localEvents, culturalTips,
        visaRequirements, vaccinationRequirements.
    """
    return await _run("get_travel_insights", destination=destination, travel_date=travel_date)


@mcp.tool()
async def compare_destinations(
    destinations: list[str],
    criteria: Optional[dict] = None,
) -> list[dict]:
    """Compare multiple destinations and rank them by an overall 0-100 score.

    Args:
        destinations: Destinations to compare.
        criteria: Optional object with budget (USD per night), weather
            (preferred conditions, e.g. "sunny") and activities (list of
            activity types).

    Returns:
        One entry per destination, best first: destination, weather,
        averageHotelCost, safetyRating, activityScore, overallScore.
        Destinations that could not be scored come last as
        {destination, error}.
    """
    return await _run("compare_destinations", destinations=destinations, criteria=criteria)


# =============================================================================
# WEATHER TOOLS
# =============================================================================
@mcp.tool()
async def get_travel_weather(
    destination: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    units: str = "metric",
) -> dict:
    """Get current weather and a daily forecast for a travel destination.

    Args:
        destination: City name (e.g., "Paris").
        start_date: First forecast day, YYYY-MM-DD (optional).
        end_date: Last forecast day, YYYY-MM-DD (optional).
        units: "metric" (°C, km/h) or "imperial" (°F, mph).

    Returns:
        current {temperature, conditions, humidity, windSpeed} and forecast,
        one {date, temperature, conditions} per day in the range.
    """
    return await _run(
        "get_travel_weather",
        destination=destination,
        start_date=start_date,
        end_date=end_date,
        units=units,
    )


@mcp.tool()
async def get_weather_alerts(destination: str) -> dict:
    """Get weather alerts and warnings for a destination.

    Returns:
        destination, alerts (list) and a message.
    """
    return await _run("get_weather_alerts", destination=destination)


@mcp.tool()
async def compare_destination_weather(
    destinations: list[str],
    date: Optional[str] = None,
) -> list[dict]:
    """Compare weather across multiple destinations.

    Args:
        destinations: Destinations to compare.
        date: Day to compare, YYYY-MM-DD (optional; defaults to now).

    Returns:
        One entry per destination, in the order given: temperature,
        conditions, humidity, windSpeed, or {destination, error}.
    """
    return await _run("compare_destination_weather", destinations=destinations, date=date)


# =============================================================================
# CURRENCY TOOLS
# =============================================================================
@mcp.tool()
async def convert_currency(
    from_currency: str,
    to_currency: str,
    amount: float = 1,
) -> dict:
    """Convert an amount between currencies.

    Args:
        from_currency: Source currency code (e.g., "USD").
        to_currency: Target currency code (e.g., "EUR").
        amount: Amount to convert (default 1).

    Returns:
        from, to, rate, timestamp, originalAmount, convertedAmount.
    """
    return await _run(
        "convert_currency",
        from_currency=from_currency,
        to_currency=to_currency,
        amount=amount,
    )


@mcp.tool()
async def get_destination_currency(destination: str) -> dict:
    """Get the local currency of a destination.

    Returns:
        code, name, symbol, country.  Unlisted destinations report US Dollar
        with country "Unknown".
    """
    return await _run("get_destination_currency", destination=destination)


@mcp.tool()
async def get_travel_budget_conversion(
    budget: float,
    destinations: list[str],
    home_currency: str = "USD",
) -> list[dict]:
    """Convert a travel budget into each destination's local currency.

    Args:
        budget: Budget amount in home_currency.
        destinations: Destinations to convert for.
        home_currency: Currency the budget is in (default "USD").

    Returns:
        One entry per destination, in the order given: localCurrency,
        budgetInLocalCurrency, exchangeRate, or {destination, error}.
    """
    return await _run(
        "get_travel_budget_conversion",
        budget=budget,
        destinations=destinations,
        home_currency=home_currency,
    )


@mcp.tool()
async def get_currency_trends(
    from_currency: str,
    to_currency: str,
    days: int = 30,
) -> dict:
    """Get exchange rate trends for a currency pair.

    Args:
        from_currency: Base currency code.
        to_currency: Target currency code.
        days: Days of history, 7-365 (default 30).

    Returns:
        from, to, days, trends [{date, rate}] oldest first, averageRate,
        minRate, maxRate.
    """
    return await _run(
        "get_currency_trends",
        from_currency=from_currency,
        to_currency=to_currency,
        days=days,
    )


# =============================================================================
# TRANSLATION TOOLS
# =============================================================================
@mcp.tool()
async def translate_text(
    text: str,
    target_language: str,
    source_language: Optional[str] = None,
) -> dict:
    """Translate text to a target language.

    Args:
        text: Text to translate.
        target_language: Target language code (e.g., "es", "fr", "ja").
        source_language: Source language code (optional, auto-detected).

    Returns:
        originalText, translatedText, sourceLanguage, targetLanguage,
        confidence (0-1).
    """
    return await _run(
        "translate_text",
        text=text,
        target_language=target_language,
        source_language=source_language,
    )


@mcp.tool()
async def detect_language(text: str) -> dict:
    """Detect the language of a text.

    Returns:
        text, language (code), confidence (0-1).
    """
    return await _run("detect_language", text=text)


@mcp.tool()
async def get_travel_phrases(language: str, category: str = "basic") -> dict:
    """Get common travel phrases translated into a language.

    Args:
        language: Target language code.
        category: One of basic, emergency, food, transport, accommodation.

    Returns:
        language, category and phrases {key: translated phrase}.
    """
    return await _run("get_travel_phrases", language=language, category=category)


@mcp.tool()
async def translate_destination_info(
    destination: str,
    target_language: str,
    content_type: str = "guide",
) -> dict:
    """Translate destination-specific information for travelers.

    Args:
        destination: Destination name.
        target_language: Target language code.
        content_type: One of guide, menu, signs, emergency, customs.

    Returns:
        destination, targetLanguage, contentType, originalText,
        translatedText.
    """
    return await _run(
        "translate_destination_info",
        destination=destination,
        target_language=target_language,
        content_type=content_type,
    )


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Run the tool server over stdio."""
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    get_operations()
    logging.info("Smart Travel Orchestrator MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
