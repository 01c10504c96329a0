# =============================================================================
# core/currency.py  —  Currency Provider Capability
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Exchange rates and conversions, the local currency of a destination,
#   rate trends, and converting one budget for many destinations at once.
#
# DATA SOURCE TOGGLE:
#   ExchangeRateApiProvider when EXCHANGE_API_KEY is set, otherwise
#   MockCurrencyProvider with a fixed table of USD-based rates.
#
# RULES:
#   - Destination → currency is an exact, case-sensitive table lookup.
#     Unknown destinations fall back to US Dollar / "Unknown".
#   - A missing rate for a pair is an ERROR (RateUnavailableError), never a
#     silent 1.0.
#   - Trends are simulated for both providers: the free APIs have no history.
# =============================================================================

import logging
import random
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import httpx

from core.errors import ProviderError, RateUnavailableError, ValidationError
from core.models import (
    BudgetConversion,
    CurrencyInfo,
    CurrencyTrends,
    ExchangeQuote,
    RatePoint,
)
from core.upstream import request_json

logger = logging.getLogger(__name__)

TREND_MIN_DAYS = 7
TREND_MAX_DAYS = 365

DESTINATION_CURRENCIES: dict[str, CurrencyInfo] = {
    "Paris": CurrencyInfo("EUR", "Euro", "€", "France"),
    "London": CurrencyInfo("GBP", "British Pound", "£", "United Kingdom"),
    "Tokyo": CurrencyInfo("JPY", "Japanese Yen", "¥", "Japan"),
    "New York": CurrencyInfo("USD", "US Dollar", "$", "United States"),
    "Sydney": CurrencyInfo("AUD", "Australian Dollar", "A$", "Australia"),
    "Bangkok": CurrencyInfo("THB", "Thai Baht", "฿", "Thailand"),
    "Dubai": CurrencyInfo("AED", "UAE Dirham", "د.إ", "UAE"),
    "Singapore": CurrencyInfo("SGD", "Singapore Dollar", "S$", "Singapore"),
}

DEFAULT_CURRENCY = CurrencyInfo("USD", "US Dollar", "$", "Unknown")

# Units of each currency per 1 USD.
MOCK_RATES_PER_USD: dict[str, float] = {
    "USD": 1.0,
    "EUR": 0.92,
    "GBP": 0.79,
    "JPY": 149.5,
    "AUD": 1.52,
    "THB": 35.8,
    "AED": 3.6725,
    "SGD": 1.34,
    "CAD": 1.36,
    "CHF": 0.88,
    "INR": 83.2,
    "MXN": 17.1,
}


def lookup_destination_currency(destination: str) -> CurrencyInfo:
    """Currency for a destination, or US Dollar / "Unknown" if not listed."""
    info = DESTINATION_CURRENCIES.get(destination, DEFAULT_CURRENCY)
    return CurrencyInfo(info.code, info.name, info.symbol, info.country)


# =============================================================================
# The capability interface
# =============================================================================
class CurrencyProvider(ABC):
    """Exchange rates for travel budgeting."""

    name = "currency"
    mode = "abstract"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    @abstractmethod
    async def get_rate(self, from_currency: str, to_currency: str) -> float:
        """Units of to_currency per one from_currency.  Raises RateUnavailableError."""

    async def convert(self, from_currency: str, to_currency: str, amount: float = 1) -> ExchangeQuote:
        rate = await self.get_rate(from_currency, to_currency)
        if not rate or rate <= 0:
            raise RateUnavailableError(from_currency, to_currency)
        return ExchangeQuote(
            from_currency=from_currency,
            to_currency=to_currency,
            rate=rate,
            timestamp=datetime.now(timezone.utc).isoformat(),
            original_amount=amount,
            converted_amount=amount * rate,
        )

    def lookup_destination(self, destination: str) -> CurrencyInfo:
        return lookup_destination_currency(destination)

    async def get_trends(
        self,
        from_currency: str,
        to_currency: str,
        days: int = 30,
        today: Optional[date] = None,
    ) -> CurrencyTrends:
        """One simulated rate per day for the last ``days`` days, ending today."""
        if not TREND_MIN_DAYS <= days <= TREND_MAX_DAYS:
            raise ValidationError(
                f"days must be between {TREND_MIN_DAYS} and {TREND_MAX_DAYS}, got {days}"
            )
        today = today or date.today()
        rng = self._rng

        trends = []
        for offset in range(days - 1, -1, -1):
            base_rate = 0.85 + rng.random() * 0.3
            variation = (rng.random() - 0.5) * 0.1
            trends.append(RatePoint(
                date=(today - timedelta(days=offset)).isoformat(),
                rate=base_rate + variation,
            ))

        return CurrencyTrends(
            from_currency=from_currency,
            to_currency=to_currency,
            days=days,
            trends=trends,
        )


# =============================================================================
# MOCK PROVIDER
# =============================================================================
class MockCurrencyProvider(CurrencyProvider):
    """Cross rates derived from MOCK_RATES_PER_USD."""

    mode = "mock"

    def __init__(self, rng: Optional[random.Random] = None, rates: Optional[dict[str, float]] = None):
        super().__init__(rng)
        self._rates = dict(rates if rates is not None else MOCK_RATES_PER_USD)

    async def get_rate(self, from_currency, to_currency):
        if from_currency not in self._rates or to_currency not in self._rates:
            raise RateUnavailableError(from_currency, to_currency)
        if from_currency == to_currency:
            return 1.0
        return self._rates[to_currency] / self._rates[from_currency]


# =============================================================================
# LIVE PROVIDER: ExchangeRate-API
# =============================================================================
class ExchangeRateApiProvider(CurrencyProvider):
    """ExchangeRate-API v6: GET {base}/{key}/latest/{from}."""

    mode = "live"
    provider_name = "ExchangeRate-API"

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str = "https://v6.exchangerate-api.com/v6",
        timeout: float = 10.0,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(rng)
        self._api_key = api_key
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def get_rate(self, from_currency, to_currency):
        data = await request_json(
            self._client,
            self.provider_name,
            "GET",
            f"{self._base_url}/{self._api_key}/latest/{from_currency}",
            timeout=self._timeout,
        )
        if not isinstance(data, dict):
            raise ProviderError(self.provider_name, "malformed payload")
        if data.get("result") == "error":
            error_type = data.get("error-type", "unknown error")
            if error_type == "unsupported-code":
                raise RateUnavailableError(from_currency, to_currency)
            raise ProviderError(self.provider_name, error_type)

        rates = data.get("conversion_rates") or data.get("rates")
        if not isinstance(rates, dict):
            raise ProviderError(self.provider_name, "malformed payload (no rates)")
        rate = rates.get(to_currency)
        if not rate:
            raise RateUnavailableError(from_currency, to_currency)
        return float(rate)


# =============================================================================
# Budget conversion across destinations
# =============================================================================
async def convert_budget(
    provider: CurrencyProvider,
    aggregator,
    budget: float,
    destinations: list[str],
    home_currency: str = "USD",
) -> list:
    """The same budget in each destination's local currency, input order kept."""

    async def fetch(destination: str) -> BudgetConversion:
        local = provider.lookup_destination(destination)
        quote = await provider.convert(home_currency, local.code, budget)
        return BudgetConversion(
            destination=destination,
            local_currency=local,
            budget_in_local_currency=quote.converted_amount,
            exchange_rate=quote.rate,
        )

    return await aggregator.per_destination(
        destinations, fetch, "Unable to convert currency"
    )
