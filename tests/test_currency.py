# tests/test_currency.py

import random
from datetime import date, timedelta

import httpx
import pytest

from core.currency import (
    ExchangeRateApiProvider,
    MockCurrencyProvider,
    convert_budget,
    lookup_destination_currency,
)
from core.errors import ProviderError, RateUnavailableError, ValidationError
from core.models import BudgetConversion, DestinationFailure

BASE_URL = "https://rates.test/v6"


@pytest.mark.parametrize(
    "destination, code",
    [("Paris", "EUR"), ("London", "GBP"), ("Tokyo", "JPY"), ("Bangkok", "THB"), ("Dubai", "AED")],
)
def test_destination_currency_table(destination, code):
    assert lookup_destination_currency(destination).code == code


def test_unknown_destination_falls_back_to_usd():
    info = lookup_destination_currency("Atlantis")
    assert (info.code, info.name, info.country) == ("USD", "US Dollar", "Unknown")


def test_destination_lookup_is_case_sensitive():
    assert lookup_destination_currency("paris").code == "USD"


async def test_convert_usd_to_eur():
    quote = await MockCurrencyProvider().convert("USD", "EUR", 100)

    assert quote.rate == pytest.approx(0.92)
    assert quote.converted_amount == 100 * quote.rate
    assert quote.original_amount == 100
    assert quote.timestamp


async def test_same_currency_rate_is_one():
    assert await MockCurrencyProvider().get_rate("EUR", "EUR") == 1.0


async def test_unknown_pair_is_an_error():
    with pytest.raises(RateUnavailableError, match="Exchange rate not available for USD to XYZ"):
        await MockCurrencyProvider().convert("USD", "XYZ", 10)


async def test_trends_cover_requested_days_ending_today():
    today = date(2024, 6, 30)
    trends = await MockCurrencyProvider(random.Random(9)).get_trends("USD", "EUR", 30, today=today)

    dates = [point.date for point in trends.trends]
    assert len(dates) == 30
    assert dates == sorted(dates)
    assert dates[-1] == today.isoformat()
    assert dates[0] == (today - timedelta(days=29)).isoformat()
    assert trends.min_rate <= trends.average_rate <= trends.max_rate
    assert all(0.8 <= point.rate <= 1.2 for point in trends.trends)


@pytest.mark.parametrize("days", [6, 366])
async def test_trends_reject_out_of_range_days(days):
    with pytest.raises(ValidationError):
        await MockCurrencyProvider().get_trends("USD", "EUR", days)


async def test_budget_conversion_keeps_order_and_isolates_failures(aggregator):
    provider = MockCurrencyProvider(rates={"USD": 1.0, "EUR": 0.92})

    results = await convert_budget(provider, aggregator, 1000, ["Paris", "Tokyo", "New York"])

    assert [r.destination for r in results] == ["Paris", "Tokyo", "New York"]
    assert isinstance(results[0], BudgetConversion)
    assert results[0].local_currency.code == "EUR"
    assert results[0].budget_in_local_currency == pytest.approx(920)
    assert results[1] == DestinationFailure(
        "Tokyo", "Unable to convert currency: Exchange rate not available for USD to JPY"
    )
    assert results[2].budget_in_local_currency == pytest.approx(1000)


# -----------------------------------------------------------------------------
# ExchangeRate-API over a mock transport
# -----------------------------------------------------------------------------
def _live(handler) -> ExchangeRateApiProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ExchangeRateApiProvider("KEY", client, base_url=BASE_URL, timeout=2.0)


async def test_exchange_rate_api_conversion():
    def handler(request):
        assert request.url.path == "/v6/KEY/latest/USD"
        return httpx.Response(200, json={
            "result": "success",
            "base_code": "USD",
            "conversion_rates": {"USD": 1, "EUR": 0.9},
        })

    quote = await _live(handler).convert("USD", "EUR", 10)
    assert quote.rate == 0.9
    assert quote.converted_amount == pytest.approx(9.0)


async def test_exchange_rate_api_unsupported_code():
    provider = _live(lambda request: httpx.Response(
        200, json={"result": "error", "error-type": "unsupported-code"}
    ))
    with pytest.raises(RateUnavailableError):
        await provider.convert("XXX", "EUR")


async def test_exchange_rate_api_missing_target_currency():
    provider = _live(lambda request: httpx.Response(
        200, json={"result": "success", "conversion_rates": {"USD": 1}}
    ))
    with pytest.raises(RateUnavailableError):
        await provider.convert("USD", "EUR")


async def test_exchange_rate_api_http_error():
    provider = _live(lambda request: httpx.Response(
        403, json={"result": "error", "error-type": "invalid-key"}
    ))
    with pytest.raises(ProviderError) as excinfo:
        await provider.convert("USD", "EUR")
    assert str(excinfo.value) == "ExchangeRate-API: invalid-key"


async def test_exchange_rate_api_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError, match="connection refused"):
        await _live(handler).convert("USD", "EUR")
