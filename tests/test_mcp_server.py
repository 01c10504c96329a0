# tests/test_mcp_server.py

import json

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.operations import TravelOperations
from core.requests import REQUEST_MODELS
from tools import mcp_server


@pytest.fixture(autouse=True)
def installed_operations(operations):
    mcp_server.use_operations(operations)
    yield operations
    mcp_server.use_operations(None)


def _json(result):
    return json.loads(result.content[0].text)


async def test_all_tools_are_registered():
    async with Client(mcp_server.mcp) as client:
        tools = await client.list_tools()

    assert {tool.name for tool in tools} == set(REQUEST_MODELS)


async def test_plan_trip_tool():
    async with Client(mcp_server.mcp) as client:
        result = await client.call_tool("plan_trip", {
            "destination": "Tokyo",
            "start_date": "2024-06-01",
            "end_date": "2024-06-08",
            "travelers": 2,
        })

    plan = _json(result)
    assert plan["nights"] == 7
    assert plan["totalCost"] == 1740 + 1890 + 600
    assert plan["language"] == "Japanese"


async def test_convert_currency_tool():
    async with Client(mcp_server.mcp) as client:
        result = await client.call_tool("convert_currency", {
            "from_currency": "USD",
            "to_currency": "EUR",
            "amount": 100,
        })

    quote = _json(result)
    assert quote["from"] == "USD"
    assert quote["convertedAmount"] == pytest.approx(92)


async def test_list_result_tool():
    async with Client(mcp_server.mcp) as client:
        result = await client.call_tool("get_travel_budget_conversion", {
            "budget": 500,
            "destinations": ["Paris", "London"],
        })

    conversions = _json(result)
    assert [c["destination"] for c in conversions] == ["Paris", "London"]


async def test_invalid_dates_are_a_tool_error():
    async with Client(mcp_server.mcp) as client:
        with pytest.raises(ToolError, match="End date must be after start date"):
            await client.call_tool("plan_trip", {
                "destination": "Tokyo",
                "start_date": "2024-06-08",
                "end_date": "2024-06-01",
            })


async def test_unknown_category_is_a_tool_error():
    async with Client(mcp_server.mcp) as client:
        with pytest.raises(ToolError, match="category"):
            await client.call_tool("get_travel_phrases", {"language": "es", "category": "slang"})


async def test_provider_failure_is_prefixed_with_domain(providers, failing_weather_cls):
    providers.weather = failing_weather_cls()
    mcp_server.use_operations(TravelOperations(providers))

    async with Client(mcp_server.mcp) as client:
        with pytest.raises(ToolError, match="Weather API error: boom"):
            await client.call_tool("get_travel_weather", {"destination": "Paris"})
