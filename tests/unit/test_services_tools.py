"""Tests for the list-services tool."""

import time

import httpx
import pytest

from conftest import table_response
from signoz_tools.services.analyzer import _list_services


@pytest.mark.asyncio
@pytest.mark.backend
async def test_builds_grouped_count_query(make_client) -> None:
    client, backend = make_client(table_response(["serviceName", "count"], [["cart", "3"]]))

    before_ms = int(time.time() * 1000)
    await _list_services({}, client)

    payload = backend.payloads[0]
    assert payload["end"] >= before_ms
    assert payload["end"] - payload["start"] == 24 * 60 * 60 * 1000
    assert payload["step"] == 0
    assert payload["compositeQuery"]["panelType"] == "table"
    query = backend.last_query
    assert query["dataSource"] == "traces"
    assert query["aggregateOperator"] == "count"
    assert query["limit"] == 1000
    assert query["orderBy"] == []
    assert query["stepInterval"] == 0
    assert query["groupBy"] == [{"key": "serviceName", "dataType": "string", "type": "tag", "isColumn": True}]


@pytest.mark.asyncio
@pytest.mark.backend
async def test_ignores_time_parameters(make_client) -> None:
    client, backend = make_client(table_response(["serviceName"], [["cart"]]))

    await _list_services({"startTimeUnix": 1, "endTimeUnix": 2}, client)

    assert backend.payloads[0]["start"] != 1000


@pytest.mark.asyncio
@pytest.mark.backend
async def test_lists_service_names(make_client) -> None:
    client, _ = make_client(table_response(["count", "serviceName"], [["3", "cart"], ["9", "checkout"], ["1", ""]]))

    result = await _list_services({}, client)

    assert result[0].text == "Found the following services:\n\n- cart\n- checkout"


@pytest.mark.asyncio
@pytest.mark.backend
@pytest.mark.parametrize(
    "response",
    [
        {"data": {"result": []}},
        table_response(["serviceName", "count"], []),
        table_response(["serviceName"], [[""], [None]]),
    ],
)
async def test_no_services(make_client, response) -> None:
    client, _ = make_client(response)

    result = await _list_services({}, client)

    assert result[0].text == "No services found."


@pytest.mark.asyncio
@pytest.mark.backend
async def test_missing_service_column(make_client) -> None:
    client, _ = make_client(table_response(["service.name", "count"], [["cart", "3"]]))

    result = await _list_services({}, client)

    assert result[0].text == "Could not find 'serviceName' column in the result."


@pytest.mark.asyncio
@pytest.mark.backend
async def test_backend_error_is_returned_as_text(make_client) -> None:
    client, _ = make_client(httpx.ReadTimeout("slow"))

    result = await _list_services({}, client)

    assert result[0].text.startswith("Error fetching services: API call failed with status N/A")
