"""Tests for the search-traces and aggregate-traces tools."""

import httpx
import pytest

from conftest import list_response, table_response
from signoz_tools.traces.analyzer import _aggregate_traces, _search_traces

SERVICE_FILTER = {
    "key": {"key": "serviceName", "dataType": "string", "type": "tag", "isColumn": True},
    "op": "=",
    "value": "cart",
}


def _error_filter(value: bool) -> dict:
    return {"key": {"key": "hasError", "dataType": "bool", "type": "tag", "isColumn": True}, "op": "=", "value": value}


class TestSearchTraces:
    """Tests for _search_traces."""

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_builds_list_query(self, make_client) -> None:
        client, backend = make_client(list_response([]))

        await _search_traces(
            {"serviceName": "cart", "hasError": True, "startTimeUnix": 10, "endTimeUnix": 20, "limit": 50}, client
        )

        payload = backend.payloads[0]
        assert (payload["start"], payload["end"], payload["step"]) == (10_000, 20_000, 0)
        assert payload["compositeQuery"]["panelType"] == "list"
        query = backend.last_query
        assert query["dataSource"] == "traces"
        assert query["aggregateOperator"] == "noop"
        assert query["pageSize"] == 20
        assert query["limit"] == 50
        assert query["filters"]["items"] == [SERVICE_FILTER, _error_filter(True)]

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_has_error_false_is_still_a_filter(self, make_client) -> None:
        client, backend = make_client(list_response([]))

        await _search_traces({"hasError": False}, client)

        assert backend.last_query["filters"]["items"] == [_error_filter(False)]
        assert backend.payloads[0]["end"] - backend.payloads[0]["start"] == 30 * 60 * 1000

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_renders_spans(self, make_client) -> None:
        spans = [
            {
                "timestamp": "2024-01-01T00:00:00Z",
                "data": {"traceID": "abc", "spanID": "def", "serviceName": "cart", "name": "GET /cart", "durationNano": 1_500_000},
            }
        ]
        client, _ = make_client(list_response(spans))

        result = await _search_traces({}, client)

        assert result[0].text == (
            "Found 1 traces:\n\nTraceID: abc, SpanID: def, Service: cart, Name: GET /cart, Duration: 1.50ms"
        )

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_string_duration_renders(self, make_client) -> None:
        spans = [{"data": {"traceID": "abc", "spanID": "def", "serviceName": "cart", "name": "GET /", "durationNano": "1500000"}}]
        client, _ = make_client(list_response(spans))

        result = await _search_traces({}, client)

        assert result[0].text.endswith("Duration: 1.50ms")

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_backend_error_is_returned_as_text(self, make_client) -> None:
        client, _ = make_client(httpx.ConnectError("dns failure"))

        result = await _search_traces({}, client)

        assert result[0].text == "Error searching traces: API call failed with status N/A: dns failure"


class TestAggregateTraces:
    """Tests for _aggregate_traces."""

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_missing_aggregate_field_makes_no_request(self, make_client) -> None:
        client, backend = make_client()

        result = await _aggregate_traces({"aggregationFunction": "avg"}, client)

        assert result[0].text == "Error: 'aggregateField' is required for 'avg'."
        assert backend.requests == []

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_builds_table_query(self, make_client) -> None:
        client, backend = make_client(table_response(["serviceName", "p99"], [["cart", "120"]]))

        await _aggregate_traces(
            {
                "aggregationFunction": "p99",
                "aggregateField": "durationNano",
                "groupBy": ["serviceName", "k8s.pod.name", "httpMethod"],
                "serviceName": "cart",
                "hasError": False,
                "startTimeUnix": 100,
                "endTimeUnix": 200,
            },
            client,
        )

        payload = backend.payloads[0]
        assert (payload["start"], payload["end"], payload["step"]) == (100_000, 200_000, 0)
        assert payload["compositeQuery"]["panelType"] == "table"
        query = backend.last_query
        assert query["stepInterval"] == 0
        assert query["aggregateOperator"] == "p99"
        assert query["reduceTo"] == "p99"
        assert query["aggregateAttribute"]["key"] == "durationNano"
        assert [(a["key"], a["type"]) for a in query["groupBy"]] == [
            ("serviceName", "resource"),
            ("k8s.pod.name", "resource"),
            ("httpMethod", "tag"),
        ]
        assert query["filters"]["items"] == [SERVICE_FILTER, _error_filter(False)]

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_default_window_is_one_hour(self, make_client) -> None:
        client, backend = make_client(table_response(["count"], [["1"]]))

        await _aggregate_traces({"aggregationFunction": "count"}, client)

        payload = backend.payloads[0]
        assert payload["end"] - payload["start"] == 60 * 60 * 1000
        assert backend.last_query["aggregateAttribute"] == {}

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_renders_table(self, make_client) -> None:
        client, _ = make_client(table_response(["serviceName", "count"], [["checkout", "42"], ["cart", "7"]]))

        result = await _aggregate_traces({"aggregationFunction": "count", "groupBy": ["serviceName"]}, client)

        assert result[0].text == "Aggregated traces (table):\n\nserviceName: checkout, count: 42\nserviceName: cart, count: 7"

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_empty_table(self, make_client) -> None:
        client, _ = make_client(table_response(["count"], []))

        result = await _aggregate_traces({"aggregationFunction": "count"}, client)

        assert result[0].text == "No results found."

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_short_table_row_renders(self, make_client) -> None:
        client, _ = make_client(table_response(["serviceName", "count"], [["checkout"]]))

        result = await _aggregate_traces({"aggregationFunction": "count", "groupBy": ["serviceName"]}, client)

        assert result[0].text == "Aggregated traces (table):\n\nserviceName: checkout, count: "

    @pytest.mark.asyncio
    @pytest.mark.backend
    async def test_backend_error_is_returned_as_text(self, make_client) -> None:
        client, _ = make_client(httpx.Response(401, json={"message": "invalid api key"}))

        result = await _aggregate_traces({"aggregationFunction": "count"}, client)

        assert result[0].text == "Error aggregating traces: API call failed with status 401: invalid api key"
