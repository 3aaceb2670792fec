"""
Trace tools: raw span search and trace aggregation.
"""

from typing import Any

from mcp.types import TextContent

from ..client import SigNozAPIError, SigNozClient
from ..shared import (
    Filter,
    FilterItem,
    build_payload,
    format_span_entry,
    make_aggregate_attribute,
    make_default_query,
    make_filter,
    make_group_by,
    normalize_response,
)
from ..shared.time_utils import AGGREGATE_WINDOW_SECONDS, SEARCH_WINDOW_SECONDS, resolve_time_range
from ..utils import text_result


def _span_filters(service_name: str | None, has_error: bool | None) -> tuple[FilterItem, ...]:
    filters = []
    if service_name:
        filters.append(make_filter("serviceName", "string", "tag", "=", service_name, True))
    if has_error is not None:
        filters.append(make_filter("hasError", "bool", "tag", "=", has_error, True))
    return tuple(filters)


async def _search_traces(args: dict[str, Any], client: SigNozClient) -> list[TextContent]:
    """Fetch raw spans, newest first, optionally filtered by service and error status."""
    time_range = resolve_time_range(args.get("startTimeUnix"), args.get("endTimeUnix"), SEARCH_WINDOW_SECONDS)

    builder_query = make_default_query(
        "traces",
        page_size=args.get("pageSize", 20),
        limit=args.get("limit", 1000),
        filters=Filter(items=_span_filters(args.get("serviceName"), args.get("hasError")), op="AND"),
        step_interval=0,
        aggregate_operator="noop",
    )
    payload = build_payload(time_range, step=0, panel_type="list", query=builder_query)

    try:
        response = await client.query_range(payload)
    except SigNozAPIError as e:
        return text_result(f"Error searching traces: {e}")

    return text_result(normalize_response(response, "list", "Found {count} traces", format_span_entry))


async def _aggregate_traces(args: dict[str, Any], client: SigNozClient) -> list[TextContent]:
    """Aggregate span data into a table (counts, latency percentiles, ...).

    Defaults to the last hour when no time range is given.
    """
    aggregation_function = args["aggregationFunction"]
    aggregate_field = args.get("aggregateField")

    if aggregation_function != "count" and not aggregate_field:
        return text_result(f"Error: 'aggregateField' is required for '{aggregation_function}'.")

    time_range = resolve_time_range(args.get("startTimeUnix"), args.get("endTimeUnix"), AGGREGATE_WINDOW_SECONDS)

    builder_query = make_default_query(
        "traces",
        aggregate_operator=aggregation_function,
        aggregate_attribute=make_aggregate_attribute(aggregation_function, aggregate_field),
        group_by=make_group_by(args.get("groupBy")),
        filters=Filter(items=_span_filters(args.get("serviceName"), args.get("hasError")), op="AND"),
        step_interval=0,
        reduce_to=aggregation_function,
    )
    payload = build_payload(time_range, step=0, panel_type="table", query=builder_query)

    try:
        response = await client.query_range(payload)
    except SigNozAPIError as e:
        return text_result(f"Error aggregating traces: {e}")

    return text_result(normalize_response(response, "table", "Aggregated traces (table)"))
