"""
Log tools: raw log search and log aggregation.
"""

import logging
from typing import Any

from mcp.types import TextContent

from ..client import SigNozAPIError, SigNozClient
from ..shared import (
    Filter,
    FilterItem,
    build_payload,
    format_log_entry,
    make_aggregate_attribute,
    make_default_query,
    make_filter,
    make_group_by,
    normalize_response,
)
from ..shared.models import TimeRange
from ..shared.time_utils import SEARCH_WINDOW_SECONDS, detect_latest_log_range, resolve_time_range
from ..utils import text_result

logger = logging.getLogger("signoz_tools.logs")

# Panel types that bucket results over time
TIME_BUCKETED_PANELS = ("graph", "value")


def _service_filter(service_name: str) -> FilterItem:
    return make_filter("service.name", "string", "resource", "=", service_name, True)


async def _search_logs(args: dict[str, Any], client: SigNozClient) -> list[TextContent]:
    """Fetch raw log entries, newest first.

    Supports:
    - Body keyword search (query)
    - Service filtering (serviceName)
    - Pagination (pageSize, limit)
    """
    query = args.get("query")
    service_name = args.get("serviceName")
    page_size = args.get("pageSize", 20)
    limit = args.get("limit", 1000)

    time_range = resolve_time_range(args.get("startTimeUnix"), args.get("endTimeUnix"), SEARCH_WINDOW_SECONDS)

    filters = []
    if service_name:
        filters.append(_service_filter(service_name))
    if query:
        filters.append(make_filter("body", "string", "log", "contains", query))

    builder_query = make_default_query(
        "logs",
        page_size=page_size,
        limit=limit,
        filters=Filter(items=tuple(filters), op="AND"),
        step_interval=0,
        aggregate_operator="noop",
    )
    payload = build_payload(time_range, step=0, panel_type="list", query=builder_query)

    try:
        response = await client.query_range(payload)
    except SigNozAPIError as e:
        return text_result(f"Error searching logs: {e}")

    return text_result(normalize_response(response, "list", "Found {count} logs", format_log_entry))


async def _aggregate_logs(args: dict[str, Any], client: SigNozClient) -> list[TextContent]:
    """Aggregate log data into a table, time series or single value.

    Without an explicit time range, the window is the hour ending at the
    most recent log.
    """
    aggregation_function = args["aggregationFunction"]
    panel_type = args["panelType"]
    group_by = args.get("groupBy")
    aggregate_field = args.get("aggregateField")
    service_name = args.get("serviceName")
    step_interval = args.get("stepInterval", 60)
    start_unix = args.get("startTimeUnix")
    end_unix = args.get("endTimeUnix")

    if aggregation_function != "count" and not aggregate_field:
        return text_result(f"Error: 'aggregateField' is required for '{aggregation_function}'.")

    if start_unix is None or end_unix is None:
        time_range = await detect_latest_log_range(client)
    else:
        time_range = TimeRange.from_unix(start_unix, end_unix)

    logger.debug(f"aggregate-logs window: {time_range}")

    filters = [_service_filter(service_name)] if service_name else []

    # Table panels aggregate over the whole window
    final_step = step_interval if panel_type in TIME_BUCKETED_PANELS else 0

    builder_query = make_default_query(
        "logs",
        aggregate_operator=aggregation_function,
        aggregate_attribute=make_aggregate_attribute(aggregation_function, aggregate_field),
        group_by=make_group_by(group_by),
        filters=Filter(items=tuple(filters), op="AND"),
        step_interval=final_step,
        reduce_to=aggregation_function,
    )
    payload = build_payload(time_range, step=final_step, panel_type=panel_type, query=builder_query)

    try:
        response = await client.query_range(payload)
    except SigNozAPIError as e:
        return text_result(f"Error aggregating logs: {e}")

    return text_result(normalize_response(response, panel_type, f"Aggregated logs ({panel_type})"))
