"""
Service discovery from trace data.
"""

from typing import Any

from mcp.types import TextContent

from ..client import SigNozAPIError, SigNozClient
from ..shared import TableResult, build_payload, make_attribute, make_default_query, parse_result
from ..shared.time_utils import SERVICES_WINDOW_SECONDS, trailing_window
from ..utils import text_result

SERVICES_LIMIT = 1000


async def _list_services(args: dict[str, Any], client: SigNozClient) -> list[TextContent]:
    """List unique service names that sent spans in the last 24 hours."""
    builder_query = make_default_query(
        "traces",
        aggregate_operator="count",
        group_by=(make_attribute("serviceName", "string", "tag", True),),
        step_interval=0,
        limit=SERVICES_LIMIT,
        order_by=(),
    )
    payload = build_payload(trailing_window(SERVICES_WINDOW_SECONDS), step=0, panel_type="table", query=builder_query)

    try:
        response = await client.query_range(payload)
    except SigNozAPIError as e:
        return text_result(f"Error fetching services: {e}")

    result = parse_result(response)
    if not isinstance(result, TableResult) or not result.rows:
        return text_result("No services found.")

    if "serviceName" not in result.headers:
        return text_result("Could not find 'serviceName' column in the result.")

    index = result.headers.index("serviceName")
    services = [row[index] for row in result.rows if len(row) > index and row[index]]
    if not services:
        return text_result("No services found.")

    return text_result("Found the following services:\n\n- " + "\n- ".join(str(s) for s in services))
