"""
MCP Tool definitions for the SigNoz tools.

This module contains all tool schemas and descriptions advertised to clients.
"""

from mcp.types import Tool

AGGREGATION_FUNCTIONS = ["count", "count_distinct", "sum", "avg", "min", "max", "p50", "p90", "p99", "rate"]

_TIME_RANGE_DESCRIPTION = "{bound} of time range in Unix seconds. {default}"


def _time_bound(bound: str, default: str) -> dict:
    return {"type": "integer", "description": _TIME_RANGE_DESCRIPTION.format(bound=bound, default=default)}


def get_all_tool_definitions() -> list[Tool]:
    """Return all MCP tool definitions."""
    return [
        # =============================================================================
        # Log Tools
        # =============================================================================
        Tool(
            name="search-logs",
            description="Fetches a list of raw log entries. "
            "Use this when you need to see specific log examples, not for summarized data or charts.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Keywords to search for in the log body."},
                    "startTimeUnix": _time_bound("Start", "Defaults to 30 mins ago."),
                    "endTimeUnix": _time_bound("End", "Defaults to now."),
                    "pageSize": {
                        "type": "integer",
                        "minimum": 1,
                        "default": 20,
                        "description": "Number of logs to return.",
                    },
                    "limit": {"type": "integer", "minimum": 1, "default": 1000, "description": "Total pagination limit."},
                    "serviceName": {"type": "string", "description": "Filter by a specific service name."},
                },
            },
        ),
        Tool(
            name="aggregate-logs",
            description="Calculates aggregate metrics from log data, such as counts or averages. "
            "This is the primary tool for generating data for charts and tables.",
            inputSchema={
                "type": "object",
                "properties": {
                    "aggregationFunction": {
                        "type": "string",
                        "enum": AGGREGATION_FUNCTIONS,
                        "description": "The calculation to perform.",
                    },
                    "panelType": {
                        "type": "string",
                        "enum": ["table", "graph", "value"],
                        "description": "The desired output format. Use 'table' for categorical breakdowns (with `groupBy`), "
                        "'graph' for time-series data (with `stepInterval`), or 'value' for a single number.",
                    },
                    "startTimeUnix": _time_bound(
                        "Start", "If not provided, the tool will auto-detect the time of the most recent logs."
                    ),
                    "endTimeUnix": _time_bound(
                        "End", "If not provided, the tool will auto-detect the time of the most recent logs."
                    ),
                    "groupBy": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "For 'table' panelType, fields to group by "
                        "(e.g., to get a count per service, use ['service.name']).",
                    },
                    "aggregateField": {
                        "type": "string",
                        "description": "The numeric field to perform the calculation on (required for sum, avg, etc.).",
                    },
                    "serviceName": {"type": "string", "description": "Filter logs to a specific service before aggregating."},
                    "stepInterval": {
                        "type": "integer",
                        "minimum": 1,
                        "default": 60,
                        "description": "For 'graph' panelType, the time bucket size in seconds (e.g., 60 for 1-minute intervals).",
                    },
                },
                "required": ["aggregationFunction", "panelType"],
            },
        ),
        # =============================================================================
        # Trace Tools
        # =============================================================================
        Tool(
            name="search-traces",
            description="Fetches a list of raw trace spans. "
            "Use this to find specific examples of traces, not for summarized data or charts.",
            inputSchema={
                "type": "object",
                "properties": {
                    "startTimeUnix": _time_bound("Start", "Defaults to 30 mins ago."),
                    "endTimeUnix": _time_bound("End", "Defaults to now."),
                    "pageSize": {
                        "type": "integer",
                        "minimum": 1,
                        "default": 20,
                        "description": "Number of traces to return.",
                    },
                    "limit": {"type": "integer", "minimum": 1, "default": 1000, "description": "Total pagination limit."},
                    "serviceName": {"type": "string", "description": "Filter by a specific service name."},
                    "hasError": {"type": "boolean", "description": "Filter for traces that have an error."},
                },
            },
        ),
        Tool(
            name="aggregate-traces",
            description="Calculates aggregate metrics from trace data. "
            "Use this for charts and tables about trace performance.",
            inputSchema={
                "type": "object",
                "properties": {
                    "aggregationFunction": {
                        "type": "string",
                        "enum": AGGREGATION_FUNCTIONS,
                        "description": "The calculation to perform.",
                    },
                    "startTimeUnix": _time_bound("Start", "Defaults to 1 hour ago."),
                    "endTimeUnix": _time_bound("End", "Defaults to now."),
                    "groupBy": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Fields to group by (e.g., to get a count per service, use ['serviceName']).",
                    },
                    "aggregateField": {
                        "type": "string",
                        "description": "The numeric field to perform the calculation on (e.g., 'durationNano'). "
                        "Required for sum, avg, etc.",
                    },
                    "serviceName": {"type": "string", "description": "Filter traces to a specific service before aggregating."},
                    "hasError": {"type": "boolean", "description": "Filter traces that have an error."},
                },
                "required": ["aggregationFunction"],
            },
        ),
        # =============================================================================
        # Service Tools
        # =============================================================================
        Tool(
            name="list-services",
            description="Fetches a list of all unique service names that have sent traces in the last 24 hours.",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]
