"""
SigNoz tool registration.

Provides MCP tools for:
- Raw log search and log aggregation
- Raw span search and trace aggregation
- Service discovery

Usage:
- MCP server: python -m signoz_tools
- CLI: python -m signoz_tools.tools search-logs --help
"""

import asyncio
import sys
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from .client import SigNozClient
from .logs.analyzer import _aggregate_logs, _search_logs
from .services.analyzer import _list_services
from .tool_definitions import AGGREGATION_FUNCTIONS, get_all_tool_definitions
from .traces.analyzer import _aggregate_traces, _search_traces
from .utils import text_result

Handler = Callable[[dict[str, Any], SigNozClient], Awaitable[list[TextContent]]]


def get_handlers() -> dict[str, Handler]:
    """Return mapping of tool names to handler functions."""
    return {
        "search-logs": _search_logs,
        "aggregate-logs": _aggregate_logs,
        "search-traces": _search_traces,
        "aggregate-traces": _aggregate_traces,
        "list-services": _list_services,
    }


async def dispatch(name: str, arguments: dict[str, Any] | None, client: SigNozClient) -> list[TextContent]:
    handler = get_handlers().get(name)
    if handler is None:
        return text_result(f"Unknown tool: {name}")
    return await handler(arguments or {}, client)


def register_tools(server: Server, client: SigNozClient) -> None:
    """Register all SigNoz tools with the MCP server.

    Args:
        server: The MCP Server instance to register tools with.
        client: Backend client shared by all tool calls.
    """

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """Return the list of available tools."""
        return get_all_tool_definitions()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Route tool calls to the matching handler."""
        return await dispatch(name, arguments, client)


def _add_time_range_args(parser) -> None:
    parser.add_argument("--start-time-unix", type=int, dest="startTimeUnix", help="Start of time range (Unix seconds)")
    parser.add_argument("--end-time-unix", type=int, dest="endTimeUnix", help="End of time range (Unix seconds)")


def _add_aggregate_args(parser) -> None:
    parser.add_argument(
        "--aggregation-function", "-f", required=True, dest="aggregationFunction", choices=AGGREGATION_FUNCTIONS
    )
    parser.add_argument("--group-by", "-g", action="append", dest="groupBy", help="Field to group by (repeatable)")
    parser.add_argument("--aggregate-field", "-a", dest="aggregateField", help="Field to aggregate on")
    parser.add_argument("--service-name", "-s", dest="serviceName", help="Filter by service name")


def _has_error_arg(parser) -> None:
    parser.add_argument(
        "--has-error",
        dest="hasError",
        type=lambda v: v.lower() in ("1", "true", "yes"),
        help="Filter by error status (true/false)",
    )


def build_parser():
    """Build the argparse parser, one subcommand per tool."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="signoz_tools",
        description="Query SigNoz logs and traces from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Last 30 minutes of checkout logs mentioning "timeout"
  python -m signoz_tools.tools search-logs --query timeout --service-name checkout

  # p99 span duration per service
  python -m signoz_tools.tools aggregate-traces -f p99 -a durationNano -g serviceName

  # List available tools
  python -m signoz_tools.tools --list
        """,
    )
    parser.add_argument("--list", "-l", action="store_true", help="List available tools")
    parser.add_argument("--env-file", help="Path to a .env file with SIGNOZ_API_BASE_URL and SIGNOZ_API_KEY")

    subparsers = parser.add_subparsers(
        title="tools", dest="tool", description="Available tools (use '<tool> --help' for tool-specific help)"
    )

    search_logs = subparsers.add_parser("search-logs", help="Fetch raw log entries")
    search_logs.add_argument("--query", "-q", help="Keywords to search for in the log body")
    _add_time_range_args(search_logs)
    search_logs.add_argument("--page-size", type=int, default=20, dest="pageSize")
    search_logs.add_argument("--limit", type=int, default=1000)
    search_logs.add_argument("--service-name", "-s", dest="serviceName")

    aggregate_logs = subparsers.add_parser("aggregate-logs", help="Aggregate log data")
    _add_aggregate_args(aggregate_logs)
    aggregate_logs.add_argument("--panel-type", "-p", required=True, dest="panelType", choices=["table", "graph", "value"])
    aggregate_logs.add_argument("--step-interval", type=int, default=60, dest="stepInterval")
    _add_time_range_args(aggregate_logs)

    search_traces = subparsers.add_parser("search-traces", help="Fetch raw trace spans")
    _add_time_range_args(search_traces)
    search_traces.add_argument("--page-size", type=int, default=20, dest="pageSize")
    search_traces.add_argument("--limit", type=int, default=1000)
    search_traces.add_argument("--service-name", "-s", dest="serviceName")
    _has_error_arg(search_traces)

    aggregate_traces = subparsers.add_parser("aggregate-traces", help="Aggregate trace data")
    _add_aggregate_args(aggregate_traces)
    _has_error_arg(aggregate_traces)
    _add_time_range_args(aggregate_traces)

    subparsers.add_parser("list-services", help="List services seen in the last 24 hours")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line interface for SigNoz tools."""
    from .config import SigNozConfig, load_env

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        print("Available tools:")
        print()
        for tool in get_all_tool_definitions():
            print(f"  {tool.name:<18} - {tool.description}")
        print()
        print("Use '<tool> --help' for tool-specific options.")
        return 0

    if not args.tool:
        parser.print_help()
        return 0

    try:
        load_env(args.env_file)
        config = SigNozConfig.from_env()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    arguments = {k: v for k, v in vars(args).items() if k not in ("list", "env_file", "tool") and v is not None}
    result = asyncio.run(dispatch(args.tool, arguments, SigNozClient(config)))
    for content in result:
        print(content.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
