"""
SigNoz MCP Server entry point.

Run with: python -m signoz_tools [--env-file PATH] [--verbose]
"""

import argparse
import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server

from .client import SigNozClient
from .config import SigNozConfig, load_env
from .tools import register_tools

logger = logging.getLogger("signoz_tools")


def setup_logging(verbose: bool = False):
    """Configure logging on stderr; stdout carries the MCP stream."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def parse_args(argv: list[str] | None = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="SigNoz MCP server (stdio)")
    parser.add_argument("--env-file", help="Path to a .env file (default: search from the current directory)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def run_server(config: SigNozConfig):
    """Run the MCP server."""
    app = Server("signoz")
    register_tools(app, SigNozClient(config))

    # stdio_server is an async context manager
    async with stdio_server() as (read_stream, write_stream):
        logger.info("SigNoz MCP Server is running and connected via stdio.")
        await app.run(read_stream, write_stream, app.create_initialization_options())


def main(argv: list[str] | None = None):
    """Main entry point for the SigNoz MCP server."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        load_env(args.env_file)
        config = SigNozConfig.from_env()
    except (FileNotFoundError, ValueError) as e:
        print(f"FATAL ERROR: {e}", file=sys.stderr)
        print("Please ensure a .env file or environment provides SIGNOZ_API_BASE_URL and SIGNOZ_API_KEY.", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Error starting MCP server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
