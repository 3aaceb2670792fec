"""
SigNoz Tools - MCP tools for querying SigNoz logs and traces.

This package translates tool parameters into SigNoz query_range builder
queries and renders the results as text for AI agents.

Tools: search-logs, aggregate-logs, search-traces, aggregate-traces, list-services.
"""

__version__ = "3.3.0"

__all__ = ["__version__"]
