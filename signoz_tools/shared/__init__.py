"""
Shared query-building and formatting utilities for the SigNoz tools.

``time_utils`` is imported directly by the analyzers since it depends on the client.
"""

from .attributes import (
    RESOURCE_KEYS,
    classify_attribute,
    make_attribute,
    make_filter,
    make_group_by,
)
from .formatters import (
    NO_DATA_MESSAGE,
    NO_RESULTS_MESSAGE,
    ListResult,
    SeriesResult,
    TableResult,
    UnrecognizedResult,
    format_duration_ms,
    format_log_entry,
    format_series,
    format_span_entry,
    format_table,
    normalize_response,
    parse_result,
)
from .models import (
    Attribute,
    BuilderQuery,
    CompositeQuery,
    EmptyAttribute,
    Filter,
    FilterItem,
    OrderBy,
    QueryRangePayload,
    TimeRange,
)
from .query_builder import (
    DEFAULT_QUERY_FIELDS,
    QUERY_NAME,
    build_payload,
    make_aggregate_attribute,
    make_default_query,
)

__all__ = [
    # Attributes
    "RESOURCE_KEYS",
    "classify_attribute",
    "make_attribute",
    "make_filter",
    "make_group_by",
    # Formatters
    "NO_DATA_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "ListResult",
    "SeriesResult",
    "TableResult",
    "UnrecognizedResult",
    "format_duration_ms",
    "format_log_entry",
    "format_series",
    "format_span_entry",
    "format_table",
    "normalize_response",
    "parse_result",
    # Models
    "Attribute",
    "BuilderQuery",
    "CompositeQuery",
    "EmptyAttribute",
    "Filter",
    "FilterItem",
    "OrderBy",
    "QueryRangePayload",
    "TimeRange",
    # Query builder
    "DEFAULT_QUERY_FIELDS",
    "QUERY_NAME",
    "build_payload",
    "make_aggregate_attribute",
    "make_default_query",
]
