"""
Normalization of query_range responses into plain text.

The first result entry of a response is parsed into one of the variants
below, then rendered line by line.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from ..utils import format_timestamp, safe_get
from .models import PanelType

NO_DATA_MESSAGE = "No data returned from API."
NO_RESULTS_MESSAGE = "No results found."


@dataclass(frozen=True)
class SeriesResult:
    series: list[dict[str, Any]]


@dataclass(frozen=True)
class TableResult:
    headers: list[str]
    rows: list[list[Any]]


@dataclass(frozen=True)
class ListResult:
    entries: list[dict[str, Any]]


@dataclass(frozen=True)
class UnrecognizedResult:
    keys: list[str] = field(default_factory=list)


QueryResult = SeriesResult | TableResult | ListResult | UnrecognizedResult


def parse_result(response: Any) -> QueryResult | None:
    """Extract the first result entry of a response as a tagged variant.

    Returns None when the response carries no result entry at all.
    """
    entry = safe_get(response, "data", "result", 0)
    if not isinstance(entry, dict):
        return None

    if isinstance(entry.get("series"), list):
        return SeriesResult(series=entry["series"])
    if isinstance(entry.get("table"), dict):
        table = entry["table"]
        return TableResult(headers=list(table.get("headers") or []), rows=list(table.get("rows") or []))
    if isinstance(entry.get("list"), list):
        return ListResult(entries=entry["list"])
    return UnrecognizedResult(keys=sorted(entry))


def _render_timestamp(ts: Any) -> str:
    """Format a timestamp, falling back to the raw value when it cannot be parsed."""
    try:
        return format_timestamp(ts)
    except (AttributeError, TypeError, ValueError, OverflowError, OSError):
        return str(ts)


def _format_labels(labels: dict[str, Any] | None) -> str:
    return ", ".join(f"{k}={v}" for k, v in (labels or {}).items())


def format_series(series: list[dict[str, Any]], panel_type: PanelType) -> str:
    """Render series points, one line per point.

    Graph panels: ``[<iso>] (k=v) -> Value: <v>``; value panels: ``Value: <v> (k=v)``.
    """
    lines = []
    for s in series:
        labels = _format_labels(s.get("labels"))
        label_text = f"({labels})" if labels else ""
        for point in s.get("values") or []:
            if panel_type == "value":
                lines.append(f"Value: {point.get('value')} {label_text}".strip())
            else:
                lines.append(f"[{_render_timestamp(point.get('timestamp'))}] {label_text} -> Value: {point.get('value')}")
    return "\n".join(lines)


def format_table(headers: list[str], rows: list[list[Any]]) -> str:
    """Render table rows as ``header: cell`` pairs, one row per line.

    Cells missing from a short row render empty.
    """
    return "\n".join(
        ", ".join(f"{header}: {row[i] if i < len(row) else ''}" for i, header in enumerate(headers)) for row in rows
    )


def format_log_entry(entry: dict[str, Any]) -> str:
    data = entry.get("data") or {}
    service = safe_get(data, "resources_string", "service.name") or "unknown"
    level = f"[{data['severity_text']}]" if data.get("severity_text") else ""
    return f"[{_render_timestamp(entry.get('timestamp'))}] [{service}] {level} {data.get('body', '')}"


def format_duration_ms(duration_nano: int | float | str) -> str:
    """Convert nanoseconds to a millisecond string, e.g. 1_500_000 -> '1.50ms'.

    Numeric strings are accepted; anything else renders as ``N/A``.
    """
    try:
        return f"{float(duration_nano) / 1_000_000:.2f}ms"
    except (TypeError, ValueError):
        return "N/A"


def format_span_entry(entry: dict[str, Any]) -> str:
    data = entry.get("data") or {}
    return (
        f"TraceID: {data.get('traceID')}, SpanID: {data.get('spanID')}, "
        f"Service: {data.get('serviceName')}, Name: {data.get('name')}, "
        f"Duration: {format_duration_ms(data.get('durationNano') or 0)}"
    )


def normalize_response(
    response: Any,
    panel_type: PanelType,
    title: str,
    entry_formatter: Callable[[dict[str, Any]], str] | None = None,
) -> str:
    """Render a query_range response as text.

    Args:
        response: Decoded JSON body.
        panel_type: Panel type the query was sent with.
        title: Heading placed above the rendered lines. ``{count}`` is
            replaced by the number of list entries.
        entry_formatter: Renders one list entry; required for list panels.

    Returns:
        The rendered text, or a fixed message when there is no data.

    Raises:
        ValueError: If ``panel_type`` is 'list' and no ``entry_formatter`` is given.
    """
    if panel_type == "list" and entry_formatter is None:
        raise ValueError("entry_formatter is required for list panels")

    result = parse_result(response)

    if result is None:
        return NO_DATA_MESSAGE
    if isinstance(result, SeriesResult):
        if not result.series:
            return NO_RESULTS_MESSAGE
        body = format_series(result.series, panel_type)
    elif isinstance(result, TableResult):
        if not result.rows:
            return NO_RESULTS_MESSAGE
        body = format_table(result.headers, result.rows)
    elif isinstance(result, ListResult):
        # List rows from an aggregate panel have no renderer
        if entry_formatter is None:
            return f"Unexpected data structure for panel type '{panel_type}'."
        if not result.entries:
            return NO_RESULTS_MESSAGE
        body = "\n".join(entry_formatter(entry) for entry in result.entries)
        title = title.format(count=len(result.entries))
    else:
        return f"Unexpected data structure for panel type '{panel_type}'."

    return f"{title}:\n\n{body}"
