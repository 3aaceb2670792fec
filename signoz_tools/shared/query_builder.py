"""
Builder-query construction for the query_range API.

Every tool builds exactly one builder query named ``A`` from the defaults
below, then wraps it in a QueryRangePayload together with the time window
and panel type.
"""

from types import MappingProxyType
from typing import Any

from .models import (
    Attribute,
    BuilderQuery,
    CompositeQuery,
    DataSource,
    EmptyAttribute,
    Filter,
    OrderBy,
    PanelType,
    QueryRangePayload,
    TimeRange,
)

QUERY_NAME = "A"

DEFAULT_QUERY_FIELDS = MappingProxyType({
    "query_name": QUERY_NAME,
    "expression": QUERY_NAME,
    "disabled": False,
    "aggregate_operator": "noop",
    "group_by": (),
    "order_by": (OrderBy(column_name="timestamp", order="desc"),),
    "filters": Filter(items=(), op="AND"),
    "step_interval": 60,
    "offset": 0,
    "select_columns": (),
    "having": (),
    "reduce_to": "sum",
})

# Fields that identify the query inside the payload
PROTECTED_FIELDS = frozenset({"query_name", "expression"})


def make_default_query(data_source: DataSource, **overrides: Any) -> BuilderQuery:
    """Create a builder query with defaults, shallow-replaced by ``overrides``.

    An override of ``None`` replaces the default only for the optional
    fields (``limit``, ``page_size``, ``aggregate_attribute``); elsewhere it
    fails validation.

    Args:
        data_source: 'logs' or 'traces'.
        **overrides: BuilderQuery field names (snake_case) and values.

    Returns:
        A validated, frozen BuilderQuery.

    Raises:
        ValueError: If an override targets a protected or unknown field.
        pydantic.ValidationError: If an override value has the wrong type,
            including ``None`` for a required field.
    """
    protected = PROTECTED_FIELDS.intersection(overrides)
    if protected:
        raise ValueError(f"Cannot override protected query fields: {', '.join(sorted(protected))}")

    unknown = set(overrides) - set(BuilderQuery.model_fields)
    if unknown:
        raise ValueError(f"Unknown query fields: {', '.join(sorted(unknown))}")

    fields = {**DEFAULT_QUERY_FIELDS, **overrides}
    return BuilderQuery(data_source=data_source, **fields)


def make_aggregate_attribute(aggregation_function: str, aggregate_field: str | None) -> Attribute | EmptyAttribute | None:
    """Pick the aggregate target: the named field, ``{}`` for a bare count, else nothing."""
    if aggregate_field:
        return Attribute(key=aggregate_field, data_type="string", category="tag")
    if aggregation_function == "count":
        return EmptyAttribute()
    return None


def build_payload(time_range: TimeRange, step: int, panel_type: PanelType, query: BuilderQuery) -> QueryRangePayload:
    return QueryRangePayload(
        start=time_range.start_ms,
        end=time_range.end_ms,
        step=step,
        composite_query=CompositeQuery(
            query_type="builder",
            panel_type=panel_type,
            builder_queries={QUERY_NAME: query},
        ),
    )
