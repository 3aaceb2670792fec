"""
Query payload models for the SigNoz query_range API.

Field names are snake_case in Python and serialized with the camelCase
names the backend expects (``model_dump(by_alias=True)``). All models are
frozen: a payload is built once per tool call and never mutated.
"""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AttributeCategory = Literal["tag", "resource", "span", "log", "timestamp", "attribute", ""]

DataSource = Literal["traces", "metrics", "logs"]

PanelType = Literal["list", "graph", "table", "trace", "value"]

FilterOperator = Literal[
    "=", "!=", ">", ">=", "<", "<=",
    "in", "nin", "contains", "ncontains",
    "regex", "nregex", "like", "nlike",
    "exists", "nexists",
]

AggregateOperator = Literal[
    "noop", "count", "count_distinct", "sum", "avg", "min", "max",
    "p05", "p10", "p20", "p25", "p50", "p75", "p90", "p95", "p99",
    "rate", "rate_sum", "rate_avg", "rate_min", "rate_max",
]

FilterValue = str | int | float | bool | list[str] | list[int] | list[float]


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict sent to the backend."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Attribute(_WireModel):
    """A queryable field and how the backend should resolve it."""

    key: str
    data_type: str = "string"
    category: AttributeCategory = Field(default="tag", alias="type")
    is_column: bool = False


class EmptyAttribute(_WireModel):
    """Placeholder serialized as ``{}`` (count without a target field)."""


class FilterItem(_WireModel):
    """One boolean predicate: ``key op value``."""

    key: Attribute
    op: FilterOperator
    value: FilterValue


class Filter(_WireModel):
    """A group of predicates combined with AND or OR."""

    items: tuple[FilterItem, ...] = ()
    op: Literal["AND", "OR"] = "AND"


class OrderBy(_WireModel):
    column_name: str
    order: Literal["asc", "desc"] = "desc"


class BuilderQuery(_WireModel):
    """One structured query over a single data source."""

    data_source: DataSource
    query_name: str
    expression: str
    disabled: bool = False
    aggregate_operator: AggregateOperator = "noop"
    aggregate_attribute: Attribute | EmptyAttribute | None = None
    group_by: tuple[Attribute, ...] = ()
    order_by: tuple[OrderBy, ...] = ()
    filters: Filter = Filter()
    step_interval: int = 60
    limit: int | None = None
    offset: int = 0
    page_size: int | None = None
    having: tuple[Any, ...] = ()
    select_columns: tuple[Attribute, ...] = ()
    reduce_to: str = "sum"


class CompositeQuery(_WireModel):
    query_type: Literal["builder"] = "builder"
    panel_type: PanelType
    builder_queries: dict[str, BuilderQuery]


@dataclass(frozen=True)
class TimeRange:
    """Half-open query window ``[start_ms, end_ms)`` in epoch milliseconds."""

    start_ms: int
    end_ms: int

    @classmethod
    def from_unix(cls, start_unix: int, end_unix: int) -> "TimeRange":
        return cls(start_ms=start_unix * 1000, end_ms=end_unix * 1000)


class QueryRangePayload(_WireModel):
    """Top-level request body for ``POST /api/v4/query_range``."""

    start: int
    end: int
    step: int
    composite_query: CompositeQuery
