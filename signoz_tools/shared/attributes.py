"""
Attribute and filter primitives.
"""

from .models import Attribute, AttributeCategory, FilterItem, FilterOperator, FilterValue

# Keys the backend indexes as resource attributes
RESOURCE_KEYS = frozenset({"service.name", "k8s.deployment.name", "deployment_name", "serviceName"})
RESOURCE_PREFIX = "k8s."


def classify_attribute(key: str) -> AttributeCategory:
    """Infer whether a field is a resource attribute or a generic tag.

    Best-effort: resource-scoped fields outside RESOURCE_KEYS and the
    ``k8s.`` prefix are reported as ``tag``.
    """
    if key in RESOURCE_KEYS or key.startswith(RESOURCE_PREFIX):
        return "resource"
    return "tag"


def make_attribute(key: str, data_type: str, category: AttributeCategory, is_column: bool = False) -> Attribute:
    return Attribute(key=key, data_type=data_type, category=category, is_column=is_column)


def make_filter(
    key: str,
    data_type: str,
    category: AttributeCategory,
    op: FilterOperator,
    value: FilterValue,
    is_column: bool = False,
) -> FilterItem:
    """Build a filter predicate on ``key``.

    The value is not checked against ``data_type``.
    """
    return FilterItem(key=make_attribute(key, data_type, category, is_column), op=op, value=value)


def make_group_by(fields: list[str] | None) -> tuple[Attribute, ...]:
    """Build group-by attributes, classifying each field."""
    return tuple(make_attribute(field, "string", classify_attribute(field), True) for field in fields or [])
