"""
Rankings sorter.

Sort keys are field paths: explicit sequences of attribute names walked from
an investment, e.g. ("four_pillar_score", "overall_score"). Each segment may
be a model attribute, a model field alias ("52_week_high"), or a mapping key.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from ...models.view_state import SortDirection, parse_field_path
from ...shared.formatters import parse_decimal

T = TypeVar("T")


class _Undefined:
    """Marker for a path that could not be resolved."""

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Any = _Undefined()

# Ordering between value kinds: unresolved < number < text
_RANK_UNDEFINED = 0
_RANK_NUMBER = 1
_RANK_TEXT = 2


def _step(value: Any, segment: str) -> Any:
    if isinstance(value, BaseModel):
        fields = type(value).model_fields
        if segment in fields:
            return getattr(value, segment)
        for name, info in fields.items():
            if info.alias == segment:
                return getattr(value, name)
        return UNDEFINED
    if isinstance(value, Mapping):
        return value.get(segment, UNDEFINED)
    return UNDEFINED


def resolve_field_path(item: Any, field_path: Sequence[str] | str) -> Any:
    """
    Walk field_path from item.

    Returns:
        The resolved value, or UNDEFINED if any segment is missing
    """
    value = item
    for segment in parse_field_path(field_path):
        value = _step(value, segment)
        if value is UNDEFINED or value is None:
            return UNDEFINED
    return value


def sort_key(value: Any) -> tuple:
    """
    Comparable key for a resolved value.

    Fully numeric strings compare as numbers ("9" < "10") and sort before
    other strings, which compare lexicographically; unresolved values are
    lowest.
    """
    if value is UNDEFINED or value is None:
        return (_RANK_UNDEFINED,)
    number = parse_decimal(value)
    if number is not None:
        return (_RANK_NUMBER, number)
    return (_RANK_TEXT, str(value))


def sort_investments(
    investments: Iterable[T],
    field_path: Sequence[str] | str,
    direction: SortDirection | str = SortDirection.DESC,
) -> list[T]:
    """
    Return investments ordered by the value at field_path.

    Stable in both directions: equal keys keep their input order.

    Args:
        investments: Items to order (not modified)
        field_path: Field path tuple or dot-separated string
        direction: "asc" or "desc"

    Returns:
        New sorted list
    """
    path = parse_field_path(field_path)
    descending = SortDirection(direction) == SortDirection.DESC
    return sorted(
        investments,
        key=lambda item: sort_key(resolve_field_path(item, path)),
        reverse=descending,
    )
