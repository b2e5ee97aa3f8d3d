"""Ordering policies for canonical output."""

from __future__ import annotations

from enum import StrEnum

from canon.errors import SortOrderUnsupported


class SortOrder(StrEnum):
    """How formatted rows are collected; values are the sqllogictest keywords."""

    NONE = "nosort"
    ROW = "rowsort"
    VALUE = "valuesort"


_ALIASES: dict[str, SortOrder] = {
    "nosort": SortOrder.NONE,
    "none": SortOrder.NONE,
    "unordered": SortOrder.NONE,
    "rowsort": SortOrder.ROW,
    "row": SortOrder.ROW,
    "valuesort": SortOrder.VALUE,
    "value": SortOrder.VALUE,
}


def parse_sort_order(value: SortOrder | str) -> SortOrder:
    """Parse an ordering policy from an enum member or keyword.

    Parameters
    ----------
    value
        ``SortOrder`` member, sqllogictest keyword (``nosort``, ``rowsort``,
        ``valuesort``) or member name.

    Returns
    -------
    SortOrder
        Parsed ordering policy.

    Raises
    ------
    SortOrderUnsupported
        Raised when ``value`` names no known policy.
    """
    if isinstance(value, SortOrder):
        return value
    if isinstance(value, str):
        parsed = _ALIASES.get(value.strip().lower())
        if parsed is not None:
            return parsed
    msg = f"Unsupported sort order: {value!r}."
    raise SortOrderUnsupported(msg)


__all__ = ["SortOrder", "parse_sort_order"]
