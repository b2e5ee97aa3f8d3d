"""Expansion of a weighted multiset into one row per unit of weight."""

from __future__ import annotations

from collections.abc import Iterator

from canon.errors import Invariant, InvariantViolation
from zset.cursor import ZSetCursor
from zset.rows import SqlRow
from zset.weights import WeightRing


def iter_weighted_rows[K, W](cursor: ZSetCursor[K, W], ring: WeightRing[W]) -> Iterator[SqlRow]:
    """Yield each key's row once per unit of its weight, in cursor order.

    Parameters
    ----------
    cursor
        Cursor positioned on the first key. It is consumed.
    ring
        Weight ring of the cursor's weights.

    Yields
    ------
    SqlRow
        Display rows, repeated according to weight.

    Raises
    ------
    InvariantViolation
        Raised on the first negative weight.
    """
    while cursor.has_next():
        weight = cursor.current_weight()
        if ring.is_negative(weight):
            raise InvariantViolation(
                Invariant.NEGATIVE_WEIGHT,
                key=cursor.current_key(),
                weight=weight,
            )
        count = ring.to_count(weight)
        if count:
            row = cursor.current_row()
            for _ in range(count):
                yield row
        cursor.advance()


def extract_rows[K, W](
    cursor: ZSetCursor[K, W],
    ring: WeightRing[W],
    *,
    capacity_hint: int | None = None,
) -> list[SqlRow]:
    """Return every row of the multiset, expanded by weight.

    ``capacity_hint`` pre-sizes the result list; it never changes the result.

    Returns
    -------
    list[SqlRow]
        Expanded rows in cursor order.
    """
    if not capacity_hint or capacity_hint <= 0:
        return list(iter_weighted_rows(cursor, ring))
    rows: list[SqlRow | None] = [None] * capacity_hint
    size = 0
    for row in iter_weighted_rows(cursor, ring):
        if size < capacity_hint:
            rows[size] = row
        else:
            rows.append(row)
        size += 1
    del rows[size:]
    return rows  # type: ignore[return-value]


__all__ = ["extract_rows", "iter_weighted_rows"]
