"""In-memory ordered Z-set."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping

from zset.cursor import PairCursor, RowConverter
from zset.rows import SqlRow, SqlValue, ToSqlRow, default_row_converter
from zset.weights import DEFAULT_RING, WeightRing


def _order_key(value: object) -> tuple[object, ...]:
    # NULLs first, NaN after every other float; tuples and rows compare element-wise.
    if isinstance(value, SqlValue):
        return _order_key(value.value)
    if value is None:
        return (0,)
    if isinstance(value, SqlRow):
        return (1, tuple(_order_key(item) for item in value))
    if isinstance(value, ToSqlRow):
        return _order_key(value.to_row())
    if isinstance(value, tuple):
        return (1, tuple(_order_key(item) for item in value))
    if isinstance(value, float) and math.isnan(value):
        return (2,)
    return (1, value)


class OrdZSet[K]:
    """Immutable, consolidated Z-set with keys in sorted order.

    Duplicate keys are summed and keys whose weight sums to zero are dropped,
    so every key appears exactly once when traversed with :meth:`cursor`.

    Parameters
    ----------
    entries
        ``(key, weight)`` pairs or a mapping of key to weight.
    ring
        Weight ring used for consolidation.
    to_row
        Conversion from keys to display rows.
    """

    __slots__ = ("_entries", "_ring", "_to_row")

    def __init__(
        self,
        entries: Mapping[K, int] | Iterable[tuple[K, int]] = (),
        *,
        ring: WeightRing[int] = DEFAULT_RING,
        to_row: RowConverter = default_row_converter,
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        totals: dict[K, int] = {}
        for key, weight in pairs:
            totals[key] = ring.add(totals.get(key, ring.zero()), weight)
        zero = ring.zero()
        ordered = sorted(
            ((key, weight) for key, weight in totals.items() if weight != zero),
            key=lambda pair: _order_key(pair[0]),
        )
        self._entries: tuple[tuple[K, int], ...] = tuple(ordered)
        self._ring = ring
        self._to_row = to_row

    @classmethod
    def from_keys(
        cls,
        keys: Iterable[K],
        *,
        ring: WeightRing[int] = DEFAULT_RING,
        to_row: RowConverter = default_row_converter,
    ) -> OrdZSet[K]:
        """Return a Z-set giving every occurrence of a key weight one.

        Returns
        -------
        OrdZSet[K]
            Consolidated Z-set.
        """
        one = ring.one()
        return cls(((key, one) for key in keys), ring=ring, to_row=to_row)

    @property
    def ring(self) -> WeightRing[int]:
        return self._ring

    def cursor(self) -> PairCursor[K, int]:
        """Return a cursor positioned on the smallest key."""
        return PairCursor(self._entries, to_row=self._to_row)

    def weight(self, key: K) -> int:
        """Return the weight of ``key`` (zero when absent)."""
        for candidate, weight in self._entries:
            if candidate == key:
                return weight
        return self._ring.zero()

    def weighted_count(self) -> int:
        """Return the sum of all weights."""
        total = self._ring.zero()
        for _, weight in self._entries:
            total = self._ring.add(total, weight)
        return total

    def add(self, other: OrdZSet[K]) -> OrdZSet[K]:
        """Return the Z-set sum of ``self`` and ``other``."""
        return OrdZSet(
            (*self._entries, *other._entries),
            ring=self._ring,
            to_row=self._to_row,
        )

    def neg(self) -> OrdZSet[K]:
        """Return the Z-set with every weight negated."""
        return OrdZSet(
            ((key, self._ring.neg(weight)) for key, weight in self._entries),
            ring=self._ring,
            to_row=self._to_row,
        )

    def __iter__(self) -> Iterator[tuple[K, int]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrdZSet):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        body = ", ".join(f"{key!r} => {weight!r}" for key, weight in self._entries)
        return f"OrdZSet({{{body}}})"


def zset[K](
    weights: Mapping[K, int],
    *,
    ring: WeightRing[int] = DEFAULT_RING,
    to_row: RowConverter = default_row_converter,
) -> OrdZSet[K]:
    """Return an :class:`OrdZSet` from a ``{key: weight}`` literal.

    Returns
    -------
    OrdZSet[K]
        Consolidated Z-set.
    """
    return OrdZSet(weights, ring=ring, to_row=to_row)


__all__ = ["OrdZSet", "zset"]
