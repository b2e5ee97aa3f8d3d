"""Cursor capability over a weighted multiset."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from zset.rows import SqlRow, default_row_converter
from zset.weights import WeightRing

type RowConverter = Callable[[object], SqlRow]


@runtime_checkable
class ZSetCursor[K, W](Protocol):
    """Read-only traversal over the distinct keys of a Z-set.

    Keys are enumerated once each, in a stable order chosen by the backing
    collection.
    """

    def has_next(self) -> bool:
        """Return whether the cursor is positioned on a key."""
        ...

    def current_key(self) -> K:
        """Return the current key."""
        ...

    def current_weight(self) -> W:
        """Return the weight of the current key."""
        ...

    def current_row(self) -> SqlRow:
        """Return the current key converted to a display row."""
        ...

    def advance(self) -> None:
        """Move to the next key."""
        ...


@runtime_checkable
class ZSetLike[K, W](Protocol):
    """Collections that can hand out a cursor and describe their weights."""

    @property
    def ring(self) -> WeightRing[W]:
        """Return the weight ring of this collection."""
        ...

    def cursor(self) -> ZSetCursor[K, W]:
        """Return a fresh cursor positioned on the first key."""
        ...


class PairCursor[K, W]:
    """Cursor over a pre-consolidated sequence of ``(key, weight)`` pairs."""

    __slots__ = ("_entries", "_position", "_to_row")

    def __init__(
        self,
        entries: Sequence[tuple[K, W]],
        *,
        to_row: RowConverter = default_row_converter,
    ) -> None:
        self._entries = entries
        self._position = 0
        self._to_row = to_row

    def has_next(self) -> bool:
        return self._position < len(self._entries)

    def _current(self) -> tuple[K, W]:
        if not self.has_next():
            msg = "Cursor is exhausted."
            raise IndexError(msg)
        return self._entries[self._position]

    def current_key(self) -> K:
        return self._current()[0]

    def current_weight(self) -> W:
        return self._current()[1]

    def current_row(self) -> SqlRow:
        return self._to_row(self.current_key())

    def advance(self) -> None:
        if self.has_next():
            self._position += 1


__all__ = ["PairCursor", "RowConverter", "ZSetCursor", "ZSetLike", "default_row_converter"]
