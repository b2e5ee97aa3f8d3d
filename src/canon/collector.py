"""Accumulate formatted rows under an ordering policy."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from canon.errors import CollectorFinalized
from canon.formatter import FormattedRow, format_rows, validate_format_spec
from canon.sort_order import SortOrder, parse_sort_order
from zset.rows import SqlRow

type CanonicalOutput = tuple[FormattedRow, ...]


def compare_rows(left: Sequence[str], right: Sequence[str]) -> int:
    """Compare two rows column by column, then by length.

    Returns
    -------
    int
        Negative, zero or positive as ``left`` sorts before, with or after
        ``right``.
    """
    for left_value, right_value in zip(left, right, strict=False):
        if left_value != right_value:
            return -1 if left_value < right_value else 1
    return (len(left) > len(right)) - (len(left) < len(right))


def row_sort_key(row: FormattedRow) -> FormattedRow:
    """Return the sort key equivalent to :func:`compare_rows`.

    Tuples of strings already order by common prefix, then shorter first.
    """
    return row


class CanonicalCollector:
    """Append-only row buffer that is sorted once, when read.

    Parameters
    ----------
    order
        Ordering policy. ``VALUE`` stores each column as its own one-column
        row.
    """

    __slots__ = ("_finalized", "_order", "_rows")

    def __init__(self, order: SortOrder | str) -> None:
        self._order = parse_sort_order(order)
        self._rows: list[FormattedRow] = []
        self._finalized = False

    @property
    def order(self) -> SortOrder:
        return self._order

    def append(self, row: FormattedRow) -> None:
        """Add one formatted row.

        Raises
        ------
        CollectorFinalized
            Raised after :meth:`get` has been called.
        """
        if self._finalized:
            msg = "Collector already produced its output."
            raise CollectorFinalized(msg)
        if self._order is SortOrder.VALUE:
            self._rows.extend((value,) for value in row)
        else:
            self._rows.append(tuple(row))

    def extend(self, rows: Iterable[FormattedRow]) -> None:
        """Add every row of ``rows`` in order."""
        for row in rows:
            self.append(row)

    def get(self) -> CanonicalOutput:
        """Finalize the collector and return the canonical rows.

        Returns
        -------
        CanonicalOutput
            Rows in arrival order for ``NONE``; stably sorted otherwise.
        """
        if not self._finalized:
            if self._order is not SortOrder.NONE:
                self._rows.sort(key=row_sort_key)
            self._finalized = True
        return tuple(self._rows)

    def __len__(self) -> int:
        return len(self._rows)


def collect_rows(
    rows: Iterable[SqlRow],
    format_spec: str,
    order: SortOrder | str,
) -> CanonicalOutput:
    """Format ``rows`` and return them in canonical order.

    Each call owns a fresh :class:`CanonicalCollector`.

    Returns
    -------
    CanonicalOutput
        Canonical rows.
    """
    collector = CanonicalCollector(order)
    collector.extend(format_rows(rows, validate_format_spec(format_spec)))
    return collector.get()


__all__ = [
    "CanonicalCollector",
    "CanonicalOutput",
    "collect_rows",
    "compare_rows",
    "row_sort_key",
]
