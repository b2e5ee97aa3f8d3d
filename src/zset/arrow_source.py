"""Z-sets backed by Arrow tables.

A table is read as one key per row over every column except the weight
column. Rows with equal keys are consolidated by summing their weights.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
from pyarrow import feather

from zset.cursor import PairCursor
from zset.rows import SqlRow, SqlType, SqlValue
from zset.weights import DEFAULT_RING, WeightRing

_LOGGER = logging.getLogger(__name__)

DEFAULT_WEIGHT_COLUMN = "weight"


def sql_type_for_arrow(data_type: pa.DataType) -> SqlType:
    """Return the display type of an Arrow column type.

    Returns
    -------
    SqlType
        Display type for the column.

    Raises
    ------
    TypeError
        Raised when the Arrow type has no scalar display type.
    """
    if pa.types.is_boolean(data_type):
        return SqlType.BOOLEAN
    if pa.types.is_integer(data_type):
        return SqlType.INTEGER
    if pa.types.is_floating(data_type) or pa.types.is_decimal(data_type):
        return SqlType.REAL
    if pa.types.is_string(data_type) or pa.types.is_large_string(data_type):
        return SqlType.TEXT
    if pa.types.is_null(data_type):
        return SqlType.UNKNOWN
    msg = f"Unsupported Arrow column type for display: {data_type}."
    raise TypeError(msg)


def _display_value(sql_type: SqlType, value: object) -> SqlValue:
    if isinstance(value, Decimal):
        value = float(value)
    return SqlValue(sql_type=sql_type, value=value)  # type: ignore[arg-type]


class ArrowZSet:
    """Consolidated Z-set read from a ``pyarrow.Table``.

    Parameters
    ----------
    table
        Source table. Every column other than ``weight_column`` is a key
        column.
    weight_column
        Name of the integer weight column. When the table has no such column
        every row carries weight one.
    ring
        Weight ring for the integer weights.
    """

    def __init__(
        self,
        table: pa.Table,
        *,
        weight_column: str = DEFAULT_WEIGHT_COLUMN,
        ring: WeightRing[int] = DEFAULT_RING,
    ) -> None:
        key_columns = [name for name in table.column_names if name != weight_column]
        if not key_columns:
            msg = "Arrow Z-set requires at least one key column."
            raise ValueError(msg)
        if weight_column in table.column_names:
            weight_type = table.schema.field(weight_column).type
            if not pa.types.is_integer(weight_type):
                msg = f"Weight column {weight_column!r} must be integer, got {weight_type}."
                raise TypeError(msg)
        else:
            table = table.append_column(
                weight_column,
                pa.array([1] * table.num_rows, type=pa.int64()),
            )
        self._key_columns = tuple(key_columns)
        self._types = tuple(
            sql_type_for_arrow(table.schema.field(name).type) for name in key_columns
        )
        self._ring = ring
        self._entries = self._consolidate(table, weight_column)
        _LOGGER.debug(
            "Consolidated %d Arrow rows into %d keys over columns %s",
            table.num_rows,
            len(self._entries),
            ", ".join(key_columns),
        )

    def _consolidate(
        self,
        table: pa.Table,
        weight_column: str,
    ) -> tuple[tuple[tuple[object, ...], int], ...]:
        # Summed through the ring, which raises on overflow.
        key_columns = list(self._key_columns)
        grouped = table.group_by(key_columns, use_threads=False).aggregate(
            [(weight_column, "list")]
        )
        grouped = grouped.sort_by(
            [(name, "ascending") for name in key_columns],
            null_placement="at_start",
        )
        keys = zip(*(grouped[name].to_pylist() for name in key_columns), strict=True)
        weight_lists = grouped[f"{weight_column}_list"].to_pylist()
        ring = self._ring
        zero = ring.zero()
        entries: list[tuple[tuple[object, ...], int]] = []
        for key, weights in zip(keys, weight_lists, strict=True):
            total = zero
            for weight in weights:
                if weight is not None:
                    total = ring.add(total, weight)
            if total != zero:
                entries.append((tuple(key), total))
        return tuple(entries)

    @classmethod
    def from_pydict(
        cls,
        columns: dict[str, Sequence[object]],
        *,
        schema: pa.Schema | None = None,
        weight_column: str = DEFAULT_WEIGHT_COLUMN,
    ) -> ArrowZSet:
        """Return a Z-set built from a column mapping.

        Returns
        -------
        ArrowZSet
            Consolidated Z-set.
        """
        return cls(pa.table(columns, schema=schema), weight_column=weight_column)

    @property
    def ring(self) -> WeightRing[int]:
        return self._ring

    @property
    def key_columns(self) -> tuple[str, ...]:
        return self._key_columns

    @property
    def column_types(self) -> tuple[SqlType, ...]:
        return self._types

    def to_row(self, key: object) -> SqlRow:
        """Return the display row of a key tuple using the table schema."""
        values = key if isinstance(key, tuple) else (key,)
        return SqlRow(
            values=tuple(
                _display_value(sql_type, value)
                for sql_type, value in zip(self._types, values, strict=True)
            )
        )

    def cursor(self) -> PairCursor[tuple[object, ...], int]:
        """Return a cursor over keys in ascending key order, NULLs first."""
        return PairCursor(self._entries, to_row=self.to_row)

    def weighted_count(self) -> int:
        """Return the sum of all weights."""
        total = self._ring.zero()
        for _, weight in self._entries:
            total = self._ring.add(total, weight)
        return total

    def __len__(self) -> int:
        return len(self._entries)


_PARQUET_SUFFIXES = frozenset({".parquet", ".pq"})
_IPC_SUFFIXES = frozenset({".arrow", ".feather", ".ipc"})


def read_table(path: Path) -> pa.Table:
    """Read an Arrow IPC (Feather v2) or Parquet file, chosen by suffix.

    Raises
    ------
    ValueError
        Raised when the suffix names no supported format.
    """
    suffix = path.suffix.lower()
    if suffix in _PARQUET_SUFFIXES:
        return pq.read_table(path)
    if suffix in _IPC_SUFFIXES:
        return feather.read_table(path)
    msg = f"Unsupported table file {path.name!r}; expected Parquet or Arrow IPC."
    raise ValueError(msg)


__all__ = ["DEFAULT_WEIGHT_COLUMN", "ArrowZSet", "read_table", "sql_type_for_arrow"]
