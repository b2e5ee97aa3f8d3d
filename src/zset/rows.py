"""Typed display values and the key-to-row conversion contract.

Values in this module are not used for computation. They carry just enough
type information to render a result column the way sqllogictest expects.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from decimal import Decimal
from enum import StrEnum
from typing import Protocol, runtime_checkable

from serde_msgspec import StructBaseHotPath

class SqlType(StrEnum):
    """Runtime type of a result column."""

    INTEGER = "integer"
    REAL = "real"
    TEXT = "text"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


class SqlValue(StructBaseHotPath, frozen=True):
    """Single typed scalar; ``value is None`` is SQL NULL."""

    sql_type: SqlType
    value: int | float | str | bool | None = None

    @property
    def is_null(self) -> bool:
        """Return whether this value is NULL."""
        return self.value is None

    @classmethod
    def integer(cls, value: int | None) -> SqlValue:
        """Return an integer value (or a typed NULL)."""
        return cls(sql_type=SqlType.INTEGER, value=value)

    @classmethod
    def real(cls, value: float | None) -> SqlValue:
        """Return a real value (or a typed NULL)."""
        return cls(sql_type=SqlType.REAL, value=None if value is None else float(value))

    @classmethod
    def text(cls, value: str | None) -> SqlValue:
        """Return a text value (or a typed NULL)."""
        return cls(sql_type=SqlType.TEXT, value=value)

    @classmethod
    def boolean(cls, value: bool | None) -> SqlValue:
        """Return a boolean value (or a typed NULL)."""
        return cls(sql_type=SqlType.BOOLEAN, value=value)

    @classmethod
    def null(cls, sql_type: SqlType = SqlType.UNKNOWN) -> SqlValue:
        """Return a NULL of ``sql_type``."""
        return cls(sql_type=sql_type, value=None)

    @classmethod
    def of(cls, value: object) -> SqlValue:
        """Infer a typed value from a plain Python scalar.

        ``None`` becomes an untyped NULL; typed NULLs must be built with the
        explicit constructors.

        Returns
        -------
        SqlValue
            Typed value.

        Raises
        ------
        TypeError
            Raised when ``value`` has no SQL display type.
        """
        if isinstance(value, SqlValue):
            return value
        if value is None:
            return cls.null()
        # bool is a subclass of int
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, (float, Decimal)):
            return cls.real(float(value))
        if isinstance(value, str):
            return cls.text(value)
        msg = f"No SQL display type for {type(value).__name__} value {value!r}."
        raise TypeError(msg)


class SqlRow(StructBaseHotPath, frozen=True):
    """Ordered sequence of typed values, one per output column."""

    values: tuple[SqlValue, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[SqlValue]:
        return iter(self.values)

    @classmethod
    def of(cls, *values: object) -> SqlRow:
        """Build a row from scalars or ``SqlValue`` instances.

        Returns
        -------
        SqlRow
            Row with inferred column types.
        """
        return cls.from_values(values)

    @classmethod
    def from_values(cls, values: Iterable[object]) -> SqlRow:
        """Build a row from an iterable of scalars or ``SqlValue`` instances.

        Returns
        -------
        SqlRow
            Row with inferred column types.
        """
        return cls(values=tuple(SqlValue.of(value) for value in values))


@runtime_checkable
class ToSqlRow(Protocol):
    """Keys that know how to render themselves as a display row."""

    def to_row(self) -> SqlRow:
        """Return the display row for this key."""
        ...


def default_row_converter(key: object) -> SqlRow:
    """Convert a key to a row.

    Rows and ``ToSqlRow`` keys convert themselves, tuples (including named
    tuples) become one column per element, and any other scalar becomes a
    single-column row.

    Returns
    -------
    SqlRow
        Display row for ``key``.
    """
    if isinstance(key, SqlRow):
        return key
    if isinstance(key, ToSqlRow):
        return key.to_row()
    if isinstance(key, tuple):
        return SqlRow.from_values(key)
    return SqlRow.of(key)


__all__ = [
    "SqlRow",
    "SqlType",
    "SqlValue",
    "ToSqlRow",
    "default_row_converter",
]
