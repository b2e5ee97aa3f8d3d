"""Render typed rows the way sqllogictest prints result values.

A format string carries one character per column: ``I`` for integer, ``R``
for real and ``T`` for text display.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Final

from canon.errors import FormatMismatch
from zset.rows import SqlRow, SqlType, SqlValue

INTEGER_CLASS: Final = "I"
REAL_CLASS: Final = "R"
TEXT_CLASS: Final = "T"
COLUMN_CLASSES: Final = frozenset({INTEGER_CLASS, REAL_CLASS, TEXT_CLASS})

NULL_TEXT: Final = "NULL"
EMPTY_TEXT: Final = "(empty)"
REPLACEMENT_CHAR: Final = "@"

_I32_MIN: Final = -(1 << 31)
_I32_MAX: Final = (1 << 31) - 1

type FormattedRow = tuple[str, ...]


def validate_format_spec(format_spec: str) -> str:
    """Return ``format_spec`` after checking every column class.

    Raises
    ------
    FormatMismatch
        Raised when a character is not one of ``I``, ``R`` or ``T``.
    """
    for index, column_class in enumerate(format_spec):
        if column_class not in COLUMN_CLASSES:
            msg = f"unknown column class {column_class!r} in format {format_spec!r}"
            raise FormatMismatch(msg, column=index)
    return format_spec


def printable_text(value: str) -> str:
    """Return ``value`` with every non-printable-ASCII character replaced by ``@``."""
    if not value:
        return EMPTY_TEXT
    return "".join(
        char if " " <= char <= "~" else REPLACEMENT_CHAR for char in value
    )


def truncate_real(value: float) -> int:
    """Truncate toward zero, saturating at the signed 32-bit range (NaN is 0)."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


def _real_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return f"{value:.3f}"


def format_value(value: SqlValue, column_class: str) -> str:
    """Format one value for the requested column class.

    Raises
    ------
    FormatMismatch
        Raised when the class is incompatible with the value's type.
    """
    sql_type = value.sql_type
    if sql_type is SqlType.UNKNOWN:
        return NULL_TEXT
    if sql_type is SqlType.INTEGER:
        return NULL_TEXT if value.is_null else str(int(value.value))  # type: ignore[arg-type]
    if sql_type is SqlType.BOOLEAN:
        if value.is_null:
            return NULL_TEXT
        return "true" if value.value else "false"
    if sql_type is SqlType.REAL and column_class in {INTEGER_CLASS, REAL_CLASS}:
        if value.is_null:
            return NULL_TEXT
        real = float(value.value)  # type: ignore[arg-type]
        if column_class == INTEGER_CLASS:
            return str(truncate_real(real))
        return _real_text(real)
    if sql_type is SqlType.TEXT and column_class == TEXT_CLASS:
        return NULL_TEXT if value.is_null else printable_text(str(value.value))
    msg = f"cannot display {sql_type.value} value as class {column_class!r}"
    raise FormatMismatch(msg)


def format_row(row: SqlRow, format_spec: str) -> FormattedRow:
    """Return the display strings of ``row`` under ``format_spec``.

    Parameters
    ----------
    row
        Typed row to render.
    format_spec
        One column class per row column.

    Returns
    -------
    FormattedRow
        One display string per column.

    Raises
    ------
    FormatMismatch
        Raised when the format length differs from the row width or a column
        class does not fit the column's type.
    """
    if len(row) != len(format_spec):
        msg = f"format {format_spec!r} has {len(format_spec)} columns, row has {len(row)}"
        raise FormatMismatch(msg)
    formatted: list[str] = []
    for index, (value, column_class) in enumerate(zip(row, format_spec, strict=True)):
        try:
            formatted.append(format_value(value, column_class))
        except FormatMismatch as exc:
            raise FormatMismatch(str(exc), column=index) from exc
    return tuple(formatted)


def format_rows(rows: Iterable[SqlRow], format_spec: str) -> Iterable[FormattedRow]:
    """Lazily format every row in ``rows``."""
    return (format_row(row, format_spec) for row in rows)


__all__ = [
    "COLUMN_CLASSES",
    "EMPTY_TEXT",
    "INTEGER_CLASS",
    "NULL_TEXT",
    "REAL_CLASS",
    "TEXT_CLASS",
    "FormattedRow",
    "format_row",
    "format_rows",
    "format_value",
    "printable_text",
    "truncate_real",
    "validate_format_spec",
]
