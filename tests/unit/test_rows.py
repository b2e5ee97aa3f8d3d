"""Typed value and row conversion tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from zset.rows import SqlRow, SqlType, SqlValue, default_row_converter


class _Point:
    def __init__(self, x: int, label: str | None) -> None:
        self.x = x
        self.label = label

    def to_row(self) -> SqlRow:
        return SqlRow.of(self.x, SqlValue.text(self.label))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (True, SqlType.BOOLEAN),
        (3, SqlType.INTEGER),
        (1.5, SqlType.REAL),
        (Decimal("2.5"), SqlType.REAL),
        ("x", SqlType.TEXT),
        (None, SqlType.UNKNOWN),
    ],
)
def test_value_type_inference(value: object, expected: SqlType) -> None:
    """Plain scalars map to their display types (bool before int)."""
    assert SqlValue.of(value).sql_type is expected


def test_unsupported_scalar_rejected() -> None:
    """Values without a display type raise TypeError."""
    with pytest.raises(TypeError, match="No SQL display type"):
        SqlValue.of(b"raw")


def test_default_converter_paths() -> None:
    """Rows, ToSqlRow keys, tuples and scalars all convert."""
    row = SqlRow.of(1)
    assert default_row_converter(row) is row
    assert default_row_converter(_Point(2, None)) == SqlRow(
        values=(SqlValue.integer(2), SqlValue.null(SqlType.TEXT))
    )
    assert default_row_converter((1, "a")) == SqlRow.of(1, "a")
    assert len(default_row_converter("solo")) == 1
