"""OrdZSet consolidation and cursor tests."""

from __future__ import annotations

from typing import NamedTuple

from canon import zset_to_strings
from zset import OrdZSet, ZSetCursor, zset
from zset.rows import SqlRow, SqlType, SqlValue


class Person(NamedTuple):
    name: str
    id: int


class _Badge:
    def __init__(self, owner: str, level: int) -> None:
        self.owner = owner
        self.level = level

    def to_row(self) -> SqlRow:
        return SqlRow.of(self.owner, self.level)


def test_consolidates_duplicates_and_drops_zero_weights() -> None:
    """Equal keys are summed and cancelled keys disappear."""
    data = OrdZSet([(("a", 1), 2), (("b", 2), 1), (("a", 1), 1), (("b", 2), -1)])
    assert list(data) == [(("a", 1), 3)]
    assert len(data) == 1


def test_cursor_enumerates_sorted_keys_once() -> None:
    """The cursor visits keys in ascending order, NULLs first."""
    data = zset({("b",): 1, ("a",): 2, (None,): 1})
    cursor = data.cursor()
    assert isinstance(cursor, ZSetCursor)
    keys = []
    while cursor.has_next():
        keys.append(cursor.current_key())
        cursor.advance()
    assert keys == [(None,), ("a",), ("b",)]


def test_cursor_row_uses_default_conversion() -> None:
    """Tuple keys convert to rows with inferred column types."""
    data = zset({Person("Mihai", 0): 1})
    cursor = data.cursor()
    assert cursor.current_row() == SqlRow.of("Mihai", 0)
    assert cursor.current_row().values[1] == SqlValue(sql_type=SqlType.INTEGER, value=0)


def test_from_keys_add_and_weighted_count() -> None:
    """from_keys gives weight one per occurrence; add sums weights."""
    left = OrdZSet.from_keys([("x",), ("x",), ("y",)])
    right = zset({("y",): 2})
    total = left.add(right)
    assert total.weight(("x",)) == 2
    assert total.weight(("y",)) == 3
    assert total.weighted_count() == 5
    assert left.add(left.neg()) == OrdZSet()


def test_custom_row_converter() -> None:
    """A per-set converter replaces the default key conversion."""
    data = zset({7: 1}, to_row=lambda key: SqlRow.of(str(key)))
    assert data.cursor().current_row() == SqlRow.of("7")


def test_sql_row_keys_sort_by_their_values() -> None:
    """SqlRow keys order by their column values, NULLs first."""
    data = zset({SqlRow.of("b", 2): 1, SqlRow.of("a", 1): 2, SqlRow.of(None, 3): 1})
    assert [key for key, _weight in data] == [
        SqlRow.of(None, 3),
        SqlRow.of("a", 1),
        SqlRow.of("b", 2),
    ]
    assert zset_to_strings(data, "TI", "rowsort") == (
        ("NULL", "3"),
        ("a", "1"),
        ("a", "1"),
        ("b", "2"),
    )


def test_to_sql_row_keys_sort_by_their_rows() -> None:
    """Keys implementing to_row order by the row they render."""
    mihai = _Badge("Mihai", 0)
    leonid = _Badge("Leonid", 1)
    data = zset({mihai: 1, leonid: 1})
    assert [key for key, _weight in data] == [leonid, mihai]
    assert zset_to_strings(data, "TI", "rowsort") == (("Leonid", "1"), ("Mihai", "0"))
