"""Vector-result canonicalization tests."""

from __future__ import annotations

import pytest

from canon.errors import Invariant, InvariantViolation
from canon.sort_order import SortOrder
from canon.vectors import hash_vectors, weighted_vector_count, zset_of_vectors_to_strings
from zset import zset
from zset.rows import SqlRow

ORDERED = (("c", 3), ("a", 1), ("b", 2))


def test_nosort_keeps_vector_order() -> None:
    """The vector order from ORDER BY is preserved for nosort."""
    data = zset({ORDERED: 1})
    assert zset_of_vectors_to_strings(data, "TI", SortOrder.NONE) == (
        ("c", "3"),
        ("a", "1"),
        ("b", "2"),
    )


def test_rowsort_sorts_vector_elements() -> None:
    """Other policies sort the element rows like any result."""
    data = zset({ORDERED: 1})
    assert zset_of_vectors_to_strings(data, "TI", "rowsort") == (
        ("a", "1"),
        ("b", "2"),
        ("c", "3"),
    )


@pytest.mark.parametrize("weight", [2, -1])
def test_non_unit_weight_rejected(weight: int) -> None:
    """Vector keys must have weight exactly one."""
    data = zset({ORDERED: weight})
    with pytest.raises(InvariantViolation) as excinfo:
        hash_vectors(data, "TI", SortOrder.NONE)
    assert excinfo.value.invariant is Invariant.EXPECTED_UNIT_WEIGHT


def test_weighted_vector_count() -> None:
    """Count is the sum of vector length times weight."""
    data = zset({ORDERED: 1, (("z", 9),): 2})
    assert weighted_vector_count(data) == len(ORDERED) + 2


def test_element_converter() -> None:
    """A custom element converter builds each element's row."""
    data = zset({(1, 2): 1})
    output = zset_of_vectors_to_strings(
        data,
        "T",
        SortOrder.NONE,
        element_to_row=lambda element: SqlRow.of(f"n{element}"),
    )
    assert output == (("n1",), ("n2",))
