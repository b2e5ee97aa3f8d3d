"""End-to-end canonicalization tests."""

from __future__ import annotations

import logging

import pytest

from canon.config import CanonicalizeConfig
from canon.errors import Invariant, InvariantViolation, SortOrderUnsupported
from canon.pipeline import canonicalize, hash_zset, weighted_count, zset_to_strings
from canon.sort_order import SortOrder
from canon.vectors import hash_vectors
from serde_msgspec import dumps_json
from zset import DEFAULT_RING, zset
from zset.cursor import PairCursor
from zset.weights import WeightRing

LEONID_MIHAI_MD5 = "75882b126bca14319bb5a64b55de3254"
TRIPLE_K_MD5 = "5e05775ff9afc193a70b3904e7adb56f"


class _ListZSet:
    """Z-set whose cursor replays pairs exactly as given."""

    def __init__(self, entries: list[tuple[object, int]]) -> None:
        self._entries = entries

    @property
    def ring(self) -> WeightRing[int]:
        return DEFAULT_RING

    def cursor(self) -> PairCursor[object, int]:
        return PairCursor(self._entries)


def test_end_to_end_rowsort() -> None:
    """The reference example sorts to Leonid, Mihai and hashes accordingly."""
    data = zset({("Mihai", 0): 1, ("Leonid", 1): 1})
    assert zset_to_strings(data, "TI", SortOrder.ROW) == (("Leonid", "1"), ("Mihai", "0"))
    assert hash_zset(data, "TI", SortOrder.ROW) == LEONID_MIHAI_MD5


@pytest.mark.parametrize("order", list(SortOrder))
def test_multiplicity_expansion_for_every_order(order: SortOrder) -> None:
    """A key with weight three appears three times under every policy."""
    data = zset({("k",): 3})
    assert zset_to_strings(data, "T", order) == (("k",), ("k",), ("k",))
    assert hash_zset(data, "T", order) == TRIPLE_K_MD5


def test_negative_weight_never_produces_digest() -> None:
    """A negative weight aborts the whole canonicalization."""
    data = zset({("a",): 1, ("b",): -1})
    with pytest.raises(InvariantViolation) as excinfo:
        hash_zset(data, "T", SortOrder.ROW)
    assert excinfo.value.invariant is Invariant.NEGATIVE_WEIGHT


@pytest.mark.parametrize("order", [SortOrder.ROW, SortOrder.VALUE])
def test_digest_independent_of_cursor_order(order: SortOrder) -> None:
    """Sorted policies give the same digest whatever order the cursor uses."""
    entries: list[tuple[object, int]] = [(("b", 2), 1), (("a", 1), 2), ((None, 3), 1)]
    forward = hash_zset(_ListZSet(entries), "TI", order)
    backward = hash_zset(_ListZSet(list(reversed(entries))), "TI", order)
    assert forward == backward
    assert hash_zset(_ListZSet(entries), "TI", order) == forward


def test_nosort_follows_cursor_order() -> None:
    """nosort on a general result keeps whatever order the cursor yields."""
    entries: list[tuple[object, int]] = [(("b",), 1), (("a",), 1)]
    assert zset_to_strings(_ListZSet(entries), "T", SortOrder.NONE) == (("b",), ("a",))


def test_strict_order_rejects_nosort_for_general_results() -> None:
    """strict_order forbids nosort except for vector results."""
    config = CanonicalizeConfig(strict_order=True)
    data = zset({("a",): 1})
    with pytest.raises(SortOrderUnsupported):
        hash_zset(data, "T", SortOrder.NONE, config=config)
    vectors = zset({(("a",),): 1})
    assert hash_vectors(vectors, "T", SortOrder.NONE, config=config)


def test_zero_weight_vector_key_rejected() -> None:
    """A vector key with weight zero breaks the unit-weight invariant."""
    data = _ListZSet([((("a",),), 0)])
    with pytest.raises(InvariantViolation) as excinfo:
        hash_vectors(data, "T", SortOrder.NONE)  # type: ignore[arg-type]
    assert excinfo.value.invariant is Invariant.EXPECTED_UNIT_WEIGHT


def test_canonicalize_result_struct() -> None:
    """canonicalize reports rows, digest and counts, and serializes to JSON."""
    data = zset({("Mihai", 0): 1, ("Leonid", 1): 1})
    result = canonicalize(data, "TI", "rowsort")
    assert result.digest == LEONID_MIHAI_MD5
    assert result.row_count == 2
    assert result.value_count == 4
    assert result.values() == ["Leonid", "1", "Mihai", "0"]
    assert b'"order":"rowsort"' in dumps_json(result)


def test_canonicalize_valuesort_matches_flattened_digest() -> None:
    """valuesort hashes the sorted individual values."""
    data = zset({("Mihai", 0): 1, ("Leonid", 1): 1})
    result = canonicalize(data, "TI", SortOrder.VALUE)
    assert result.rows == (("0",), ("1",), ("Leonid",), ("Mihai",))
    assert result.digest == "42c2fd254e52a1009f2db407ea645bf4"


def test_weighted_count() -> None:
    """weighted_count sums every weight."""
    assert weighted_count(zset({("a",): 2, ("b",): 3})) == 5


def test_echo_rows_config(caplog: pytest.LogCaptureFixture) -> None:
    """echo_rows logs the canonical rows without changing the result."""
    data = zset({("x",): 1})
    with caplog.at_level(logging.DEBUG, logger="canon.digest"):
        output = zset_to_strings(
            data, "T", SortOrder.ROW, config=CanonicalizeConfig(echo_rows=True)
        )
    assert output == (("x",),)
    assert "x," in caplog.text
