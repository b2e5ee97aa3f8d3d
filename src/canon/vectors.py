"""Canonicalization of results that hold one pre-ordered vector per key.

An ``ORDER BY`` result is materialized as a single vector of rows. Its key
must carry weight exactly one, and ``nosort`` keeps the vector's order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from canon.collector import CanonicalOutput, collect_rows
from canon.config import DEFAULT_CONFIG, CanonicalizeConfig
from canon.digest import digest_rows, echo_rows
from canon.errors import Invariant, InvariantViolation
from canon.sort_order import SortOrder, parse_sort_order
from zset.cursor import RowConverter, ZSetCursor, ZSetLike
from zset.rows import SqlRow, default_row_converter
from zset.weights import WeightRing

_LOGGER = logging.getLogger(__name__)


def iter_vector_rows[W](
    cursor: ZSetCursor[Sequence[object], W],
    ring: WeightRing[W],
    *,
    element_to_row: RowConverter = default_row_converter,
) -> Iterator[SqlRow]:
    """Yield one row per vector element, keys in cursor order.

    Raises
    ------
    InvariantViolation
        Raised when a key's weight is not exactly one.
    """
    one = ring.one()
    while cursor.has_next():
        weight = cursor.current_weight()
        vector = cursor.current_key()
        if weight != one:
            raise InvariantViolation(Invariant.EXPECTED_UNIT_WEIGHT, key=vector, weight=weight)
        for element in vector:
            yield element_to_row(element)
        cursor.advance()


def zset_of_vectors_to_strings[W](
    zset: ZSetLike[Sequence[object], W],
    format_spec: str,
    order: SortOrder | str,
    *,
    element_to_row: RowConverter = default_row_converter,
    config: CanonicalizeConfig | None = None,
) -> CanonicalOutput:
    """Return the canonical rows of a vector result.

    Returns
    -------
    CanonicalOutput
        Canonical rows; vector order is kept for ``nosort``.
    """
    config = config or DEFAULT_CONFIG
    rows = iter_vector_rows(zset.cursor(), zset.ring, element_to_row=element_to_row)
    output = collect_rows(rows, format_spec, parse_sort_order(order))
    if config.echo_rows:
        echo_rows(output)
    return output


def hash_vectors[W](
    zset: ZSetLike[Sequence[object], W],
    format_spec: str,
    order: SortOrder | str,
    *,
    element_to_row: RowConverter = default_row_converter,
    config: CanonicalizeConfig | None = None,
) -> str:
    """Return the result digest of a vector result."""
    output = zset_of_vectors_to_strings(
        zset,
        format_spec,
        order,
        element_to_row=element_to_row,
        config=config,
    )
    digest = digest_rows(output)
    _LOGGER.debug("Vector result digest %s over %d rows", digest, len(output))
    return digest


def weighted_vector_count[W](zset: ZSetLike[Sequence[object], W]) -> W:
    """Return the sum over keys of ``len(vector) * weight``."""
    ring = zset.ring
    total = ring.zero()
    cursor = zset.cursor()
    while cursor.has_next():
        weight = cursor.current_weight()
        for _ in cursor.current_key():
            total = ring.add(total, weight)
        cursor.advance()
    return total


__all__ = [
    "hash_vectors",
    "iter_vector_rows",
    "weighted_vector_count",
    "zset_of_vectors_to_strings",
]
