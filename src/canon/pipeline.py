"""End-to-end canonicalization of weighted results."""

from __future__ import annotations

import logging

from canon.collector import CanonicalOutput, collect_rows
from canon.config import DEFAULT_CONFIG, CanonicalizeConfig
from canon.digest import digest_rows, echo_rows
from canon.errors import SortOrderUnsupported
from canon.extractor import iter_weighted_rows
from canon.sort_order import SortOrder, parse_sort_order
from canon.vectors import zset_of_vectors_to_strings
from serde_msgspec import StructBaseCompat
from zset.cursor import ZSetLike

_LOGGER = logging.getLogger(__name__)


class CanonicalResult(StructBaseCompat, frozen=True):
    """Canonical rows of a result together with their digest."""

    rows: tuple[tuple[str, ...], ...]
    digest: str
    order: SortOrder
    format_spec: str

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def value_count(self) -> int:
        return sum(len(row) for row in self.rows)

    def values(self) -> list[str]:
        """Return every value, row-major."""
        return [value for row in self.rows for value in row]


def zset_to_strings[K, W](
    zset: ZSetLike[K, W],
    format_spec: str,
    order: SortOrder | str,
    *,
    config: CanonicalizeConfig | None = None,
) -> CanonicalOutput:
    """Return the canonical rows of a general result.

    Parameters
    ----------
    zset
        Result multiset; every weight must be non-negative.
    format_spec
        One ``I``/``R``/``T`` class per column.
    order
        Ordering policy.
    config
        Optional settings; defaults to :data:`canon.config.DEFAULT_CONFIG`.

    Returns
    -------
    CanonicalOutput
        Canonical rows.

    Raises
    ------
    SortOrderUnsupported
        Raised for ``nosort`` when ``config.strict_order`` is set.
    """
    config = config or DEFAULT_CONFIG
    resolved = parse_sort_order(order)
    if resolved is SortOrder.NONE:
        if config.strict_order:
            msg = "nosort requires a vector result; the cursor order is not canonical."
            raise SortOrderUnsupported(msg)
        _LOGGER.debug("nosort on a general result keeps cursor order")
    rows = iter_weighted_rows(zset.cursor(), zset.ring)
    output = collect_rows(rows, format_spec, resolved)
    if config.echo_rows:
        echo_rows(output)
    return output


def hash_zset[K, W](
    zset: ZSetLike[K, W],
    format_spec: str,
    order: SortOrder | str,
    *,
    config: CanonicalizeConfig | None = None,
) -> str:
    """Return the lowercase MD5 digest of the canonical rows of ``zset``."""
    output = zset_to_strings(zset, format_spec, order, config=config)
    digest = digest_rows(output)
    _LOGGER.debug("Result digest %s over %d rows", digest, len(output))
    return digest


def canonicalize[K, W](
    zset: ZSetLike[K, W],
    format_spec: str,
    order: SortOrder | str,
    *,
    vectors: bool = False,
    config: CanonicalizeConfig | None = None,
) -> CanonicalResult:
    """Canonicalize ``zset`` and return rows plus digest.

    Returns
    -------
    CanonicalResult
        Canonical rows, digest and the policy used.
    """
    resolved = parse_sort_order(order)
    if vectors:
        output = zset_of_vectors_to_strings(
            zset,  # type: ignore[arg-type]
            format_spec,
            resolved,
            config=config,
        )
    else:
        output = zset_to_strings(zset, format_spec, resolved, config=config)
    return CanonicalResult(
        rows=output,
        digest=digest_rows(output),
        order=resolved,
        format_spec=format_spec,
    )


def weighted_count[K, W](zset: ZSetLike[K, W]) -> W:
    """Return the sum of all weights of ``zset``."""
    ring = zset.ring
    total = ring.zero()
    cursor = zset.cursor()
    while cursor.has_next():
        total = ring.add(total, cursor.current_weight())
        cursor.advance()
    return total


__all__ = [
    "CanonicalResult",
    "canonicalize",
    "hash_zset",
    "weighted_count",
    "zset_to_strings",
]
