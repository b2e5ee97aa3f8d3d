"""Parse sqllogictest query expectations and check results against them.

A query block looks like::

    query IT rowsort label
    SELECT a, b FROM t
    ----
    4 values hashing to 0123456789abcdef0123456789abcdef

or lists the expected values, one per line, instead of the hash line.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from canon.config import DEFAULT_CONFIG, CanonicalizeConfig
from canon.errors import ExpectationParseError, FormatMismatch, SortOrderUnsupported
from canon.formatter import validate_format_spec
from canon.pipeline import canonicalize
from canon.sort_order import SortOrder, parse_sort_order
from serde_msgspec import StructBaseCompat, StructBaseStrict
from zset.cursor import ZSetLike

_LOGGER = logging.getLogger(__name__)

QUERY_KEYWORD = "query"
RESULT_SEPARATOR = "----"
_HASH_LINE_RE = re.compile(
    r"^\s*(?P<count>\d+)\s+values\s+hashing\s+to\s+(?P<digest>[0-9a-fA-F]{32})\s*$"
)


class QueryExpectation(StructBaseStrict, frozen=True):
    """Expected output of one sqllogictest query."""

    format_spec: str
    order: SortOrder
    label: str | None = None
    query: str = ""
    value_count: int | None = None
    digest: str | None = None
    values: tuple[str, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.format_spec)

    @property
    def uses_digest(self) -> bool:
        return self.digest is not None

    @property
    def expected_value_count(self) -> int:
        if self.value_count is not None:
            return self.value_count
        return len(self.values)

    @property
    def expected_row_count(self) -> int:
        """Return the number of result rows implied by the value count."""
        return self.expected_value_count // self.column_count


class ResultComparison(StructBaseCompat, frozen=True):
    """Outcome of checking a result against a :class:`QueryExpectation`."""

    matched: bool
    actual_digest: str
    expected_value_count: int
    actual_value_count: int
    expected_digest: str | None = None
    reason: str | None = None
    actual_values: tuple[str, ...] | None = None


def parse_query_header(line: str) -> QueryExpectation:
    """Parse ``query <types> <order> [label]``.

    Returns
    -------
    QueryExpectation
        Expectation with format and order set and no expected output.

    Raises
    ------
    ExpectationParseError
        Raised when the header is malformed.
    """
    tokens = line.split()
    if not tokens or tokens[0] != QUERY_KEYWORD:
        msg = f"Expected a query header, got {line!r}."
        raise ExpectationParseError(msg)
    if len(tokens) < 3:
        msg = f"Malformed query description {line!r}."
        raise ExpectationParseError(msg)
    try:
        format_spec = validate_format_spec(tokens[1])
        order = parse_sort_order(tokens[2])
    except (FormatMismatch, SortOrderUnsupported) as exc:
        msg = f"Malformed query description {line!r}: {exc}"
        raise ExpectationParseError(msg) from exc
    label = " ".join(tokens[3:]) or None
    return QueryExpectation(format_spec=format_spec, order=order, label=label)


def parse_expected_output(lines: Sequence[str]) -> tuple[int | None, str | None, tuple[str, ...]]:
    """Parse the lines after ``----``.

    Returns
    -------
    tuple[int | None, str | None, tuple[str, ...]]
        ``(value_count, digest, values)``; the first two are ``None`` when the
        values are listed literally.
    """
    if lines:
        match = _HASH_LINE_RE.match(lines[0])
        if match is not None:
            return int(match.group("count")), match.group("digest").lower(), ()
        if "values hashing to" in lines[0]:
            msg = f"Malformed hash line {lines[0]!r}."
            raise ExpectationParseError(msg)
    values: list[str] = []
    for line in lines:
        if not line.strip():
            break
        values.append(line.rstrip("\r\n"))
    return None, None, tuple(values)


def parse_query_block(text: str) -> QueryExpectation:
    """Parse a complete query block.

    Leading blank and ``#`` comment lines are skipped.

    Returns
    -------
    QueryExpectation
        Parsed expectation.

    Raises
    ------
    ExpectationParseError
        Raised when the block has no header or its output is malformed.
    """
    lines = text.splitlines()
    position = 0
    while position < len(lines) and (
        not lines[position].strip() or lines[position].lstrip().startswith("#")
    ):
        position += 1
    if position == len(lines):
        msg = "Query block is empty."
        raise ExpectationParseError(msg)
    header = parse_query_header(lines[position])
    position += 1
    query_lines: list[str] = []
    while position < len(lines) and not lines[position].startswith(RESULT_SEPARATOR):
        query_lines.append(lines[position].strip())
        position += 1
    value_count: int | None = None
    digest: str | None = None
    values: tuple[str, ...] = ()
    if position < len(lines):
        value_count, digest, values = parse_expected_output(lines[position + 1 :])
    if value_count is not None and value_count % header.column_count:
        msg = (
            f"Value count {value_count} is not a multiple of the "
            f"{header.column_count} result columns."
        )
        raise ExpectationParseError(msg)
    return QueryExpectation(
        format_spec=header.format_spec,
        order=header.order,
        label=header.label,
        query=" ".join(line for line in query_lines if line),
        value_count=value_count,
        digest=digest,
        values=values,
    )


def check_zset[K, W](
    zset: ZSetLike[K, W],
    expectation: QueryExpectation,
    *,
    vectors: bool = False,
    config: CanonicalizeConfig | None = None,
) -> ResultComparison:
    """Canonicalize ``zset`` and compare it with ``expectation``.

    Digest expectations compare the value count, then the digest. Literal
    expectations compare the canonical values one by one.

    Returns
    -------
    ResultComparison
        Comparison outcome; mismatches carry a ``reason``.
    """
    config = config or DEFAULT_CONFIG
    result = canonicalize(
        zset,
        expectation.format_spec,
        expectation.order,
        vectors=vectors,
        config=config,
    )
    actual_values = result.values()
    reason: str | None = None
    expected_count = expectation.expected_value_count
    if expected_count != len(actual_values):
        reason = f"expected {expected_count} values, got {len(actual_values)}"
    elif expectation.uses_digest and expectation.digest != result.digest:
        reason = f"expected digest {expectation.digest}, got {result.digest}"
    elif not expectation.uses_digest:
        for index, (expected, actual) in enumerate(
            zip(expectation.values, actual_values, strict=True)
        ):
            if expected != actual:
                reason = f"value {index}: expected {expected!r}, got {actual!r}"
                break
    if reason is not None:
        _LOGGER.info("Result mismatch for %s: %s", expectation.label or "query", reason)
    shown = tuple(actual_values) if len(actual_values) <= config.hash_threshold else None
    return ResultComparison(
        matched=reason is None,
        actual_digest=result.digest,
        expected_value_count=expected_count,
        actual_value_count=len(actual_values),
        expected_digest=expectation.digest,
        reason=reason,
        actual_values=shown,
    )


__all__ = [
    "QueryExpectation",
    "ResultComparison",
    "check_zset",
    "parse_expected_output",
    "parse_query_block",
    "parse_query_header",
]
