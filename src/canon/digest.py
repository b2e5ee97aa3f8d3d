"""Serialize canonical rows and compute the sqllogictest result hash."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from utils.hashing import hash_md5_hex

_LOGGER = logging.getLogger(__name__)

VALUE_TERMINATOR = "\n"


def canonical_bytes(rows: Iterable[Sequence[str]]) -> bytes:
    """Return every value followed by a newline, row-major, UTF-8 encoded."""
    return "".join(
        value + VALUE_TERMINATOR for row in rows for value in row
    ).encode("utf-8")


def digest_rows(rows: Iterable[Sequence[str]]) -> str:
    """Return the lowercase MD5 hex digest of :func:`canonical_bytes`."""
    return hash_md5_hex(canonical_bytes(rows))


def render_rows(rows: Iterable[Sequence[str]]) -> str:
    """Return the diagnostic rendering: ``value,`` per column, one row per line."""
    return "".join("".join(f"{value}," for value in row) + "\n" for row in rows)


def echo_rows(rows: Iterable[Sequence[str]]) -> None:
    """Log the diagnostic rendering of ``rows`` at DEBUG level."""
    if _LOGGER.isEnabledFor(logging.DEBUG):
        _LOGGER.debug("Canonical rows:\n%s", render_rows(rows))


__all__ = ["VALUE_TERMINATOR", "canonical_bytes", "digest_rows", "echo_rows", "render_rows"]
