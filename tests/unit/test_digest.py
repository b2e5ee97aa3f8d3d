"""Digest builder tests."""

from __future__ import annotations

import logging

import pytest

from canon.digest import canonical_bytes, digest_rows, echo_rows, render_rows

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
LEONID_MIHAI_MD5 = "75882b126bca14319bb5a64b55de3254"


def test_canonical_bytes_row_major_with_newlines() -> None:
    """Every value is followed by a newline, column-minor."""
    rows = (("Leonid", "1"), ("Mihai", "0"))
    assert canonical_bytes(rows) == b"Leonid\n1\nMihai\n0\n"


def test_digest_is_lowercase_md5() -> None:
    """The digest is the lowercase hex md5 of the canonical bytes."""
    assert digest_rows((("Leonid", "1"), ("Mihai", "0"))) == LEONID_MIHAI_MD5
    assert digest_rows(()) == EMPTY_MD5


def test_row_boundaries_do_not_affect_digest() -> None:
    """Only the value sequence is hashed, not the row shape."""
    assert digest_rows((("a", "b"),)) == digest_rows((("a",), ("b",)))


def test_echo_rows_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    """The diagnostic rendering goes to the DEBUG log only."""
    rows = (("a", "1"),)
    assert render_rows(rows) == "a,1,\n"
    with caplog.at_level(logging.DEBUG, logger="canon.digest"):
        echo_rows(rows)
    assert "a,1," in caplog.text
