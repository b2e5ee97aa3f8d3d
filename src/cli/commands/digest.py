"""Canonicalize a result table and print its digest."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from canon.config import CanonicalizeConfig
from canon.digest import render_rows
from canon.pipeline import canonicalize
from cli.exit_codes import ExitCode
from serde_msgspec import dumps_json
from zset.arrow_source import DEFAULT_WEIGHT_COLUMN, ArrowZSet, read_table

_LOGGER = logging.getLogger(__name__)


def load_zset(path: Path, *, weight_column: str, config: CanonicalizeConfig) -> ArrowZSet:
    """Read ``path`` into a consolidated Z-set.

    Returns
    -------
    ArrowZSet
        Z-set over every non-weight column of the table.
    """
    table = read_table(path)
    _LOGGER.info("Loaded %d rows from %s", table.num_rows, path)
    return ArrowZSet(table, weight_column=weight_column, ring=config.ring())


def digest_command(
    path: Annotated[Path, Parameter(help="Arrow IPC or Parquet file holding the result.")],
    *,
    types: Annotated[
        str,
        Parameter(name=["--types", "-t"], help="Column classes, one of I/R/T per column."),
    ],
    order: Annotated[
        str,
        Parameter(name=["--order", "-o"], help="nosort, rowsort or valuesort."),
    ] = "rowsort",
    weight_column: Annotated[
        str,
        Parameter(name="--weight-column", help="Integer weight column (absent: weight one)."),
    ] = DEFAULT_WEIGHT_COLUMN,
    show_rows: Annotated[
        bool,
        Parameter(name="--show-rows", help="Print the canonical rows before the digest."),
    ] = False,
    as_json: Annotated[
        bool,
        Parameter(name="--json", help="Print the full canonical result as JSON."),
    ] = False,
) -> int:
    """Print the sqllogictest digest of a result table.

    Returns
    -------
    int
        Exit status code.
    """
    config = CanonicalizeConfig.from_env()
    zset = load_zset(path, weight_column=weight_column, config=config)
    result = canonicalize(zset, types, order, config=config)
    if as_json:
        sys.stdout.write(dumps_json(result, pretty=True).decode("utf-8") + "\n")
        return ExitCode.SUCCESS
    if show_rows:
        sys.stdout.write(render_rows(result.rows))
    sys.stdout.write(f"{result.value_count} values hashing to {result.digest}\n")
    return ExitCode.SUCCESS


__all__ = ["digest_command", "load_zset"]
