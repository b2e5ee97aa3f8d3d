"""Check a result table against a sqllogictest query block."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

from cyclopts import Parameter

from canon.config import CanonicalizeConfig
from canon.expectations import check_zset, parse_query_block
from cli.commands.digest import load_zset
from cli.exit_codes import ExitCode
from serde_msgspec import dumps_json
from zset.arrow_source import DEFAULT_WEIGHT_COLUMN


def check_command(
    path: Annotated[Path, Parameter(help="Arrow IPC or Parquet file holding the result.")],
    *,
    expect: Annotated[
        Path,
        Parameter(name=["--expect", "-e"], help="File containing one sqllogictest query block."),
    ],
    weight_column: Annotated[
        str,
        Parameter(name="--weight-column", help="Integer weight column (absent: weight one)."),
    ] = DEFAULT_WEIGHT_COLUMN,
) -> int:
    """Compare a result table with the expected output of a query block.

    Returns
    -------
    int
        ``0`` on match, ``10`` on mismatch.
    """
    config = CanonicalizeConfig.from_env()
    expectation = parse_query_block(expect.read_text(encoding="utf-8"))
    zset = load_zset(path, weight_column=weight_column, config=config)
    comparison = check_zset(zset, expectation, config=config)
    sys.stdout.write(dumps_json(comparison, pretty=True).decode("utf-8") + "\n")
    if comparison.matched:
        return ExitCode.SUCCESS
    return ExitCode.RESULT_MISMATCH


__all__ = ["check_command"]
