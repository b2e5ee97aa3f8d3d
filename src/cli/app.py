"""Main application setup for the zset-canon CLI."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Literal

from cyclopts import App, Group, Parameter
from cyclopts.exceptions import CycloptsError
from rich.console import Console

from canon.errors import CanonicalizationError
from cli.commands.check import check_command
from cli.commands.digest import digest_command
from cli.commands.version import get_version, version_command
from cli.exit_codes import ExitCode

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_HELP_EPILOGUE = """
Examples:
  zset-canon digest result.parquet -t TI               rowsort digest
  zset-canon digest result.arrow -t I -o valuesort     valuesort digest
  zset-canon check result.parquet -e query.test        compare with a query block

Environment Variables:
  ZSET_CANON_LOG_LEVEL       Default log level (DEBUG, INFO, WARNING, ERROR)
  ZSET_CANON_RING_BITS       Signed weight width (0 for unbounded)
  ZSET_CANON_STRICT_ORDER    Reject nosort on general results
  ZSET_CANON_ECHO_ROWS       Log canonical rows at DEBUG level
  ZSET_CANON_HASH_THRESHOLD  Largest result reported value by value
"""

session_group = Group(
    "Session",
    help="Session options.",
    sort_key=0,
)

app = App(
    name="zset-canon",
    help="Canonical rows and sqllogictest digests for weighted query results.",
    help_format="rich",
    help_epilogue=_HELP_EPILOGUE,
    version=get_version(),
    version_flags=["--version", "-V"],
    default_parameter=Parameter(
        show_default=True,
        show_env_var=True,
    ),
    exit_on_error=True,
    print_error=True,
    help_on_error=False,
)

app.meta.group_parameters = session_group

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionOptions:
    """Session-level configuration parameters."""

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR"],
        Parameter(
            name="--log-level",
            help="Logging verbosity level.",
            env_var="ZSET_CANON_LOG_LEVEL",
            group=session_group,
        ),
    ] = "WARNING"


_DEFAULT_SESSION_OPTIONS = SessionOptions()


@app.meta.default
def meta_launcher(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    session: Annotated[SessionOptions, Parameter(name="*")] = _DEFAULT_SESSION_OPTIONS,
) -> int:
    """Configure logging, then dispatch to the selected command.

    Returns
    -------
    int
        Exit status code from command execution.

    Raises
    ------
    ValueError
        Raised when the log level is invalid.
    """
    if session.log_level not in LOG_LEVELS:
        msg = f"Unsupported log level {session.log_level!r}."
        raise ValueError(msg)
    logging.basicConfig(level=session.log_level)
    try:
        command, bound, _ignored = app.parse_args(
            list(tokens),
            exit_on_error=False,
            print_error=True,
        )
        result = command(*bound.args, **bound.kwargs)
    except CycloptsError as exc:
        return ExitCode.from_exception(exc)
    except (CanonicalizationError, OSError, OverflowError, ValueError, TypeError) as exc:
        Console(stderr=True).print(f"Error: {exc}", style="bold red", markup=False)
        _LOGGER.debug("Command failed", exc_info=exc)
        return ExitCode.from_exception(exc)
    return ExitCode.SUCCESS if result is None else int(result)


app.command(digest_command, name="digest", alias="d")
app.command(check_command, name="check", alias="c")
app.command(version_command, name="version", alias="v")


def main() -> None:
    """Run the zset-canon CLI."""
    sys.exit(app.meta())


__all__ = ["app", "main"]
