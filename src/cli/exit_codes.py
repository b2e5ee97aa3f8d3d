"""Exit code taxonomy for the zset-canon CLI."""

from __future__ import annotations

from enum import IntEnum

from canon.errors import CanonicalizationError, ErrorKind


class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    - 0: Success
    - 1-9: General errors (parse, validation, config)
    - 10-19: Canonicalization outcomes
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    PARSE_ERROR = 2
    VALIDATION_ERROR = 3
    CONFIG_ERROR = 4

    RESULT_MISMATCH = 10
    INVARIANT_ERROR = 11
    FORMAT_ERROR = 12

    @classmethod
    def from_exception(cls, exc: BaseException) -> ExitCode:
        """Map an exception to an appropriate exit code.

        Parameters
        ----------
        exc
            Exception to classify.

        Returns
        -------
        ExitCode
            Exit code appropriate for the exception type.
        """
        if exc.__class__.__module__.startswith("cyclopts"):
            if exc.__class__.__name__ == "ValidationError":
                return cls.VALIDATION_ERROR
            return cls.PARSE_ERROR
        if isinstance(exc, CanonicalizationError):
            return _KIND_CODES.get(exc.kind, cls.VALIDATION_ERROR)
        if isinstance(exc, OverflowError):
            return cls.INVARIANT_ERROR
        if isinstance(exc, (FileNotFoundError, PermissionError)):
            return cls.CONFIG_ERROR
        if isinstance(exc, (ValueError, TypeError)):
            return cls.VALIDATION_ERROR
        return cls.GENERAL_ERROR


_KIND_CODES: dict[ErrorKind, ExitCode] = {
    ErrorKind.INVARIANT: ExitCode.INVARIANT_ERROR,
    ErrorKind.FORMAT: ExitCode.FORMAT_ERROR,
    ErrorKind.ORDER: ExitCode.VALIDATION_ERROR,
    ErrorKind.EXPECTATION: ExitCode.PARSE_ERROR,
}


__all__ = ["ExitCode"]
