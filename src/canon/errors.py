"""Error taxonomy for result canonicalization.

Every error here is a defect in the caller or in the upstream computation.
None of them is retried and none yields a partial result.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categorize canonicalization errors."""

    GENERIC = "generic"
    INVARIANT = "invariant"
    FORMAT = "format"
    ORDER = "order"
    STATE = "state"
    EXPECTATION = "expectation"


class Invariant(StrEnum):
    """Weight invariants checked while reading a final result."""

    NEGATIVE_WEIGHT = "negative_weight"
    EXPECTED_UNIT_WEIGHT = "expected_unit_weight"


class CanonicalizationError(Exception):
    """Base exception for canonicalization failures."""

    kind: ErrorKind = ErrorKind.GENERIC


class InvariantViolation(CanonicalizationError, RuntimeError):
    """Raised when a result Z-set breaks a weight invariant."""

    kind = ErrorKind.INVARIANT

    def __init__(self, invariant: Invariant, *, key: object, weight: object) -> None:
        if invariant is Invariant.NEGATIVE_WEIGHT:
            detail = "negative weight in a final result (un-cancelled retraction)"
        else:
            detail = "vector result keys must have weight exactly one"
        super().__init__(f"{invariant.value}: {detail}; key={key!r} weight={weight!r}")
        self.invariant = invariant
        self.key = key
        self.weight = weight


class FormatMismatch(CanonicalizationError, ValueError):
    """Raised when a format string does not fit a row."""

    kind = ErrorKind.FORMAT

    def __init__(self, message: str, *, column: int | None = None) -> None:
        if column is not None:
            message = f"column {column}: {message}"
        super().__init__(message)
        self.column = column


class SortOrderUnsupported(CanonicalizationError, ValueError):
    """Raised when an ordering policy is unknown or not allowed at a call site."""

    kind = ErrorKind.ORDER


class CollectorFinalized(CanonicalizationError, RuntimeError):
    """Raised when rows are added to a collector after ``get``."""

    kind = ErrorKind.STATE


class ExpectationParseError(CanonicalizationError, ValueError):
    """Raised when a sqllogictest expectation block is malformed."""

    kind = ErrorKind.EXPECTATION


__all__ = [
    "CanonicalizationError",
    "CollectorFinalized",
    "ErrorKind",
    "ExpectationParseError",
    "FormatMismatch",
    "Invariant",
    "InvariantViolation",
    "SortOrderUnsupported",
]
