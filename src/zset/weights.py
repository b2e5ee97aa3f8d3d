"""Weight ring abstraction for Z-set multiplicities.

Weights live in a commutative ring with a total order. The canonicalization
pipeline only needs a handful of operations from it: the identities, addition,
negation, a negativity test and a conversion to a repetition count.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

SUPPORTED_BITS: frozenset[int] = frozenset({0, 8, 16, 32, 64, 128})


@runtime_checkable
class WeightRing[W](Protocol):
    """Numeric interface over a concrete weight type."""

    def zero(self) -> W:
        """Return the additive identity."""
        ...

    def one(self) -> W:
        """Return the multiplicative identity."""
        ...

    def add(self, left: W, right: W) -> W:
        """Return ``left + right``."""
        ...

    def neg(self, value: W) -> W:
        """Return ``-value``."""
        ...

    def is_negative(self, value: W) -> bool:
        """Return whether ``value < 0``."""
        ...

    def to_count(self, value: W) -> int:
        """Return ``value`` as a non-negative repetition count."""
        ...


@dataclass(frozen=True)
class IntWeightRing:
    """Integer weights, optionally bounded to a signed machine width.

    Parameters
    ----------
    bits
        Signed bit width of the weight type. ``0`` means unbounded Python
        integers.
    """

    bits: int = 64

    def __post_init__(self) -> None:
        """Validate the configured width.

        Raises
        ------
        ValueError
            Raised when ``bits`` is negative or not a supported width.
        """
        if self.bits not in SUPPORTED_BITS:
            msg = f"Unsupported weight width: {self.bits!r}."
            raise ValueError(msg)

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Return the inclusive ``(min, max)`` range, or ``None`` if unbounded."""
        if self.bits == 0:
            return None
        limit = 1 << (self.bits - 1)
        return -limit, limit - 1

    def _checked(self, value: int) -> int:
        bounds = self.bounds
        if bounds is not None and not bounds[0] <= value <= bounds[1]:
            msg = f"Weight {value} overflows a signed {self.bits}-bit ring."
            raise OverflowError(msg)
        return value

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def add(self, left: int, right: int) -> int:
        return self._checked(left + right)

    def neg(self, value: int) -> int:
        return self._checked(-value)

    def is_negative(self, value: int) -> bool:
        return value < 0

    def to_count(self, value: int) -> int:
        """Return the weight as a repetition count.

        Raises
        ------
        ValueError
            Raised when the weight is negative.
        """
        if value < 0:
            msg = f"Cannot expand negative weight {value}."
            raise ValueError(msg)
        return int(value)


DEFAULT_RING = IntWeightRing()


__all__ = ["DEFAULT_RING", "SUPPORTED_BITS", "IntWeightRing", "WeightRing"]
