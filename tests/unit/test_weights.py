"""Weight ring tests."""

from __future__ import annotations

import pytest

from zset.weights import DEFAULT_RING, IntWeightRing, WeightRing


def test_default_ring_satisfies_protocol() -> None:
    """The default integer ring implements the WeightRing protocol."""
    ring: WeightRing[int] = DEFAULT_RING
    assert isinstance(ring, WeightRing)
    assert ring.add(ring.one(), ring.neg(ring.one())) == ring.zero()


def test_bounded_ring_rejects_overflow() -> None:
    """Addition outside the signed width raises OverflowError."""
    ring = IntWeightRing(bits=8)
    assert ring.add(100, 27) == 127
    with pytest.raises(OverflowError):
        ring.add(100, 28)
    with pytest.raises(OverflowError):
        ring.neg(-128)


def test_unbounded_ring_has_no_bounds() -> None:
    """Width zero uses arbitrary precision integers."""
    ring = IntWeightRing(bits=0)
    assert ring.bounds is None
    assert ring.add(1 << 80, 1 << 80) == 1 << 81


def test_unsupported_width_rejected() -> None:
    """Only machine widths are accepted."""
    with pytest.raises(ValueError, match="Unsupported weight width"):
        IntWeightRing(bits=12)


def test_to_count_rejects_negative() -> None:
    """Negative weights never become repetition counts."""
    assert DEFAULT_RING.to_count(3) == 3
    with pytest.raises(ValueError, match="negative"):
        DEFAULT_RING.to_count(-1)


class _CountingRing:
    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def add(self, left: int, right: int) -> int:
        return left + right

    def neg(self, value: int) -> int:
        return -value

    def is_negative(self, value: int) -> bool:
        return value < 0

    def to_count(self, value: int) -> int:
        return value


def test_minimal_ring_satisfies_protocol() -> None:
    """Identities, addition, negation, sign and count make a ring."""
    assert isinstance(_CountingRing(), WeightRing)
    assert not hasattr(DEFAULT_RING, "is_positive")
