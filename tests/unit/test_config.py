"""Canonicalization settings tests."""

from __future__ import annotations

import msgspec
import pytest

from canon.config import CanonicalizeConfig
from zset.weights import IntWeightRing

CUSTOM_THRESHOLD = 20


def test_defaults() -> None:
    """Defaults match the sqllogictest runner."""
    config = CanonicalizeConfig()
    assert config.hash_threshold == 8
    assert not config.strict_order
    assert config.ring() == IntWeightRing(bits=64)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """ZSET_CANON_* variables override defaults."""
    monkeypatch.setenv("ZSET_CANON_STRICT_ORDER", "true")
    monkeypatch.setenv("ZSET_CANON_HASH_THRESHOLD", str(CUSTOM_THRESHOLD))
    monkeypatch.setenv("ZSET_CANON_RING_BITS", "0")
    config = CanonicalizeConfig.from_env()
    assert config.strict_order
    assert config.hash_threshold == CUSTOM_THRESHOLD
    assert config.ring().bounds is None


def test_from_env_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unparseable values keep the defaults."""
    monkeypatch.setenv("ZSET_CANON_ECHO_ROWS", "sometimes")
    monkeypatch.setenv("ZSET_CANON_HASH_THRESHOLD", "-3")
    config = CanonicalizeConfig.from_env()
    assert config == CanonicalizeConfig()


def test_fingerprint_is_stable_and_sensitive() -> None:
    """Equal settings share a fingerprint; different settings do not."""
    assert CanonicalizeConfig().fingerprint() == CanonicalizeConfig().fingerprint()
    assert CanonicalizeConfig().fingerprint() != CanonicalizeConfig(echo_rows=True).fingerprint()


def test_unsupported_ring_width_rejected_on_construction() -> None:
    """A weight width outside the machine widths fails when settings are built."""
    with pytest.raises(ValueError, match="Unsupported weight width"):
        CanonicalizeConfig(ring_bits=7)  # type: ignore[arg-type]
    with pytest.raises(msgspec.ValidationError):
        msgspec.convert({"ring_bits": 7}, CanonicalizeConfig)


def test_from_env_unsupported_ring_width(monkeypatch: pytest.MonkeyPatch) -> None:
    """ZSET_CANON_RING_BITS must name a supported width."""
    monkeypatch.setenv("ZSET_CANON_RING_BITS", "7")
    with pytest.raises(ValueError, match="Unsupported weight width"):
        CanonicalizeConfig.from_env()
