"""Canonicalization settings."""

from __future__ import annotations

from typing import Annotated, Literal

import msgspec

from serde_msgspec import StructBaseStrict
from utils.env_utils import env_bool, env_int
from utils.hashing import hash_json_canonical
from zset.weights import SUPPORTED_BITS, IntWeightRing

ENV_PREFIX = "ZSET_CANON_"
DEFAULT_HASH_THRESHOLD = 8

NonNegativeInt = Annotated[int, msgspec.Meta(ge=0)]
RingBits = Literal[0, 8, 16, 32, 64, 128]


class CanonicalizeConfig(StructBaseStrict, frozen=True):
    """Settings shared by every canonicalization call.

    Attributes
    ----------
    ring_bits
        Signed width of integer weights; ``0`` means unbounded.
    strict_order
        Reject ``nosort`` for general (non-vector) results, whose row order
        would then depend on the cursor.
    echo_rows
        Log the canonical rows at DEBUG level.
    hash_threshold
        Results with more values than this are compared by digest only.
    """

    ring_bits: RingBits = 64
    strict_order: bool = False
    echo_rows: bool = False
    hash_threshold: NonNegativeInt = DEFAULT_HASH_THRESHOLD

    def __post_init__(self) -> None:
        """Validate the weight width.

        Raises
        ------
        ValueError
            Raised when ``ring_bits`` is not a supported signed width.
        """
        if self.ring_bits not in SUPPORTED_BITS:
            msg = f"Unsupported weight width: {self.ring_bits!r}."
            raise ValueError(msg)

    def ring(self) -> IntWeightRing:
        """Return the weight ring described by ``ring_bits``."""
        return IntWeightRing(bits=self.ring_bits)

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> CanonicalizeConfig:
        """Return settings read from ``<prefix>*`` environment variables.

        Returns
        -------
        CanonicalizeConfig
            Settings with environment overrides applied.
        """
        defaults = cls()
        return cls(
            ring_bits=env_int(f"{prefix}RING_BITS", default=defaults.ring_bits, minimum=0),
            strict_order=env_bool(f"{prefix}STRICT_ORDER", default=defaults.strict_order),
            echo_rows=env_bool(f"{prefix}ECHO_ROWS", default=defaults.echo_rows),
            hash_threshold=env_int(
                f"{prefix}HASH_THRESHOLD",
                default=defaults.hash_threshold,
                minimum=0,
            ),
        )

    def fingerprint_payload(self) -> dict[str, object]:
        """Return a versioned payload for fingerprinting."""
        return {"version": 1, "settings": msgspec.structs.asdict(self)}

    def fingerprint(self) -> str:
        """Return a deterministic fingerprint of these settings."""
        return hash_json_canonical(self.fingerprint_payload())


DEFAULT_CONFIG = CanonicalizeConfig()


__all__ = ["DEFAULT_CONFIG", "DEFAULT_HASH_THRESHOLD", "ENV_PREFIX", "CanonicalizeConfig"]
