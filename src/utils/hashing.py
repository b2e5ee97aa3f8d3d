"""Explicit hash utilities with stable serialization semantics."""

from __future__ import annotations

import hashlib

from serde_msgspec import JSON_ENCODER_SORTED


def hash_md5_hex(payload: bytes) -> str:
    """Return the lowercase MD5 hex digest of ``payload``.

    MD5 is kept for interoperability with sqllogictest result hashes, not for
    integrity.

    Parameters
    ----------
    payload
        Raw bytes to hash.

    Returns
    -------
    str
        32-character hex digest.
    """
    return hashlib.md5(payload, usedforsecurity=False).hexdigest()


def hash_sha256_hex(payload: bytes, *, length: int | None = None) -> str:
    """Return SHA-256 hex digest, optionally truncated.

    Parameters
    ----------
    payload
        Raw bytes to hash.
    length
        Optional length of hex digest to return.

    Returns
    -------
    str
        Hex digest string (possibly truncated).
    """
    digest = hashlib.sha256(payload).hexdigest()
    return digest if length is None else digest[:length]


def hash_json_canonical(payload: object) -> str:
    """Return SHA-256 hexdigest of ``payload`` encoded as key-sorted JSON.

    Returns
    -------
    str
        SHA-256 hexdigest.
    """
    return hash_sha256_hex(JSON_ENCODER_SORTED.encode(payload))


__all__ = ["hash_json_canonical", "hash_md5_hex", "hash_sha256_hex"]
