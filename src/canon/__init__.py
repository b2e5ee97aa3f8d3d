"""Canonical rendering and hashing of weighted query results."""

from __future__ import annotations

from canon.collector import CanonicalCollector, CanonicalOutput, compare_rows
from canon.config import CanonicalizeConfig
from canon.digest import canonical_bytes, digest_rows
from canon.errors import (
    CanonicalizationError,
    FormatMismatch,
    Invariant,
    InvariantViolation,
    SortOrderUnsupported,
)
from canon.extractor import extract_rows
from canon.formatter import format_row
from canon.pipeline import CanonicalResult, canonicalize, hash_zset, weighted_count, zset_to_strings
from canon.sort_order import SortOrder, parse_sort_order
from canon.vectors import hash_vectors, weighted_vector_count, zset_of_vectors_to_strings

__all__ = [
    "CanonicalCollector",
    "CanonicalOutput",
    "CanonicalResult",
    "CanonicalizationError",
    "CanonicalizeConfig",
    "FormatMismatch",
    "Invariant",
    "InvariantViolation",
    "SortOrder",
    "SortOrderUnsupported",
    "canonical_bytes",
    "canonicalize",
    "compare_rows",
    "digest_rows",
    "extract_rows",
    "format_row",
    "hash_vectors",
    "hash_zset",
    "parse_sort_order",
    "weighted_count",
    "weighted_vector_count",
    "zset_of_vectors_to_strings",
    "zset_to_strings",
]
