"""Weighted multisets (Z-sets) and the cursor contract used to read them."""

from __future__ import annotations

from zset.cursor import RowConverter, ZSetCursor, ZSetLike, default_row_converter
from zset.ordzset import OrdZSet, zset
from zset.weights import DEFAULT_RING, IntWeightRing, WeightRing

__all__ = [
    "DEFAULT_RING",
    "IntWeightRing",
    "OrdZSet",
    "RowConverter",
    "WeightRing",
    "ZSetCursor",
    "ZSetLike",
    "default_row_converter",
    "zset",
]
