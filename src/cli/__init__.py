"""Command line interface for zset-canon."""
