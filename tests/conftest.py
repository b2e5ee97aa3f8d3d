"""Shared pytest fixtures."""

from __future__ import annotations

import os

import pytest

from canon.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def _clean_canon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient ZSET_CANON_* settings out of every test."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
