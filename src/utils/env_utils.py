"""Environment variable resolution utilities."""

from __future__ import annotations

import logging
import os

_LOGGER = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def env_value(name: str) -> str | None:
    """Return stripped env var value, or None if empty/not set.

    Returns
    -------
    str | None
        Stripped value or None.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    stripped = raw.strip()
    return stripped or None


def env_bool(name: str, *, default: bool) -> bool:
    """Parse environment variable as boolean, logging unparseable values.

    Returns
    -------
    bool
        Parsed boolean or ``default``.
    """
    raw = env_value(name)
    if raw is None:
        return default
    value = raw.lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    _LOGGER.warning("Invalid boolean for %s: %r", name, raw)
    return default


def env_int(name: str, *, default: int, minimum: int | None = None) -> int:
    """Parse environment variable as integer, logging invalid values.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value used when unset or invalid.
    minimum
        Optional inclusive lower bound; smaller values fall back to ``default``.

    Returns
    -------
    int
        Parsed integer or ``default``.
    """
    raw = env_value(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        _LOGGER.warning("Invalid integer for %s: %r", name, raw)
        return default
    if minimum is not None and value < minimum:
        _LOGGER.warning("Integer for %s below minimum %d: %r", name, minimum, raw)
        return default
    return value


__all__ = ["env_bool", "env_int", "env_value"]
