"""Typed environment variable parsing helpers.

Unset variables return the caller's default. A set but malformed value
raises ``ValueError`` naming the variable, so misconfiguration surfaces at
startup rather than as a silent fallback.
"""

import os
from typing import Callable, List, Optional, TypeVar

T = TypeVar("T")

_TRUE = frozenset({"true", "1", "yes", "on"})
_FALSE = frozenset({"false", "0", "no", "off", ""})


def _parsed(name: str, default: Optional[T], parse: Callable[[str], T], kind: str) -> Optional[T]:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return parse(value)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' must be {kind}, got '{value}'.") from None


def get_env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    return _parsed(name, default, int, "an integer")


def get_env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    return _parsed(name, default, float, "a float")


def _to_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(value)


def get_env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Truthy: true, 1, yes, on. Falsey: false, 0, no, off, empty."""
    return _parsed(name, default, _to_bool, "a boolean")


def get_env_list(
    name: str, default: Optional[List[str]] = None, separator: str = ","
) -> Optional[List[str]]:
    """Split on ``separator``, dropping blank entries."""
    return _parsed(
        name,
        default,
        lambda value: [item.strip() for item in value.split(separator) if item.strip()],
        "a list",
    )
