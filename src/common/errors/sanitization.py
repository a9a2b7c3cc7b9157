"""Sanitization helpers for user-facing error surfaces."""

from __future__ import annotations

import re
from typing import Any

from common.sanitization.text import redact_sensitive_info

MAX_PUBLIC_ERROR_LENGTH = 2048

_SQL_FRAGMENT_RE = re.compile(
    r"(?is)\b(select|insert|update|delete|create|drop|alter|truncate)\b"
    r".*\b(from|into|table|set|values|where|column|index|function)\b"
)
_MULTI_SPACE_RE = re.compile(r"\s+")


def sanitize_error_message(message: Any, *, fallback: str = "Request failed.") -> str:
    """Return safe user-facing error text without leaking credentials or SQL text."""
    raw_text = "" if message is None else str(message)
    bounded_fallback = (fallback or "Request failed.").strip()[:MAX_PUBLIC_ERROR_LENGTH]
    safe_text = redact_sensitive_info(raw_text.strip())
    if not safe_text:
        return bounded_fallback
    if _SQL_FRAGMENT_RE.search(safe_text):
        return bounded_fallback
    safe_text = _MULTI_SPACE_RE.sub(" ", safe_text).strip()
    return (safe_text or bounded_fallback)[:MAX_PUBLIC_ERROR_LENGTH]


def sanitize_exception(exc: BaseException, *, fallback: str = "Request failed.") -> str:
    """Sanitize an exception for outward-facing contracts."""
    return sanitize_error_message(str(exc), fallback=fallback)
