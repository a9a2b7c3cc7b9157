"""Explicit type hints embedded in CSV headers: ``"<name> [<type>]"``."""

import re
from typing import Optional, Tuple

_HEADER_WITH_HINT = re.compile(r"(.*?)\s*\[(.*?)\]", re.DOTALL)
_VARCHAR_HINT = re.compile(r"varchar:(\d+)")
_NUMERIC_HINT = re.compile(r"numeric:(\d+),(\d+)")

DEFAULT_VARCHAR = "varchar(255)"
DEFAULT_NUMERIC = "numeric(10,2)"

_HINT_ALIASES = {
    "bool": "boolean",
    "boolean": "boolean",
    "int": "integer",
    "integer": "integer",
    "float": "float",
    "real": "float",
    "text": "text",
    "json": "json",
    "timestamp": "timestamp",
    "datetime": "timestamp",
}


def parse_type_hint(hint: str) -> Optional[str]:
    """Map a hint to a column type; unrecognized hints pass through verbatim."""
    normalized = hint.strip().lower()
    if not normalized:
        return None

    if normalized.startswith("varchar"):
        match = _VARCHAR_HINT.search(normalized)
        return f"varchar({match.group(1)})" if match else DEFAULT_VARCHAR

    if normalized.startswith("numeric"):
        match = _NUMERIC_HINT.search(normalized)
        return f"numeric({match.group(1)},{match.group(2)})" if match else DEFAULT_NUMERIC

    return _HINT_ALIASES.get(normalized, normalized)


def split_header(header: str) -> Tuple[str, Optional[str]]:
    """Return ``(name, forced_type)`` for a header cell.

    ``"balance [numeric:12,2]"`` -> ``("balance", "numeric(12,2)")``.
    """
    match = _HEADER_WITH_HINT.fullmatch(header)
    if not match:
        return header, None
    return match.group(1).strip(), parse_type_hint(match.group(2))
