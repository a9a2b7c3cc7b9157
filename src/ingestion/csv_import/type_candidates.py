"""Column type candidates evaluated against the non-empty cells of a column.

Each candidate folds the whole column into a single "still viable" state
and returns the resulting column type, or ``None`` once any cell falsifies
it. ``DEFAULT_CANDIDATES`` fixes the priority order; the first viable
candidate wins and strings are the fallback.
"""

import json
import re
from datetime import datetime
from typing import Callable, Optional, Sequence, Tuple

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
MAX_NUMERIC_PRECISION = 38

_BOOLEAN_LITERALS = frozenset({"true", "false", "1", "0"})
_INTEGER = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(?P<int>\d*)(?:\.(?P<frac>\d*))?")
_EXPONENT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)[eE][+-]?\d+")
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|z|[+-]\d{2}:\d{2})"
)

# (shape, strptime format); the shape keeps field widths as strict as the formats read.
TIMESTAMP_FORMATS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"), "%Y-%m-%dT%H:%M:%S"),
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"), "%Y-%m-%d %H:%M:%S"),
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%d/%m/%Y"),
    (re.compile(r"\d{4}/\d{2}/\d{2}"), "%Y/%m/%d"),
)


def _parse_rfc3339(value: str) -> Optional[datetime]:
    match = _RFC3339.fullmatch(value)
    if not match:
        return None
    base, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    if fraction:
        base = f"{base}.{fraction[:6].ljust(6, '0')}"
    try:
        return datetime.fromisoformat(base + offset)
    except ValueError:
        return None


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse ``value`` with the first matching timestamp format, RFC3339 first."""
    parsed = _parse_rfc3339(value)
    if parsed is not None:
        return parsed
    for shape, fmt in TIMESTAMP_FORMATS:
        if not shape.fullmatch(value):
            continue
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def is_boolean(value: str) -> bool:
    return value.lower() in _BOOLEAN_LITERALS


def is_integer(value: str) -> bool:
    if not _INTEGER.fullmatch(value):
        return False
    return INT32_MIN <= int(value) <= INT32_MAX


def is_json_document(value: str) -> bool:
    try:
        document = json.loads(value)
    except ValueError:
        return False
    return isinstance(document, (dict, list))


def _all(predicate: Callable[[str], bool]) -> Callable[[Sequence[str]], bool]:
    def fold(values: Sequence[str]) -> bool:
        viable = True
        for value in values:
            viable = viable and predicate(value)
            if not viable:
                break
        return viable

    return fold


class TypeCandidate:
    """A column type that is accepted only if every non-empty cell conforms."""

    name = ""

    def fold(self, values: Sequence[str]) -> Optional[str]:
        raise NotImplementedError


class PredicateCandidate(TypeCandidate):
    def __init__(self, name: str, predicate: Callable[[str], bool]) -> None:
        self.name = name
        self._viable = _all(predicate)

    def fold(self, values: Sequence[str]) -> Optional[str]:
        return self.name if self._viable(values) else None

    def __repr__(self) -> str:
        return f"PredicateCandidate({self.name!r})"


class NumericCandidate(TypeCandidate):
    """Decimal numbers, sized to the widest integer part and longest fraction.

    Any exponent, infinity or NaN literal leaves no observable precision and
    the column becomes ``float``.
    """

    name = "numeric"

    def fold(self, values: Sequence[str]) -> Optional[str]:
        integer_digits = 0
        scale = 0
        precise = True
        for value in values:
            match = _DECIMAL.fullmatch(value)
            if match and (match.group("int") or match.group("frac")):
                digits = match.group("int").lstrip("0")
                integer_digits = max(integer_digits, len(digits) or 1)
                scale = max(scale, len(match.group("frac") or ""))
            elif _EXPONENT.fullmatch(value) or _SPECIAL_FLOAT.fullmatch(value):
                precise = False
            else:
                return None

        if not precise:
            return "float"
        precision = min(integer_digits + scale, MAX_NUMERIC_PRECISION)
        scale = min(scale, precision - 1)
        return f"numeric({precision},{scale})"

    def __repr__(self) -> str:
        return "NumericCandidate()"


class StringCandidate(TypeCandidate):
    """Fallback: ``varchar(longest)`` up to ``varchar_limit``, else ``text``."""

    name = "string"

    def __init__(self, varchar_limit: int = 255) -> None:
        self.varchar_limit = varchar_limit

    def fold(self, values: Sequence[str]) -> Optional[str]:
        longest = max((len(value) for value in values), default=0)
        if longest == 0 or longest > self.varchar_limit:
            return "text"
        return f"varchar({longest})"


BOOLEAN = PredicateCandidate("boolean", is_boolean)
INTEGER = PredicateCandidate("integer", is_integer)
NUMERIC = NumericCandidate()
JSON = PredicateCandidate("json", is_json_document)
TIMESTAMP = PredicateCandidate("timestamp", lambda value: parse_timestamp(value) is not None)

DEFAULT_CANDIDATES: Tuple[TypeCandidate, ...] = (BOOLEAN, INTEGER, NUMERIC, JSON, TIMESTAMP)


def resolve_column_type(
    values: Sequence[str],
    candidates: Sequence[TypeCandidate] = DEFAULT_CANDIDATES,
    fallback: Optional[TypeCandidate] = None,
) -> str:
    """Return the type of the first viable candidate for ``values``."""
    for candidate in candidates:
        column_type = candidate.fold(values)
        if column_type is not None:
            return column_type
    return (fallback or StringCandidate()).fold(values) or "text"
