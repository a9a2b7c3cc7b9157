"""Conversion of raw CSV cells into driver-ready bind parameters."""

import json
from datetime import date, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Sequence

from ingestion.csv_import.type_candidates import parse_timestamp


class CellConversionError(ValueError):
    """A cell could not be converted to its column type."""

    def __init__(self, column_type: str, value: str):
        super().__init__(f"cannot convert {value!r} to {column_type}")
        self.column_type = column_type
        self.value = value


def _to_boolean(value: str) -> bool:
    return value.lower() in ("true", "1")


def _to_decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(value) from exc


def _to_json(value: str) -> str:
    json.loads(value)
    return value


def _to_timestamp(value: str):
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _to_date(value: str) -> date:
    parsed = parse_timestamp(value)
    if parsed is None:
        raise ValueError(value)
    return parsed.date()


_CONVERTERS: Dict[str, Callable[[str], Any]] = {
    "boolean": _to_boolean,
    "integer": int,
    "serial": int,
    "float": float,
    "numeric": _to_decimal,
    "json": _to_json,
    "date": _to_date,
    "timestamp": _to_timestamp,
}


def _base_type(column_type: str) -> str:
    return column_type.split("(", 1)[0].strip().lower()


def converter_for(column_type: str) -> Callable[[str], Any]:
    """Return the cell converter for a column type; unknown types stay text."""
    return _CONVERTERS.get(_base_type(column_type), str)


def convert_cell(value: Optional[str], column_type: str) -> Any:
    """Convert one raw cell; empty or missing cells become ``None`` (NULL)."""
    if value is None or value == "":
        return None
    try:
        return converter_for(column_type)(value)
    except ValueError as exc:
        raise CellConversionError(column_type, value) from exc


def convert_row(row: Sequence[str], column_types: Sequence[str]) -> List[Any]:
    """Convert a ragged row to a full-width list of bind parameters."""
    return [
        convert_cell(row[index] if index < len(row) else None, column_type)
        for index, column_type in enumerate(column_types)
    ]
