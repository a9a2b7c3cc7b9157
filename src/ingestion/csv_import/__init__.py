"""CSV type inference engine."""

from .column_names import deduplicate_names, sanitize_column_name
from .inference import CsvSchemaInferrer, infer_schema
from .type_candidates import DEFAULT_CANDIDATES, parse_timestamp, resolve_column_type
from .type_hints import parse_type_hint, split_header
from .values import CellConversionError, convert_cell, convert_row

__all__ = [
    "CellConversionError",
    "CsvSchemaInferrer",
    "DEFAULT_CANDIDATES",
    "convert_cell",
    "convert_row",
    "deduplicate_names",
    "infer_schema",
    "parse_timestamp",
    "parse_type_hint",
    "resolve_column_type",
    "sanitize_column_name",
    "split_header",
]
