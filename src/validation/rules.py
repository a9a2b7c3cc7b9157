"""Pure validation rules for user-supplied schema objects.

Every rule returns a list of human-readable errors (empty when valid) and
never touches the database.
"""

import re
from typing import List, Optional, Sequence

from common.config.schema_registry import ObjectKind, SchemaRegistry
from common.config.settings import NameLengthBounds
from common.sql.expressions import default_expression_error
from schema import ColumnSpec

ALPHANUMERIC_WITH_UNDERSCORE = re.compile(r"^[A-Za-z0-9_]+$")
ALPHANUMERIC_WITH_UNDERSCORE_AND_DASH = re.compile(r"^[A-Za-z0-9_-]+$")

_WITH_UNDERSCORE = (ALPHANUMERIC_WITH_UNDERSCORE, "alphanumeric with underscores")
_WITH_UNDERSCORE_AND_DASH = (
    ALPHANUMERIC_WITH_UNDERSCORE_AND_DASH,
    "alphanumeric with underscores and dashes",
)

_NAME_PATTERNS = {
    ObjectKind.COLUMN: _WITH_UNDERSCORE_AND_DASH,
    ObjectKind.TABLE: _WITH_UNDERSCORE,
    ObjectKind.INDEX: _WITH_UNDERSCORE,
    ObjectKind.FUNCTION: _WITH_UNDERSCORE_AND_DASH,
}

FOREIGN_KEY_INCOMPLETE = "reference table and column are required for foreign key constraints"

BODY_DELIMITER = "$$"


def check_name(
    name: Optional[str],
    kind: ObjectKind,
    bounds: NameLengthBounds,
    registry: SchemaRegistry,
    label: Optional[str] = None,
) -> List[str]:
    """Apply the required/length/pattern/reserved rules to one name.

    A missing name short-circuits; otherwise every violated rule is reported.
    """
    label = label or kind.value.capitalize()
    if name is None or name == "":
        return [f"{label} name is required"]

    errors = []
    if not bounds.contains(name):
        errors.append(
            f"{label} name must be between {bounds.min_length} and {bounds.max_length} characters"
        )

    pattern, description = _NAME_PATTERNS[kind]
    if not pattern.match(name):
        errors.append(f"{label} name must be {description}")

    if registry.is_reserved(kind, name):
        errors.append(f"{label} name '{name}' is reserved and cannot be used")
    return errors


def check_schema_name(schema_name: Optional[str]) -> List[str]:
    """Schema names follow the table charset and must be present."""
    if not schema_name:
        return ["Schema name is required"]
    if not ALPHANUMERIC_WITH_UNDERSCORE.match(schema_name):
        return ["Schema name must be alphanumeric with underscores"]
    return []


def check_column_type(column_type: Optional[str], registry: SchemaRegistry) -> List[str]:
    """Column types must be in the allow-list; the offending value is echoed."""
    if not column_type or not column_type.strip():
        return ["Column type is required"]
    if not registry.is_allowed_column_type(column_type):
        return [f"column type '{column_type}' is not allowed"]
    return []


def check_foreign_key(column: ColumnSpec) -> List[str]:
    """A foreign column needs both reference fields; one combined error otherwise."""
    if not column.foreign:
        return []
    if not (column.reference_table or "").strip() or not (column.reference_column or "").strip():
        return [FOREIGN_KEY_INCOMPLETE]
    return []


def check_default(column: ColumnSpec) -> List[str]:
    """DEFAULT must be a single scalar SQL expression."""
    error = default_expression_error(column.default)
    return [error] if error else []


def check_index_columns(columns: Sequence[str]) -> List[str]:
    """Reject empty lists, blank entries and case-insensitive duplicates."""
    if not columns:
        return ["At least one column is required"]

    errors = []
    seen = set()
    for column in columns:
        if column is None or not column.strip():
            errors.append("Column name in index cannot be empty")
            continue

        key = column.strip().lower()
        if key in seen:
            errors.append(f"Duplicate column '{column}' in index definition")
        seen.add(key)
    return errors


def check_function_definition(definition: Optional[str]) -> List[str]:
    """Minimal structural check on a routine body; not a parser."""
    if not definition or not definition.strip():
        return ["Definition is required"]

    errors = []
    body = definition.strip()
    if not body.startswith("BEGIN") or not body.rstrip(";").rstrip().endswith("END"):
        errors.append("Definition must begin with BEGIN and end with END")
    if BODY_DELIMITER in body:
        errors.append(f"Definition must not contain '{BODY_DELIMITER}'")
    return errors


def check_language(language: Optional[str], registry: SchemaRegistry) -> List[str]:
    """Routine language must be allow-listed."""
    if not language:
        return ["Language is required"]
    if not registry.is_allowed_language(language):
        return [f"invalid language: {language}"]
    return []


def check_return_type(return_type: Optional[str], registry: SchemaRegistry) -> List[str]:
    """Routine return type must be in the return type allow-list."""
    if not return_type:
        return ["Return type is required"]
    if not registry.is_allowed_return_type(return_type):
        return [f"invalid return type: {return_type}"]
    return []


def check_parameter_type(type_name: Optional[str], registry: SchemaRegistry) -> List[str]:
    """Parameter types exclude the result-only pseudo-types."""
    if not type_name or not registry.is_allowed_parameter_type(type_name):
        return [f"invalid parameter type: {type_name or ''}"]
    return []
