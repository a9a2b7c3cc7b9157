"""Reserved-name and allowed-type registries for user-defined schema objects.

The registry is immutable configuration data. Build it once at startup with
``default_registry()`` (or ``SchemaRegistry.from_env()`` to merge operator
supplied reserved names) and inject it into the validator.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Pattern, Tuple

from common.config.env import get_env_list


class ObjectKind(str, Enum):
    """Kinds of schema objects an end user can define."""

    COLUMN = "column"
    TABLE = "table"
    INDEX = "index"
    FUNCTION = "function"


RESERVED_COLUMN_NAMES = frozenset({"oid", "xmin", "cmin", "xmax", "cmax", "tableoid", "ctid"})
RESERVED_TABLE_NAMES = frozenset({"pg_catalog", "information_schema"})
RESERVED_INDEX_NAMES = frozenset({"primary", "unique", "foreign", "exclude"})

COLUMN_TYPES = frozenset(
    {
        "integer",
        "serial",
        "varchar",
        "text",
        "boolean",
        "date",
        "timestamp",
        "float",
        "uuid",
        "json",
    }
)

# varchar(n), numeric(p) and numeric(p,s)
PARAMETERIZED_COLUMN_TYPES: Tuple[Pattern[str], ...] = (
    re.compile(r"^varchar\(\s*[1-9]\d{0,4}\s*\)$"),
    re.compile(r"^numeric\(\s*[1-9]\d?\s*(,\s*\d{1,2}\s*)?\)$"),
)

FUNCTION_PARAMETER_TYPES = frozenset(
    {
        "integer",
        "bigint",
        "smallint",
        "serial",
        "bigserial",
        "text",
        "varchar",
        "char",
        "boolean",
        "real",
        "double precision",
        "numeric",
        "json",
        "jsonb",
        "uuid",
        "timestamp",
        "timestamptz",
        "date",
        "time",
        "bytea",
    }
)

# Pseudo-types are only meaningful as a routine result.
FUNCTION_RETURN_TYPES = FUNCTION_PARAMETER_TYPES | frozenset({"void", "record"})

FUNCTION_LANGUAGES = frozenset({"plpgsql", "sql"})


@dataclass(frozen=True)
class SchemaRegistry:
    """Static sets keyed by object kind, queried by the validator."""

    reserved_names: Mapping[ObjectKind, frozenset] = field(
        default_factory=lambda: MappingProxyType(
            {
                ObjectKind.COLUMN: RESERVED_COLUMN_NAMES,
                ObjectKind.TABLE: RESERVED_TABLE_NAMES,
                ObjectKind.INDEX: RESERVED_INDEX_NAMES,
                ObjectKind.FUNCTION: frozenset(),
            }
        )
    )
    column_types: frozenset = COLUMN_TYPES
    parameterized_column_types: Tuple[Pattern[str], ...] = PARAMETERIZED_COLUMN_TYPES
    function_parameter_types: frozenset = FUNCTION_PARAMETER_TYPES
    function_return_types: frozenset = FUNCTION_RETURN_TYPES
    function_languages: frozenset = FUNCTION_LANGUAGES

    def is_reserved(self, kind: ObjectKind, name: str) -> bool:
        """Case-insensitive reserved-name lookup scoped to the object kind."""
        return name.strip().lower() in self.reserved_names.get(kind, frozenset())

    def is_allowed_column_type(self, column_type: str) -> bool:
        """Return True for plain or parameterized allow-listed column types."""
        normalized = column_type.strip().lower()
        if normalized in self.column_types:
            return True
        return any(pattern.match(normalized) for pattern in self.parameterized_column_types)

    def is_allowed_parameter_type(self, type_name: str) -> bool:
        """Return True when the routine parameter type is allow-listed."""
        return type_name.strip().lower() in self.function_parameter_types

    def is_allowed_return_type(self, type_name: str) -> bool:
        """Return True when the routine return type is allow-listed."""
        return type_name.strip().lower() in self.function_return_types

    def is_allowed_language(self, language: str) -> bool:
        """Return True when the routine language is allow-listed."""
        return language.strip().lower() in self.function_languages

    @classmethod
    def from_env(cls) -> "SchemaRegistry":
        """Merge SCHEMA_RESERVED_<KIND>_NAMES into the built-in reserved sets."""
        base = cls()
        merged = {}
        for kind in ObjectKind:
            extra = get_env_list(f"SCHEMA_RESERVED_{kind.value.upper()}_NAMES", []) or []
            merged[kind] = base.reserved_names.get(kind, frozenset()) | frozenset(
                name.lower() for name in extra
            )
        return cls(reserved_names=MappingProxyType(merged))


def default_registry() -> SchemaRegistry:
    """Return the built-in registry."""
    return SchemaRegistry()
