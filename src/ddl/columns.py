"""Column definition and ALTER TABLE fragments."""

from typing import List, Optional

from common.sql.identifiers import parse_table_name, quote_identifier, quote_qualified
from schema import ColumnSpec

MAX_IDENTIFIER_LENGTH = 63


def build_column_definition(column: ColumnSpec) -> str:
    """Render ``"name" type [NOT NULL] [PRIMARY KEY] [UNIQUE] [DEFAULT expr]``.

    The type and default expression must already be validated; only the
    column name is quoted.
    """
    parts = [quote_identifier(column.name), column.type]
    if column.not_null:
        parts.append("NOT NULL")
    if column.primary:
        parts.append("PRIMARY KEY")
    if column.unique:
        parts.append("UNIQUE")
    if column.default:
        parts.append(f"DEFAULT {column.default.strip()}")
    return " ".join(parts)


def foreign_key_constraint_name(table: str, column: str) -> str:
    """Deterministic constraint name, truncated to the Postgres identifier limit."""
    return f"fk_{table}_{column}"[:MAX_IDENTIFIER_LENGTH]


def build_foreign_key_constraint(schema: str, table: str, column: ColumnSpec) -> Optional[str]:
    """Return the named FOREIGN KEY constraint for ``column``, or None if not foreign."""
    if not (column.foreign and column.reference_table and column.reference_column):
        return None

    ref_schema, ref_table = parse_table_name(column.reference_table, default_schema=schema)
    return (
        f"ALTER TABLE {quote_qualified(schema, table)} "
        f"ADD CONSTRAINT {quote_identifier(foreign_key_constraint_name(table, column.name))} "
        f"FOREIGN KEY ({quote_identifier(column.name)}) "
        f"REFERENCES {quote_qualified(ref_schema, ref_table)}"
        f"({quote_identifier(column.reference_column)})"
    )


def build_add_column(schema: str, table: str, column: ColumnSpec) -> List[str]:
    """ADD COLUMN followed by its foreign key constraint, if any."""
    statements = [
        f"ALTER TABLE {quote_qualified(schema, table)} "
        f"ADD COLUMN {build_column_definition(column)}"
    ]
    foreign_key = build_foreign_key_constraint(schema, table, column)
    if foreign_key:
        statements.append(foreign_key)
    return statements


def build_alter_column(schema: str, table: str, column: ColumnSpec) -> List[str]:
    """Change a column's type and nullability.

    Existing values are cast to the new type with ``USING``.
    """
    target = quote_qualified(schema, table)
    name = quote_identifier(column.name)
    nullability = "SET NOT NULL" if column.not_null else "DROP NOT NULL"
    return [
        f"ALTER TABLE {target} ALTER COLUMN {name} TYPE {column.type} "
        f"USING {name}::{column.type}",
        f"ALTER TABLE {target} ALTER COLUMN {name} {nullability}",
    ]


def build_rename_column(schema: str, table: str, column: str, new_name: str) -> str:
    return (
        f"ALTER TABLE {quote_qualified(schema, table)} "
        f"RENAME COLUMN {quote_identifier(column)} TO {quote_identifier(new_name)}"
    )


def build_drop_column(schema: str, table: str, column: str) -> str:
    return (
        f"ALTER TABLE {quote_qualified(schema, table)} "
        f"DROP COLUMN {quote_identifier(column)}"
    )
