from typing import List, Sequence

from common.sql.identifiers import quote_qualified
from ddl.columns import build_column_definition, build_foreign_key_constraint
from schema import ColumnSpec


def build_create_table(schema: str, table: str, columns: Sequence[ColumnSpec]) -> List[str]:
    """CREATE TABLE with every column, then one statement per foreign key.

    Columns are emitted in ascending ``position`` so the catalog ordinal
    matches the order supplied.
    """
    ordered = sorted(columns, key=lambda column: column.position)
    definitions = ",\n    ".join(build_column_definition(column) for column in ordered)
    statements = [f"CREATE TABLE {quote_qualified(schema, table)} (\n    {definitions}\n)"]
    for column in ordered:
        foreign_key = build_foreign_key_constraint(schema, table, column)
        if foreign_key:
            statements.append(foreign_key)
    return statements


def build_create_table_like(schema: str, source: str, target: str) -> str:
    """Copy structure, defaults, constraints and indexes of ``source``."""
    return (
        f"CREATE TABLE {quote_qualified(schema, target)} "
        f"(LIKE {quote_qualified(schema, source)} INCLUDING ALL)"
    )


def build_copy_table_rows(schema: str, source: str, target: str) -> str:
    return (
        f"INSERT INTO {quote_qualified(schema, target)} "
        f"SELECT * FROM {quote_qualified(schema, source)}"
    )


def build_rename_table(schema: str, table: str, new_name: str) -> str:
    # RENAME TO takes an unqualified name; the table stays in its schema.
    return (
        f"ALTER TABLE {quote_qualified(schema, table)} "
        f"RENAME TO {quote_qualified(None, new_name)}"
    )


def build_drop_table(schema: str, table: str) -> str:
    return f"DROP TABLE IF EXISTS {quote_qualified(schema, table)}"
