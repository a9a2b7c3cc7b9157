"""DDL Builder: renders validated specs into identifier-quoted Postgres statements.

Nothing in this package executes SQL.
"""

from .columns import (
    build_add_column,
    build_alter_column,
    build_column_definition,
    build_drop_column,
    build_foreign_key_constraint,
    build_rename_column,
    foreign_key_constraint_name,
)
from .functions import build_create_function, build_drop_function
from .indexes import build_create_index, build_drop_index
from .rows import build_insert
from .tables import (
    build_copy_table_rows,
    build_create_table,
    build_create_table_like,
    build_drop_table,
    build_rename_table,
)

__all__ = [
    "build_add_column",
    "build_alter_column",
    "build_column_definition",
    "build_copy_table_rows",
    "build_create_function",
    "build_create_index",
    "build_create_table",
    "build_create_table_like",
    "build_drop_column",
    "build_drop_function",
    "build_drop_index",
    "build_drop_table",
    "build_foreign_key_constraint",
    "build_insert",
    "build_rename_column",
    "build_rename_table",
    "foreign_key_constraint_name",
]
