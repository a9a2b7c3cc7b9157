from common.sql.identifiers import quote_identifier, quote_qualified
from schema import IndexSpec


def build_create_index(schema: str, table: str, index: IndexSpec) -> str:
    """``CREATE [UNIQUE] INDEX "name" ON "schema"."table" ("c1", "c2")``."""
    unique = "UNIQUE " if index.is_unique else ""
    columns = ", ".join(quote_identifier(column.strip()) for column in index.columns)
    return (
        f"CREATE {unique}INDEX {quote_identifier(index.name)} "
        f"ON {quote_qualified(schema, table)} ({columns})"
    )


def build_drop_index(schema: str, index: str) -> str:
    # Indexes live in their table's schema.
    return f"DROP INDEX IF EXISTS {quote_qualified(schema, index)}"
