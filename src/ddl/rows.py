from typing import Sequence

from common.sql.identifiers import quote_identifier, quote_qualified


def build_insert(schema: str, table: str, columns: Sequence[str]) -> str:
    """Parameterized single-row INSERT suitable for ``executemany``."""
    names = ", ".join(quote_identifier(column) for column in columns)
    placeholders = ", ".join(f"${position}" for position in range(1, len(columns) + 1))
    return f"INSERT INTO {quote_qualified(schema, table)} ({names}) VALUES ({placeholders})"
