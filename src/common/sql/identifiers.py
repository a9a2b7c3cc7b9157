"""Identifier quoting and qualified-name helpers for Postgres DDL."""

from typing import Optional, Tuple


def quote_identifier(name: str) -> str:
    """Quote a Postgres identifier, doubling embedded double quotes.

    NUL bytes cannot appear in a Postgres identifier and are stripped.
    """
    cleaned = name.replace("\x00", "")
    return '"' + cleaned.replace('"', '""') + '"'


def quote_qualified(schema: Optional[str], name: str) -> str:
    """Quote ``schema.name`` (or just ``name`` when schema is empty)."""
    if schema:
        return f"{quote_identifier(schema)}.{quote_identifier(name)}"
    return quote_identifier(name)


def parse_table_name(full_name: str, default_schema: str = "public") -> Tuple[str, str]:
    """Split ``schema.table`` into its parts, defaulting the schema.

    Only the first dot separates the schema; table names themselves are
    restricted to ``[A-Za-z0-9_]`` by validation.
    """
    candidate = (full_name or "").strip()
    if "." in candidate:
        schema, table = candidate.split(".", 1)
        schema = schema.strip() or default_schema
        return schema, table.strip()
    return default_schema, candidate
