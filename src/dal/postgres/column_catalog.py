import logging
from typing import Any, List, Sequence

from common.interfaces.column_catalog import ColumnCatalog
from common.sql.identifiers import quote_qualified
from dal.errors import catalog_errors
from ddl import build_add_column, build_alter_column, build_drop_column, build_rename_column
from schema import Column, ColumnSpec

logger = logging.getLogger(__name__)

# One row per attribute; a column covered by several constraints is folded with bool_or.
LIST_COLUMNS_SQL = """
    SELECT
        a.attname AS name,
        a.attnum AS position,
        a.attnotnull AS not_null,
        COALESCE(pg_catalog.format_type(a.atttypid, a.atttypmod), '') AS type,
        COALESCE(pg_get_expr(ad.adbin, ad.adrelid), '') AS default_value,
        COALESCE(bool_or(ct.contype = 'p'), false) AS "primary",
        COALESCE(bool_or(ct.contype = 'u'), false) AS "unique",
        COALESCE(bool_or(ct.contype = 'f'), false) AS "foreign",
        max(ref_table.relname) FILTER (WHERE ct.contype = 'f') AS reference_table,
        max(ref_col.attname) FILTER (WHERE ct.contype = 'f') AS reference_column
    FROM pg_attribute a
    LEFT JOIN pg_attrdef ad
        ON a.attrelid = ad.adrelid AND a.attnum = ad.adnum
    LEFT JOIN pg_constraint ct
        ON ct.conrelid = a.attrelid AND a.attnum = ANY(ct.conkey)
    LEFT JOIN pg_class ref_table
        ON ref_table.oid = ct.confrelid
    LEFT JOIN pg_attribute ref_col
        ON ref_col.attrelid = ct.confrelid AND ref_col.attnum = ct.confkey[1]
    WHERE a.attrelid = $1::regclass
      AND a.attnum > 0
      AND NOT a.attisdropped
    GROUP BY a.attname, a.attnum, a.attnotnull, a.atttypid, a.atttypmod, ad.adbin, ad.adrelid
    ORDER BY a.attnum
"""

COUNT_COLUMNS_SQL = """
    SELECT COUNT(DISTINCT column_name)
    FROM information_schema.columns
    WHERE table_schema = $1
      AND table_name = $2
      AND column_name = ANY($3::text[])
"""


class PostgresColumnCatalog(ColumnCatalog):
    """Column introspection and DDL bound to one tenant connection."""

    def __init__(self, conn: Any):
        self.conn = conn

    async def list(self, schema: str, table: str) -> List[Column]:
        with catalog_errors("column.error.listFailed"):
            rows = await self.conn.fetch(LIST_COLUMNS_SQL, quote_qualified(schema, table))
        return [Column(**dict(row)) for row in rows]

    async def _count_existing(self, schema: str, table: str, columns: Sequence[str]) -> int:
        with catalog_errors("column.error.lookupFailed"):
            count = await self.conn.fetchval(COUNT_COLUMNS_SQL, schema, table, list(columns))
        return int(count or 0)

    async def has(self, schema: str, table: str, column: str) -> bool:
        return await self._count_existing(schema, table, [column]) > 0

    async def has_any(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        if not columns:
            return False
        return await self._count_existing(schema, table, columns) > 0

    async def has_all(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        wanted = set(columns)
        if not wanted:
            return False
        return await self._count_existing(schema, table, sorted(wanted)) == len(wanted)

    async def create_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        """Add each column with its foreign key in its own transaction."""
        for column in columns:
            with catalog_errors("column.error.createFailed"):
                async with self.conn.transaction():
                    for statement in build_add_column(schema, table, column):
                        await self.conn.execute(statement)
            logger.info("Added column %s to %s.%s", column.name, schema, table)

    async def alter_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        for column in columns:
            with catalog_errors("column.error.alterFailed"):
                async with self.conn.transaction():
                    for statement in build_alter_column(schema, table, column):
                        await self.conn.execute(statement)
            logger.info("Altered column %s on %s.%s", column.name, schema, table)

    async def rename(self, schema: str, table: str, column: str, new_name: str) -> None:
        with catalog_errors("column.error.renameFailed"):
            await self.conn.execute(build_rename_column(schema, table, column, new_name))

    async def drop(self, schema: str, table: str, column: str) -> None:
        with catalog_errors("column.error.deleteFailed"):
            await self.conn.execute(build_drop_column(schema, table, column))
