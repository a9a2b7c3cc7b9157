import logging
from typing import Any, List, Optional, Sequence

from common.interfaces.table_catalog import TableCatalog
from dal.errors import catalog_errors
from ddl import (
    build_copy_table_rows,
    build_create_table,
    build_create_table_like,
    build_drop_table,
    build_rename_table,
)
from schema import ColumnSpec, Table

logger = logging.getLogger(__name__)

_TABLE_COLUMNS = """
        c.oid AS id,
        c.relname AS name,
        n.nspname AS schema_name,
        c.reltuples AS estimated_rows,
        pg_size_pretty(pg_total_relation_size(c.oid)) AS total_size
"""

LIST_TABLES_SQL = f"""
    SELECT {_TABLE_COLUMNS}
    FROM pg_class c
    JOIN pg_namespace n ON c.relnamespace = n.oid
    WHERE n.nspname = $1
      AND c.relkind = 'r'
    ORDER BY c.relname
"""

GET_TABLE_SQL = f"""
    SELECT {_TABLE_COLUMNS}
    FROM pg_class c
    JOIN pg_namespace n ON c.relnamespace = n.oid
    WHERE n.nspname = $1
      AND c.relname = $2
      AND c.relkind = 'r'
    LIMIT 1
"""

TABLE_EXISTS_SQL = """
    SELECT EXISTS (
        SELECT 1 FROM information_schema.tables
        WHERE table_schema = $1 AND table_name = $2
    )
"""


class PostgresTableCatalog(TableCatalog):
    """Table introspection and DDL bound to one tenant connection."""

    def __init__(self, conn: Any):
        self.conn = conn

    async def list(self, schema: str) -> List[Table]:
        with catalog_errors("table.error.listFailed"):
            rows = await self.conn.fetch(LIST_TABLES_SQL, schema)
        return [Table(**dict(row)) for row in rows]

    async def exists(self, schema: str, name: str) -> bool:
        with catalog_errors("table.error.lookupFailed"):
            return bool(await self.conn.fetchval(TABLE_EXISTS_SQL, schema, name))

    async def get_by_name(self, schema: str, name: str) -> Optional[Table]:
        with catalog_errors("table.error.lookupFailed"):
            row = await self.conn.fetchrow(GET_TABLE_SQL, schema, name)
        return Table(**dict(row)) if row else None

    async def create(self, schema: str, name: str, columns: Sequence[ColumnSpec]) -> None:
        with catalog_errors("table.error.createFailed"):
            async with self.conn.transaction():
                for statement in build_create_table(schema, name, columns):
                    await self.conn.execute(statement)
        logger.info("Created table %s.%s with %d columns", schema, name, len(columns))

    async def duplicate(self, schema: str, source: str, target: str) -> None:
        with catalog_errors("table.error.duplicateFailed"):
            async with self.conn.transaction():
                await self.conn.execute(build_create_table_like(schema, source, target))
                await self.conn.execute(build_copy_table_rows(schema, source, target))
        logger.info("Duplicated table %s.%s as %s", schema, source, target)

    async def rename(self, schema: str, name: str, new_name: str) -> None:
        with catalog_errors("table.error.renameFailed"):
            await self.conn.execute(build_rename_table(schema, name, new_name))

    async def drop(self, schema: str, name: str) -> None:
        with catalog_errors("table.error.deleteFailed"):
            await self.conn.execute(build_drop_table(schema, name))
