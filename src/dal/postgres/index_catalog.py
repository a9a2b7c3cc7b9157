from typing import Any, List, Optional

from common.interfaces.index_catalog import IndexCatalog
from dal.errors import catalog_errors
from ddl import build_create_index, build_drop_index
from schema import Index, IndexSpec

_INDEX_QUERY = """
    SELECT
        i.relname AS name,
        t.relname AS "table",
        pg_get_indexdef(ix.indexrelid) AS definition,
        ix.indisunique AS is_unique
    FROM pg_index ix
    JOIN pg_class i ON i.oid = ix.indexrelid
    JOIN pg_class t ON t.oid = ix.indrelid
    JOIN pg_namespace n ON n.oid = t.relnamespace
    WHERE n.nspname = $1
      AND t.relname = $2
"""

LIST_INDEXES_SQL = _INDEX_QUERY + "    ORDER BY ix.indexrelid\n"

GET_INDEX_SQL = _INDEX_QUERY + "      AND i.relname = $3\n    LIMIT 1\n"

INDEX_IN_SCHEMA_SQL = """
    SELECT EXISTS (
        SELECT 1 FROM pg_indexes
        WHERE schemaname = $1 AND indexname = $2
    )
"""


class PostgresIndexCatalog(IndexCatalog):
    """Index introspection and DDL bound to one tenant connection."""

    def __init__(self, conn: Any):
        self.conn = conn

    async def list(self, schema: str, table: str) -> List[Index]:
        with catalog_errors("index.error.listFailed"):
            rows = await self.conn.fetch(LIST_INDEXES_SQL, schema, table)
        return [Index(**dict(row)) for row in rows]

    async def get_by_name(self, schema: str, table: str, name: str) -> Optional[Index]:
        with catalog_errors("index.error.lookupFailed"):
            row = await self.conn.fetchrow(GET_INDEX_SQL, schema, table, name)
        return Index(**dict(row)) if row else None

    async def has(self, schema: str, table: str, name: str) -> bool:
        return await self.get_by_name(schema, table, name) is not None

    async def exists_in_schema(self, schema: str, name: str) -> bool:
        with catalog_errors("index.error.lookupFailed"):
            return bool(await self.conn.fetchval(INDEX_IN_SCHEMA_SQL, schema, name))

    async def create(self, schema: str, table: str, index: IndexSpec) -> None:
        with catalog_errors("index.error.createFailed"):
            await self.conn.execute(build_create_index(schema, table, index))

    async def drop(self, schema: str, name: str) -> None:
        with catalog_errors("index.error.deleteFailed"):
            await self.conn.execute(build_drop_index(schema, name))
