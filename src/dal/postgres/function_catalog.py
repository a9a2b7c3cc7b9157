from typing import Any, List, Optional

from common.interfaces.function_catalog import FunctionCatalog
from dal.errors import catalog_errors
from ddl import build_create_function, build_drop_function
from schema import Function, FunctionSpec

# specific_name is "<proname>_<oid>", which pins each routine to its pg_proc row.
_FUNCTION_QUERY = """
    SELECT
        r.routine_name AS name,
        r.routine_type,
        r.data_type,
        r.type_udt_name,
        pg_get_functiondef(p.oid) AS definition,
        r.external_language AS language,
        r.sql_data_access
    FROM information_schema.routines r
    JOIN pg_proc p ON r.specific_name = p.proname || '_' || p.oid
    WHERE r.routine_type = 'FUNCTION'
      AND r.specific_schema = $1
"""

LIST_FUNCTIONS_SQL = _FUNCTION_QUERY + "    ORDER BY r.routine_name, p.oid\n"

GET_FUNCTION_SQL = _FUNCTION_QUERY + "      AND r.routine_name = $2\n    ORDER BY p.oid\n    LIMIT 1\n"


class PostgresFunctionCatalog(FunctionCatalog):
    """Stored routine introspection and DDL bound to one tenant connection."""

    def __init__(self, conn: Any):
        self.conn = conn

    async def list(self, schema: str) -> List[Function]:
        with catalog_errors("function.error.listFailed"):
            rows = await self.conn.fetch(LIST_FUNCTIONS_SQL, schema)
        return [Function(**dict(row)) for row in rows]

    async def get_by_name(self, schema: str, name: str) -> Optional[Function]:
        with catalog_errors("function.error.lookupFailed"):
            row = await self.conn.fetchrow(GET_FUNCTION_SQL, schema, name)
        return Function(**dict(row)) if row else None

    async def exists(self, schema: str, name: str) -> bool:
        return await self.get_by_name(schema, name) is not None

    async def create(self, function: FunctionSpec) -> None:
        with catalog_errors("function.error.createFailed"):
            await self.conn.execute(build_create_function(function))

    async def drop(self, schema: str, name: str) -> None:
        with catalog_errors("function.error.deleteFailed"):
            await self.conn.execute(build_drop_function(schema, name))
