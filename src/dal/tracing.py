import hashlib
from typing import Any, Awaitable, List, Optional, Sequence

from common.observability.context import request_id_var
from common.observability.otel import is_signal_enabled

PROVIDER = "postgres"


def trace_enabled() -> bool:
    """Return True when DDL tracing is enabled or OTEL exporter defaults apply."""
    return is_signal_enabled("DAL_TRACE_DDL")


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


def _operation_of(sql: str) -> str:
    words = sql.split(None, 1)
    return words[0].upper() if words else ""


async def trace_ddl_operation(
    name: str,
    sql: Optional[str],
    operation: Awaitable,
    provider: str = PROVIDER,
):
    """Trace a catalog statement with OTEL when enabled.

    Only a hash of the statement is recorded, never its text.
    """
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("dal")
    with tracer.start_as_current_span(name) as span:
        request_id = request_id_var.get()
        if request_id:
            span.set_attribute("request_id", request_id)
        span.set_attribute("db.provider", provider)
        if sql:
            span.set_attribute("db.operation", _operation_of(sql))
            span.set_attribute("db.statement_hash", _hash_sql(sql))
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise


class TracedConnection:
    """Proxy for asyncpg connections that emits a span per statement."""

    def __init__(self, conn: Any, provider: str = PROVIDER) -> None:
        self._conn = conn
        self._provider = provider

    @property
    def raw(self) -> Any:
        """The wrapped driver connection."""
        return self._conn

    async def execute(self, sql: str, *params: Any) -> str:
        return await trace_ddl_operation(
            "dal.ddl.execute", sql, self._conn.execute(sql, *params), self._provider
        )

    async def executemany(self, sql: str, args: Sequence[Sequence[Any]]) -> None:
        return await trace_ddl_operation(
            "dal.dml.executemany", sql, self._conn.executemany(sql, args), self._provider
        )

    async def fetch(self, sql: str, *params: Any) -> List[Any]:
        return await trace_ddl_operation(
            "dal.catalog.fetch", sql, self._conn.fetch(sql, *params), self._provider
        )

    async def fetchrow(self, sql: str, *params: Any) -> Optional[Any]:
        return await trace_ddl_operation(
            "dal.catalog.fetch", sql, self._conn.fetchrow(sql, *params), self._provider
        )

    async def fetchval(self, sql: str, *params: Any) -> Any:
        return await trace_ddl_operation(
            "dal.catalog.fetch", sql, self._conn.fetchval(sql, *params), self._provider
        )

    def transaction(self):
        """Return the driver's transaction context manager."""
        return self._conn.transaction()

    async def close(self) -> None:
        await self._conn.close()
