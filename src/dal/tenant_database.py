"""Tenant database connection manager.

Each project owns a physically separate Postgres database. Connections are
opened per call against the project's database and always closed when the
caller's ``async with`` block exits.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional

import asyncpg

from common.config.env import get_env_float, get_env_int, get_env_str
from common.errors import CatalogOperationError
from common.errors.sanitization import sanitize_exception
from dal.tracing import TracedConnection, trace_enabled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantDatabase:
    """Connection settings shared by every tenant database on one server."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: Optional[str] = None
    command_timeout: float = 30.0
    application_name: str = "schema_engine"

    @classmethod
    def from_env(cls) -> "TenantDatabase":
        """Build settings from ``TENANT_DB_*`` environment variables."""
        return cls(
            host=get_env_str("TENANT_DB_HOST", "localhost"),
            port=get_env_int("TENANT_DB_PORT", 5432),
            user=get_env_str("TENANT_DB_USER", "postgres"),
            password=get_env_str("TENANT_DB_PASSWORD"),
            command_timeout=get_env_float("TENANT_DB_COMMAND_TIMEOUT", 30.0),
            application_name=get_env_str("TENANT_DB_APPLICATION_NAME", "schema_engine"),
        )

    async def _open(self, database_name: str) -> Any:
        try:
            return await asyncpg.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=database_name,
                command_timeout=self.command_timeout,
                server_settings={"application_name": self.application_name},
            )
        except (asyncpg.PostgresError, OSError) as exc:
            detail = sanitize_exception(exc, fallback="Could not connect to tenant database.")
            logger.error(
                "Failed to connect to tenant database %s@%s/%s: %s",
                self.user,
                self.host,
                database_name,
                detail,
            )
            raise CatalogOperationError("database.error.connectionFailed", detail) from exc

    @asynccontextmanager
    async def connect(self, database_name: str) -> AsyncIterator[Any]:
        """Yield a connection to ``database_name``; closed on every exit path."""
        conn = await self._open(database_name)
        logger.debug("Opened tenant connection to %s", database_name)
        try:
            yield TracedConnection(conn) if trace_enabled() else conn
        finally:
            await conn.close()
            logger.debug("Closed tenant connection to %s", database_name)
