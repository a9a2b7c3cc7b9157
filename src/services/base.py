"""Shared request pipeline for the schema mutation services.

Every operation resolves the owning project, authorizes the caller against
the project's organization, then works on catalogs bound to one scoped
tenant connection that is released on every exit path.
"""

import logging
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any, AsyncIterator, Callable, Optional, Tuple

from common.config.settings import SchemaEngineSettings
from common.errors import ForbiddenError, NotFoundError
from common.interfaces import AuthorizationPolicy, ProjectResolver, TenantConnectionProvider
from common.sql.identifiers import parse_table_name
from dal.postgres.catalogs import TenantCatalogs, postgres_catalogs
from schema import ProjectRef
from validation.validator import SchemaValidator

logger = logging.getLogger(__name__)

CatalogFactory = Callable[[Any], TenantCatalogs]


class Action(str, Enum):
    """Policy check applied before an operation."""

    ACCESS = "access"
    CREATE = "create"
    UPDATE = "update"


_FORBIDDEN_SUFFIX = {
    Action.ACCESS: "listForbidden",
    Action.CREATE: "createForbidden",
    Action.UPDATE: "updateForbidden",
}


class SchemaService:
    """Base class wiring collaborators shared by all schema services."""

    object_kind = "schema"

    def __init__(
        self,
        projects: ProjectResolver,
        policy: AuthorizationPolicy,
        connections: TenantConnectionProvider,
        validator: Optional[SchemaValidator] = None,
        settings: Optional[SchemaEngineSettings] = None,
        catalog_factory: Optional[CatalogFactory] = None,
    ) -> None:
        self.projects = projects
        self.policy = policy
        self.connections = connections
        self.settings = settings or SchemaEngineSettings.defaults()
        self.validator = validator or SchemaValidator(settings=self.settings)
        self.catalog_factory = catalog_factory or self._default_catalogs

    def _default_catalogs(self, conn: Any) -> TenantCatalogs:
        return postgres_catalogs(conn, batch_size=self.settings.bulk_insert_batch_size)

    async def _authorize(self, project_id: str, caller: Any, action: Action) -> ProjectRef:
        """Resolve the project and check the caller; NotFound/Forbidden otherwise."""
        project = await self.projects.get_project(project_id)
        if project is None:
            raise NotFoundError("project.error.notFound")

        check = getattr(self.policy, f"can_{action.value}")
        if not await check(project.organization_id, caller):
            logger.warning(
                "Denied %s %s on project %s", action.value, self.object_kind, project_id
            )
            raise ForbiddenError(f"{self.object_kind}.error.{_FORBIDDEN_SUFFIX[action]}")
        return project

    @asynccontextmanager
    async def _catalogs(self, project: ProjectRef) -> AsyncIterator[TenantCatalogs]:
        """Catalog repositories bound to a scoped connection to the tenant database."""
        async with self.connections.connect(project.tenant_database_name) as conn:
            yield self.catalog_factory(conn)

    def _split_table(self, full_name: str) -> Tuple[str, str]:
        return parse_table_name(full_name, default_schema=self.settings.default_schema)

    def _schema_or_default(self, schema: Optional[str]) -> str:
        return (schema or "").strip() or self.settings.default_schema

    @staticmethod
    async def _require_table(catalogs: TenantCatalogs, schema: str, table: str) -> None:
        if not await catalogs.tables.exists(schema, table):
            logger.info("Table %s.%s not found", schema, table)
            raise NotFoundError("table.error.notFound")
