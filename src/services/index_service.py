import logging
from typing import Any, List

from common.errors import NotFoundError, UnprocessableError
from schema import Index, IndexSpec
from services.base import Action, SchemaService

logger = logging.getLogger(__name__)


class IndexService(SchemaService):
    """List, inspect, create and delete indexes on a tenant table."""

    object_kind = "index"

    async def list(self, project_id: str, caller: Any, full_table_name: str) -> List[Index]:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        schema, table = self._split_table(full_table_name)
        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            return await catalogs.indexes.list(schema, table)

    async def get_by_name(
        self, project_id: str, caller: Any, full_table_name: str, index_name: str
    ) -> Index:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        schema, table = self._split_table(full_table_name)
        async with self._catalogs(project) as catalogs:
            index = await catalogs.indexes.get_by_name(schema, table, index_name)
            if index is None:
                raise NotFoundError("index.error.notFound")
            return index

    async def create(
        self, project_id: str, caller: Any, full_table_name: str, spec: IndexSpec
    ) -> Index:
        """Create an index; its name must be unused across the whole schema."""
        project = await self._authorize(project_id, caller, Action.CREATE)
        self.validator.ensure(self.validator.validate_index(spec))
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            if await catalogs.indexes.exists_in_schema(schema, spec.name):
                logger.info("Index %s already exists in schema %s", spec.name, schema)
                raise UnprocessableError("index.error.alreadyExists")

            await catalogs.indexes.create(schema, table, spec)
            logger.info(
                "Created index %s on %s.%s in %s",
                spec.name,
                schema,
                table,
                project.tenant_database_name,
            )
            index = await catalogs.indexes.get_by_name(schema, table, spec.name)
            if index is None:
                raise NotFoundError("index.error.notFound")
            return index

    async def delete(
        self, project_id: str, caller: Any, full_table_name: str, index_name: str
    ) -> bool:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            if not await catalogs.indexes.has(schema, table, index_name):
                raise NotFoundError("index.error.notFound")

            await catalogs.indexes.drop(schema, index_name)
            logger.info(
                "Dropped index %s on %s.%s in %s",
                index_name,
                schema,
                table,
                project.tenant_database_name,
            )
            return True
