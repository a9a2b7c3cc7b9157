import logging
from typing import Any, List, Sequence

from common.errors import NotFoundError, UnprocessableError
from schema import Column, ColumnSpec
from services.base import Action, SchemaService

logger = logging.getLogger(__name__)


class ColumnService(SchemaService):
    """List, create, alter, rename and delete columns of a tenant table."""

    object_kind = "column"

    async def list(self, project_id: str, caller: Any, full_table_name: str) -> List[Column]:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        schema, table = self._split_table(full_table_name)
        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            return await catalogs.columns.list(schema, table)

    async def create_many(
        self,
        project_id: str,
        caller: Any,
        full_table_name: str,
        columns: Sequence[ColumnSpec],
    ) -> List[Column]:
        """Add columns; fails if any of them already exists on the table."""
        project = await self._authorize(project_id, caller, Action.CREATE)
        self.validator.ensure(self._validate_request(columns))
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            if await catalogs.columns.has_any(schema, table, [c.name for c in columns]):
                logger.info("Refused to add existing columns to %s.%s", schema, table)
                raise UnprocessableError("column.error.someAlreadyExist")

            await catalogs.columns.create_many(schema, table, columns)
            logger.info(
                "Created %d columns on %s.%s in %s",
                len(columns),
                schema,
                table,
                project.tenant_database_name,
            )
            return await catalogs.columns.list(schema, table)

    async def alter_many(
        self,
        project_id: str,
        caller: Any,
        full_table_name: str,
        columns: Sequence[ColumnSpec],
    ) -> List[Column]:
        """Change type and nullability; fails unless every column exists."""
        project = await self._authorize(project_id, caller, Action.UPDATE)
        self.validator.ensure(self._validate_request(columns))
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            if not await catalogs.columns.has_all(schema, table, [c.name for c in columns]):
                logger.info("Refused to alter missing columns on %s.%s", schema, table)
                raise NotFoundError("column.error.someNotFound")

            await catalogs.columns.alter_many(schema, table, columns)
            logger.info(
                "Altered %d columns on %s.%s in %s",
                len(columns),
                schema,
                table,
                project.tenant_database_name,
            )
            return await catalogs.columns.list(schema, table)

    async def rename(
        self,
        project_id: str,
        caller: Any,
        full_table_name: str,
        column_name: str,
        new_name: str,
    ) -> List[Column]:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        self.validator.ensure(self.validator.validate_column_name(new_name))
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            if not await catalogs.columns.has(schema, table, column_name):
                raise NotFoundError("column.error.notFound")
            if await catalogs.columns.has(schema, table, new_name):
                raise UnprocessableError("column.error.alreadyExists")

            await catalogs.columns.rename(schema, table, column_name, new_name)
            logger.info(
                "Renamed column %s.%s.%s to %s in %s",
                schema,
                table,
                column_name,
                new_name,
                project.tenant_database_name,
            )
            return await catalogs.columns.list(schema, table)

    async def delete(
        self, project_id: str, caller: Any, full_table_name: str, column_name: str
    ) -> bool:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        schema, table = self._split_table(full_table_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, table)
            if not await catalogs.columns.has(schema, table, column_name):
                raise NotFoundError("column.error.notFound")

            await catalogs.columns.drop(schema, table, column_name)
            logger.info(
                "Dropped column %s.%s.%s in %s",
                schema,
                table,
                column_name,
                project.tenant_database_name,
            )
            return True

    def _validate_request(self, columns: Sequence[ColumnSpec]) -> List[str]:
        if not columns:
            return ["Columns are required"]
        return self.validator.validate_columns(columns)
