import logging
from typing import Any, List, Optional

from common.errors import NotFoundError, UnprocessableError
from ingestion.csv_import import CsvSchemaInferrer
from schema import Table, TableSpec
from services.base import Action, SchemaService

logger = logging.getLogger(__name__)


class TableService(SchemaService):
    """Table lifecycle: list, create, upload from CSV, duplicate, rename, delete."""

    object_kind = "table"

    def __init__(self, *args: Any, inferrer: Optional[CsvSchemaInferrer] = None, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.inferrer = inferrer or CsvSchemaInferrer(self.settings)

    async def list(self, project_id: str, caller: Any, schema: Optional[str] = None) -> List[Table]:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        async with self._catalogs(project) as catalogs:
            return await catalogs.tables.list(self._schema_or_default(schema))

    async def get_by_name(self, project_id: str, caller: Any, full_name: str) -> Table:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        schema, name = self._split_table(full_name)
        async with self._catalogs(project) as catalogs:
            return await self._fetch(catalogs, schema, name)

    async def create(self, project_id: str, caller: Any, spec: TableSpec) -> Table:
        project = await self._authorize(project_id, caller, Action.CREATE)
        self.validator.ensure(self.validator.validate_table(spec))
        schema = self._schema_or_default(spec.schema_name)

        async with self._catalogs(project) as catalogs:
            await self._require_absent(catalogs, schema, spec.name)
            await catalogs.tables.create(schema, spec.name, spec.columns)
            logger.info(
                "Created table %s.%s in %s", schema, spec.name, project.tenant_database_name
            )
            return await self._fetch(catalogs, schema, spec.name)

    async def upload(self, project_id: str, caller: Any, name: str, data: bytes) -> Table:
        """Create a table from CSV content and insert its rows.

        If the rows cannot be inserted the created table stays in place,
        empty, and ``BulkInsertError`` is raised.
        """
        project = await self._authorize(project_id, caller, Action.CREATE)
        schema, table = self._split_table(name)
        self.validator.ensure(self.validator.validate_table_name(table))

        inferred = self.inferrer.infer(data)
        self.validator.ensure(
            self.validator.validate_columns(inferred.columns),
            message_key="fileImport.error.invalidColumns",
        )

        async with self._catalogs(project) as catalogs:
            await self._require_absent(catalogs, schema, table)
            await catalogs.tables.create(schema, table, inferred.columns)
            logger.info(
                "Created table %s.%s from CSV (%d columns) in %s",
                schema,
                table,
                len(inferred.columns),
                project.tenant_database_name,
            )
            await catalogs.rows.insert_many(schema, table, inferred.columns, inferred.rows)
            return await self._fetch(catalogs, schema, table)

    async def duplicate(
        self, project_id: str, caller: Any, full_name: str, new_name: str
    ) -> Table:
        """Copy structure and rows of an existing table under a new name."""
        project = await self._authorize(project_id, caller, Action.UPDATE)
        self.validator.ensure(self.validator.validate_table_name(new_name))
        schema, name = self._split_table(full_name)

        async with self._catalogs(project) as catalogs:
            await self._require_absent(catalogs, schema, new_name)
            await self._fetch(catalogs, schema, name)
            await catalogs.tables.duplicate(schema, name, new_name)
            logger.info(
                "Duplicated table %s.%s as %s in %s",
                schema,
                name,
                new_name,
                project.tenant_database_name,
            )
            return await self._fetch(catalogs, schema, new_name)

    async def rename(self, project_id: str, caller: Any, full_name: str, new_name: str) -> Table:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        self.validator.ensure(self.validator.validate_table_name(new_name))
        schema, name = self._split_table(full_name)

        async with self._catalogs(project) as catalogs:
            await self._require_absent(catalogs, schema, new_name)
            await self._fetch(catalogs, schema, name)
            await catalogs.tables.rename(schema, name, new_name)
            logger.info(
                "Renamed table %s.%s to %s in %s",
                schema,
                name,
                new_name,
                project.tenant_database_name,
            )
            return await self._fetch(catalogs, schema, new_name)

    async def delete(self, project_id: str, caller: Any, full_name: str) -> bool:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        schema, name = self._split_table(full_name)

        async with self._catalogs(project) as catalogs:
            await self._require_table(catalogs, schema, name)
            await catalogs.tables.drop(schema, name)
            logger.info("Dropped table %s.%s in %s", schema, name, project.tenant_database_name)
            return True

    @staticmethod
    async def _require_absent(catalogs, schema: str, name: str) -> None:
        if await catalogs.tables.exists(schema, name):
            logger.info("Table %s.%s already exists", schema, name)
            raise UnprocessableError("table.error.alreadyExists")

    @staticmethod
    async def _fetch(catalogs, schema: str, name: str) -> Table:
        table = await catalogs.tables.get_by_name(schema, name)
        if table is None:
            raise NotFoundError("table.error.notFound")
        return table
