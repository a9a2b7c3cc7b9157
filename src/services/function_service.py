import logging
from typing import Any, List

from common.errors import NotFoundError, UnprocessableError
from schema import Function, FunctionSpec
from services.base import Action, SchemaService

logger = logging.getLogger(__name__)


class FunctionService(SchemaService):
    """List, inspect, create and delete stored functions in a tenant schema."""

    object_kind = "function"

    async def list(self, project_id: str, caller: Any, schema: str) -> List[Function]:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        async with self._catalogs(project) as catalogs:
            return await catalogs.functions.list(self._schema_or_default(schema))

    async def get_by_name(self, project_id: str, caller: Any, schema: str, name: str) -> Function:
        project = await self._authorize(project_id, caller, Action.ACCESS)
        async with self._catalogs(project) as catalogs:
            return await self._fetch(catalogs, self._schema_or_default(schema), name)

    async def create(self, project_id: str, caller: Any, spec: FunctionSpec) -> Function:
        project = await self._authorize(project_id, caller, Action.CREATE)
        self.validator.ensure(self.validator.validate_function(spec))
        schema = self._schema_or_default(spec.schema_name)
        spec = spec.model_copy(update={"schema_name": schema})

        async with self._catalogs(project) as catalogs:
            if await catalogs.functions.exists(schema, spec.name):
                logger.info("Function %s.%s already exists", schema, spec.name)
                raise UnprocessableError("function.error.alreadyExists")

            await catalogs.functions.create(spec)
            logger.info(
                "Created function %s.%s in %s", schema, spec.name, project.tenant_database_name
            )
            return await self._fetch(catalogs, schema, spec.name)

    async def delete(self, project_id: str, caller: Any, schema: str, name: str) -> bool:
        project = await self._authorize(project_id, caller, Action.UPDATE)
        schema = self._schema_or_default(schema)

        async with self._catalogs(project) as catalogs:
            if not await catalogs.functions.exists(schema, name):
                raise NotFoundError("function.error.notFound")

            await catalogs.functions.drop(schema, name)
            logger.info("Dropped function %s.%s in %s", schema, name, project.tenant_database_name)
            return True

    @staticmethod
    async def _fetch(catalogs, schema: str, name: str) -> Function:
        function = await catalogs.functions.get_by_name(schema, name)
        if function is None:
            raise NotFoundError("function.error.notFound")
        return function
