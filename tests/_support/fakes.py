"""In-memory fakes for the tenant connection and catalog collaborators."""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Sequence, Tuple

from common.errors import NotFoundError
from dal.postgres.catalogs import TenantCatalogs
from schema import (
    Column,
    ColumnSpec,
    Function,
    FunctionSpec,
    Index,
    IndexSpec,
    ProjectRef,
    Table,
)

PROJECT_ID = "proj-1"
CALLER = {"user_id": "u-1"}


class FakeConnection:
    """asyncpg-like connection that records statements and replays scripted results."""

    def __init__(
        self,
        fetch_results: Optional[List[List[Dict[str, Any]]]] = None,
        fetchrow_results: Optional[List[Optional[Dict[str, Any]]]] = None,
        fetchval_results: Optional[List[Any]] = None,
        fail_on: Optional[str] = None,
        error: Optional[BaseException] = None,
    ):
        self.executed: List[Tuple[str, tuple]] = []
        self.executemany_calls: List[Tuple[str, list]] = []
        self.queries: List[Tuple[str, tuple]] = []
        self.transactions = 0
        self.closed = False
        self._fetch_results = list(fetch_results or [])
        self._fetchrow_results = list(fetchrow_results or [])
        self._fetchval_results = list(fetchval_results or [])
        self._fail_on = fail_on
        self._error = error

    def _maybe_fail(self, sql: str) -> None:
        if self._fail_on is not None and self._fail_on in sql:
            raise self._error

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield

    async def execute(self, sql: str, *args: Any) -> str:
        self._maybe_fail(sql)
        self.executed.append((sql, args))
        return "OK"

    async def executemany(self, sql: str, args: Sequence[Sequence[Any]]) -> None:
        self._maybe_fail(sql)
        self.executemany_calls.append((sql, list(args)))

    async def fetch(self, sql: str, *args: Any) -> List[Dict[str, Any]]:
        self._maybe_fail(sql)
        self.queries.append((sql, args))
        return self._fetch_results.pop(0) if self._fetch_results else []

    async def fetchrow(self, sql: str, *args: Any) -> Optional[Dict[str, Any]]:
        self._maybe_fail(sql)
        self.queries.append((sql, args))
        return self._fetchrow_results.pop(0) if self._fetchrow_results else None

    async def fetchval(self, sql: str, *args: Any) -> Any:
        self._maybe_fail(sql)
        self.queries.append((sql, args))
        return self._fetchval_results.pop(0) if self._fetchval_results else None

    async def close(self) -> None:
        self.closed = True

    @property
    def executed_sql(self) -> List[str]:
        return [sql for sql, _ in self.executed]


class FakeProjectResolver:
    def __init__(self, projects: Optional[Dict[str, ProjectRef]] = None):
        self.projects = projects or {}

    async def get_project(self, project_id: str) -> ProjectRef:
        if project_id not in self.projects:
            raise NotFoundError("project.error.notFound")
        return self.projects[project_id]


class FakePolicy:
    """Grants every action unless it is listed in ``denied``."""

    def __init__(self, denied: Sequence[str] = ()):
        self.denied = set(denied)
        self.checks: List[Tuple[str, str, Any]] = []

    async def _check(self, action: str, organization_id: str, caller: Any) -> bool:
        self.checks.append((action, organization_id, caller))
        return action not in self.denied

    async def can_access(self, organization_id: str, caller: Any) -> bool:
        return await self._check("access", organization_id, caller)

    async def can_create(self, organization_id: str, caller: Any) -> bool:
        return await self._check("create", organization_id, caller)

    async def can_update(self, organization_id: str, caller: Any) -> bool:
        return await self._check("update", organization_id, caller)


class FakeConnectionProvider:
    """Counts scoped connections and checks each one is released."""

    def __init__(self):
        self.opened: List[str] = []
        self.released = 0

    @asynccontextmanager
    async def connect(self, database_name: str):
        self.opened.append(database_name)
        try:
            yield object()
        finally:
            self.released += 1


class TenantState:
    """Catalog contents of one fake tenant database."""

    def __init__(self):
        self.tables: Dict[Tuple[str, str], List[ColumnSpec]] = {}
        self.rows: Dict[Tuple[str, str], List[List[str]]] = {}
        self.indexes: Dict[Tuple[str, str], Tuple[str, IndexSpec]] = {}
        self.functions: Dict[Tuple[str, str], FunctionSpec] = {}
        self.calls: List[str] = []
        self.fail_insert: Optional[BaseException] = None


class InMemoryColumnCatalog:
    def __init__(self, state: TenantState):
        self.state = state

    async def list(self, schema: str, table: str) -> List[Column]:
        return [
            Column(
                name=spec.name,
                position=position,
                not_null=spec.not_null,
                type=spec.type,
                default_value=spec.default,
                primary=spec.primary,
                unique=spec.unique,
                foreign=spec.foreign,
                reference_table=spec.reference_table,
                reference_column=spec.reference_column,
            )
            for position, spec in enumerate(self.state.tables[(schema, table)], start=1)
        ]

    def _names(self, schema: str, table: str) -> set:
        return {spec.name for spec in self.state.tables.get((schema, table), [])}

    async def has(self, schema: str, table: str, column: str) -> bool:
        return column in self._names(schema, table)

    async def has_any(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        return bool(self._names(schema, table) & set(columns))

    async def has_all(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        return bool(columns) and set(columns) <= self._names(schema, table)

    async def create_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        self.state.calls.append("columns.create_many")
        self.state.tables[(schema, table)].extend(columns)

    async def alter_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        self.state.calls.append("columns.alter_many")
        by_name = {column.name: column for column in columns}
        altered = []
        for spec in self.state.tables[(schema, table)]:
            change = by_name.get(spec.name)
            if change is not None:
                spec = spec.model_copy(update={"type": change.type, "not_null": change.not_null})
            altered.append(spec)
        self.state.tables[(schema, table)] = altered

    async def rename(self, schema: str, table: str, column: str, new_name: str) -> None:
        self.state.calls.append("columns.rename")
        for spec in self.state.tables[(schema, table)]:
            if spec.name == column:
                spec.name = new_name

    async def drop(self, schema: str, table: str, column: str) -> None:
        self.state.calls.append("columns.drop")
        self.state.tables[(schema, table)] = [
            spec for spec in self.state.tables[(schema, table)] if spec.name != column
        ]


class InMemoryTableCatalog:
    def __init__(self, state: TenantState):
        self.state = state

    def _table(self, schema: str, name: str) -> Table:
        return Table(
            id=sorted(self.state.tables).index((schema, name)) + 1,
            name=name,
            schema_name=schema,
            estimated_rows=len(self.state.rows.get((schema, name), [])),
        )

    async def list(self, schema: str) -> List[Table]:
        return [self._table(s, n) for s, n in sorted(self.state.tables) if s == schema]

    async def exists(self, schema: str, name: str) -> bool:
        return (schema, name) in self.state.tables

    async def get_by_name(self, schema: str, name: str) -> Optional[Table]:
        if (schema, name) not in self.state.tables:
            return None
        return self._table(schema, name)

    async def create(self, schema: str, name: str, columns: Sequence[ColumnSpec]) -> None:
        self.state.calls.append("tables.create")
        self.state.tables[(schema, name)] = sorted(columns, key=lambda c: c.position)

    async def duplicate(self, schema: str, source: str, target: str) -> None:
        self.state.calls.append("tables.duplicate")
        self.state.tables[(schema, target)] = [
            column.model_copy() for column in self.state.tables[(schema, source)]
        ]
        self.state.rows[(schema, target)] = list(self.state.rows.get((schema, source), []))

    async def rename(self, schema: str, name: str, new_name: str) -> None:
        self.state.calls.append("tables.rename")
        self.state.tables[(schema, new_name)] = self.state.tables.pop((schema, name))

    async def drop(self, schema: str, name: str) -> None:
        self.state.calls.append("tables.drop")
        self.state.tables.pop((schema, name), None)


class InMemoryIndexCatalog:
    def __init__(self, state: TenantState):
        self.state = state

    def _index(self, name: str, table: str, spec: IndexSpec) -> Index:
        columns = ", ".join(spec.columns)
        unique = "UNIQUE " if spec.is_unique else ""
        return Index(
            name=name,
            table=table,
            definition=f"CREATE {unique}INDEX {name} ON {table} ({columns})",
            is_unique=spec.is_unique,
        )

    async def list(self, schema: str, table: str) -> List[Index]:
        return [
            self._index(name, owner, spec)
            for (s, name), (owner, spec) in self.state.indexes.items()
            if s == schema and owner == table
        ]

    async def get_by_name(self, schema: str, table: str, name: str) -> Optional[Index]:
        entry = self.state.indexes.get((schema, name))
        if entry is None or entry[0] != table:
            return None
        return self._index(name, *entry)

    async def has(self, schema: str, table: str, name: str) -> bool:
        return await self.get_by_name(schema, table, name) is not None

    async def exists_in_schema(self, schema: str, name: str) -> bool:
        return (schema, name) in self.state.indexes

    async def create(self, schema: str, table: str, index: IndexSpec) -> None:
        self.state.calls.append("indexes.create")
        self.state.indexes[(schema, index.name)] = (table, index)

    async def drop(self, schema: str, name: str) -> None:
        self.state.calls.append("indexes.drop")
        self.state.indexes.pop((schema, name), None)


class InMemoryFunctionCatalog:
    def __init__(self, state: TenantState):
        self.state = state

    async def list(self, schema: str) -> List[Function]:
        return [
            Function(name=name, data_type=spec.return_type, language=spec.language)
            for (s, name), spec in sorted(self.state.functions.items())
            if s == schema
        ]

    async def get_by_name(self, schema: str, name: str) -> Optional[Function]:
        spec = self.state.functions.get((schema, name))
        if spec is None:
            return None
        return Function(
            name=name,
            data_type=spec.return_type,
            language=spec.language,
            definition=spec.definition,
        )

    async def exists(self, schema: str, name: str) -> bool:
        return (schema, name) in self.state.functions

    async def create(self, function: FunctionSpec) -> None:
        self.state.calls.append("functions.create")
        self.state.functions[(function.schema_name, function.name)] = function

    async def drop(self, schema: str, name: str) -> None:
        self.state.calls.append("functions.drop")
        self.state.functions.pop((schema, name), None)


class InMemoryRowWriter:
    def __init__(self, state: TenantState):
        self.state = state

    async def insert_many(
        self,
        schema: str,
        table: str,
        columns: Sequence[ColumnSpec],
        rows: Sequence[List[str]],
    ) -> int:
        self.state.calls.append("rows.insert_many")
        if self.state.fail_insert is not None:
            raise self.state.fail_insert
        self.state.rows[(schema, table)] = [list(row) for row in rows]
        return len(rows)


def in_memory_catalog_factory(state: TenantState):
    """Catalog factory for services: every connection sees the same tenant state."""

    def factory(conn: Any) -> TenantCatalogs:
        return TenantCatalogs(
            columns=InMemoryColumnCatalog(state),
            tables=InMemoryTableCatalog(state),
            indexes=InMemoryIndexCatalog(state),
            functions=InMemoryFunctionCatalog(state),
            rows=InMemoryRowWriter(state),
        )

    return factory
