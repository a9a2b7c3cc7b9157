from dataclasses import dataclass
from typing import Any

from common.interfaces import ColumnCatalog, FunctionCatalog, IndexCatalog, RowWriter, TableCatalog

from .column_catalog import PostgresColumnCatalog
from .function_catalog import PostgresFunctionCatalog
from .index_catalog import PostgresIndexCatalog
from .row_writer import DEFAULT_BATCH_SIZE, PostgresRowWriter
from .table_catalog import PostgresTableCatalog


@dataclass
class TenantCatalogs:
    """The per-connection set of catalog repositories."""

    columns: ColumnCatalog
    tables: TableCatalog
    indexes: IndexCatalog
    functions: FunctionCatalog
    rows: RowWriter


def postgres_catalogs(conn: Any, batch_size: int = DEFAULT_BATCH_SIZE) -> TenantCatalogs:
    """Bind every Postgres catalog repository to one tenant connection."""
    return TenantCatalogs(
        columns=PostgresColumnCatalog(conn),
        tables=PostgresTableCatalog(conn),
        indexes=PostgresIndexCatalog(conn),
        functions=PostgresFunctionCatalog(conn),
        rows=PostgresRowWriter(conn, batch_size=batch_size),
    )
