"""PostgreSQL catalog repositories.

Concrete implementations of the catalog interfaces, one instance per
tenant connection.
"""

from .catalogs import TenantCatalogs, postgres_catalogs
from .column_catalog import PostgresColumnCatalog
from .function_catalog import PostgresFunctionCatalog
from .index_catalog import PostgresIndexCatalog
from .row_writer import PostgresRowWriter
from .table_catalog import PostgresTableCatalog

__all__ = [
    "PostgresColumnCatalog",
    "PostgresFunctionCatalog",
    "PostgresIndexCatalog",
    "PostgresRowWriter",
    "PostgresTableCatalog",
    "TenantCatalogs",
    "postgres_catalogs",
]
