"""Capability interfaces consumed by the schema mutation services."""

from .authorization_policy import AuthorizationPolicy
from .column_catalog import ColumnCatalog
from .function_catalog import FunctionCatalog
from .index_catalog import IndexCatalog
from .project_resolver import ProjectResolver
from .row_writer import RowWriter
from .table_catalog import TableCatalog
from .tenant_connection_provider import TenantConnectionProvider

__all__ = [
    "AuthorizationPolicy",
    "ColumnCatalog",
    "FunctionCatalog",
    "IndexCatalog",
    "ProjectResolver",
    "RowWriter",
    "TableCatalog",
    "TenantConnectionProvider",
]
