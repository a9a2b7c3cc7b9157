"""Schema mutation services for tenant tables, columns, indexes and functions."""

from .base import Action, SchemaService
from .column_service import ColumnService
from .function_service import FunctionService
from .index_service import IndexService
from .table_service import TableService

__all__ = [
    "Action",
    "ColumnService",
    "FunctionService",
    "IndexService",
    "SchemaService",
    "TableService",
]
