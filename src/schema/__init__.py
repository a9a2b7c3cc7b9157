"""Canonical schema models for user-defined tables, columns, indexes and functions."""

from .catalog_objects import Column, Function, Index, Table
from .column_spec import ColumnSpec
from .function_spec import FunctionParameter, FunctionSpec
from .index_spec import IndexSpec
from .inferred_schema import InferredSchema
from .project import ProjectRef
from .table_spec import TableSpec

__all__ = [
    "Column",
    "ColumnSpec",
    "Function",
    "FunctionParameter",
    "FunctionSpec",
    "Index",
    "IndexSpec",
    "InferredSchema",
    "ProjectRef",
    "Table",
    "TableSpec",
]
