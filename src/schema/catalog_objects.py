"""Metadata read back from a tenant catalog after a mutation."""

from typing import Optional

from pydantic import BaseModel


class Column(BaseModel):
    """A column as reported by pg_attribute/pg_constraint."""

    name: str
    position: int
    not_null: bool = False
    type: str = ""
    default_value: str = ""
    primary: bool = False
    unique: bool = False
    foreign: bool = False
    reference_table: Optional[str] = None
    reference_column: Optional[str] = None


class Table(BaseModel):
    """A regular table as reported by pg_class."""

    id: int
    name: str
    schema_name: str
    estimated_rows: float = 0
    total_size: str = ""


class Index(BaseModel):
    """An index as reported by pg_index."""

    name: str
    table: str
    definition: str = ""
    is_unique: bool = False


class Function(BaseModel):
    """A stored routine as reported by information_schema.routines."""

    name: str
    routine_type: str = "FUNCTION"
    data_type: Optional[str] = None
    type_udt_name: Optional[str] = None
    definition: Optional[str] = None
    language: Optional[str] = None
    sql_data_access: Optional[str] = None
