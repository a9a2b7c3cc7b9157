"""CREATE/DROP FUNCTION statements."""

from common.sql.identifiers import quote_identifier, quote_qualified
from schema import FunctionSpec

# SQL-standard spellings that are grammar aliases rather than catalog type
# names; a quoted type must use the pg_type name.
CATALOG_TYPE_NAMES = {
    "integer": "int4",
    "int": "int4",
    "serial": "int4",
    "smallint": "int2",
    "bigint": "int8",
    "bigserial": "int8",
    "boolean": "bool",
    "real": "float4",
    "double precision": "float8",
    "char": "bpchar",
}


def catalog_type_name(type_name: str) -> str:
    normalized = " ".join(type_name.strip().lower().split())
    return CATALOG_TYPE_NAMES.get(normalized, normalized)


def build_function_parameters(function: FunctionSpec) -> str:
    """Comma-separated ``"name" "type"`` pairs."""
    return ", ".join(
        f"{quote_identifier(parameter.name)} "
        f"{quote_identifier(catalog_type_name(parameter.type))}"
        for parameter in function.parameters
    )


def build_create_function(function: FunctionSpec) -> str:
    """Render ``CREATE OR REPLACE FUNCTION`` with a dollar-quoted body.

    Return type and language are allow-listed by validation and emitted
    as keywords. A doubled semicolon after the body is collapsed.
    """
    sql = (
        f"CREATE OR REPLACE FUNCTION "
        f"{quote_qualified(function.schema_name, function.name)}"
        f"({build_function_parameters(function)}) "
        f"RETURNS {function.return_type.strip().lower()} "
        f"AS $$ {function.definition.strip()}; $$ "
        f"LANGUAGE {function.language.strip().lower()};"
    )
    while ";;" in sql:
        sql = sql.replace(";;", ";")
    return sql


def build_drop_function(schema: str, name: str) -> str:
    return f"DROP FUNCTION IF EXISTS {quote_qualified(schema, name)} CASCADE"
