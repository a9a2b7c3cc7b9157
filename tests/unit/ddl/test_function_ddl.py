"""Tests for CREATE/DROP FUNCTION rendering."""

from ddl import build_create_function, build_drop_function
from ddl.functions import catalog_type_name
from schema import FunctionParameter, FunctionSpec


def _spec(**overrides):
    values = dict(
        name="add_numbers",
        schema_name="public",
        parameters=[FunctionParameter(name="a", type="integer"), FunctionParameter(name="b", type="text")],
        definition="BEGIN RETURN a + 1; END",
        language="plpgsql",
        return_type="integer",
    )
    values.update(overrides)
    return FunctionSpec(**values)


def test_create_function_statement():
    """Name and parameters are quoted; the body is dollar-quoted."""
    assert build_create_function(_spec()) == (
        'CREATE OR REPLACE FUNCTION "public"."add_numbers"("a" "int4", "b" "text") '
        "RETURNS integer AS $$ BEGIN RETURN a + 1; END; $$ LANGUAGE plpgsql;"
    )


def test_double_semicolon_is_collapsed():
    """A body already ending in a semicolon does not produce ';;'."""
    sql = build_create_function(_spec(definition="BEGIN RETURN 1; END;"))

    assert ";;" not in sql
    assert "END; $$" in sql


def test_function_without_parameters():
    """An empty parameter list renders as ()."""
    sql = build_create_function(_spec(parameters=[], return_type="VOID", language="SQL"))

    assert '"add_numbers"() RETURNS void' in sql
    assert sql.endswith("LANGUAGE sql;")


def test_catalog_type_names_for_quoted_parameters():
    """SQL-standard aliases are mapped to their pg_type names."""
    assert catalog_type_name("integer") == "int4"
    assert catalog_type_name("double  precision") == "float8"
    assert catalog_type_name("boolean") == "bool"
    assert catalog_type_name("jsonb") == "jsonb"


def test_drop_function():
    """Functions are dropped by qualified name with CASCADE."""
    assert build_drop_function("public", "add_numbers") == (
        'DROP FUNCTION IF EXISTS "public"."add_numbers" CASCADE'
    )
