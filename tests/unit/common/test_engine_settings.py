"""Tests for settings and the reserved-name/type registry."""

import pytest

from common.config.schema_registry import ObjectKind, SchemaRegistry, default_registry
from common.config.settings import SchemaEngineSettings


def test_default_bounds():
    """Columns allow one character; other objects need three."""
    settings = SchemaEngineSettings.defaults()

    assert settings.bounds_for(ObjectKind.COLUMN).min_length == 1
    assert settings.bounds_for(ObjectKind.TABLE).min_length == 3
    assert settings.bounds_for(ObjectKind.FUNCTION).max_length == 63
    assert settings.default_schema == "public"
    assert settings.bulk_insert_batch_size == 500


def test_settings_from_env(monkeypatch):
    """SCHEMA_* variables override the defaults."""
    monkeypatch.setenv("SCHEMA_TABLE_NAME_MIN_LENGTH", "2")
    monkeypatch.setenv("SCHEMA_DEFAULT_SCHEMA", "app")
    monkeypatch.setenv("SCHEMA_INFERENCE_VARCHAR_LIMIT", "100")
    monkeypatch.setenv("SCHEMA_BULK_INSERT_BATCH_SIZE", "50")

    settings = SchemaEngineSettings.from_env()

    assert settings.bounds_for(ObjectKind.TABLE).min_length == 2
    assert settings.default_schema == "app"
    assert settings.varchar_inference_limit == 100
    assert settings.bulk_insert_batch_size == 50


@pytest.mark.parametrize(
    "name, value",
    [
        ("SCHEMA_INDEX_NAME_MIN_LENGTH", "0"),
        ("SCHEMA_COLUMN_NAME_MAX_LENGTH", "0"),
        ("SCHEMA_BULK_INSERT_BATCH_SIZE", "0"),
    ],
)
def test_settings_from_env_rejects_bad_bounds(monkeypatch, name, value):
    """Inverted or non-positive bounds fail at startup."""
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError):
        SchemaEngineSettings.from_env()


def test_reserved_names_are_case_insensitive_and_scoped():
    """A name reserved for one kind is allowed for another."""
    registry = default_registry()

    assert registry.is_reserved(ObjectKind.COLUMN, "XMIN") is True
    assert registry.is_reserved(ObjectKind.TABLE, "xmin") is False
    assert registry.is_reserved(ObjectKind.INDEX, "Primary") is True


def test_column_type_allow_list():
    """Plain and parameterized types are accepted; anything else is not."""
    registry = default_registry()

    assert registry.is_allowed_column_type("VARCHAR(255)")
    assert registry.is_allowed_column_type("numeric(10, 2)")
    assert registry.is_allowed_column_type("numeric(38)")
    assert not registry.is_allowed_column_type("varchar(0)")
    assert not registry.is_allowed_column_type("bytea")
    assert registry.is_allowed_parameter_type("double precision")
    assert registry.is_allowed_return_type("void")
    assert not registry.is_allowed_parameter_type("void")
    assert registry.is_allowed_language("PLPGSQL")


def test_registry_from_env_merges_reserved_names(monkeypatch):
    """Operator supplied names extend the built-in sets."""
    monkeypatch.setenv("SCHEMA_RESERVED_TABLE_NAMES", "Audit_Log, secrets")

    registry = SchemaRegistry.from_env()

    assert registry.is_reserved(ObjectKind.TABLE, "audit_log")
    assert registry.is_reserved(ObjectKind.TABLE, "information_schema")
    assert registry.is_reserved(ObjectKind.COLUMN, "ctid")
