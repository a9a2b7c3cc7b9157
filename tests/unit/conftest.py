"""Unit test environment helpers."""

import pytest

_TRACING_ENV = (
    "DAL_TRACE_DDL",
    "OTEL_DISABLE_EXPORTER",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT",
    "OTEL_TRACES_EXPORTER",
)


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Run unit tests without tracing or operator overrides from the host env."""
    for name in _TRACING_ENV:
        monkeypatch.delenv(name, raising=False)
    for name in (
        "SCHEMA_DEFAULT_SCHEMA",
        "SCHEMA_BULK_INSERT_BATCH_SIZE",
        "SCHEMA_INFERENCE_VARCHAR_LIMIT",
        "SCHEMA_RESERVED_TABLE_NAMES",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
