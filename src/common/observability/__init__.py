"""Shared observability helpers."""

from common.observability.context import request_id_var
from common.observability.otel import is_otel_exporter_configured, is_signal_enabled

__all__ = ["is_otel_exporter_configured", "is_signal_enabled", "request_id_var"]
