"""Configuration for the dynamic schema engine."""

from common.config.schema_registry import ObjectKind, SchemaRegistry, default_registry
from common.config.settings import NameLengthBounds, SchemaEngineSettings

__all__ = [
    "NameLengthBounds",
    "ObjectKind",
    "SchemaEngineSettings",
    "SchemaRegistry",
    "default_registry",
]
