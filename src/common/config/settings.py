"""Startup-resolved settings for the dynamic schema engine."""

from __future__ import annotations

from dataclasses import dataclass

from common.config.env import get_env_int, get_env_str
from common.config.schema_registry import ObjectKind


@dataclass(frozen=True)
class NameLengthBounds:
    """Inclusive length bounds for one kind of identifier."""

    min_length: int
    max_length: int

    def contains(self, name: str) -> bool:
        """Return True when the name length falls inside the bounds."""
        return self.min_length <= len(name) <= self.max_length


_DEFAULT_BOUNDS = {
    ObjectKind.COLUMN: (1, 63),
    ObjectKind.TABLE: (3, 63),
    ObjectKind.INDEX: (3, 63),
    ObjectKind.FUNCTION: (3, 63),
}


@dataclass(frozen=True)
class SchemaEngineSettings:
    """Typed settings shared by the validator, inference engine and services."""

    name_bounds: dict[ObjectKind, NameLengthBounds]
    default_schema: str = "public"
    varchar_inference_limit: int = 255
    bulk_insert_batch_size: int = 500

    def bounds_for(self, kind: ObjectKind) -> NameLengthBounds:
        """Return length bounds for the object kind."""
        return self.name_bounds[kind]

    @classmethod
    def defaults(cls) -> "SchemaEngineSettings":
        """Build settings from built-in defaults only."""
        return cls(
            name_bounds={
                kind: NameLengthBounds(low, high) for kind, (low, high) in _DEFAULT_BOUNDS.items()
            }
        )

    @classmethod
    def from_env(cls) -> "SchemaEngineSettings":
        """Resolve settings from SCHEMA_* environment variables."""
        bounds = {}
        for kind, (low, high) in _DEFAULT_BOUNDS.items():
            prefix = f"SCHEMA_{kind.value.upper()}_NAME"
            bounds[kind] = NameLengthBounds(
                min_length=get_env_int(f"{prefix}_MIN_LENGTH", low),
                max_length=get_env_int(f"{prefix}_MAX_LENGTH", high),
            )
        for kind, bound in bounds.items():
            if bound.min_length < 1 or bound.min_length > bound.max_length:
                raise ValueError(
                    f"Invalid name length bounds for {kind.value}: "
                    f"{bound.min_length}..{bound.max_length}"
                )

        batch_size = get_env_int("SCHEMA_BULK_INSERT_BATCH_SIZE", 500)
        if batch_size < 1:
            raise ValueError("SCHEMA_BULK_INSERT_BATCH_SIZE must be positive.")

        return cls(
            name_bounds=bounds,
            default_schema=get_env_str("SCHEMA_DEFAULT_SCHEMA", "public"),
            varchar_inference_limit=get_env_int("SCHEMA_INFERENCE_VARCHAR_LIMIT", 255),
            bulk_insert_batch_size=batch_size,
        )

