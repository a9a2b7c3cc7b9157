"""Identifier & constraint validator for column, table, index and function specs."""

import logging
from typing import Iterable, List, Optional

from common.config.schema_registry import ObjectKind, SchemaRegistry, default_registry
from common.config.settings import SchemaEngineSettings
from common.errors import SchemaValidationError
from schema import ColumnSpec, FunctionSpec, IndexSpec, TableSpec
from validation import rules

logger = logging.getLogger(__name__)


class SchemaValidator:
    """Validate schema definitions before any DDL is attempted.

    Registries and length bounds are injected at construction. Each method
    returns a list of field errors (empty when valid); ``ensure`` turns a
    non-empty list into a ``SchemaValidationError``.
    """

    def __init__(
        self,
        registry: Optional[SchemaRegistry] = None,
        settings: Optional[SchemaEngineSettings] = None,
    ) -> None:
        self._registry = registry or default_registry()
        self._settings = settings or SchemaEngineSettings.defaults()

    @property
    def registry(self) -> SchemaRegistry:
        return self._registry

    def _check_name(self, name: Optional[str], kind: ObjectKind) -> List[str]:
        return rules.check_name(name, kind, self._settings.bounds_for(kind), self._registry)

    def validate_column(self, column: ColumnSpec) -> List[str]:
        """Report every violated rule across the fields of one column."""
        errors = self._check_name(column.name, ObjectKind.COLUMN)
        errors.extend(rules.check_column_type(column.type, self._registry))
        errors.extend(rules.check_foreign_key(column))
        errors.extend(rules.check_default(column))
        return errors

    def validate_columns(self, columns: Iterable[ColumnSpec]) -> List[str]:
        """Stop at the first invalid or repeated column and return its errors.

        Names are quoted in DDL, so repeats are compared case-sensitively.
        """
        seen = set()
        for column in columns:
            errors = self.validate_column(column)
            if errors:
                return errors
            if column.name in seen:
                return [f"Duplicate column '{column.name}' in request"]
            seen.add(column.name)
        return []

    def validate_column_name(self, name: Optional[str]) -> List[str]:
        """Rename path: all constraints on the new column name at once."""
        return self._check_name(name, ObjectKind.COLUMN)

    def validate_table_name(self, name: Optional[str]) -> List[str]:
        """Rename/duplicate/upload path: all constraints on the table name at once."""
        return self._check_name(name, ObjectKind.TABLE)

    def validate_table(self, table: TableSpec) -> List[str]:
        """Create path: name and schema first, then the columns fail-fast."""
        errors = self._check_name(table.name, ObjectKind.TABLE)
        errors.extend(rules.check_schema_name(table.schema_name))
        if not table.columns:
            errors.append("Columns are required")
        if errors:
            return errors
        return self.validate_columns(table.columns)

    def validate_index(self, index: IndexSpec) -> List[str]:
        """Name rules plus non-empty, non-blank, case-insensitively unique columns."""
        errors = self._check_name(index.name, ObjectKind.INDEX)
        errors.extend(rules.check_index_columns(index.columns))
        return errors

    def validate_function(self, function: FunctionSpec) -> List[str]:
        """Name, schema, parameters, language, return type and body markers."""
        errors = self._check_name(function.name, ObjectKind.FUNCTION)
        errors.extend(rules.check_schema_name(function.schema_name))
        for parameter in function.parameters:
            errors.extend(
                rules.check_name(
                    parameter.name,
                    ObjectKind.COLUMN,
                    self._settings.bounds_for(ObjectKind.COLUMN),
                    self._registry,
                    label="Parameter",
                )
            )
            errors.extend(rules.check_parameter_type(parameter.type, self._registry))
        errors.extend(rules.check_language(function.language, self._registry))
        errors.extend(rules.check_return_type(function.return_type, self._registry))
        errors.extend(rules.check_function_definition(function.definition))
        return errors

    @staticmethod
    def ensure(errors: List[str], message_key: str = "validation.error.invalid") -> None:
        """Raise ``SchemaValidationError`` when any error was collected."""
        if errors:
            logger.info("Schema validation rejected request: %s", "; ".join(errors))
            raise SchemaValidationError(errors, message_key=message_key)
