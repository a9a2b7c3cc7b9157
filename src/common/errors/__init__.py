"""Common error taxonomy helpers."""

from common.errors.error_codes import ErrorCode, error_code_group, parse_error_code
from common.errors.exceptions import (
    BulkInsertError,
    CatalogOperationError,
    CsvImportError,
    ForbiddenError,
    NotFoundError,
    SchemaEngineError,
    SchemaValidationError,
    UnprocessableError,
)
from common.errors.sanitization import sanitize_error_message, sanitize_exception

__all__ = [
    "BulkInsertError",
    "CatalogOperationError",
    "CsvImportError",
    "ErrorCode",
    "ForbiddenError",
    "NotFoundError",
    "SchemaEngineError",
    "SchemaValidationError",
    "UnprocessableError",
    "error_code_group",
    "parse_error_code",
    "sanitize_error_message",
    "sanitize_exception",
]
