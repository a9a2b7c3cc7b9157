"""Exception taxonomy raised by validators, the inference engine and services.

Every error carries a canonical ``ErrorCode`` and a stable dotted message key
(``table.error.alreadyExists``) that callers can translate or surface as-is.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from common.errors.error_codes import ErrorCode


class SchemaEngineError(Exception):
    """Base class for all schema engine failures."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message_key: str, detail: Optional[str] = None) -> None:
        self.message_key = message_key
        self.detail = detail
        super().__init__(detail or message_key)

    def to_dict(self) -> dict:
        """Return a JSON-safe payload for transport layers."""
        payload = {"code": self.code.value, "message": self.message_key}
        if self.detail:
            payload["detail"] = self.detail
        return payload


class ForbiddenError(SchemaEngineError):
    """The caller is not allowed to perform the operation on the project."""

    code = ErrorCode.FORBIDDEN


class NotFoundError(SchemaEngineError):
    """A project, table, column, index or function does not exist."""

    code = ErrorCode.NOT_FOUND


class UnprocessableError(SchemaEngineError):
    """The request is well formed but conflicts with catalog state or input data."""

    code = ErrorCode.UNPROCESSABLE


class CsvImportError(UnprocessableError):
    """Uploaded CSV content cannot be turned into a schema."""


class SchemaValidationError(SchemaEngineError):
    """Field-level naming/type/length violations."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, errors: Iterable[str], message_key: str = "validation.error.invalid"):
        self.errors: List[str] = list(errors)
        super().__init__(message_key, "; ".join(self.errors) or None)

    def to_dict(self) -> dict:
        """Return the payload with the full error list."""
        return {"code": self.code.value, "message": self.message_key, "errors": self.errors}


class CatalogOperationError(SchemaEngineError):
    """A catalog query or DDL statement failed in the tenant database."""

    code = ErrorCode.DB_ERROR


class BulkInsertError(CatalogOperationError):
    """An uploaded table was created but its rows could not be inserted.

    The table is left in place without rows; nothing is rolled back.
    """

    def __init__(self, table_name: str, detail: Optional[str] = None) -> None:
        self.table_name = table_name
        super().__init__("table.error.uploadRowsFailed", detail)
