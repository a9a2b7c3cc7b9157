"""Translation of driver failures into the schema engine error taxonomy."""

import logging
from contextlib import contextmanager
from typing import Iterator

import asyncpg

from common.errors import CatalogOperationError
from common.errors.sanitization import sanitize_exception

logger = logging.getLogger(__name__)


@contextmanager
def catalog_errors(message_key: str) -> Iterator[None]:
    """Re-raise ``asyncpg`` errors as ``CatalogOperationError`` with a safe detail.

    The original exception is kept as ``__cause__``.
    """
    try:
        yield
    except asyncpg.PostgresError as exc:
        detail = sanitize_exception(exc, fallback="Database operation failed.")
        logger.error(
            "Catalog operation failed (%s, sqlstate=%s): %s",
            message_key,
            getattr(exc, "sqlstate", None),
            detail,
        )
        raise CatalogOperationError(message_key, detail) from exc
