import logging
from typing import Any, List, Sequence

import asyncpg

from common.errors import BulkInsertError
from common.errors.sanitization import sanitize_exception
from common.interfaces.row_writer import RowWriter
from ddl import build_insert
from ingestion.csv_import.values import CellConversionError, convert_row
from schema import ColumnSpec

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


class PostgresRowWriter(RowWriter):
    """Bulk insert of raw CSV rows with bind parameters, in batches.

    All batches share one transaction, so a failure leaves the table empty.
    """

    def __init__(self, conn: Any, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.conn = conn
        self.batch_size = batch_size

    async def insert_many(
        self,
        schema: str,
        table: str,
        columns: Sequence[ColumnSpec],
        rows: Sequence[List[str]],
    ) -> int:
        if not rows or not columns:
            return 0

        column_types = [column.type for column in columns]
        sql = build_insert(schema, table, [column.name for column in columns])
        try:
            params = [convert_row(row, column_types) for row in rows]
            async with self.conn.transaction():
                for start in range(0, len(params), self.batch_size):
                    await self.conn.executemany(sql, params[start : start + self.batch_size])
        except CellConversionError as exc:
            logger.error("Rejected CSV cell for %s.%s: %s", schema, table, exc)
            raise BulkInsertError(table, str(exc)) from exc
        except asyncpg.PostgresError as exc:
            detail = sanitize_exception(exc, fallback="Row insert failed.")
            logger.error("Bulk insert into %s.%s failed: %s", schema, table, detail)
            raise BulkInsertError(table, detail) from exc

        logger.info("Inserted %d rows into %s.%s", len(params), schema, table)
        return len(params)
