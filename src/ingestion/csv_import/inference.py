"""Schema inference for uploaded CSV content."""

import logging
from typing import List, Optional, Sequence, Tuple

from common.config.settings import SchemaEngineSettings
from ingestion.csv_import.column_names import deduplicate_names, sanitize_column_name
from ingestion.csv_import.reader import read_csv_records
from ingestion.csv_import.type_candidates import (
    DEFAULT_CANDIDATES,
    StringCandidate,
    TypeCandidate,
    resolve_column_type,
)
from ingestion.csv_import.type_hints import split_header
from schema import ColumnSpec, InferredSchema

logger = logging.getLogger(__name__)


class CsvSchemaInferrer:
    """Derive column names, types and nullability from raw CSV bytes.

    Inference is pure: no database access and no state kept between calls.
    """

    def __init__(
        self,
        settings: Optional[SchemaEngineSettings] = None,
        candidates: Sequence[TypeCandidate] = DEFAULT_CANDIDATES,
    ) -> None:
        self.settings = settings or SchemaEngineSettings.defaults()
        self.candidates = tuple(candidates)
        self.fallback = StringCandidate(self.settings.varchar_inference_limit)

    def infer(self, data: bytes) -> InferredSchema:
        headers, rows = read_csv_records(data)
        width = len(headers)
        rows = [_pad(row, width) for row in rows]

        parsed = [split_header(header) for header in headers]
        names = deduplicate_names(sanitize_column_name(name) for name, _ in parsed)

        columns: List[ColumnSpec] = []
        for position, (name, (_, forced_type)) in enumerate(zip(names, parsed)):
            if forced_type:
                column_type, not_null = forced_type, True
            else:
                column_type, not_null = self.detect_column(row[position] for row in rows)
            columns.append(
                ColumnSpec(name=name, position=position, type=column_type, not_null=not_null)
            )

        logger.debug("Inferred %d columns from %d CSV rows", len(columns), len(rows))
        return InferredSchema(columns=columns, rows=rows)

    def detect_column(self, cells) -> Tuple[str, bool]:
        """Return ``(type, not_null)`` for one column's cells."""
        cells = list(cells)
        values = [cell for cell in cells if cell != ""]
        if not values:
            return "text", False

        not_null = len(values) == len(cells)
        return resolve_column_type(values, self.candidates, self.fallback), not_null


def _pad(row: List[str], width: int) -> List[str]:
    if len(row) >= width:
        return row
    return row + [""] * (width - len(row))


def infer_schema(
    data: bytes, settings: Optional[SchemaEngineSettings] = None
) -> InferredSchema:
    """Infer an ``InferredSchema`` from CSV bytes with the default candidates."""
    return CsvSchemaInferrer(settings).infer(data)
