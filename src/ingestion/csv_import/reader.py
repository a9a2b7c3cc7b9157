"""CSV parsing into a header row and untyped string rows."""

import io
import logging
from typing import List, Tuple

import pandas as pd

from common.errors import CsvImportError

logger = logging.getLogger(__name__)

EMPTY_FILE = "fileImport.error.emptyFile"
EMPTY_HEADERS = "fileImport.error.emptyHeaders"
MALFORMED = "fileImport.error.malformed"


def read_csv_records(data: bytes) -> Tuple[List[str], List[List[str]]]:
    """Parse CSV bytes into ``(headers, rows)`` with every cell kept as a string.

    Blank lines are skipped. Rows shorter than the header are padded with
    empty cells; rows longer than the header are rejected as malformed.
    """
    if not data or not data.strip():
        raise CsvImportError(EMPTY_FILE)

    try:
        frame = pd.read_csv(
            io.BytesIO(data),
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        raise CsvImportError(EMPTY_FILE)
    except (pd.errors.ParserError, UnicodeDecodeError, ValueError) as exc:
        logger.info("Rejected malformed CSV upload: %s", exc)
        raise CsvImportError(MALFORMED, str(exc)) from exc

    records = frame.fillna("").values.tolist()
    if not records:
        raise CsvImportError(EMPTY_FILE)

    headers = [str(cell) for cell in records[0]]
    if not headers or all(not header.strip() for header in headers):
        raise CsvImportError(EMPTY_HEADERS)

    rows = [[str(cell) for cell in record] for record in records[1:]]
    return headers, rows
