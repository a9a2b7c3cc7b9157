"""Tests for CSV cell conversion to bind parameters."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from ingestion.csv_import import CellConversionError, convert_cell, convert_row, infer_schema


@pytest.mark.parametrize(
    "value, column_type, expected",
    [
        ("true", "boolean", True),
        ("1", "boolean", True),
        ("FALSE", "boolean", False),
        ("0", "boolean", False),
        ("42", "integer", 42),
        ("-7", "serial", -7),
        ("2.5", "float", 2.5),
        ("50000.50", "numeric(7,2)", Decimal("50000.50")),
        ('{"key": "value"}', "json", '{"key": "value"}'),
        ("2024-01-02", "timestamp", datetime(2024, 1, 2)),
        ("2024-01-02T12:00:00+02:00", "timestamp", datetime(2024, 1, 2, 10, 0, 0)),
        ("2024-01-02", "date", date(2024, 1, 2)),
        ("01/31/2024", "date", date(2024, 1, 31)),
        ("hello", "varchar(5)", "hello"),
        ("anything", "uuid", "anything"),
    ],
)
def test_convert_cell(value, column_type, expected):
    """Cells are converted according to the column type."""
    assert convert_cell(value, column_type) == expected


def test_empty_cells_are_null():
    """Empty and missing cells insert NULL for every type."""
    assert convert_cell("", "integer") is None
    assert convert_cell(None, "text") is None


@pytest.mark.parametrize(
    "value, column_type",
    [("abc", "integer"), ("x", "numeric(10,2)"), ("{bad", "json"), ("soon", "timestamp"), ("2024-13-40", "date")],
)
def test_convert_cell_failures(value, column_type):
    """Unconvertible cells raise CellConversionError naming the value."""
    with pytest.raises(CellConversionError) as exc_info:
        convert_cell(value, column_type)

    assert exc_info.value.value == value
    assert exc_info.value.column_type == column_type


def test_convert_row_pads_ragged_rows():
    """Missing trailing cells become NULL."""
    assert convert_row(["1"], ["integer", "text", "boolean"]) == [1, None, None]


def test_date_hinted_upload_rows_bind_dates():
    """A column forced to date binds date objects, not the raw text."""
    inferred = infer_schema(b"d [date],n [int]\n2024-01-02,9999999999\n")
    types = [column.type for column in inferred.columns]

    params = convert_row(inferred.rows[0], types)

    assert types == ["date", "integer"]
    assert params == [date(2024, 1, 2), 9999999999]
