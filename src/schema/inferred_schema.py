from typing import List

from pydantic import BaseModel, Field

from .column_spec import ColumnSpec


class InferredSchema(BaseModel):
    """Columns derived from a CSV upload plus the raw, untyped data rows.

    ``rows`` keep their original width; ragged rows are tolerated and missing
    cells are treated as empty by consumers.
    """

    columns: List[ColumnSpec] = Field(default_factory=list)
    rows: List[List[str]] = Field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        """Sanitized column names in header order."""
        return [column.name for column in self.columns]
