from typing import List, Protocol, Sequence, runtime_checkable

from schema import ColumnSpec


@runtime_checkable
class RowWriter(Protocol):
    """Protocol for the bulk row insert that materializes an imported CSV."""

    async def insert_many(
        self,
        schema: str,
        table: str,
        columns: Sequence[ColumnSpec],
        rows: Sequence[List[str]],
    ) -> int:
        """Insert raw string rows converted to the column types.

        Returns:
            Number of rows inserted.
        """
        ...
