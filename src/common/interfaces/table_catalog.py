from typing import List, Optional, Protocol, Sequence, runtime_checkable

from schema import ColumnSpec, Table


@runtime_checkable
class TableCatalog(Protocol):
    """Protocol for table introspection and DDL on one tenant connection."""

    async def list(self, schema: str) -> List[Table]:
        ...

    async def exists(self, schema: str, name: str) -> bool:
        ...

    async def get_by_name(self, schema: str, name: str) -> Optional[Table]:
        """Return the table, or None when it does not exist."""
        ...

    async def create(self, schema: str, name: str, columns: Sequence[ColumnSpec]) -> None:
        """Create the table and its foreign keys atomically."""
        ...

    async def duplicate(self, schema: str, source: str, target: str) -> None:
        """Copy structure and rows of ``source`` into a new table ``target``."""
        ...

    async def rename(self, schema: str, name: str, new_name: str) -> None:
        ...

    async def drop(self, schema: str, name: str) -> None:
        ...
