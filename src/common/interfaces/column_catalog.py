from typing import List, Protocol, Sequence, runtime_checkable

from schema import Column, ColumnSpec


@runtime_checkable
class ColumnCatalog(Protocol):
    """Protocol for column introspection and DDL on one tenant connection."""

    async def list(self, schema: str, table: str) -> List[Column]:
        """Return the table's columns ordered by ordinal position."""
        ...

    async def has(self, schema: str, table: str, column: str) -> bool:
        ...

    async def has_any(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        """True if at least one of ``columns`` exists on the table."""
        ...

    async def has_all(self, schema: str, table: str, columns: Sequence[str]) -> bool:
        """True only if every one of ``columns`` exists on the table."""
        ...

    async def create_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        ...

    async def alter_many(self, schema: str, table: str, columns: Sequence[ColumnSpec]) -> None:
        ...

    async def rename(self, schema: str, table: str, column: str, new_name: str) -> None:
        ...

    async def drop(self, schema: str, table: str, column: str) -> None:
        ...
