from typing import List, Optional, Protocol, runtime_checkable

from schema import Index, IndexSpec


@runtime_checkable
class IndexCatalog(Protocol):
    """Protocol for index introspection and DDL on one tenant connection."""

    async def list(self, schema: str, table: str) -> List[Index]:
        ...

    async def get_by_name(self, schema: str, table: str, name: str) -> Optional[Index]:
        ...

    async def has(self, schema: str, table: str, name: str) -> bool:
        """True if the index exists on this table."""
        ...

    async def exists_in_schema(self, schema: str, name: str) -> bool:
        """True if any index in the schema already uses ``name``."""
        ...

    async def create(self, schema: str, table: str, index: IndexSpec) -> None:
        ...

    async def drop(self, schema: str, name: str) -> None:
        ...
