from typing import List, Optional, Protocol, runtime_checkable

from schema import Function, FunctionSpec


@runtime_checkable
class FunctionCatalog(Protocol):
    """Protocol for stored routine introspection and DDL on one tenant connection."""

    async def list(self, schema: str) -> List[Function]:
        ...

    async def get_by_name(self, schema: str, name: str) -> Optional[Function]:
        ...

    async def exists(self, schema: str, name: str) -> bool:
        ...

    async def create(self, function: FunctionSpec) -> None:
        ...

    async def drop(self, schema: str, name: str) -> None:
        ...
