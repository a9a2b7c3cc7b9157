from typing import Any, AsyncContextManager, Protocol, runtime_checkable


@runtime_checkable
class TenantConnectionProvider(Protocol):
    """Protocol for scoped connections to a tenant database.

    The returned context manager must release the connection on every exit
    path, including exceptions raised inside the ``async with`` block.
    """

    def connect(self, database_name: str) -> AsyncContextManager[Any]:
        ...
