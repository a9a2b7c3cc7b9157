from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class AuthorizationPolicy(Protocol):
    """Protocol for organization-membership checks on a project."""

    async def can_access(self, organization_id: str, caller: Any) -> bool:
        ...

    async def can_create(self, organization_id: str, caller: Any) -> bool:
        ...

    async def can_update(self, organization_id: str, caller: Any) -> bool:
        ...
