from typing import Protocol, runtime_checkable

from schema import ProjectRef


@runtime_checkable
class ProjectResolver(Protocol):
    """Protocol for looking up the project that owns a tenant database."""

    async def get_project(self, project_id: str) -> ProjectRef:
        """Return the project reference.

        Raises:
            NotFoundError: If the project does not exist.
        """
        ...
