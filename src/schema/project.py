from pydantic import BaseModel


class ProjectRef(BaseModel):
    """The slice of a project the schema engine needs: where its data lives and who owns it."""

    project_id: str
    tenant_database_name: str
    organization_id: str

    model_config = {"frozen": True}
