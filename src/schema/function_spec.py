from typing import List

from pydantic import BaseModel, Field


class FunctionParameter(BaseModel):
    """A named, typed routine parameter."""

    name: str
    type: str


class FunctionSpec(BaseModel):
    """A stored routine to create in a tenant schema."""

    name: str = ""
    schema_name: str = Field(default="public", alias="schema")
    parameters: List[FunctionParameter] = Field(default_factory=list)
    definition: str = ""
    language: str = ""
    return_type: str = ""

    model_config = {"frozen": False, "populate_by_name": True}
