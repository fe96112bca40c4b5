"""REST data shapes exchanged with the console API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Project(BaseModel):
    model_config = ConfigDict(extra="ignore")

    project_id: str
    name: str
    org_id: str | None = None
    description: str = ""
    status: str = ""


class Resource(BaseModel):
    model_config = ConfigDict(extra="ignore")

    resource_id: str
    project_id: str = ""
    name: str
    type: str
    sku: str = ""
    status: str = ""
    settings_json: dict[str, Any] = Field(default_factory=dict)
    error_message: str | None = None
    access_url: str | None = None


class CreateResourcePayload(BaseModel):
    """Body of POST /projects/{project_id}/resources."""

    id: str
    name: str
    type: str
    sku: str
    settings_json: dict[str, Any] = Field(default_factory=dict)
