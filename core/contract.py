"""Collaborator protocols consumed by the creation flow.

The flow never imports the REST client directly; anything matching these
protocols (ConsoleClient, a test double) can be passed in.
"""

from typing import Protocol, runtime_checkable

from core.billing import BillingStatus
from core.models import CreateResourcePayload, Project, Resource


@runtime_checkable
class ResourceCreator(Protocol):
    """Performs the terminal creation call."""

    async def create_resource(
        self, project_id: str, payload: CreateResourcePayload
    ) -> Resource:
        """Create the resource. Raises on failure; the flow surfaces the error untouched."""


@runtime_checkable
class BillingStatusSource(Protocol):
    """Refreshable billing-status signal for a project."""

    async def get_billing_status(self, project_id: str) -> BillingStatus:
        """Current billing readiness of the project."""


@runtime_checkable
class ProjectSource(Protocol):
    """Projects visible to the current user."""

    async def list_projects(self) -> list[Project]:
        """All projects, in display order."""
