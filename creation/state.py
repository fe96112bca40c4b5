"""Wizard state for one resource-creation session."""

from dataclasses import dataclass
from typing import Any

from core.billing import FREE_SKU


@dataclass
class WizardState:
    """Mutable state collected by the creation wizard.

    Owned by a single FlowController and changed only through its update
    operations. Never persisted.
    """

    project_id: str | None = None
    resource_type: str | None = None
    resource_name: str = ""
    resource_id: str = ""
    sku: str = FREE_SKU
    settings: dict[str, Any] | None = None  # opaque, type-specific
    skip_settings: bool = False
    skip_access: bool = True
    id_manually_edited: bool = False
