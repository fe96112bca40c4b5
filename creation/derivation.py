"""Step derivation: the ordered list of wizard steps for a state and its signals.

derive_steps is a pure function of (WizardState, FlowSignals). The emitted
order is fixed: project, resourceType, tier, billing, settings, access.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

from core.billing import BillingStatus, is_paid_resource
from core.catalog import ResourceCatalog, builtin_catalog
from creation.state import WizardState


class StepId(StrEnum):
    PROJECT = "project"
    RESOURCE_TYPE = "resourceType"
    TIER = "tier"
    BILLING = "billing"
    SETTINGS = "settings"
    ACCESS = "access"


@dataclass(frozen=True)
class StepDefinition:
    id: StepId
    label: str
    required: bool
    visible: bool = True


@dataclass(frozen=True)
class FlowSignals:
    """Read-only inputs supplied by collaborators; replaced, never mutated."""

    fixed_project_id: str | None = None
    has_existing_projects: bool = False
    billing_status: BillingStatus | None = None
    billing_loading: bool = False
    preselected_resource_type: str | None = None
    catalog: ResourceCatalog = field(default_factory=builtin_catalog)
    is_paid: Callable[[str | None, str], bool] = is_paid_resource


def is_billing_pending(state: WizardState, signals: FlowSignals) -> bool:
    """True when the selected paid tier still needs a payment method.

    Undecidable while billing status is loading or absent; treated as False.
    """
    if not state.resource_type:
        return False
    if not signals.is_paid(state.resource_type, state.sku):
        return False
    if signals.billing_loading or signals.billing_status is None:
        return False
    return not signals.billing_status.has_payment_method


def derive_steps(state: WizardState, signals: FlowSignals) -> list[StepDefinition]:
    steps: list[StepDefinition] = []

    if not signals.fixed_project_id:
        label = "Select Project" if signals.has_existing_projects else "Create Project"
        steps.append(StepDefinition(StepId.PROJECT, label, required=True))

    if not signals.preselected_resource_type:
        steps.append(
            StepDefinition(StepId.RESOURCE_TYPE, "Select Resource Type", required=True)
        )

    # Name, id and pricing tier; never skipped
    steps.append(StepDefinition(StepId.TIER, "Configure Resource", required=True))

    if is_billing_pending(state, signals):
        steps.append(StepDefinition(StepId.BILLING, "Setup Billing", required=True))

    resource_type = signals.catalog.get(state.resource_type)
    if resource_type is not None and resource_type.offers_settings and not state.skip_settings:
        steps.append(
            StepDefinition(
                StepId.SETTINGS,
                "Configure Settings",
                required=resource_type.requires_settings,
            )
        )

    if not state.skip_access:
        steps.append(StepDefinition(StepId.ACCESS, "Grant Access", required=False))

    return steps
