"""Creation wizard step views, one per step id."""

from collections.abc import Callable

from creation.derivation import StepId
from creation.flow import FlowController
from creation.steps.access_step import run_access_step
from creation.steps.billing_step import run_billing_step
from creation.steps.common import StepAction, StepContext
from creation.steps.project_step import run_project_step
from creation.steps.resource_type_step import run_resource_type_step
from creation.steps.settings_step import run_settings_step
from creation.steps.tier_step import run_tier_step

StepView = Callable[[FlowController, StepContext], StepAction]

STEP_VIEWS: dict[StepId, StepView] = {
    StepId.PROJECT: run_project_step,
    StepId.RESOURCE_TYPE: run_resource_type_step,
    StepId.TIER: run_tier_step,
    StepId.BILLING: run_billing_step,
    StepId.SETTINGS: run_settings_step,
    StepId.ACCESS: run_access_step,
}

__all__ = ["STEP_VIEWS", "StepAction", "StepContext", "StepView"]
