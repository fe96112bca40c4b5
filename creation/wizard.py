"""Creation wizard orchestration: drives the flow controller through the step views."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

import questionary
from questionary import Choice

from core.api import ApiError, ConsoleClient
from core.catalog import ResourceCatalog, builtin_catalog
from core.models import Project, Resource
from core.settings import get_setting
from creation.derivation import FlowSignals
from creation.flow import FlowController, IncompleteFlowError
from creation.params import EntryParams
from creation.steps import STEP_VIEWS, StepAction, StepContext
from creation.steps.common import refresh_billing_status
from creation.ui import STYLE, render_progress

logger = logging.getLogger(__name__)

_RETRY = "retry"
_REVIEW = "review"
_CANCEL = "cancel"


@dataclass
class WizardResult:
    """Result of running the wizard."""

    success: bool
    resource: Resource | None = None
    configure_access: bool = False
    error: str | None = None  # set when the session could not start


def run_wizard(
    client: ConsoleClient,
    entry: EntryParams | None = None,
    fixed_project_id: str | None = None,
    settings: dict[str, Any] | None = None,
    catalog: ResourceCatalog | None = None,
) -> WizardResult:
    """Run the resource-creation wizard until creation succeeds or the user cancels."""
    settings = settings or {}
    projects: list[Project] = []
    if not fixed_project_id:
        try:
            projects = asyncio.run(client.list_projects())
        except ApiError as e:
            logger.error("Could not load projects: %s", e)
            return WizardResult(success=False, error=f"Could not load projects: {e}")

    signals = FlowSignals(
        fixed_project_id=fixed_project_id,
        has_existing_projects=bool(projects),
        billing_loading=True,
        catalog=catalog or builtin_catalog(),
    )
    controller = FlowController(
        signals,
        entry,
        offer_access_step=bool(get_setting(settings, "creation.offer_access_step", False)),
    )
    if projects:
        controller.set_default_project(projects[0].project_id)
    refresh_billing_status(controller, client)

    ctx = StepContext(
        client=client,
        projects=projects,
        billing_return_url=get_setting(settings, "creation.billing_return_url", ""),
    )

    while True:
        step = controller.current_step
        if step is None:
            return WizardResult(success=False, error="No steps to run")
        print("\n" + render_progress(controller.steps, controller.current_step_index))
        print(f"\n{step.label}\n")

        project_before = controller.state.project_id
        action = STEP_VIEWS[step.id](controller, ctx)
        if controller.state.project_id != project_before:
            refresh_billing_status(controller, client)

        if action is StepAction.CANCEL:
            return WizardResult(success=False)
        if action is StepAction.BACK:
            controller.go_back()
        elif action is StepAction.SKIP:
            was_last = controller.is_last_step
            controller.skip_current_step()
            if was_last:
                result = _submit(controller, client, ctx)
                if result is not None:
                    return result
        elif action is StepAction.NEXT:
            if not controller.can_go_next:
                print("Complete this step before continuing.")
            elif controller.is_last_step:
                result = _submit(controller, client, ctx)
                if result is not None:
                    return result
            else:
                controller.go_next()


def _submit(
    controller: FlowController, client: ConsoleClient, ctx: StepContext
) -> WizardResult | None:
    """Create the resource. Returns None to keep the wizard running (state intact)."""
    while True:
        print("\nCreating resource...")
        try:
            resource = asyncio.run(controller.submit(client))
        except IncompleteFlowError as e:
            print(f"\n✗ {e}.")
            return None
        except ApiError as e:
            print(f"\n✗ Failed to create resource: {e}\n")
            choice = _ask_after_failure()
            if choice == _RETRY:
                continue
            if choice == _REVIEW:
                return None
            return WizardResult(success=False)

        return WizardResult(
            success=True,
            resource=resource,
            configure_access=ctx.configure_access,
        )


def _ask_after_failure() -> str:
    choice = questionary.select(
        "What would you like to do?",
        choices=[
            Choice("Retry", _RETRY),
            Choice("Review and edit the resource", _REVIEW),
            Choice("Cancel", _CANCEL),
        ],
        style=STYLE,
    ).ask()
    return choice or _CANCEL
