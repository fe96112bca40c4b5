"""Helpers shared by the step views."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

import questionary
from questionary import Choice

from core.api import ApiError, ConsoleClient
from core.contract import BillingStatusSource
from core.models import Project
from creation.flow import FlowController
from creation.ui import STYLE

logger = logging.getLogger(__name__)


class StepAction(Enum):
    """What the driver should do after a view returns."""

    NEXT = "next"
    BACK = "back"
    SKIP = "skip"
    STAY = "stay"  # re-render the (possibly new) current step
    CANCEL = "cancel"


@dataclass
class StepContext:
    """Collaborators and session data the views may use."""

    client: ConsoleClient
    projects: list[Project] = field(default_factory=list)
    billing_return_url: str = ""
    configure_access: bool = False


def ask_until_nonempty(prompt: str, default: str = "") -> str | None:
    """Prompt until non-empty input or user cancelled. Returns None on cancel."""
    while True:
        val = questionary.text(prompt, default=default, style=STYLE).ask()
        if val is None:
            return None
        if val.strip():
            return val.strip()
        print("This field cannot be empty. Try again.\n")


def ask_navigation(controller: FlowController, allow_skip: bool = False) -> StepAction:
    """Ask where to go from the current step."""
    forward = "Create resource" if controller.is_last_step else f"Continue: {controller.next_step_label}"
    choices = [Choice(forward, StepAction.NEXT)]
    if allow_skip:
        choices.append(Choice("Skip this step", StepAction.SKIP))
    if controller.can_go_back:
        choices.append(Choice(f"Back: {controller.previous_step_label}", StepAction.BACK))
    choices.append(Choice("Cancel", StepAction.CANCEL))
    action = questionary.select("Next:", choices=choices, style=STYLE).ask()
    return action if action is not None else StepAction.CANCEL


def refresh_billing_status(controller: FlowController, source: BillingStatusSource) -> None:
    """Reload the billing signal for the selected project.

    The last known status stays in place until the new one arrives, so the
    billing step does not drop out of the list while the lookup runs.

    A failed lookup leaves the status unknown, which keeps the billing step
    out of the flow; the backend still enforces payment on creation.
    """
    project_id = controller.state.project_id
    if not project_id:
        controller.update_signals(billing_status=None, billing_loading=False)
        return
    try:
        status = asyncio.run(source.get_billing_status(project_id))
    except ApiError as e:
        logger.warning("Billing status for %s unavailable: %s", project_id, e)
        status = None
    controller.update_signals(billing_status=status, billing_loading=False)
