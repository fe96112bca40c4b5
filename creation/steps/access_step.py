"""Optional access grant. Collaborators are added on the resource's Access page."""

import questionary
from questionary import Choice

from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext
from creation.ui import STYLE

_CONFIGURE = "configure"


def run_access_step(controller: FlowController, ctx: StepContext) -> StepAction:
    name = controller.state.resource_name
    print(
        f"\nGrant team members access to {name} now, or skip and add "
        "collaborators later from the resource's Access tab.\n"
    )
    choices = [
        Choice("Configure access after creation", _CONFIGURE),
        Choice("Skip for now", StepAction.SKIP),
    ]
    if controller.can_go_back:
        choices.append(Choice(f"Back: {controller.previous_step_label}", StepAction.BACK))
    choices.append(Choice("Cancel", StepAction.CANCEL))

    choice = questionary.select("Access:", choices=choices, style=STYLE).ask()
    if choice is None:
        return StepAction.CANCEL
    if choice == _CONFIGURE:
        ctx.configure_access = True
        return StepAction.NEXT
    return choice
