"""Resource type selection."""

import questionary
from questionary import Choice

from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext
from creation.ui import STYLE

_BACK = "__back__"


def run_resource_type_step(controller: FlowController, ctx: StepContext) -> StepAction:
    enabled = controller.signals.catalog.enabled()
    choices = [Choice(f"{rt.name}: {rt.description}", rt.id) for rt in enabled]
    current = controller.state.resource_type
    if controller.can_go_back:
        choices.append(Choice(f"Back: {controller.previous_step_label}", _BACK))

    selected = questionary.select(
        "Resource type:",
        choices=choices,
        default=current if any(rt.id == current for rt in enabled) else None,
        style=STYLE,
    ).ask()
    if selected is None:
        return StepAction.CANCEL
    if selected == _BACK:
        return StepAction.BACK

    controller.update(resource_type=selected)
    return StepAction.NEXT
