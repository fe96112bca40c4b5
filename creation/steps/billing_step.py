"""Billing setup for paid tiers.

The payment method itself is added in the billing portal; this view only
opens a portal session and re-reads the billing signal. Once a payment
method is on file the billing step drops out of the flow by itself.
"""

import asyncio

import questionary
from questionary import Choice

from core.api import ApiError
from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext, refresh_billing_status
from creation.ui import STYLE

_PORTAL = "portal"
_CHECK = "check"


def run_billing_step(controller: FlowController, ctx: StepContext) -> StepAction:
    tier = controller.selected_tier
    tier_name = tier.name if tier else controller.state.sku
    print(f"\nThe {tier_name} tier is paid. Add a payment method to this project to continue.\n")

    choice = questionary.select(
        "Billing:",
        choices=[
            Choice("Open billing portal", _PORTAL),
            Choice("I added a payment method, check again", _CHECK),
            Choice(f"Back: {controller.previous_step_label}", StepAction.BACK),
            Choice("Cancel", StepAction.CANCEL),
        ],
        style=STYLE,
    ).ask()
    if choice is None:
        return StepAction.CANCEL
    if choice == _PORTAL:
        _open_portal(controller, ctx)
        return StepAction.STAY
    if choice == _CHECK:
        refresh_billing_status(controller, ctx.client)
        if controller.can_go_next:
            print("\n✓ Payment method found.\n")
        else:
            print("\nNo payment method on file yet.\n")
        return StepAction.STAY
    return choice


def _open_portal(controller: FlowController, ctx: StepContext) -> None:
    project_id = controller.state.project_id or ""
    try:
        url = asyncio.run(ctx.client.create_billing_portal(project_id, ctx.billing_return_url))
    except ApiError as e:
        print(f"\n✗ Could not open billing portal: {e}\n")
        return
    print(f"\nOpen this link to add a payment method:\n  {url}\n")
