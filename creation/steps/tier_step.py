"""Resource name, DNS id and pricing tier."""

import questionary
from questionary import Choice

from core.dns import validate_dns_id
from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext, ask_navigation, ask_until_nonempty
from creation.ui import STYLE


def _id_validator(value: str) -> bool | str:
    # Empty is allowed: the id is then derived from the name again
    if not value:
        return True
    return validate_dns_id(value) or True


def run_tier_step(controller: FlowController, ctx: StepContext) -> StepAction:
    state = controller.state

    name = ask_until_nonempty("Resource name:", default=state.resource_name)
    if name is None:
        return StepAction.CANCEL
    controller.set_resource_name(name)

    resource_id = questionary.text(
        "Resource ID (DNS name, leave empty to derive from name):",
        default=controller.state.resource_id,
        validate=_id_validator,
        style=STYLE,
    ).ask()
    if resource_id is None:
        return StepAction.CANCEL
    controller.set_resource_id(resource_id.strip())
    print(f"  ID: {controller.state.resource_id}")

    rt = controller.selected_resource_type
    if rt is not None and rt.skus:
        is_paid = controller.signals.is_paid
        choices = [
            Choice(_tier_label(tier.name, tier.features, is_paid(rt.id, tier.sku)), tier.sku)
            for tier in rt.skus
        ]
        sku = questionary.select(
            "Tier:",
            choices=choices,
            default=state.sku if rt.get_tier(state.sku) else None,
            style=STYLE,
        ).ask()
        if sku is None:
            return StepAction.CANCEL
        controller.update(sku=sku)

    return ask_navigation(controller)


def _tier_label(name: str, features: list[str], paid: bool) -> str:
    label = f"{name} ({'paid' if paid else 'free'})"
    if features:
        label += ": " + ", ".join(features)
    return label
