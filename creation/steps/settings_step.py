"""Type-specific settings, entered as a JSON object."""

import json

import questionary

from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext, ask_navigation
from creation.ui import STYLE


def _parse_settings(text: str) -> dict | None:
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def _settings_validator(text: str) -> bool | str:
    if not text.strip():
        return True
    if _parse_settings(text) is None:
        return "Enter a JSON object, e.g. {\"key\": \"value\"}"
    return True


def run_settings_step(controller: FlowController, ctx: StepContext) -> StepAction:
    step = controller.current_step
    required = step.required if step else False
    rt = controller.selected_resource_type
    type_name = rt.name if rt else controller.state.resource_type
    print(f"\nConfigure {type_name} settings" + ("." if required else " (optional).") + "\n")
    if rt is not None and rt.documentation_url:
        print(f"  Reference: {rt.documentation_url}\n")

    current = controller.state.settings
    text = questionary.text(
        "Settings (JSON):",
        default=json.dumps(current) if current is not None else "",
        validate=_settings_validator,
        style=STYLE,
    ).ask()
    if text is None:
        return StepAction.CANCEL
    if text.strip():
        controller.update(settings=_parse_settings(text))
    elif required:
        print("These settings are required for this resource type.\n")
        return StepAction.STAY
    else:
        controller.update(settings=None)

    return ask_navigation(controller, allow_skip=not required)
