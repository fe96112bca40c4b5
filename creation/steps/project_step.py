"""Project selection, or creation when the user has none yet."""

import asyncio

import questionary
from questionary import Choice

from core.api import ApiError
from creation.flow import FlowController
from creation.steps.common import StepAction, StepContext, ask_until_nonempty
from creation.ui import STYLE

_CREATE_NEW = "__create__"


def run_project_step(controller: FlowController, ctx: StepContext) -> StepAction:
    if not ctx.projects:
        print("\nYou have no projects yet. Resources live inside a project.\n")
        return _create_project(controller, ctx)

    choices = [Choice(f"{p.name} ({p.project_id})", p.project_id) for p in ctx.projects]
    choices.append(Choice("Create a new project...", _CREATE_NEW))
    current = controller.state.project_id
    known = {p.project_id for p in ctx.projects}
    selected = questionary.select(
        "Project:",
        choices=choices,
        default=current if current in known else None,
        style=STYLE,
    ).ask()
    if selected is None:
        return StepAction.CANCEL
    if selected == _CREATE_NEW:
        return _create_project(controller, ctx)

    controller.update(project_id=selected)
    return StepAction.NEXT


def _create_project(controller: FlowController, ctx: StepContext) -> StepAction:
    name = ask_until_nonempty("Project name:")
    if name is None:
        return StepAction.CANCEL
    description = questionary.text("Description (optional):", style=STYLE).ask()
    if description is None:
        return StepAction.CANCEL

    try:
        project = asyncio.run(ctx.client.create_project(name, description.strip()))
    except ApiError as e:
        print(f"\n✗ Could not create project: {e}\n")
        return StepAction.STAY

    print(f"\n✓ Project {project.name} created.\n")
    ctx.projects.append(project)
    controller.update_signals(has_existing_projects=True)
    controller.update(project_id=project.project_id)
    return StepAction.NEXT
