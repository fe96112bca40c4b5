"""Shared terminal styling and progress rendering for the creation wizard."""

from questionary import Style

from creation.derivation import StepDefinition

STYLE = Style(
    [
        ("qmark", "fg:cyan bold"),
        ("question", "bold"),
        ("answer", "fg:green bold"),
        ("pointer", "fg:cyan bold"),
        ("highlighted", "fg:cyan bold"),
        ("selected", "fg:green"),
    ]
)


def render_progress(steps: list[StepDefinition], current_index: int) -> str:
    """One-line progress bar: completed steps checked, current step bracketed."""
    parts: list[str] = []
    for index, step in enumerate(steps):
        label = step.label if step.required else f"{step.label} (Optional)"
        if index < current_index:
            parts.append(f"✓ {label}")
        elif index == current_index:
            parts.append(f"[{index + 1}] {label}")
        else:
            parts.append(f"{index + 1}. {label}")
    return " → ".join(parts)
