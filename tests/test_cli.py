"""Tests for creation.ui progress rendering and the python -m creation entry point."""

from unittest.mock import patch

from core.models import Resource
from creation.__main__ import build_parser, main
from creation.constants import CREATION_CANCELLED, CREATION_FAILED, CREATION_SUCCESS
from creation.derivation import StepDefinition, StepId
from creation.params import EntryParams
from creation.ui import render_progress
from creation.wizard import WizardResult


def test_render_progress_marks_done_current_and_optional() -> None:
    steps = [
        StepDefinition(StepId.RESOURCE_TYPE, "Select Resource Type", required=True),
        StepDefinition(StepId.TIER, "Configure Resource", required=True),
        StepDefinition(StepId.ACCESS, "Grant Access", required=False),
    ]
    line = render_progress(steps, 1)
    assert line == "✓ Select Resource Type → [2] Configure Resource → 3. Grant Access (Optional)"


def test_build_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.entry == ""
    assert args.project_id is None
    assert args.store_token is False


def test_build_parser_entry_and_project() -> None:
    args = build_parser().parse_args(["resourceType=Konnektr.Graph", "--project-id", "p1"])
    assert args.entry == "resourceType=Konnektr.Graph"
    assert args.project_id == "p1"


def _run_main(result: WizardResult, argv: list[str]):
    with (
        patch("creation.__main__.load_settings", return_value={}),
        patch("creation.__main__.setup_logging"),
        patch("creation.__main__.get_api_token", return_value="tok"),
        patch("creation.__main__.run_wizard", return_value=result) as mock_run,
    ):
        code = main(argv)
    return code, mock_run


def test_main_passes_entry_and_project_to_wizard() -> None:
    resource = Resource(resource_id="g-1", project_id="p1", name="G", type="Konnektr.Graph", sku="free")
    code, mock_run = _run_main(
        WizardResult(success=True, resource=resource),
        ["?resourceType=Konnektr.Graph&tier=free", "--project-id", "p1"],
    )
    assert code == CREATION_SUCCESS
    kwargs = mock_run.call_args.kwargs
    assert kwargs["entry"] == EntryParams(resource_type="Konnektr.Graph", sku="free")
    assert kwargs["fixed_project_id"] == "p1"


def test_main_exit_codes() -> None:
    assert _run_main(WizardResult(success=False), [])[0] == CREATION_CANCELLED
    assert _run_main(WizardResult(success=False, error="down"), [])[0] == CREATION_FAILED
