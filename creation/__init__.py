"""Resource-creation flow: step derivation, flow controller and terminal wizard."""

from creation.constants import CREATION_CANCELLED, CREATION_FAILED, CREATION_SUCCESS
from creation.derivation import FlowSignals, StepDefinition, StepId, derive_steps
from creation.flow import FlowController, IncompleteFlowError
from creation.params import EntryParams
from creation.state import WizardState

__all__ = [
    "CREATION_SUCCESS",
    "CREATION_CANCELLED",
    "CREATION_FAILED",
    "EntryParams",
    "FlowController",
    "FlowSignals",
    "IncompleteFlowError",
    "StepDefinition",
    "StepId",
    "WizardState",
    "derive_steps",
]
