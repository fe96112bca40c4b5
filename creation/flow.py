"""Resource-creation flow controller: navigation, validity gates and state updates."""

import copy
import dataclasses
import logging
from typing import Any

from core.catalog import ResourceTier, ResourceType
from core.contract import ResourceCreator
from core.dns import generate_dns_id, generate_random_suffix
from core.models import CreateResourcePayload, Resource
from creation.derivation import FlowSignals, StepDefinition, StepId, derive_steps
from creation.params import EntryParams
from creation.state import WizardState

logger = logging.getLogger(__name__)

_STATE_FIELDS = frozenset(f.name for f in dataclasses.fields(WizardState))
# Sticky skip flags and the id-edit marker are owned by the controller
_MANAGED_FIELDS = frozenset({"skip_settings", "skip_access", "id_manually_edited"})


class IncompleteFlowError(ValueError):
    """The creation payload cannot be assembled from the current state."""


class FlowController:
    """Owns one WizardState and the position within its derived steps.

    The step list is recomputed from (state, signals) on every access.
    The position follows the current step by id; when that step drops out
    of the list it resolves to the step that took its place, or to the
    last step.
    """

    def __init__(
        self,
        signals: FlowSignals,
        entry: EntryParams | None = None,
        *,
        offer_access_step: bool = False,
    ) -> None:
        entry = entry or EntryParams()
        preselected = self._accepted_preselection(signals, entry.resource_type)
        self._signals = dataclasses.replace(signals, preselected_resource_type=preselected)
        self._state = WizardState(
            project_id=signals.fixed_project_id or entry.project_id,
            resource_type=preselected,
            skip_access=not offer_access_step,
        )
        if preselected:
            self._state.sku = self._initial_sku(preselected, entry.sku)
        self._id_suffix = generate_random_suffix()
        self._creating = False
        self._completed = False
        self._index = 0
        self._current_id: StepId | None = None
        self._sync_position()

    @staticmethod
    def _accepted_preselection(signals: FlowSignals, type_id: str | None) -> str | None:
        if not type_id:
            return None
        rt = signals.catalog.get(type_id)
        if rt is None or rt.disabled:
            logger.warning("Ignoring preselected resource type %r: not available", type_id)
            return None
        return type_id

    def _initial_sku(self, type_id: str, sku: str | None) -> str:
        catalog = self._signals.catalog
        if sku and catalog.is_sku_valid(type_id, sku):
            return sku
        if catalog.is_sku_valid(type_id, self._state.sku):
            return self._state.sku
        return catalog.default_sku(type_id)

    # --- read-only surface ---

    @property
    def state(self) -> WizardState:
        """Snapshot of the wizard state; change it through update() and the setters."""
        return copy.deepcopy(self._state)

    @property
    def signals(self) -> FlowSignals:
        return self._signals

    @property
    def steps(self) -> list[StepDefinition]:
        return derive_steps(self._state, self._signals)

    @property
    def current_step_index(self) -> int:
        return self._index

    @property
    def current_step(self) -> StepDefinition | None:
        steps = self.steps
        return steps[self._index] if steps else None

    @property
    def is_first_step(self) -> bool:
        return self._index == 0

    @property
    def is_last_step(self) -> bool:
        return self._index == len(self.steps) - 1

    @property
    def can_go_back(self) -> bool:
        return self._index > 0

    @property
    def can_go_next(self) -> bool:
        step = self.current_step
        return step is not None and self._step_is_valid(step)

    @property
    def next_step_label(self) -> str:
        steps = self.steps
        if self._index + 1 < len(steps):
            return steps[self._index + 1].label
        return "Create Resource"

    @property
    def previous_step_label(self) -> str:
        if self._index > 0:
            return self.steps[self._index - 1].label
        return "Back"

    @property
    def creating(self) -> bool:
        """Creation call in flight. Advisory only; duplicate calls are not blocked here."""
        return self._creating

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def selected_resource_type(self) -> ResourceType | None:
        return self._signals.catalog.get(self._state.resource_type)

    @property
    def selected_tier(self) -> ResourceTier | None:
        rt = self.selected_resource_type
        return rt.get_tier(self._state.sku) if rt else None

    def _step_is_valid(self, step: StepDefinition) -> bool:
        state = self._state
        match step.id:
            case StepId.PROJECT:
                return bool(state.project_id)
            case StepId.RESOURCE_TYPE:
                return bool(state.resource_type)
            case StepId.TIER:
                return (
                    bool(state.resource_name.strip())
                    and bool(state.resource_id.strip())
                    and self._signals.catalog.is_sku_valid(state.resource_type, state.sku)
                )
            case StepId.BILLING:
                status = self._signals.billing_status
                return status is not None and status.has_payment_method
            case StepId.SETTINGS:
                return not step.required or state.settings is not None
            case StepId.ACCESS:
                return True
        return True

    # --- position ---

    def _sync_position(self) -> None:
        """Re-resolve the position after the derived list may have changed."""
        steps = self.steps
        if not steps:
            self._index, self._current_id = 0, None
            return
        ids = [s.id for s in steps]
        if self._current_id in ids:
            self._index = ids.index(self._current_id)
        else:
            self._index = min(self._index, len(steps) - 1)
        self._current_id = ids[self._index]

    def _move_to(self, index: int) -> None:
        steps = self.steps
        self._index = index
        self._current_id = steps[index].id
        logger.debug("Moved to step %s (%d/%d)", self._current_id, index + 1, len(steps))

    # --- navigation ---

    def go_next(self) -> bool:
        """Advance one step. Refused (False) when the current step is invalid or last."""
        if not self.can_go_next or self._index >= len(self.steps) - 1:
            return False
        self._move_to(self._index + 1)
        return True

    def go_back(self) -> bool:
        """Step back without discarding anything entered later."""
        if not self.can_go_back:
            return False
        self._move_to(self._index - 1)
        return True

    def go_to_step(self, step_id: StepId | str) -> bool:
        """Jump to the step with this id; no-op when it is not in the current list."""
        for index, step in enumerate(self.steps):
            if step.id == step_id:
                self._move_to(index)
                return True
        return False

    def skip_current_step(self) -> bool:
        """Dismiss an optional step for the rest of the session and move past it."""
        step = self.current_step
        if step is None or step.required:
            return False
        steps = self.steps
        following = steps[self._index + 1].id if self._index + 1 < len(steps) else None
        if step.id == StepId.SETTINGS:
            self._state.skip_settings = True
        elif step.id == StepId.ACCESS:
            self._state.skip_access = True
        else:
            return self.go_next()
        logger.info("Skipped optional step %s", step.id)
        if following is not None:
            self._current_id = following
        self._sync_position()
        return True

    # --- state updates ---

    def update(self, **changes: Any) -> None:
        """Apply a partial update to the wizard state."""
        unknown = set(changes) - _STATE_FIELDS
        if unknown:
            raise TypeError(f"Unknown wizard state field(s): {', '.join(sorted(unknown))}")
        managed = set(changes) & _MANAGED_FIELDS
        if managed:
            raise ValueError(
                f"Field(s) managed by the flow controller: {', '.join(sorted(managed))}"
            )

        name = changes.pop("resource_name", None)
        resource_id = changes.pop("resource_id", None)
        type_changed = (
            "resource_type" in changes and changes["resource_type"] != self._state.resource_type
        )
        for key, value in changes.items():
            setattr(self._state, key, value)
        if type_changed:
            self._normalize_sku()
        if name is not None:
            self.set_resource_name(name)
        if resource_id is not None:
            self.set_resource_id(resource_id)
        self._sync_position()

    def _normalize_sku(self) -> None:
        state = self._state
        if not state.resource_type:
            return
        catalog = self._signals.catalog
        if not catalog.is_sku_valid(state.resource_type, state.sku):
            state.sku = catalog.default_sku(state.resource_type)

    def _auto_id(self, name: str) -> str:
        return generate_dns_id(name, suffix=self._id_suffix) if name.strip() else ""

    def set_resource_name(self, name: str) -> None:
        """Set the name; the id follows it until the user edits the id by hand."""
        self._state.resource_name = name
        if not self._state.id_manually_edited:
            self._state.resource_id = self._auto_id(name)
        self._sync_position()

    def set_resource_id(self, value: str) -> None:
        """Set the id by hand. Clearing it hands control back to the name."""
        state = self._state
        if not value:
            state.id_manually_edited = False
            state.resource_id = self._auto_id(state.resource_name)
        else:
            state.id_manually_edited = value != self._auto_id(state.resource_name)
            state.resource_id = value
        self._sync_position()

    def set_default_project(self, project_id: str | None) -> None:
        """Pick project_id unless a project is already selected."""
        if project_id and not self._state.project_id:
            self._state.project_id = project_id
            self._sync_position()

    def update_signals(self, **changes: Any) -> None:
        """Replace signal fields, e.g. after a billing-status refresh."""
        self._signals = dataclasses.replace(self._signals, **changes)
        self._sync_position()

    # --- creation ---

    def build_payload(self) -> CreateResourcePayload:
        state = self._state
        if not state.project_id:
            raise IncompleteFlowError("No project selected")
        if not state.resource_type:
            raise IncompleteFlowError("No resource type selected")
        return CreateResourcePayload(
            id=state.resource_id.strip(),
            name=state.resource_name.strip(),
            type=state.resource_type,
            sku=state.sku,
            settings_json=dict(state.settings or {}),
        )

    async def submit(self, creator: ResourceCreator) -> Resource:
        """Delegate creation to the collaborator.

        Failures propagate unchanged and leave the state as it was, so the
        user can retry without re-entering anything.
        """
        payload = self.build_payload()
        project_id = str(self._state.project_id)
        self._creating = True
        try:
            resource = await creator.create_resource(project_id, payload)
        finally:
            self._creating = False
        self._completed = True
        logger.info(
            "Created %s resource %s in project %s", payload.type, resource.resource_id, project_id
        )
        return resource
