"""Wizard step state machine.

The controller owns a single ``WizardSelection`` for the lifetime of one
wizard session.  It knows nothing about the filesystem: reaching the
terminal step freezes the selection and hands the snapshot to the
``on_create`` callback, then dismisses the wizard.
"""

from __future__ import annotations

from typing import Callable, Optional

from .models import FrozenSelection, Framework, Template, WizardSelection, WizardStep

CreateCallback = Callable[[FrozenSelection], None]
Listener = Callable[[], None]


_NEXT_STEP: dict[WizardStep, WizardStep] = {
    WizardStep.NAME_ENTRY: WizardStep.FRAMEWORK_CHOICE,
    WizardStep.FRAMEWORK_CHOICE: WizardStep.TEMPLATE_CHOICE,
    WizardStep.TEMPLATE_CHOICE: WizardStep.FINALIZING,
    WizardStep.FINALIZING: WizardStep.FINALIZING,
}

_PREVIOUS_STEP: dict[WizardStep, WizardStep] = {
    WizardStep.NAME_ENTRY: WizardStep.NAME_ENTRY,
    WizardStep.FRAMEWORK_CHOICE: WizardStep.NAME_ENTRY,
    WizardStep.TEMPLATE_CHOICE: WizardStep.FRAMEWORK_CHOICE,
    WizardStep.FINALIZING: WizardStep.TEMPLATE_CHOICE,
}

# Steps from which advancing hands the selection off for generation.
_GENERATING_STEPS = frozenset({WizardStep.TEMPLATE_CHOICE, WizardStep.FINALIZING})

_PRIMARY_LABELS: dict[WizardStep, str] = {
    WizardStep.NAME_ENTRY: "Next",
    WizardStep.FRAMEWORK_CHOICE: "Next",
    WizardStep.TEMPLATE_CHOICE: "Create project",
    WizardStep.FINALIZING: "Working...",
}


class WizardController:
    """Drives the Name -> Framework -> Template -> Finalizing flow.

    Args:
        on_create: Called with a frozen snapshot each time generation is
            triggered.
        on_change: Called whenever state changes and the surface should
            redraw.
        on_dismiss: Called once generation has been handed off.
        selection: Optional initial selection (defaults otherwise).
    """

    def __init__(
        self,
        on_create: Optional[CreateCallback] = None,
        on_change: Optional[Listener] = None,
        on_dismiss: Optional[Listener] = None,
        selection: Optional[WizardSelection] = None,
    ) -> None:
        self._step = WizardStep.NAME_ENTRY
        self._selection = selection.model_copy() if selection else WizardSelection()
        self._on_create = on_create
        self._on_change = on_change
        self._on_dismiss = on_dismiss
        self.dismissed = False

    # -- Queries -----------------------------------------------------------

    def current_step(self) -> WizardStep:
        return self._step

    def current_selection(self) -> FrozenSelection:
        """Read-only view of the current choices."""
        return self._selection.freeze()

    def is_terminal(self) -> bool:
        return self._step is WizardStep.FINALIZING

    def can_go_back(self) -> bool:
        return self._step not in (WizardStep.NAME_ENTRY, WizardStep.FINALIZING)

    def primary_label(self) -> str:
        return _PRIMARY_LABELS[self._step]

    def docs_label(self) -> str:
        return "Include PRD & tasks" if self._selection.generate_docs else "Skip PRD & tasks"

    def shows_description(self) -> bool:
        return self._selection.template.accepts_description

    # -- Selection edits ---------------------------------------------------

    def set_name(self, name: str) -> None:
        self._selection.name = name
        self._notify()

    def set_description(self, text: Optional[str]) -> None:
        self._selection.description = text
        self._notify()

    def select_framework(self, framework: Framework) -> None:
        self._selection.framework = framework
        self._notify()

    def select_template(self, template: Template) -> None:
        self._selection.template = template
        self._notify()

    def toggle_docs(self) -> None:
        self._selection.generate_docs = not self._selection.generate_docs
        self._notify()

    # -- Transitions -------------------------------------------------------

    def advance(self) -> WizardStep:
        """Move forward one step, triggering generation from the last ones."""
        if self._step in _GENERATING_STEPS:
            self._step = WizardStep.FINALIZING
            self._notify()
            self._trigger_generation()
        else:
            self._step = _NEXT_STEP[self._step]
            self._notify()
        return self._step

    def retreat(self) -> WizardStep:
        """Move back one step.  A no-op on the first step."""
        self._step = _PREVIOUS_STEP[self._step]
        self._notify()
        return self._step

    # -- Internals ---------------------------------------------------------

    def _trigger_generation(self) -> None:
        snapshot = self._selection.freeze()
        if self._on_create is not None:
            self._on_create(snapshot)
        self.dismissed = True
        if self._on_dismiss is not None:
            self._on_dismiss()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
