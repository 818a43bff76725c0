"""Wizard state machine and selection models."""

from bitcoin_app_wizard.wizard.controller import WizardController
from bitcoin_app_wizard.wizard.models import (
    FrozenSelection,
    Framework,
    Template,
    WizardSelection,
    WizardStep,
    normalize_description,
)

__all__ = [
    "FrozenSelection",
    "Framework",
    "Template",
    "WizardController",
    "WizardSelection",
    "WizardStep",
    "normalize_description",
]
