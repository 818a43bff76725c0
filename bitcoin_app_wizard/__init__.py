"""Bitcoin App Wizard -- guided scaffolding for sCrypt + Yours Wallet dApps.

Quick usage::

    from bitcoin_app_wizard import CreationFlow, WizardController

    flow = CreationFlow(host)
    controller = WizardController(on_create=flow.launch)
"""

from bitcoin_app_wizard.config import WizardConfig
from bitcoin_app_wizard.flow import CreationFlow, CreationReport
from bitcoin_app_wizard.host import Notice, NoticeIcon, PathPromptOptions
from bitcoin_app_wizard.scaffolder import Scaffold, ScaffoldGenerator, ScaffoldWriteError
from bitcoin_app_wizard.wizard import (
    FrozenSelection,
    Framework,
    Template,
    WizardController,
    WizardSelection,
    WizardStep,
)

__all__ = [
    "CreationFlow",
    "CreationReport",
    "FrozenSelection",
    "Framework",
    "Notice",
    "NoticeIcon",
    "PathPromptOptions",
    "Scaffold",
    "ScaffoldGenerator",
    "ScaffoldWriteError",
    "Template",
    "WizardConfig",
    "WizardController",
    "WizardSelection",
    "WizardStep",
]
