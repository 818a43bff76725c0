"""Bitcoin App Wizard configuration.

Typed defaults for the wizard session and the terminal host.  Pydantic v2
models validate values at construction time and serialise to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from bitcoin_app_wizard.scaffolder.generator import FALLBACK_PROJECT_NAME
from bitcoin_app_wizard.wizard.models import Framework, Template, WizardSelection

_TRUE_VALUES = {"1", "true", "yes", "on"}


class WizardConfig(BaseModel):
    """Global wizard configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the controller factory and the creation flow.
    """

    name_placeholder: str = Field(
        default="my-bitcoin-app",
        description="Hint shown in the empty name field",
    )
    fallback_name: str = Field(
        default=FALLBACK_PROJECT_NAME,
        min_length=1,
        description="Folder name used when the entered name is blank",
    )
    default_framework: Framework = Field(default_factory=Framework.default)
    default_template: Template = Field(default_factory=Template.default)
    generate_docs: bool = Field(default=True, description="Write PRD.md and tasks.md by default")
    output_dir: Optional[Path] = Field(
        default=None,
        description="Suggested base directory offered by the terminal picker",
    )
    picker_prompt: str = Field(default="Select folder for project")

    def initial_selection(self) -> WizardSelection:
        """Build the selection a new wizard session starts from."""
        return WizardSelection(
            framework=self.default_framework,
            template=self.default_template,
            generate_docs=self.generate_docs,
        )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "WizardConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "WizardConfig":
        """Build a ``WizardConfig`` from environment variables.

        Recognised variables (all optional):
            BTC_WIZARD_OUTPUT_DIR, BTC_WIZARD_FRAMEWORK, BTC_WIZARD_TEMPLATE,
            BTC_WIZARD_GENERATE_DOCS, BTC_WIZARD_NAME_PLACEHOLDER.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("BTC_WIZARD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["BTC_WIZARD_OUTPUT_DIR"])
        if os.environ.get("BTC_WIZARD_FRAMEWORK"):
            kwargs["default_framework"] = Framework.parse(os.environ["BTC_WIZARD_FRAMEWORK"])
        if os.environ.get("BTC_WIZARD_TEMPLATE"):
            kwargs["default_template"] = Template.parse(os.environ["BTC_WIZARD_TEMPLATE"])
        if os.environ.get("BTC_WIZARD_GENERATE_DOCS"):
            kwargs["generate_docs"] = (
                os.environ["BTC_WIZARD_GENERATE_DOCS"].strip().lower() in _TRUE_VALUES
            )
        if os.environ.get("BTC_WIZARD_NAME_PLACEHOLDER"):
            kwargs["name_placeholder"] = os.environ["BTC_WIZARD_NAME_PLACEHOLDER"]
        return cls(**kwargs)
