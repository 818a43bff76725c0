"""Data models for the wizard: steps, frameworks, templates and selections.

``Framework`` and ``Template`` are closed enumerations.  Every lookup keyed
on them is an exhaustive table, so adding a variant without filling in its
metadata fails loudly at import time rather than at generation time.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


class WizardStep(str, Enum):
    """Ordered wizard steps.  ``FINALIZING`` is terminal and re-entrant."""

    NAME_ENTRY = "name_entry"
    FRAMEWORK_CHOICE = "framework_choice"
    TEMPLATE_CHOICE = "template_choice"
    FINALIZING = "finalizing"

    @property
    def label(self) -> str:
        return _STEP_LABELS[self]


_STEP_LABELS: dict[WizardStep, str] = {
    WizardStep.NAME_ENTRY: "Name",
    WizardStep.FRAMEWORK_CHOICE: "Framework",
    WizardStep.TEMPLATE_CHOICE: "Template",
    WizardStep.FINALIZING: "Create",
}


# ---------------------------------------------------------------------------
# Frameworks
# ---------------------------------------------------------------------------


class Framework(str, Enum):
    """Frontend targets.  The value is the stable generation key."""

    REACT = "react"
    NEXTJS = "nextjs"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"

    @classmethod
    def all(cls) -> list["Framework"]:
        """Return every framework in canonical order."""
        return list(cls)

    @classmethod
    def default(cls) -> "Framework":
        return cls.all()[0]

    @classmethod
    def parse(cls, value: str) -> "Framework":
        """Look up a framework by key or display name (case-insensitive)."""
        wanted = value.strip().lower()
        for framework in cls:
            if wanted in (framework.value, framework.display_name.lower()):
                return framework
        raise ValueError(f"Unknown framework: {value!r}")

    @property
    def display_name(self) -> str:
        return _FRAMEWORK_LABELS[self]

    @property
    def key(self) -> str:
        return self.value


_FRAMEWORK_LABELS: dict[Framework, str] = {
    Framework.REACT: "React",
    Framework.NEXTJS: "Next.js",
    Framework.VUE: "Vue",
    Framework.ANGULAR: "Angular",
    Framework.SVELTE: "Svelte",
}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


class Template(str, Enum):
    """Project archetypes.  Each one owns exactly one contract file."""

    HELLO_WORLD = "hello_world"
    COUNTER = "counter"
    TIC_TAC_TOE = "tic_tac_toe"
    AUCTION = "auction"
    CUSTOM = "custom"

    @classmethod
    def all(cls) -> list["Template"]:
        """Return every template in canonical order."""
        return list(cls)

    @classmethod
    def default(cls) -> "Template":
        return cls.all()[0]

    @classmethod
    def parse(cls, value: str) -> "Template":
        """Look up a template by key or display name (case-insensitive)."""
        wanted = value.strip().lower()
        for template in cls:
            if wanted in (template.value, template.display_name.lower()):
                return template
        raise ValueError(f"Unknown template: {value!r}")

    @property
    def display_name(self) -> str:
        return _TEMPLATE_INFO[self][0]

    @property
    def contract_filename(self) -> str:
        return _TEMPLATE_INFO[self][1]

    @property
    def contract_class(self) -> str:
        return _TEMPLATE_INFO[self][2]

    @property
    def contract_stem(self) -> str:
        """Contract filename without its extension (artifact basename)."""
        return self.contract_filename.rsplit(".", 1)[0]

    @property
    def accepts_description(self) -> bool:
        return self is Template.CUSTOM


# template -> (display name, contract filename, contract class)
_TEMPLATE_INFO: dict[Template, tuple[str, str, str]] = {
    Template.HELLO_WORLD: ("Hello World", "helloWorld.ts", "HelloWorld"),
    Template.COUNTER: ("Counter", "counter.ts", "Counter"),
    Template.TIC_TAC_TOE: ("Tic-Tac-Toe", "ticTacToe.ts", "TicTacToe"),
    Template.AUCTION: ("Auction", "auction.ts", "Auction"),
    Template.CUSTOM: ("Custom", "custom.ts", "CustomContract"),
}


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------


def normalize_description(text: Optional[str]) -> Optional[str]:
    """Return *text* unless it is missing or blank, in which case ``None``."""
    if text is None or not text.strip():
        return None
    return text


class WizardSelection(BaseModel):
    """The user's in-progress choices.  Mutated in place by the controller."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(default="", description="Project name as typed (may be blank)")
    framework: Framework = Field(default_factory=Framework.default)
    template: Template = Field(default_factory=Template.default)
    generate_docs: bool = Field(default=True, description="Write PRD.md and tasks.md")
    description: Optional[str] = Field(
        default=None,
        description="Free-text contract description, meaningful for Custom only",
    )

    def freeze(self) -> "FrozenSelection":
        """Take an immutable snapshot of the current choices."""
        return FrozenSelection(**self.model_dump())


class FrozenSelection(BaseModel):
    """Immutable snapshot of a ``WizardSelection`` taken at generation time."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    framework: Framework = Field(default_factory=Framework.default)
    template: Template = Field(default_factory=Template.default)
    generate_docs: bool = True
    description: Optional[str] = None

    @property
    def custom_description(self) -> Optional[str]:
        """The description, or ``None`` when it is blank."""
        return normalize_description(self.description)
