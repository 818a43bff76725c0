"""Shared pytest fixtures for the Bitcoin App Wizard test suite.

Provides reusable fixtures for:
- Temporary base directories for generated projects
- A real scaffold generator and template renderer
- Recording fakes for the host, the opened project and the picker
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pytest

from bitcoin_app_wizard.host import Notice, NoticeIcon, PathPromptOptions
from bitcoin_app_wizard.scaffolder.generator import ScaffoldGenerator
from bitcoin_app_wizard.scaffolder.templates import TemplateRenderer
from bitcoin_app_wizard.wizard.models import FrozenSelection, Framework, Template


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    """Base directory the picker "returns" (auto-cleanup)."""
    directory = tmp_path / "workspace"
    directory.mkdir()
    yield directory


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------

@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def generator(renderer: TemplateRenderer) -> ScaffoldGenerator:
    return ScaffoldGenerator(renderer)


@pytest.fixture
def hello_selection() -> FrozenSelection:
    """The canonical React + Hello World selection."""
    return FrozenSelection(
        name="my-bitcoin-app",
        framework=Framework.REACT,
        template=Template.HELLO_WORLD,
        generate_docs=True,
        description=None,
    )


# ---------------------------------------------------------------------------
# Host fakes
# ---------------------------------------------------------------------------

class FakeProject:
    """Records everything the creation flow asks of an opened project."""

    def __init__(
        self,
        root: Path,
        open_file_error: Optional[Exception] = None,
        assistant_error: Optional[Exception] = None,
    ) -> None:
        self.root = root
        self.open_file_error = open_file_error
        self.assistant_error = assistant_error
        self.opened_files: list[Path] = []
        self.assistant_prompts: list[str] = []
        self.notices: list[Notice] = []

    async def open_file(self, path: Path) -> None:
        if self.open_file_error is not None:
            raise self.open_file_error
        self.opened_files.append(path)

    def set_assistant_prompt(self, text: str) -> None:
        if self.assistant_error is not None:
            raise self.assistant_error
        self.assistant_prompts.append(text)

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)


class FakeHost:
    """Host fake whose picker returns a canned answer (or raises)."""

    def __init__(
        self,
        picked: Optional[list[Path]] = None,
        picker_error: Optional[Exception] = None,
        workspace_error: Optional[Exception] = None,
        project_kwargs: Optional[dict[str, Any]] = None,
    ) -> None:
        self.picked = picked
        self.picker_error = picker_error
        self.workspace_error = workspace_error
        self.project_kwargs = project_kwargs or {}
        self.picker_requests: list[PathPromptOptions] = []
        self.opened_workspaces: list[list[Path]] = []
        self.notices: list[Notice] = []
        self.project: Optional[FakeProject] = None

    async def prompt_for_paths(self, options: PathPromptOptions) -> Optional[list[Path]]:
        self.picker_requests.append(options)
        if self.picker_error is not None:
            raise self.picker_error
        return self.picked

    async def open_workspace(self, paths: list[Path]) -> FakeProject:
        self.opened_workspaces.append(list(paths))
        if self.workspace_error is not None:
            raise self.workspace_error
        self.project = FakeProject(paths[0], **self.project_kwargs)
        return self.project

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    def all_notices(self) -> list[Notice]:
        project_notices = self.project.notices if self.project else []
        return [*self.notices, *project_notices]

    def warnings(self) -> list[str]:
        return [n.message for n in self.all_notices() if n.icon is NoticeIcon.WARNING]


@pytest.fixture
def fake_host_factory():
    """Build ``FakeHost`` instances with per-test behaviour."""
    return FakeHost


def list_tree(root: Path) -> list[str]:
    """Every file and directory below *root*, as sorted POSIX paths."""
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*"))


@pytest.fixture
def tree_of():
    """Return the ``list_tree`` helper."""
    return list_tree
