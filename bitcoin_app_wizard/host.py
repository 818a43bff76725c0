"""Interfaces to the host application.

The wizard never draws UI, opens windows or shows toasts itself.  Everything
it needs from its surroundings goes through the protocols below, so the same
creation flow can run inside an editor, a terminal or a test harness.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class NoticeIcon(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SPARKLE = "sparkle"


class Notice(BaseModel):
    """A fire-and-forget, user-visible message (toast)."""

    model_config = ConfigDict(frozen=True)

    message: str
    icon: NoticeIcon = NoticeIcon.INFO
    dismissible: bool = True


class PathPromptOptions(BaseModel):
    """What the directory picker is allowed to return."""

    model_config = ConfigDict(frozen=True)

    files: bool = False
    directories: bool = True
    multiple: bool = False
    prompt: Optional[str] = Field(default="Select folder for project")


@runtime_checkable
class ProjectHandle(Protocol):
    """An opened project context (a workspace window in an editor)."""

    async def open_file(self, path: Path) -> None:
        """Open *path* in the project.  Raises on failure."""
        ...

    def set_assistant_prompt(self, text: str) -> None:
        """Focus the assistant panel and pre-populate it with *text*."""
        ...

    def notify(self, notice: Notice) -> None:
        ...


@runtime_checkable
class WorkspaceHost(Protocol):
    """The application the wizard was launched from."""

    async def prompt_for_paths(self, options: PathPromptOptions) -> Optional[list[Path]]:
        """Ask the user for paths.  ``None`` or ``[]`` means cancelled."""
        ...

    async def open_workspace(self, paths: list[Path]) -> ProjectHandle:
        """Open *paths* as a new project and return its handle."""
        ...

    def notify(self, notice: Notice) -> None:
        ...
