"""Project creation flow.

Runs after the wizard hands off a frozen selection:

1. ask the host for a base directory,
2. generate and write the scaffold,
3. open the new project as a workspace,
4. open the contract file,
5. pre-populate the assistant panel with the starting prompt,
6. announce success.

Each step reports its own failure with a notice.  A failed required step
skips everything after it; best-effort steps (opening the contract and
populating the assistant) report and let the flow continue.  Nothing is
retried and nothing already written is rolled back.
"""

from __future__ import annotations

import asyncio
import inspect
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, Field

from bitcoin_app_wizard.config import WizardConfig
from bitcoin_app_wizard.host import Notice, NoticeIcon, PathPromptOptions, WorkspaceHost
from bitcoin_app_wizard.scaffolder.generator import ScaffoldGenerator
from bitcoin_app_wizard.utils import format_error, print_error
from bitcoin_app_wizard.wizard.models import FrozenSelection

STEP_PICK_DIRECTORY = "pick_directory"
STEP_WRITE_SCAFFOLD = "write_scaffold"
STEP_OPEN_WORKSPACE = "open_workspace"
STEP_OPEN_CONTRACT = "open_contract"
STEP_POPULATE_ASSISTANT = "populate_assistant"
STEP_ANNOUNCE = "announce"

STEPS: tuple[str, ...] = (
    STEP_PICK_DIRECTORY,
    STEP_WRITE_SCAFFOLD,
    STEP_OPEN_WORKSPACE,
    STEP_OPEN_CONTRACT,
    STEP_POPULATE_ASSISTANT,
    STEP_ANNOUNCE,
)

NOT_CREATED_MESSAGE = "No folder selected; project not created"


# ---------------------------------------------------------------------------
# Report models
# ---------------------------------------------------------------------------


class StepOutcome(BaseModel):
    name: str
    ok: bool = True
    skipped: bool = False
    error: Optional[str] = None


class CreationReport(BaseModel):
    """What happened during one run of the creation flow."""

    steps: list[StepOutcome] = Field(default_factory=list)
    cancelled: bool = False
    project_path: Optional[Path] = None
    primary_file: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return (
            not self.cancelled
            and bool(self.steps)
            and all(s.ok and not s.skipped for s in self.steps)
        )

    def step(self, name: str) -> Optional[StepOutcome]:
        for outcome in self.steps:
            if outcome.name == name:
                return outcome
        return None

    def failed_steps(self) -> list[str]:
        return [s.name for s in self.steps if not s.ok]

    def record(self, name: str, error: Optional[str] = None) -> None:
        self.steps.append(StepOutcome(name=name, ok=error is None, error=error))

    def skip_remaining(self) -> None:
        """Mark every step that has not run yet as skipped."""
        done = {s.name for s in self.steps}
        for name in STEPS:
            if name not in done:
                self.steps.append(StepOutcome(name=name, ok=False, skipped=True))


# ---------------------------------------------------------------------------
# Flow
# ---------------------------------------------------------------------------


class CreationFlow:
    """Drives project creation across the host boundary.

    Args:
        host: The application that owns the picker, workspaces and notices.
        generator: Scaffold generator (a default one is created if omitted).
        config: Wizard configuration; supplies the picker prompt.
    """

    def __init__(
        self,
        host: WorkspaceHost,
        generator: Optional[ScaffoldGenerator] = None,
        config: Optional[WizardConfig] = None,
    ) -> None:
        self.host = host
        self.config = config or WizardConfig()
        self.generator = generator or ScaffoldGenerator(fallback_name=self.config.fallback_name)
        self._tasks: set[asyncio.Task[CreationReport]] = set()

    # -- Public API --------------------------------------------------------

    def picker_options(self) -> PathPromptOptions:
        return PathPromptOptions(
            files=False,
            directories=True,
            multiple=False,
            prompt=self.config.picker_prompt,
        )

    def launch(self, selection: FrozenSelection) -> asyncio.Task[CreationReport]:
        """Request the directory picker and continue in the background.

        Must be called from inside a running event loop.  Returns as soon as
        the picker request is issued, so the caller can dismiss the wizard.
        """
        picker = asyncio.ensure_future(self.host.prompt_for_paths(self.picker_options()))
        task = asyncio.create_task(self.run(selection, picker=picker))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def wait(self) -> None:
        """Wait for every launched run to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def run(
        self,
        selection: FrozenSelection,
        picker: Optional[Awaitable[Optional[list[Path]]]] = None,
    ) -> CreationReport:
        """Run the whole flow for *selection* and return its report."""
        report = CreationReport()
        if picker is None:
            picker = self.host.prompt_for_paths(self.picker_options())

        # 1. Directory
        ok, paths = await self._attempt(
            report, STEP_PICK_DIRECTORY, lambda: picker,
            failure="Folder picker failed", notify=self.host.notify,
        )
        if not ok:
            report.skip_remaining()
            return report
        if not paths:
            report.cancelled = True
            self._notify(self.host.notify, Notice(message=NOT_CREATED_MESSAGE, icon=NoticeIcon.WARNING))
            report.skip_remaining()
            return report
        base_dir = Path(paths[0])

        # 2. Scaffold
        scaffold = None

        async def _write() -> Path:
            nonlocal scaffold
            scaffold = self.generator.generate_from_selection(selection)
            return await self.generator.write(scaffold, base_dir)

        ok, project_path = await self._attempt(
            report, STEP_WRITE_SCAFFOLD, _write,
            failure="Failed to create project", notify=self.host.notify,
        )
        if not ok:
            report.skip_remaining()
            return report
        report.project_path = project_path
        report.primary_file = project_path / scaffold.primary_file

        # 3. Workspace
        ok, project = await self._attempt(
            report, STEP_OPEN_WORKSPACE, lambda: self.host.open_workspace([project_path]),
            failure="Failed to open workspace", notify=self.host.notify,
        )
        if not ok:
            report.skip_remaining()
            return report

        # 4-5. Best effort inside the new project
        await self._attempt(
            report, STEP_OPEN_CONTRACT, lambda: project.open_file(report.primary_file),
            failure="Failed to open contract file", notify=project.notify,
        )
        await self._attempt(
            report, STEP_POPULATE_ASSISTANT, lambda: project.set_assistant_prompt(scaffold.prompt_text),
            failure="Failed to open assistant panel", notify=project.notify,
        )

        # 6. Announce
        await self._attempt(
            report, STEP_ANNOUNCE,
            lambda: project.notify(Notice(
                message=f'Created "{scaffold.project_root}" — ready to build with AI!',
                icon=NoticeIcon.SPARKLE,
            )),
            failure="Failed to show notice", notify=self.host.notify,
        )
        return report

    # -- Internals ---------------------------------------------------------

    async def _attempt(
        self,
        report: CreationReport,
        name: str,
        action: Callable[[], Any],
        *,
        failure: str,
        notify: Callable[[Notice], None],
    ) -> tuple[bool, Any]:
        """Run one step, recording and announcing its failure."""
        try:
            result = action()
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            message = f"{failure}: {format_error(exc)}"
            print_error(message)
            report.record(name, error=message)
            self._notify(notify, Notice(message=message, icon=NoticeIcon.WARNING))
            return False, None
        report.record(name)
        return True, result

    @staticmethod
    def _notify(notify: Callable[[Notice], None], notice: Notice) -> None:
        try:
            notify(notice)
        except Exception as exc:
            print_error(f"Failed to show notice {notice.message!r}: {format_error(exc)}")
