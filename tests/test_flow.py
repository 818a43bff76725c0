"""Tests for the project creation flow.

Covers:
- Happy path: picker -> write -> workspace -> contract -> assistant -> notice
- Cancellation leaves the filesystem untouched
- Failures in required steps stop the flow with a notice
- Failures in best-effort steps are reported and the flow continues
- Background launch from the wizard hand-off
"""

from __future__ import annotations

import pytest

from bitcoin_app_wizard.config import WizardConfig
from bitcoin_app_wizard.flow import (
    NOT_CREATED_MESSAGE,
    STEP_ANNOUNCE,
    STEP_OPEN_CONTRACT,
    STEP_OPEN_WORKSPACE,
    STEP_PICK_DIRECTORY,
    STEP_POPULATE_ASSISTANT,
    STEP_WRITE_SCAFFOLD,
    STEPS,
    CreationFlow,
    CreationReport,
)
from bitcoin_app_wizard.host import Notice, NoticeIcon, ProjectHandle, WorkspaceHost
from bitcoin_app_wizard.scaffolder.prompts import build_instruction_prompt
from bitcoin_app_wizard.terminal import TerminalHost
from bitcoin_app_wizard.wizard.controller import WizardController
from bitcoin_app_wizard.wizard.models import Framework, Template


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit

SUCCESS_MESSAGE = 'Created "my-bitcoin-app" — ready to build with AI!'


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


class TestHappyPath:
    async def test_full_run(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        report = await CreationFlow(host).run(hello_selection)

        project = base_dir / "my-bitcoin-app"
        assert report.succeeded
        assert [s.name for s in report.steps] == list(STEPS)
        assert report.project_path == project
        assert report.primary_file == project / "contracts" / "helloWorld.ts"
        assert (project / "contracts" / "helloWorld.ts").is_file()
        assert host.opened_workspaces == [[project]]
        assert host.project.opened_files == [project / "contracts" / "helloWorld.ts"]

    async def test_assistant_gets_prompt(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        await CreationFlow(host).run(hello_selection)
        expected = build_instruction_prompt(Framework.REACT, Template.HELLO_WORLD)
        assert host.project.assistant_prompts == [expected]

    async def test_success_notice(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        await CreationFlow(host).run(hello_selection)
        assert host.notices == []
        assert host.project.notices == [
            Notice(message=SUCCESS_MESSAGE, icon=NoticeIcon.SPARKLE)
        ]

    async def test_picker_options(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        flow = CreationFlow(host, config=WizardConfig(picker_prompt="Where?"))
        await flow.run(hello_selection)
        (options,) = host.picker_requests
        assert options.directories is True
        assert options.files is False
        assert options.multiple is False
        assert options.prompt == "Where?"

    async def test_blank_name_uses_fallback(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        selection = hello_selection.model_copy(update={"name": "   "})
        report = await CreationFlow(host).run(selection)
        assert report.project_path == base_dir / "bitcoin-app"

    def test_fakes_satisfy_protocols(self, fake_host_factory):
        host = fake_host_factory()
        assert isinstance(host, WorkspaceHost)


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------


class TestCancellation:
    @pytest.mark.parametrize("picked", [None, []])
    async def test_nothing_written(self, fake_host_factory, base_dir, hello_selection, picked):
        host = fake_host_factory(picked=picked)
        report = await CreationFlow(host).run(hello_selection)

        assert report.cancelled is True
        assert not report.succeeded
        assert list(base_dir.iterdir()) == []
        assert host.opened_workspaces == []
        assert host.notices == [Notice(message=NOT_CREATED_MESSAGE, icon=NoticeIcon.WARNING)]

    async def test_later_steps_skipped(self, fake_host_factory, hello_selection):
        host = fake_host_factory(picked=None)
        report = await CreationFlow(host).run(hello_selection)
        assert report.step(STEP_PICK_DIRECTORY).ok
        assert report.step(STEP_WRITE_SCAFFOLD).skipped
        assert report.step(STEP_ANNOUNCE).skipped


# ---------------------------------------------------------------------------
# Required-step failures
# ---------------------------------------------------------------------------


class TestRequiredFailures:
    async def test_picker_failure(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picker_error=RuntimeError("dialog crashed"))
        report = await CreationFlow(host).run(hello_selection)

        assert host.warnings() == ["Folder picker failed: dialog crashed"]
        assert report.failed_steps() == [STEP_PICK_DIRECTORY, *STEPS[1:]]
        assert report.step(STEP_WRITE_SCAFFOLD).skipped
        assert list(base_dir.iterdir()) == []

    async def test_write_failure(self, fake_host_factory, base_dir, hello_selection):
        (base_dir / "my-bitcoin-app").write_text("a file, not a folder")
        host = fake_host_factory(picked=[base_dir])
        report = await CreationFlow(host).run(hello_selection)

        (warning,) = host.warnings()
        assert warning.startswith("Failed to create project: ")
        assert report.step(STEP_WRITE_SCAFFOLD).ok is False
        assert report.project_path is None
        assert host.opened_workspaces == []

    async def test_workspace_failure(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir], workspace_error=RuntimeError("no window"))
        report = await CreationFlow(host).run(hello_selection)

        assert host.warnings() == ["Failed to open workspace: no window"]
        assert (base_dir / "my-bitcoin-app" / "README.md").is_file()
        assert report.step(STEP_OPEN_WORKSPACE).error == "Failed to open workspace: no window"
        for name in (STEP_OPEN_CONTRACT, STEP_POPULATE_ASSISTANT, STEP_ANNOUNCE):
            assert report.step(name).skipped
        assert host.project is None


# ---------------------------------------------------------------------------
# Best-effort failures
# ---------------------------------------------------------------------------


class TestBestEffortFailures:
    async def test_open_contract_failure(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(
            picked=[base_dir],
            project_kwargs={"open_file_error": FileNotFoundError("gone")},
        )
        report = await CreationFlow(host).run(hello_selection)

        assert host.warnings() == ["Failed to open contract file: gone"]
        assert report.failed_steps() == [STEP_OPEN_CONTRACT]
        assert len(host.project.assistant_prompts) == 1
        assert host.project.notices[-1].message == SUCCESS_MESSAGE

    async def test_assistant_failure(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(
            picked=[base_dir],
            project_kwargs={"assistant_error": RuntimeError()},
        )
        report = await CreationFlow(host).run(hello_selection)

        assert host.warnings() == ["Failed to open assistant panel: RuntimeError"]
        assert report.failed_steps() == [STEP_POPULATE_ASSISTANT]
        assert host.project.opened_files
        assert host.project.notices[-1].icon is NoticeIcon.SPARKLE

    async def test_broken_notices_do_not_raise(self, fake_host_factory, hello_selection):
        class SilentHost(fake_host_factory):
            def notify(self, notice: Notice) -> None:
                raise RuntimeError("toast service down")

        report = await CreationFlow(SilentHost(picked=None)).run(hello_selection)
        assert report.cancelled is True


# ---------------------------------------------------------------------------
# Background launch
# ---------------------------------------------------------------------------


class TestLaunch:
    async def test_launch_and_wait(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir])
        flow = CreationFlow(host)
        task = flow.launch(hello_selection)
        await flow.wait()

        report = task.result()
        assert isinstance(report, CreationReport)
        assert report.succeeded
        assert len(host.picker_requests) == 1

    async def test_wait_without_runs(self, fake_host_factory):
        await CreationFlow(fake_host_factory()).wait()

    async def test_wizard_hand_off(self, fake_host_factory, base_dir):
        host = fake_host_factory(picked=[base_dir])
        flow = CreationFlow(host)
        tasks = []
        controller = WizardController(on_create=lambda s: tasks.append(flow.launch(s)))
        controller.set_name("dice")
        controller.select_framework(Framework.VUE)
        controller.select_template(Template.COUNTER)
        while not controller.dismissed:
            controller.advance()

        assert controller.dismissed
        report = await tasks[0]
        assert report.project_path == base_dir / "dice"
        assert (base_dir / "dice" / "contracts" / "counter.ts").is_file()
        assert isinstance(host.project, ProjectHandle)


# ---------------------------------------------------------------------------
# Names that need care on the way to the terminal and the disk
# ---------------------------------------------------------------------------


class TestProjectNames:
    @pytest.mark.parametrize("name", ["dice[/x]", "[bold]dice", "dice [red]"])
    async def test_bracketed_name_with_terminal_host(self, base_dir, hello_selection, name):
        host = TerminalHost(preset_directory=base_dir)
        selection = hello_selection.model_copy(update={"name": name})
        report = await CreationFlow(host).run(selection)

        assert report.succeeded, report.failed_steps()
        assert report.project_path == base_dir / name
        assert (base_dir / name / "contracts" / "helloWorld.ts").is_file()

    async def test_markup_in_failure_message_is_reported(self, fake_host_factory, base_dir, hello_selection):
        host = fake_host_factory(picked=[base_dir], workspace_error=RuntimeError("tag '[/x]' broke"))
        report = await CreationFlow(host).run(hello_selection)

        assert host.warnings() == ["Failed to open workspace: tag '[/x]' broke"]
        assert report.step(STEP_OPEN_WORKSPACE).ok is False

    @pytest.mark.parametrize("name", ["..", "../outside", "."])
    async def test_name_escaping_base_is_rejected(self, fake_host_factory, base_dir, hello_selection, name):
        host = fake_host_factory(picked=[base_dir])
        selection = hello_selection.model_copy(update={"name": name})
        report = await CreationFlow(host).run(selection)

        (warning,) = host.warnings()
        assert warning.startswith("Failed to create project: Project name")
        assert report.step(STEP_WRITE_SCAFFOLD).ok is False
        assert list(base_dir.iterdir()) == []
        assert not (base_dir.parent / "outside").exists()
