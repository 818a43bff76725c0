"""Rich-based terminal implementation of the host interfaces.

Used by the CLI: the directory picker becomes a prompt, "opening a
workspace" prints the generated tree, and the assistant prompt is shown in a
panel so it can be pasted into any assistant.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.prompt import Prompt
from rich.tree import Tree

from bitcoin_app_wizard.host import Notice, NoticeIcon, PathPromptOptions
from bitcoin_app_wizard.utils import (
    console,
    print_info,
    print_prompt_panel,
    print_success,
    print_warning,
)


def _show_notice(notice: Notice) -> None:
    if notice.icon is NoticeIcon.SPARKLE:
        print_success(notice.message)
    elif notice.icon is NoticeIcon.WARNING:
        print_warning(notice.message)
    else:
        print_info(notice.message)


class TerminalProject:
    """A generated project "opened" in the terminal."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.opened: list[Path] = []
        self.assistant_prompt: Optional[str] = None

    async def open_file(self, path: Path) -> None:
        exists = await asyncio.to_thread(path.is_file)
        if not exists:
            raise FileNotFoundError(f"No such file: {path}")
        self.opened.append(path)
        console.print(f"  [green]+[/green] Start here: [bold]{escape(str(path))}[/bold]")

    def set_assistant_prompt(self, text: str) -> None:
        self.assistant_prompt = text
        print_prompt_panel(text)

    def notify(self, notice: Notice) -> None:
        _show_notice(notice)


class TerminalHost:
    """Terminal stand-in for the editor hosting the wizard.

    Args:
        preset_directory: When set, the picker returns it without asking.
        default_directory: Suggested answer for the interactive picker.
    """

    def __init__(
        self,
        preset_directory: Optional[Path] = None,
        default_directory: Optional[Path] = None,
    ) -> None:
        self.preset_directory = preset_directory
        self.default_directory = default_directory

    async def prompt_for_paths(self, options: PathPromptOptions) -> Optional[list[Path]]:
        if self.preset_directory is not None:
            chosen = self.preset_directory
        else:
            default = str(self.default_directory or Path.cwd())
            answer = await asyncio.to_thread(
                Prompt.ask,
                escape(options.prompt or "Select folder"),
                default=default,
                console=console,
            )
            if not answer or not answer.strip():
                return None
            chosen = Path(answer.strip())

        chosen = chosen.expanduser()
        if options.directories and not options.files:
            is_file = await asyncio.to_thread(chosen.is_file)
            if is_file:
                raise NotADirectoryError(f"Not a directory: {chosen}")
        return [chosen]

    async def open_workspace(self, paths: list[Path]) -> TerminalProject:
        root = paths[0]
        if not await asyncio.to_thread(root.is_dir):
            raise FileNotFoundError(f"Project folder does not exist: {root}")
        tree = await asyncio.to_thread(_build_tree, root)
        console.print(tree)
        return TerminalProject(root)

    def notify(self, notice: Notice) -> None:
        _show_notice(notice)


def _build_tree(root: Path) -> Tree:
    """Render the project directory as a Rich tree (directories first)."""
    tree = Tree(f"[bold bright_cyan]{escape(str(root))}[/bold bright_cyan]")

    def _add(node: Tree, directory: Path) -> None:
        entries = sorted(directory.iterdir(), key=lambda p: (not p.is_dir(), p.name))
        for entry in entries:
            if entry.is_dir():
                _add(node.add(f"[bold]{escape(entry.name)}/[/bold]"), entry)
            else:
                node.add(escape(entry.name))

    _add(tree, root)
    return tree
