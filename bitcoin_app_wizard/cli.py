"""Command-line entry point for the Bitcoin App Wizard.

Usage::

    python -m bitcoin_app_wizard
    python -m bitcoin_app_wizard --name my-app --framework vue --template counter -o ./apps
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from bitcoin_app_wizard.config import WizardConfig
from bitcoin_app_wizard.flow import CreationFlow, CreationReport
from bitcoin_app_wizard.terminal import TerminalHost
from bitcoin_app_wizard.utils import console, print_summary_table
from bitcoin_app_wizard.wizard.controller import WizardController
from bitcoin_app_wizard.wizard.models import Framework, Template, WizardStep

_BACK = "b"


# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


async def _ask(prompt: str, **kwargs) -> str:
    return await asyncio.to_thread(Prompt.ask, prompt, console=console, **kwargs)


async def _choose(title: str, labels: list[str], current: int) -> Optional[int]:
    """Show a numbered menu; return the chosen index or ``None`` for back."""
    console.print(f"\n[bold]{title}[/bold]")
    for index, label in enumerate(labels, start=1):
        marker = "[green]*[/green]" if index - 1 == current else " "
        console.print(f"  {marker} {index}. {label}")
    choices = [str(i) for i in range(1, len(labels) + 1)] + [_BACK]
    answer = await _ask("Choice (b = back)", choices=choices, default=str(current + 1))
    if answer == _BACK:
        return None
    return int(answer) - 1


async def run_interactive(controller: WizardController, config: WizardConfig) -> None:
    """Drive *controller* with terminal prompts until generation is handed off."""
    while not controller.dismissed:
        step = controller.current_step()
        selection = controller.current_selection()
        console.print(
            f"\n[dim]{' > '.join(s.label for s in WizardStep if s is not WizardStep.FINALIZING)}"
            f"   (now: {step.label})[/dim]"
        )

        if step is WizardStep.NAME_ENTRY:
            name = await _ask(
                f"Give your project a name [dim]({escape(config.name_placeholder)})[/dim]",
                default=selection.name,
            )
            controller.set_name(name)
            controller.advance()

        elif step is WizardStep.FRAMEWORK_CHOICE:
            frameworks = Framework.all()
            index = await _choose(
                "Choose your frontend framework",
                [f.display_name for f in frameworks],
                frameworks.index(selection.framework),
            )
            if index is None:
                controller.retreat()
                continue
            controller.select_framework(frameworks[index])
            controller.advance()

        elif step is WizardStep.TEMPLATE_CHOICE:
            templates = Template.all()
            index = await _choose(
                "Pick a template",
                [t.display_name for t in templates],
                templates.index(selection.template),
            )
            if index is None:
                controller.retreat()
                continue
            controller.select_template(templates[index])
            if controller.shows_description():
                description = await _ask(
                    "Custom contract description (optional)",
                    default=selection.description or "",
                )
                controller.set_description(description)
            docs = await asyncio.to_thread(
                Confirm.ask, "Include PRD & tasks?", default=selection.generate_docs, console=console
            )
            if docs != controller.current_selection().generate_docs:
                controller.toggle_docs()
            controller.advance()

        else:
            controller.advance()


def configure_controller(
    controller: WizardController,
    name: Optional[str],
    framework: Optional[Framework],
    template: Optional[Template],
    description: Optional[str],
    generate_docs: Optional[bool],
) -> None:
    """Apply command-line choices to the selection without changing steps."""
    if name is not None:
        controller.set_name(name)
    if framework is not None:
        controller.select_framework(framework)
    if template is not None:
        controller.select_template(template)
    if description is not None:
        controller.set_description(description)
    if generate_docs is not None and generate_docs != controller.current_selection().generate_docs:
        controller.toggle_docs()


def run_to_completion(controller: WizardController) -> None:
    """Advance through every step until generation is triggered."""
    while not controller.dismissed:
        controller.advance()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


async def _main_async(args: argparse.Namespace, config: WizardConfig) -> Optional[CreationReport]:
    preset = Path(args.output) if args.yes and args.output else None
    host = TerminalHost(preset_directory=preset, default_directory=config.output_dir)
    flow = CreationFlow(host, config=config)
    launched: list[asyncio.Task[CreationReport]] = []

    controller = WizardController(
        on_create=lambda snapshot: launched.append(flow.launch(snapshot)),
        selection=config.initial_selection(),
    )
    configure_controller(
        controller,
        name=args.name,
        framework=Framework.parse(args.framework) if args.framework else None,
        template=Template.parse(args.template) if args.template else None,
        description=args.description,
        generate_docs=False if args.no_docs else None,
    )

    console.print(
        Panel(
            "[bold bright_cyan]New Bitcoin App[/bold bright_cyan]\n"
            "[italic]Scaffold a sCrypt dApp with Yours Wallet[/italic]",
            border_style="bright_cyan",
        )
    )

    if args.yes:
        run_to_completion(controller)
    else:
        await run_interactive(controller, config)

    if not launched:
        return None
    return await launched[-1]


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point for ``python -m bitcoin_app_wizard``."""
    parser = argparse.ArgumentParser(
        description="Bitcoin App Wizard -- scaffold an sCrypt + Yours Wallet dApp",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m bitcoin_app_wizard\n"
            "  python -m bitcoin_app_wizard --yes --name my-app -f vue -t counter -o ./apps\n"
        ),
    )
    parser.add_argument("--name", "-n", default=None, help="Project name")
    parser.add_argument(
        "--framework", "-f",
        default=None,
        help=f"Frontend framework ({', '.join(f.key for f in Framework)})",
    )
    parser.add_argument(
        "--template", "-t",
        default=None,
        help=f"Project template ({', '.join(t.value for t in Template)})",
    )
    parser.add_argument(
        "--description", "-d",
        default=None,
        help="Custom contract description (custom template only)",
    )
    parser.add_argument("--no-docs", action="store_true", help="Skip PRD.md and tasks.md")
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Base directory the project folder is created in",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask questions; use flags and defaults",
    )

    args = parser.parse_args(argv)

    try:
        config = WizardConfig.from_env()
        if args.framework:
            Framework.parse(args.framework)
        if args.template:
            Template.parse(args.template)
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(2)

    if args.output:
        config.output_dir = Path(args.output)
    if args.yes and not config.output_dir:
        config.output_dir = Path.cwd()
        args.output = str(config.output_dir)

    report = asyncio.run(_main_async(args, config))

    if report is None:
        sys.exit(1)
    if report.cancelled:
        return
    if report.project_path is not None:
        print_summary_table(
            {
                "Project": str(report.project_path),
                "Open first": str(report.primary_file),
                "Steps failed": ", ".join(report.failed_steps()) or "none",
            },
            title="New Bitcoin App",
        )
    if not report.succeeded:
        sys.exit(1)


if __name__ == "__main__":
    main()
