"""Main scaffolding orchestrator.

Takes the frozen wizard selection (name, framework, template, description,
docs flag) and produces the complete file set for a new sCrypt + Yours
Wallet project.  Generation is pure and deterministic; writing the result to
disk is a separate, sequential step.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from bitcoin_app_wizard.utils import write_text_file
from bitcoin_app_wizard.wizard.models import (
    FrozenSelection,
    Framework,
    Template,
    normalize_description,
)

from .prompts import TASKS_CHECKLIST, build_instruction_prompt, render_prd
from .templates import ScaffoldError, TemplateRenderer, slugify


FALLBACK_PROJECT_NAME = "bitcoin-app"


# ---------------------------------------------------------------------------
# Directory and file tables
# ---------------------------------------------------------------------------

REQUIRED_DIRECTORIES: tuple[str, ...] = (
    "contracts",
    "src/components",
    "src/lib",
    "src/services",
)

# (template, output) pairs rendered into every project root.
_ROOT_FILES: list[tuple[str, str]] = [
    ("env.example.j2", ".env.example"),
    ("README.md.j2", "README.md"),
    ("AI_RULES.md.j2", "AI_RULES.md"),
]

_SHARED_FRONTEND_FILES: list[tuple[str, str]] = [
    ("frontend/shared/tailwind.config.js.j2", "tailwind.config.js"),
    ("frontend/shared/postcss.config.js.j2", "postcss.config.js"),
    ("frontend/shared/src/lib/wallet.ts.j2", "src/lib/wallet.ts"),
    ("frontend/shared/src/lib/artifact.ts.j2", "src/lib/artifact.ts"),
    ("frontend/shared/src/services/contract.ts.j2", "src/services/contract.ts"),
]

_FRAMEWORK_FILES: dict[Framework, list[str]] = {
    Framework.REACT: [
        "package.json",
        "vite.config.ts",
        "tsconfig.json",
        "index.html",
        "src/main.tsx",
        "src/App.tsx",
        "src/index.css",
        "src/components/Game.tsx",
        "src/components/WalletButton.tsx",
    ],
    Framework.NEXTJS: [
        "package.json",
        "next.config.mjs",
        "tsconfig.json",
        "src/app/layout.tsx",
        "src/app/page.tsx",
        "src/app/globals.css",
        "src/components/Game.tsx",
        "src/components/WalletButton.tsx",
    ],
    Framework.VUE: [
        "package.json",
        "vite.config.ts",
        "tsconfig.json",
        "index.html",
        "src/main.ts",
        "src/App.vue",
        "src/style.css",
        "src/components/Game.vue",
        "src/components/WalletButton.vue",
    ],
    Framework.ANGULAR: [
        "package.json",
        "angular.json",
        "tsconfig.json",
        "src/index.html",
        "src/main.ts",
        "src/styles.css",
        "src/app/app.component.ts",
        "src/components/game.component.ts",
    ],
    Framework.SVELTE: [
        "package.json",
        "vite.config.ts",
        "svelte.config.js",
        "tsconfig.json",
        "index.html",
        "src/main.ts",
        "src/App.svelte",
        "src/app.css",
        "src/components/Game.svelte",
    ],
}

# OAuth helper server, identical for every framework and template.
_BACKEND_FILES: list[tuple[str, str]] = [
    ("backend/package.json.j2", "server/package.json"),
    ("backend/index.js.j2", "server/index.js"),
    ("backend/env.example.j2", "server/.env.example"),
    ("backend/README.md.j2", "server/README.md"),
]


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class GeneratedFile(BaseModel):
    """A single generated file, relative to the project root."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(..., description="POSIX path relative to the project root")
    content: str


class Scaffold(BaseModel):
    """Everything a generation run produces, before it touches the disk."""

    model_config = ConfigDict(frozen=True)

    project_root: str = Field(..., description="Sanitized project folder name")
    directories: tuple[str, ...] = Field(default=REQUIRED_DIRECTORIES)
    files: tuple[GeneratedFile, ...]
    primary_file: str = Field(..., description="File to open once the project is ready")
    prompt_text: str = Field(..., description="Starting prompt for the assistant")

    def paths(self) -> list[str]:
        return [f.relative_path for f in self.files]

    def file_map(self) -> dict[str, str]:
        """Return ``{relative_path: content}`` in generation order."""
        return {f.relative_path: f.content for f in self.files}

    def content_of(self, relative_path: str) -> str:
        for f in self.files:
            if f.relative_path == relative_path:
                return f.content
        raise KeyError(relative_path)


class ScaffoldWriteError(ScaffoldError):
    """Raised when a directory or file of the scaffold cannot be written.

    Files written before the failure are left in place.
    """

    def __init__(self, action: str, path: Path, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        super().__init__(f"{action} {path}: {cause}")


class UnsafeProjectPathError(ScaffoldError):
    """Raised when the project name would place the project outside its base directory."""

    def __init__(self, project_root: str, base_dir: Path) -> None:
        self.project_root = project_root
        self.base_dir = base_dir
        super().__init__(f"Project name {project_root!r} does not stay inside {base_dir}")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """Maps (name, framework, template, options) to a concrete file tree.

    The generated tree always contains:
    - ``contracts/`` with the template's sCrypt contract
    - ``src/components``, ``src/lib``, ``src/services``
    - ``.env.example``, ``README.md``, ``AI_RULES.md``
    - optionally ``PRD.md`` and ``tasks.md``
    - the framework's frontend files and the fixed ``server/`` OAuth helper
    """

    def __init__(
        self,
        renderer: TemplateRenderer | None = None,
        fallback_name: str = FALLBACK_PROJECT_NAME,
    ) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.fallback_name = fallback_name

    # -- Public API --------------------------------------------------------

    def generate(
        self,
        name: str,
        framework: Framework,
        template: Template,
        description: Optional[str] = None,
        generate_docs: bool = True,
    ) -> Scaffold:
        """Build the scaffold for the given choices without writing anything.

        Args:
            name: Project name as typed; trimmed, blank falls back to
                ``bitcoin-app``.
            framework: Frontend framework; selects the frontend file set.
            template: Project archetype; selects the contract file.
            description: Free text embedded in the contract for ``Custom``
                only, and only when non-blank.
            generate_docs: Whether to add ``PRD.md`` and ``tasks.md``.

        Returns:
            A frozen ``Scaffold`` describing every directory and file.
        """
        project_name = sanitize_project_name(name, self.fallback_name)
        custom = normalize_description(description) if template.accepts_description else None
        prompt_text = build_instruction_prompt(framework, template, custom)
        context = self._build_context(project_name, framework, template, custom)

        files: dict[str, str] = {}

        # 1. Root documents
        for template_name, output_name in _ROOT_FILES:
            files[output_name] = self.renderer.render(template_name, context)

        # 2. Contract
        files[contract_path(template)] = self.renderer.render(
            f"contracts/{template.value}.ts.j2", context
        )

        # 3. Planning documents
        if generate_docs:
            files["PRD.md"] = render_prd(prompt_text)
            files["tasks.md"] = TASKS_CHECKLIST

        # 4. Frontend
        for template_name, output_name in frontend_file_table(framework):
            files[output_name] = self.renderer.render(template_name, context)

        # 5. Backend
        for template_name, output_name in _BACKEND_FILES:
            files[output_name] = self.renderer.render(template_name, context)

        return Scaffold(
            project_root=project_name,
            files=tuple(
                GeneratedFile(relative_path=path, content=content)
                for path, content in files.items()
            ),
            primary_file=contract_path(template),
            prompt_text=prompt_text,
        )

    def generate_from_selection(self, selection: FrozenSelection) -> Scaffold:
        """Generate from a frozen wizard snapshot."""
        return self.generate(
            selection.name,
            selection.framework,
            selection.template,
            selection.description,
            selection.generate_docs,
        )

    async def write(self, scaffold: Scaffold, base_dir: str | Path) -> Path:
        """Write *scaffold* under ``base_dir/<project_root>``.

        Directories and files are written one at a time, in order.  The
        first failure aborts the sequence with ``ScaffoldWriteError``; no
        rollback is attempted.  A project root that is absolute, or that
        resolves to *base_dir* itself or outside it, raises
        ``UnsafeProjectPathError`` before anything is written.

        Returns:
            Path to the project root.
        """
        base = Path(base_dir)
        project_path = base / scaffold.project_root
        resolved_base = base.resolve()
        resolved_project = project_path.resolve()
        if resolved_project == resolved_base or not resolved_project.is_relative_to(resolved_base):
            raise UnsafeProjectPathError(scaffold.project_root, base)

        for directory in [project_path, *(project_path / d for d in scaffold.directories)]:
            try:
                await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
            except OSError as exc:
                raise ScaffoldWriteError("create directory", directory, exc) from exc

        for generated in scaffold.files:
            target = project_path / generated.relative_path
            try:
                await asyncio.to_thread(write_text_file, target, generated.content)
            except OSError as exc:
                raise ScaffoldWriteError("write file", target, exc) from exc

        return project_path

    # -- Context building --------------------------------------------------

    def _build_context(
        self,
        project_name: str,
        framework: Framework,
        template: Template,
        description: Optional[str],
    ) -> dict[str, Any]:
        """Build the Jinja2 template context for one generation run."""
        return {
            "project_name": project_name,
            "project_slug": slugify(project_name) or self.fallback_name,
            "framework_name": framework.display_name,
            "framework_key": framework.key,
            "template_name": template.display_name,
            "template_key": template.value,
            "contract_filename": template.contract_filename,
            "contract_stem": template.contract_stem,
            "contract_class": template.contract_class,
            "contract_path": contract_path(template),
            "description": description,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def sanitize_project_name(name: str, fallback: str = FALLBACK_PROJECT_NAME) -> str:
    """Trim *name*; an empty result becomes *fallback*."""
    trimmed = name.strip()
    return trimmed or fallback


def contract_path(template: Template) -> str:
    """Relative path of the template's contract source."""
    return f"contracts/{template.contract_filename}"


def frontend_file_table(framework: Framework) -> list[tuple[str, str]]:
    """Return the (template, output) pairs for *framework*'s frontend."""
    own = [
        (f"frontend/{framework.key}/{output}.j2", output)
        for output in _FRAMEWORK_FILES[framework]
    ]
    return own + list(_SHARED_FRONTEND_FILES)


def generate(
    name: str,
    framework: Framework,
    template: Template,
    description: Optional[str] = None,
    generate_docs: bool = True,
) -> Scaffold:
    """Module-level shortcut for ``ScaffoldGenerator().generate(...)``."""
    return ScaffoldGenerator().generate(name, framework, template, description, generate_docs)
