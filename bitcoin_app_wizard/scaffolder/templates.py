"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``bitcoin_app_wizard/scaffolder/templates/`` directory and renders them with
project-specific context data.  Rendering is pure: the renderer never
touches the output filesystem, it only produces strings.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for scaffolding failures."""


class TemplateNotFoundError(ScaffoldError):
    """Raised when a scaffold template is missing from the template tree."""

    def __init__(self, template_path: str) -> None:
        self.template_path = template_path
        super().__init__(f"Scaffold template not found: {template_path}")


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer loads ``.j2`` template files from a configurable
    template directory.  Templates are rendered with a context dictionary
    that carries the project name, framework, template and contract
    metadata.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["comment_safe"] = comment_safe

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"frontend/react/src/App.tsx.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            TemplateNotFoundError: If *template_path* does not exist.
        """
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(template_path) from exc
        return template.render(**context)


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def slugify(value: str) -> str:
    """Convert a string to an npm-package-safe slug (hyphenated)."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower().strip())
    return slug.strip("-")


def comment_safe(value: str) -> str:
    """Neutralise ``*/`` so free text can sit inside a block comment."""
    return value.replace("*/", "* /")
