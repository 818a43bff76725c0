"""Bitcoin App Wizard scaffolder -- generates sCrypt + Yours Wallet projects.

This module turns a frozen wizard selection into a complete project file set
and writes it under a caller-supplied base directory.

Quick usage::

    from bitcoin_app_wizard.scaffolder import ScaffoldGenerator
    from bitcoin_app_wizard.wizard import Framework, Template

    generator = ScaffoldGenerator()
    scaffold = generator.generate("my-app", Framework.REACT, Template.COUNTER)
    project_path = await generator.write(scaffold, "/tmp/output")
"""

from bitcoin_app_wizard.scaffolder.generator import (
    FALLBACK_PROJECT_NAME,
    REQUIRED_DIRECTORIES,
    GeneratedFile,
    Scaffold,
    ScaffoldGenerator,
    ScaffoldWriteError,
    UnsafeProjectPathError,
    contract_path,
    generate,
    sanitize_project_name,
)
from bitcoin_app_wizard.scaffolder.prompts import build_instruction_prompt
from bitcoin_app_wizard.scaffolder.templates import (
    ScaffoldError,
    TemplateNotFoundError,
    TemplateRenderer,
)

__all__ = [
    "FALLBACK_PROJECT_NAME",
    "REQUIRED_DIRECTORIES",
    "GeneratedFile",
    "Scaffold",
    "ScaffoldError",
    "ScaffoldGenerator",
    "ScaffoldWriteError",
    "TemplateNotFoundError",
    "TemplateRenderer",
    "UnsafeProjectPathError",
    "build_instruction_prompt",
    "contract_path",
    "generate",
    "sanitize_project_name",
]
