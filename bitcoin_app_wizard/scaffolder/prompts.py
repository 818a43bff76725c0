"""Instructional prompt text and planning documents for new projects.

The prompt is written into ``PRD.md`` (when docs are enabled) and injected
into the assistant panel after the project opens.  Two variants exist: one
for a custom contract description and one for the stock templates.  Both
name the frontend framework and the contract file exactly as chosen.
"""

from __future__ import annotations

import textwrap
from typing import Optional

from bitcoin_app_wizard.wizard.models import Framework, Template, normalize_description

_CRITICAL_RULES = textwrap.dedent("""\
    CRITICAL RULES:
    - NEVER import .scrypt.ts files directly into frontend components
    - Contracts must be compiled: `npx scrypt-cli compile`
    - Load compiled artifacts dynamically, not via direct import
    - When adding npm packages, ALSO update package.json dependencies
    - Use toRaw() when passing Vue reactive contract instances to SDK methods
    - Use bindTxBuilder() for custom transaction building with ANYONECANPAY_SINGLE""")

_CLOSING = "See AI_RULES.md for full guidelines on tx building, signer patterns, and common pitfalls."

TASKS_CHECKLIST = textwrap.dedent("""\
    - [ ] Implement sCrypt covenant contract
    - [ ] Wire wallet connect flow
    - [ ] Build game UI and state management
    - [ ] Add transaction signing and broadcasting
    - [ ] Style with Tailwind (customize as needed)
    - [ ] Test on testnet
    - [ ] Update README with deploy instructions
    """)


def build_instruction_prompt(
    framework: Framework,
    template: Template,
    description: Optional[str] = None,
) -> str:
    """Return the starting prompt for the assistant.

    *description* is only honoured for the ``Custom`` template, and only
    when it has non-blank text.
    """
    custom = normalize_description(description) if template.accepts_description else None
    contract = template.contract_filename

    if custom is not None:
        return (
            f"The project scaffold is already created with {framework.display_name} frontend "
            "and Yours Wallet integration. "
            "DO NOT run any CLI commands like 'npm create' or 'npx create-vue'. "
            f"Instead, EDIT the existing files to implement: {custom}\n\n"
            f"{_CRITICAL_RULES}\n\n"
            "Focus on:\n"
            f"1. Complete the smart contract logic in contracts/{contract}\n"
            "2. Update the Game component to interact with the COMPILED contract artifact\n"
            "3. Use YoursDirectSigner for settlement transactions\n\n"
            f"{_CLOSING}"
        )

    return (
        f"The project scaffold is already created with {framework.display_name} frontend "
        "and Yours Wallet integration. "
        "DO NOT run any CLI commands. "
        f"EDIT the existing files to complete the {template.display_name} implementation.\n\n"
        f"{_CRITICAL_RULES}\n\n"
        "Focus on:\n"
        f"1. Complete the smart contract logic in contracts/{contract}\n"
        "2. Update the Game component to interact with the COMPILED contract artifact\n\n"
        f"{_CLOSING}"
    )


def render_prd(prompt_text: str) -> str:
    """Body of ``PRD.md``: the prompt under a requirements heading."""
    return f"# Project Requirements\n\nPrompt:\n\n{prompt_text}\n"
