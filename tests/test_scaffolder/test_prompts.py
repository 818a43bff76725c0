"""Tests for the assistant starting prompt and planning documents."""

from __future__ import annotations

import pytest

from bitcoin_app_wizard.scaffolder.prompts import (
    TASKS_CHECKLIST,
    build_instruction_prompt,
    render_prd,
)
from bitcoin_app_wizard.wizard.models import Framework, Template

pytestmark = pytest.mark.unit


class TestBuildInstructionPrompt:
    @pytest.mark.parametrize("framework", list(Framework))
    @pytest.mark.parametrize("template", list(Template))
    def test_names_framework_and_contract(self, framework, template):
        text = build_instruction_prompt(framework, template)
        assert framework.display_name in text
        assert f"contracts/{template.contract_filename}" in text

    def test_stock_variant(self):
        text = build_instruction_prompt(Framework.REACT, Template.COUNTER)
        assert "complete the Counter implementation" in text
        assert "DO NOT run any CLI commands." in text
        assert "YoursDirectSigner" not in text

    def test_custom_variant(self):
        text = build_instruction_prompt(Framework.VUE, Template.CUSTOM, "a lottery")
        assert "EDIT the existing files to implement: a lottery" in text
        assert "YoursDirectSigner" in text

    def test_blank_custom_uses_stock_variant(self):
        assert build_instruction_prompt(
            Framework.VUE, Template.CUSTOM, "  "
        ) == build_instruction_prompt(Framework.VUE, Template.CUSTOM)

    def test_description_ignored_for_stock_template(self):
        assert build_instruction_prompt(
            Framework.REACT, Template.AUCTION, "ignored"
        ) == build_instruction_prompt(Framework.REACT, Template.AUCTION)

    def test_mentions_rules(self):
        text = build_instruction_prompt(Framework.SVELTE, Template.HELLO_WORLD)
        assert "CRITICAL RULES:" in text
        assert text.endswith("common pitfalls.")


class TestDocuments:
    def test_prd_layout(self):
        assert render_prd("do it") == "# Project Requirements\n\nPrompt:\n\ndo it\n"

    def test_tasks_checklist(self):
        lines = TASKS_CHECKLIST.splitlines()
        assert len(lines) == 7
        assert lines[0] == "- [ ] Implement sCrypt covenant contract"
        assert TASKS_CHECKLIST.endswith("\n")
