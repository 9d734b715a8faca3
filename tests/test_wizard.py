"""
Tests for the console prompter and the field collector.
"""

import io

import pytest

from add_context.errors import SessionCancelled
from add_context.wizard import END_SENTINEL, ConsolePrompter, FieldCollector

from conftest import ScriptedInput, WIZARD_ANSWERS


def prompter_for(answers):
    return ConsolePrompter(input_func=ScriptedInput(answers), output=io.StringIO())


class TestConsolePrompter:
    """Tests for the three input modes."""

    def test_ask_strips(self):
        """Test single answers are trimmed."""
        assert prompter_for(["  2  "]).ask("Choose: ") == "2"

    def test_confirm_only_accepts_y(self):
        """Test that only y confirms."""
        assert prompter_for(["y"]).confirm("Proceed?")
        assert prompter_for(["Y"]).confirm("Proceed?")
        assert not prompter_for(["yes"]).confirm("Proceed?")
        assert not prompter_for([""]).confirm("Proceed?")

    def test_ask_on_closed_input_cancels(self):
        """Test EOF at a prompt raises SessionCancelled."""
        with pytest.raises(SessionCancelled):
            prompter_for([]).ask("Choose: ")

    def test_interrupt_cancels(self):
        """Test Ctrl-C at a prompt raises SessionCancelled."""
        def interrupt(prompt=""):
            raise KeyboardInterrupt

        prompter = ConsolePrompter(input_func=interrupt, output=io.StringIO())
        with pytest.raises(SessionCancelled):
            prompter.ask("Choose: ")

    def test_list_ends_on_blank_line(self):
        """Test list mode stops at the first blank line."""
        items = prompter_for([" one ", "two", "", "three"]).read_list()
        assert items == ["one", "two"]

    def test_list_ends_on_sentinel(self):
        """Test list mode also stops at the end sentinel."""
        assert prompter_for(["one", END_SENTINEL, "two"]).read_list() == ["one"]

    def test_list_ends_on_closed_input(self):
        """Test list mode returns what it has at EOF."""
        assert prompter_for(["one"]).read_list() == ["one"]

    def test_blob_keeps_blank_lines_and_indentation(self):
        """Test blob mode ends on the sentinel only."""
        blob = prompter_for(["def f():", "", "    return 1", END_SENTINEL]).read_blob()
        assert blob == "def f():\n\n    return 1"

    def test_header_layout(self):
        """Test headers are framed by dividers."""
        output = io.StringIO()
        ConsolePrompter(input_func=ScriptedInput([]), output=output).header("Title")
        lines = output.getvalue().split("\n")
        assert lines[0] == "━" * 80
        assert lines[1] == "Title"
        assert lines[2] == "━" * 80


class TestFieldCollector:
    """Tests for the six-question wizard."""

    def test_skip_returns_none(self):
        """Test typing skip gives no pattern."""
        collector = FieldCollector(prompter_for(["skip", END_SENTINEL]))
        assert collector.ask_pattern("Pattern:") is None

    def test_fresh_wizard(self):
        """Test a full run without a seed."""
        data = FieldCollector(prompter_for(WIZARD_ANSWERS)).run_wizard()
        assert data.version == "1.0"
        assert data.tech_stack.language == "TypeScript"
        assert data.naming.components == "PascalCase"
        assert data.component_pattern is None
        assert data.security == ["Validate all user input"]

    def test_seed_is_not_modified(self, existing_record):
        """Test that running with a seed works on a copy."""
        before = existing_record.model_copy(deep=True)
        data = FieldCollector(prompter_for(WIZARD_ANSWERS)).run_wizard(seed=existing_record)
        assert existing_record == before
        assert data.version == "1.3"
        assert data.standards == ["TypeScript strict mode", "Validate w/ Zod"]
        assert data.security == ["Validate all user input"]
        # Q3 was skipped
        assert data.component_pattern == existing_record.component_pattern
