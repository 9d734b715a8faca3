"""
Tests for the add-context command line.
"""

import io

import pytest

from add_context.cli import build_parser, main
from add_context.wizard import ConsolePrompter

from conftest import ScriptedInput, WIZARD_ANSWERS


@pytest.fixture
def env_root(monkeypatch, project_root, tmp_path):
    """Point the CLI at the test project and a throwaway global directory."""
    monkeypatch.setenv("ADD_CONTEXT_PROJECT_ROOT", str(project_root))
    monkeypatch.setenv("ADD_CONTEXT_GLOBAL_CONTEXT_DIR", str(tmp_path / "global"))
    return project_root


def scripted(answers):
    output = io.StringIO()
    return ConsolePrompter(input_func=ScriptedInput(answers), output=output), output


class TestArgumentParsing:
    """Tests for flag handling."""

    def test_defaults(self):
        """Test no flags means a full interactive session."""
        args = build_parser().parse_args([])
        assert not (args.update or args.tech_stack or args.patterns or args.use_global)

    def test_global_combines_with_mode(self):
        """Test --global can be combined with a mode flag."""
        args = build_parser().parse_args(["--tech-stack", "--global"])
        assert args.tech_stack and args.use_global

    def test_help_exits_zero(self, capsys):
        """Test --help prints usage without side effects."""
        assert main(["--help"]) == 0
        assert "--tech-stack" in capsys.readouterr().out

    def test_mode_flags_are_exclusive(self, capsys):
        """Test two mode flags are rejected with exit code 1."""
        assert main(["--update", "--patterns"]) == 1
        assert "not allowed with argument" in capsys.readouterr().err

    def test_unknown_flag_exits_one(self):
        """Test an unrecognised flag maps to the general failure code."""
        assert main(["--frobnicate"]) == 1


@pytest.mark.usefixtures("env_root")
class TestExitCodes:
    """Tests for exit codes."""

    def test_patterns_without_document(self, capsys):
        """Test --patterns exits 1 when there is nothing to update."""
        prompter, _ = scripted([])
        assert main(["--patterns"], prompter=prompter) == 1
        assert "❌ Error: No existing patterns found" in capsys.readouterr().err

    def test_update_without_document(self, capsys):
        """Test --update exits 1 when there is nothing to update."""
        prompter, _ = scripted([])
        assert main(["--update"], prompter=prompter) == 1
        assert "❌ Error:" in capsys.readouterr().err

    def test_cancel_exits_zero(self, env_root):
        """Test declining at the Ready prompt exits 0."""
        prompter, output = scripted(["n"])
        assert main([], prompter=prompter) == 0
        assert "Exiting." in output.getvalue()
        assert not (env_root / ".opencode").exists()

    def test_closed_input_exits_zero(self):
        """Test EOF at a prompt is treated as a cancel."""
        prompter, _ = scripted([])
        assert main([], prompter=prompter) == 0

    def test_full_session(self, env_root):
        """Test a complete session exits 0 and writes the document."""
        prompter, _ = scripted(["y", *WIZARD_ANSWERS, "y"])
        assert main([], prompter=prompter) == 0
        document = env_root / ".opencode" / "context" / "project-intelligence" / "technical-domain.md"
        assert document.exists()

    def test_global_target(self, env_root, tmp_path):
        """Test --global writes to the per-user directory."""
        prompter, _ = scripted(["FastAPI", "Python", "SQLite", "None", "y"])
        assert main(["--tech-stack", "--global"], prompter=prompter) == 0
        assert (tmp_path / "global" / "technical-domain.md").exists()
        assert not (env_root / ".opencode").exists()

    def test_validation_failure_exits_one(self, monkeypatch, capsys):
        """Test a refused document exits 1."""
        monkeypatch.setenv("ADD_CONTEXT_DOC_MAX_LINES", "5")
        prompter, _ = scripted(["y", *WIZARD_ANSWERS])
        assert main([], prompter=prompter) == 1
        assert "Validation failed" in capsys.readouterr().err

    def test_bad_setting_reported_once(self, monkeypatch, capsys):
        """Test an invalid environment value exits 1 with a single message."""
        monkeypatch.setenv("ADD_CONTEXT_DEBUG_MODE", "maybe")
        prompter, _ = scripted([])
        assert main([], prompter=prompter) == 1
        err = capsys.readouterr().err
        assert "❌ Error:" in err
        assert "debug_mode" in err
