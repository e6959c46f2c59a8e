"""
Tests for utils.console module - dual-mode CLI output utilities.

This module tests console output functions to ensure:
- OutputMode correctly manages format/quiet state and JSON buffering
- Output functions (success, error, warning, info, notice) work in all modes
- Display functions adapt to human, agent and quiet modes
- No ANSI codes in agent/quiet modes
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from copilot_prompt_sync.sync.reconciler import ReconcileReport
from copilot_prompt_sync.utils.console import (
    OutputMode,
    error,
    info,
    notice,
    output_mode,
    print_banner,
    print_languages,
    print_prompt_table,
    print_reconcile_summary,
    print_settings_writes,
    spinner,
    success,
    warning,
)

# ========================================================================
# Fixtures
# ========================================================================


@pytest.fixture
def reset_output_mode():
    """Reset global output_mode to default state after each test."""
    original_format = output_mode.format
    original_quiet = output_mode.quiet
    output_mode._json_buffer.clear()

    yield

    # Restore original state
    output_mode.format = original_format
    output_mode.quiet = original_quiet
    output_mode._json_buffer.clear()


@pytest.fixture
def sample_report():
    """Report of a pass with one write and one error."""
    return ReconcileReport(
        workspace=Path("/work/app"),
        started_at="2025-11-02T08:30:45Z",
        steps=["global_instructions", "language_specific"],
        writes=[
            ("github.copilot.chat.codeGeneration.instructions", [{"text": "Use tabs."}])
        ],
        errors=[("language_specific", "Invalid JSON in copilot.json")],
    )


# ========================================================================
# OutputMode
# ========================================================================


class TestOutputMode:
    """Test OutputMode state and buffering."""

    def test_default_initialization(self):
        """OutputMode should default to text format and not quiet."""
        mode = OutputMode()
        assert mode.format == "text"
        assert mode.quiet is False
        assert mode._json_buffer == {}

    def test_invalid_format_raises_error(self):
        """OutputMode should raise ValueError for invalid format."""
        with pytest.raises(ValueError) as exc_info:
            OutputMode(format_type="yaml")
        assert "Invalid format: yaml" in str(exc_info.value)

    def test_predicates(self):
        """is_human() and is_agent() follow the format."""
        assert OutputMode("text").is_human() is True
        assert OutputMode("json").is_agent() is True
        assert OutputMode("json").is_human() is False

    def test_append_json_builds_list(self):
        """append_json() should accumulate values under one key."""
        mode = OutputMode("json")
        mode.append_json("notices", "first")
        mode.append_json("notices", "second")

        assert mode._json_buffer["notices"] == ["first", "second"]

    def test_flush_json_outputs_and_clears(self, capsys):
        """flush_json() prints the buffer once and empties it."""
        mode = OutputMode("json")
        mode.add_json("status", "success")
        mode.flush_json()
        mode.flush_json()

        out = capsys.readouterr().out
        assert json.loads(out) == {"status": "success"}
        assert mode._json_buffer == {}

    def test_flush_json_noop_in_text_mode(self, capsys):
        """flush_json() prints nothing in human mode."""
        mode = OutputMode("text")
        mode.add_json("status", "success")
        mode.flush_json()

        assert capsys.readouterr().out == ""


# ========================================================================
# Message functions
# ========================================================================


class TestMessageFunctions:
    """Test success/error/warning/info/notice in all modes."""

    @patch("copilot_prompt_sync.utils.console.console")
    def test_success_human(self, mock_console, reset_output_mode):
        """success() prints a green check in human mode."""
        output_mode.format = "text"
        success("Done")

        printed = mock_console.print.call_args[0][0]
        assert "✓" in printed
        assert "Done" in printed

    def test_success_agent(self, reset_output_mode):
        """success() buffers status and message in agent mode."""
        output_mode.format = "json"
        success("Done")

        assert output_mode._json_buffer["status"] == "success"
        assert output_mode._json_buffer["message"] == "Done"

    @patch("copilot_prompt_sync.utils.console.console_err")
    def test_error_human_goes_to_stderr(self, mock_console_err, reset_output_mode):
        """error() prints to the stderr console in human mode."""
        output_mode.format = "text"
        error("Broken")

        assert "Broken" in mock_console_err.print.call_args[0][0]

    def test_errors_accumulate_in_agent_mode(self, reset_output_mode):
        """Multiple errors are all kept."""
        output_mode.format = "json"
        error("first")
        error("second")

        assert output_mode._json_buffer["status"] == "error"
        assert output_mode._json_buffer["errors"] == ["first", "second"]

    def test_warning_agent(self, reset_output_mode):
        """warning() collects warnings in agent mode."""
        output_mode.format = "json"
        warning("careful")

        assert output_mode._json_buffer["warnings"] == ["careful"]

    @patch("copilot_prompt_sync.utils.console.console")
    def test_info_silent_when_quiet(self, mock_console, reset_output_mode):
        """info() is suppressed in quiet mode."""
        output_mode.format = "text"
        output_mode.quiet = True
        info("hidden")

        mock_console.print.assert_not_called()

    def test_notice_shown_when_quiet(self, capsys, reset_output_mode):
        """notice() is never suppressed; quiet mode prints it plainly."""
        output_mode.format = "text"
        output_mode.quiet = True
        notice("Please reload VS Code to apply the new Copilot settings")

        out = capsys.readouterr().out
        assert out == "Please reload VS Code to apply the new Copilot settings\n"

    def test_notice_agent(self, reset_output_mode):
        """notice() collects notices in agent mode."""
        output_mode.format = "json"
        notice("one")
        notice("two")

        assert output_mode._json_buffer["notices"] == ["one", "two"]

    @patch("copilot_prompt_sync.utils.console.console")
    def test_spinner_human(self, mock_console, reset_output_mode):
        """spinner() shows a Rich status in human mode."""
        output_mode.format = "text"
        with spinner("Working..."):
            pass

        mock_console.status.assert_called_once()

    def test_spinner_agent_yields_none(self, reset_output_mode):
        """spinner() is silent in agent mode."""
        output_mode.format = "json"
        with spinner("Working...") as status:
            assert status is None


# ========================================================================
# Display functions
# ========================================================================


class TestDisplayFunctions:
    """Test display helpers in all modes."""

    @patch("copilot_prompt_sync.utils.console.console")
    def test_banner_hidden_in_agent_mode(self, mock_console, reset_output_mode):
        """Banner is only printed for humans."""
        output_mode.format = "json"
        print_banner("0.1.0")

        mock_console.print.assert_not_called()

    def test_reconcile_summary_agent(self, capsys, sample_report, reset_output_mode):
        """Agent mode prints the report as JSON with no ANSI codes."""
        output_mode.format = "json"
        print_reconcile_summary(sample_report)

        out = capsys.readouterr().out
        assert "\x1b[" not in out
        data = json.loads(out)
        assert data["report"]["workspace"] == "/work/app"
        assert data["report"]["writes"][0]["value"] == [{"text": "Use tabs."}]
        assert data["report"]["errors"][0]["step"] == "language_specific"

    def test_reconcile_summary_quiet(self, capsys, sample_report, reset_output_mode):
        """Quiet mode prints writes and errors tab-separated."""
        output_mode.format = "text"
        output_mode.quiet = True
        print_reconcile_summary(sample_report)

        assert capsys.readouterr().out == "1\t1\n"

    @patch("copilot_prompt_sync.utils.console.console")
    def test_reconcile_summary_human(self, mock_console, sample_report, reset_output_mode):
        """Human mode prints one panel."""
        output_mode.format = "text"
        print_reconcile_summary(sample_report)

        mock_console.print.assert_called_once()

    def test_settings_writes_quiet(self, capsys, reset_output_mode):
        """Quiet mode prints key and JSON value per line."""
        output_mode.format = "text"
        output_mode.quiet = True
        print_settings_writes([("chat.promptFiles", {"/w/.github/prompts": True})])

        assert capsys.readouterr().out == 'chat.promptFiles\t{"/w/.github/prompts": true}\n'

    def test_settings_writes_agent(self, reset_output_mode):
        """Agent mode buffers planned writes."""
        output_mode.format = "json"
        print_settings_writes([("k", 1)])

        assert output_mode._json_buffer["planned_writes"] == [{"key": "k", "value": 1}]

    def test_prompt_table_quiet(self, capsys, reset_output_mode):
        """Quiet mode prints language, kind and JSON text per line."""
        output_mode.format = "text"
        output_mode.quiet = True
        print_prompt_table({"rust": {"CODE_REVIEW": "No unwrap."}})

        assert capsys.readouterr().out == 'rust\tCODE_REVIEW\t"No unwrap."\n'

    def test_languages_agent(self, capsys, reset_output_mode):
        """Agent mode prints the language list as JSON."""
        output_mode.format = "json"
        print_languages(("python", "rust"))

        assert json.loads(capsys.readouterr().out) == {"languages": ["python", "rust"]}
