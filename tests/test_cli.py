"""
Tests for the CLI interface.
"""
import json
import logging

import pytest
import yaml
from typer.testing import CliRunner

from team_usage.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL, _format_currency, _format_tokens

runner = CliRunner()


@pytest.fixture
def events_file(tmp_path):
    """Write a root-plus-child event log."""
    path = tmp_path / "events.jsonl"
    events = [
        {
            "session_id": "root",
            "agent_context": {"agent_name": "orchestrator"},
            "self_usage": {"input_tokens": 1000, "output_tokens": 234, "cost": 0.5},
            "inclusive_usage": {"input_tokens": 1000, "output_tokens": 234, "cost": 0.5}
        },
        {
            "session_id": "child1",
            "agent_context": {"agent_name": "researcher"},
            "self_usage": {"input_tokens": 200, "output_tokens": 100, "cost": 1.25}
        }
    ]
    path.write_text("\n".join(json.dumps(event) for event in events), encoding="utf-8")
    return str(path)


@pytest.fixture
def reset_logging():
    """Drop handlers the verbose flag installs on the package logger."""
    logger = logging.getLogger("team_usage")
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


class TestFormatting:
    """Test number formatting helpers."""

    def test_token_grouping(self):
        """Test token counts use grouping separators."""
        assert _format_tokens(1234567) == "1,234,567"
        assert _format_tokens(12) == "12"

    def test_currency(self):
        """Test currency has a dollar prefix and two decimals."""
        from decimal import Decimal
        assert _format_currency(Decimal("1234.5")) == "$1,234.50"
        assert _format_currency(Decimal("0")) == "$0.00"


class TestCLI:
    """Test CLI commands."""

    def test_no_command_prints_hint(self):
        """Test running without a command prints usage help."""
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Use --help" in result.output

    def test_report_vertical(self, events_file):
        """Test the default vertical report."""
        result = runner.invoke(app, ["report", events_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "TOTAL USAGE (Team Total)" in result.output
        # 1,234 + 300 tokens; $0.50 + $1.25
        assert "Tokens: 1,534 | Cost: $1.75" in result.output
        assert "SESSION BREAKDOWN" in result.output
        assert "orchestrator" in result.output
        assert "researcher" in result.output
        assert result.output.index("orchestrator") < result.output.index("researcher")

    def test_report_compact(self, events_file):
        """Test the single-line report."""
        result = runner.invoke(app, ["report", events_file, "--compact"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Team Total | Tokens: 1,534 | Cost: $1.75" in result.output
        assert "SESSION BREAKDOWN" not in result.output

    def test_report_empty_log(self, tmp_path):
        """Test an empty event log prints the empty breakdown text."""
        path = tmp_path / "empty.jsonl"
        path.write_text("", encoding="utf-8")

        result = runner.invoke(app, ["report", str(path)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Tokens: 0 | Cost: $0.00" in result.output
        assert "No session usage yet" in result.output
        assert "TOTAL USAGE (Team Total)" in result.output

    def test_report_with_config(self, events_file, tmp_path):
        """Test labels and layout come from the config file."""
        config_path = tmp_path / "report.yaml"
        config_path.write_text(yaml.dump({
            "labels": {"team_total": "All Agents"},
            "layout": "horizontal"
        }), encoding="utf-8")

        result = runner.invoke(app, ["report", events_file, "--config", str(config_path)])

        assert result.exit_code == EXIT_CODE_PASS
        assert "All Agents | Tokens: 1,534" in result.output

    def test_report_missing_file(self, tmp_path):
        """Test a missing event file fails."""
        result = runner.invoke(app, ["report", str(tmp_path / "missing.jsonl")])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Error:" in result.output
        assert "Event file not found" in result.output

    def test_report_malformed_event(self, tmp_path):
        """Test a malformed event fails with its line number."""
        path = tmp_path / "bad.jsonl"
        path.write_text('{"session_id": 1}\n', encoding="utf-8")

        result = runner.invoke(app, ["report", str(path)])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "line 1" in result.output

    def test_report_invalid_config(self, events_file, tmp_path):
        """Test an invalid config fails."""
        config_path = tmp_path / "report.yaml"
        config_path.write_text(yaml.dump({"layout": "diagonal"}), encoding="utf-8")

        result = runner.invoke(app, ["report", events_file, "-c", str(config_path)])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "layout" in result.output

    def test_demo(self):
        """Test the demo team report."""
        result = runner.invoke(app, ["demo"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Tokens: 12,800 | Cost: $0.04" in result.output
        assert "orchestrator" in result.output
        assert "researcher" in result.output
        assert "writer" in result.output

    def test_demo_compact(self):
        """Test the demo in compact form."""
        result = runner.invoke(app, ["demo", "--compact"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Team Total | Tokens: 12,800 | Cost: $0.04" in result.output

    def test_verbose_flag(self, events_file, reset_logging):
        """Test the verbose flag is accepted before a command."""
        result = runner.invoke(app, ["--verbose", "report", events_file, "--compact"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Team Total" in result.output
        assert logging.getLogger("team_usage").level == logging.DEBUG

    def test_quiet_by_default(self, events_file, reset_logging):
        """Test no log handler is installed without the verbose flag."""
        result = runner.invoke(app, ["report", events_file, "--compact"])

        assert result.exit_code == EXIT_CODE_PASS
        assert reset_logging.handlers == []
        assert reset_logging.level == logging.NOTSET
