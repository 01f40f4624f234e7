# ==============================================================================
# Tests for CLI Help Commands
# ==============================================================================
"""
Tests that all CLI help commands generate the expected output.

Verifies that every command and subcommand in the pulse CLI:
- Exits with code 0 when invoked with --help
- Contains the expected description text
- Lists the expected subcommands or options

These tests use the real app from pulse.app (not minimal Typer apps)
to ensure the full command tree is wired up correctly and that Typer can
introspect all command function signatures without errors.
"""

from typer.testing import CliRunner

from pulse.app import app

runner = CliRunner()


# ==============================================================================
# Root App
# ==============================================================================


class TestRootHelp:
    """Tests for the root `pulse --help` output."""

    def test_exit_code(self):
        """Root --help exits successfully."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0

    def test_description(self):
        """Root --help shows the app description."""
        result = runner.invoke(app, ["--help"])
        assert "Self-hosted web analytics server CLI" in result.output

    def test_lists_all_subcommands(self):
        """Root --help lists every top-level command."""
        result = runner.invoke(app, ["--help"])
        for cmd in ["config", "data", "report", "serve"]:
            assert cmd in result.output, f"Missing command: {cmd}"


# ==============================================================================
# Serve / Report
# ==============================================================================


class TestServeHelp:
    """Tests for `pulse serve --help`."""

    def test_options(self):
        """Serve --help lists bind options."""
        result = runner.invoke(app, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--host" in result.output
        assert "--port" in result.output
        assert "--reload" in result.output


class TestReportHelp:
    """Tests for `pulse report --help`."""

    def test_description(self):
        """Report --help shows its description."""
        result = runner.invoke(app, ["report", "--help"])
        assert result.exit_code == 0
        assert "Show the session report" in result.output

    def test_options(self):
        """Report --help lists its output options."""
        result = runner.invoke(app, ["report", "--help"])
        for option in ["--json", "--breakdowns", "--sessions"]:
            assert option in result.output, f"Missing option: {option}"


# ==============================================================================
# Data
# ==============================================================================


class TestDataHelp:
    """Tests for `pulse data` help output."""

    def test_exit_code(self):
        """Data --help exits successfully."""
        result = runner.invoke(app, ["data", "--help"])
        assert result.exit_code == 0

    def test_description(self):
        """Data --help shows its description."""
        result = runner.invoke(app, ["data", "--help"])
        assert "Event data management" in result.output

    def test_lists_subcommands(self):
        """Data --help lists all subcommands."""
        result = runner.invoke(app, ["data", "--help"])
        assert "clear" in result.output
        assert "import" in result.output

    def test_clear_options(self):
        """Data clear --help lists the confirmation flag."""
        result = runner.invoke(app, ["data", "clear", "--help"])
        assert result.exit_code == 0
        assert "--yes" in result.output


# ==============================================================================
# Config
# ==============================================================================


class TestConfigHelp:
    """Tests for `pulse config` help output."""

    def test_description(self):
        """Config --help shows its description."""
        result = runner.invoke(app, ["config", "--help"])
        assert result.exit_code == 0
        assert "Configuration management" in result.output

    def test_lists_subcommands(self):
        """Config --help lists all subcommands."""
        result = runner.invoke(app, ["config", "--help"])
        assert "show" in result.output
