"""
Unit Tests for run.py Entry Script.

Tests individual actions with mocked subprocesses.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from run import main, validate_project_root


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    """Keep the CLI from reconfiguring the root logger during tests."""
    with patch("run.setup_logging"):
        yield


class TestValidateProjectRoot:
    """Tests for validate_project_root function."""

    def test_succeeds_when_marker_exists(self, tmp_path):
        (tmp_path / ".project_root").touch()

        with patch("run.PROJECT_ROOT", tmp_path):
            assert validate_project_root() == tmp_path

    def test_exits_when_marker_missing(self, tmp_path):
        with patch("run.PROJECT_ROOT", tmp_path):
            with pytest.raises(SystemExit) as exc_info:
                validate_project_root()
            assert exc_info.value.code == 1


class TestMainCLI:
    """Tests for main CLI entry point."""

    def test_help_displays_usage(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Notes API Entry Point" in result.output
        assert "--action" in result.output

    def test_info_is_default_action(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Notes API" in result.output
        assert "Available Actions:" in result.output

    def test_rejects_unknown_action(self, runner):
        result = runner.invoke(main, ["--action", "explode"])

        assert result.exit_code != 0

    @pytest.mark.parametrize(
        ("flags", "level"),
        [([], "WARNING"), (["--verbose"], "INFO"), (["--debug"], "DEBUG")],
    )
    def test_flags_select_log_level(self, runner, flags, level):
        with patch("run.setup_logging") as mock_setup:
            runner.invoke(main, ["--action", "info", *flags])

        mock_setup.assert_called_once_with(level=level, format_type="console")

    def test_config_hides_database_password(self, runner, monkeypatch):
        from modules.backend.core.config import get_settings

        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://notes:s3cret@db/notes")
        get_settings.cache_clear()
        try:
            result = runner.invoke(main, ["--action", "config"])
        finally:
            get_settings.cache_clear()

        assert result.exit_code == 0
        assert "Database Settings" in result.output
        assert "s3cret" not in result.output
        assert "notes:***@db/notes" in result.output


class TestServerAction:
    """Tests for the server action."""

    def test_uses_configured_address(self, runner):
        with patch("run.subprocess.run") as mock_run, \
                patch("modules.backend.core.config.get_server_address", return_value=("0.0.0.0", 9000)):
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 0
        cmd = mock_run.call_args.args[0]
        assert "modules.backend.main:app" in cmd
        assert cmd[cmd.index("--host") + 1] == "0.0.0.0"
        assert cmd[cmd.index("--port") + 1] == "9000"
        assert "--reload" not in cmd

    def test_cli_options_override_address(self, runner):
        with patch("run.subprocess.run") as mock_run:
            runner.invoke(
                main,
                ["--action", "server", "--host", "localhost", "--port", "8123", "--reload"],
            )

        cmd = mock_run.call_args.args[0]
        assert cmd[cmd.index("--host") + 1] == "localhost"
        assert cmd[cmd.index("--port") + 1] == "8123"
        assert "--reload" in cmd

    def test_server_failure_exits_with_code(self, runner):
        error = subprocess.CalledProcessError(returncode=3, cmd=["uvicorn"])

        with patch("run.subprocess.run", side_effect=error):
            result = runner.invoke(main, ["--action", "server"])

        assert result.exit_code == 3


class TestMigrateAction:
    """Tests for the migrate action."""

    def test_runs_alembic_upgrade_head(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=0)) as mock_run:
            result = runner.invoke(main, ["--action", "migrate"])

        assert result.exit_code == 0
        assert mock_run.call_args.args[0][-3:] == ["alembic", "upgrade", "head"]
        assert "up to date" in result.output

    def test_failed_migration_exits_nonzero(self, runner):
        with patch("run.subprocess.run", return_value=MagicMock(returncode=2)):
            result = runner.invoke(main, ["--action", "migrate"])

        assert result.exit_code == 2
