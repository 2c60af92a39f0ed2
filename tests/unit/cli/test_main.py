"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from src.cli.config import FixConfig
from src.cli.main import app, _configure_logging
from src.cli.models import ExitCode


runner = CliRunner()


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(0)

            mock_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_1_sets_info_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(1)

            mock_logger.setLevel.assert_called_with(logging.INFO)

    def test_verbosity_2_sets_debug_level(self):
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(2)

            mock_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_creates_log_file(self, tmp_path):
        logdir = tmp_path / "logs"
        app_logger = logging.getLogger("src")
        before = list(app_logger.handlers)
        try:
            _configure_logging(1, str(logdir))

            assert logdir.is_dir()
            assert any(p.name.startswith("drive-sync-fix_") for p in logdir.iterdir())
        finally:
            for handler in app_logger.handlers[len(before):]:
                handler.close()
            app_logger.handlers = before


class TestMainCommand:
    """Test cases for the drive-sync-fix command."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "drive-sync-fix version" in result.stdout

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader.load', return_value=FixConfig())
    def test_runs_fix_with_root_argument(self, mock_load, mock_output, mock_fix_cmd):
        mock_fix_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["rootR"])

        assert result.exit_code == 0
        mock_fix_cmd.return_value.run.assert_called_once_with("rootR", dry_run=False)

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader.load', return_value=FixConfig())
    def test_dry_run_flag(self, mock_load, mock_output, mock_fix_cmd):
        mock_fix_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, ["rootR", "--dry-run"])

        assert result.exit_code == 0
        mock_fix_cmd.return_value.run.assert_called_once_with("rootR", dry_run=True)

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader.load', return_value=FixConfig(root_id="fromConfig"))
    def test_root_falls_back_to_config(self, mock_load, mock_output, mock_fix_cmd):
        mock_fix_cmd.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, [])

        assert result.exit_code == 0
        mock_fix_cmd.return_value.run.assert_called_once_with("fromConfig", dry_run=False)

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader.load', return_value=FixConfig())
    def test_missing_root_is_usage_error(self, mock_load, mock_output, mock_fix_cmd):
        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        mock_fix_cmd.assert_not_called()

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    @patch('src.cli.main.ConfigLoader.load', return_value=FixConfig())
    def test_exit_code_is_propagated(self, mock_load, mock_output, mock_fix_cmd):
        mock_fix_cmd.return_value.run.return_value = ExitCode.NETWORK_ERROR

        result = runner.invoke(app, ["rootR"])

        assert result.exit_code == ExitCode.NETWORK_ERROR

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    def test_save_root_writes_config(self, mock_output, mock_fix_cmd, tmp_path):
        mock_fix_cmd.return_value.run.return_value = ExitCode.SUCCESS
        config_path = tmp_path / "config.yaml"

        result = runner.invoke(app, ["rootR", "--save-root", "--config", str(config_path)])

        assert result.exit_code == 0
        assert "root_id: rootR" in config_path.read_text(encoding="utf-8")

    @patch('src.cli.main.FixCommand')
    @patch('src.cli.main.OutputHandler')
    def test_invalid_config_fails(self, mock_output, mock_fix_cmd, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("- not a mapping\n", encoding="utf-8")

        result = runner.invoke(app, ["rootR", "--config", str(config_path)])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        mock_fix_cmd.assert_not_called()
