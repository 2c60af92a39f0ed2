"""Main CLI entry point for drive-sync-fix command.

This module provides the Typer application that serves as the entry point
for the drive-sync-fix command-line tool.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import ConfigError
from src.cli.fix_command import FixCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler

__version__ = "0.1.0"

app = typer.Typer(
    name="drive-sync-fix",
    help="""Repair syncRootId markers of a Google Drive sync hierarchy.

QUICK START:
  drive-sync-fix <root_id>              # Fix markers below the sync root
  drive-sync-fix <root_id> --dry-run    # Preview changes
  drive-sync-fix                        # Use root_id from .drive-sync/config.yaml""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

MISSING_ROOT_MESSAGE = """No sync root given.

Pass the Drive folder ID of the sync root:
  drive-sync-fix <root_id> [--dry-run]

or set it in the config file:
  root_id: "<root_id>"

Required environment variables:
  DRIVE_CREDENTIALS_FILE  - OAuth client secrets JSON
  DRIVE_TOKEN_FILE        - Cached token (default: .drive-sync/token.json)"""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"drive-sync-fix_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


@app.command()
def main_command(
    root_id: Optional[str] = typer.Argument(
        None,
        help="Drive folder ID of the sync root (defaults to root_id in the config file)",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "--dryrun",
        help="Report corrections without writing them",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path of the YAML config file",
        metavar="PATH",
    ),
    save_root: bool = typer.Option(
        False,
        "--save-root",
        help="Remember the given root_id in the config file",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Repair syncRootId markers below a Drive sync root.

    Files inside the sync root's hierarchy get syncRootId set to the root;
    files outside it get a stale syncRootId cleared.
    """
    if version:
        typer.echo(f"drive-sync-fix version {__version__}")
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        config = ConfigLoader.load(config_path)
    except ConfigError as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    effective_root = root_id or config.root_id
    if not effective_root:
        typer.echo(MISSING_ROOT_MESSAGE, err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if save_root and root_id:
        config.root_id = root_id
        try:
            ConfigLoader.save(config_path, config)
            output.success(f"Saved root_id to {config_path}")
        except ConfigError as e:
            output.error(str(e))
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    fix_cmd = FixCommand(output_handler=output)
    exit_code = fix_cmd.run(effective_root, dry_run=dry_run)

    raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
