"""Main CLI entry point."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

import click

from sirengrid import __version__

from .commands import export_command, grid, info

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".sirengrid" / "logs"


def setup_logging(verbose: int, debug: bool, log_file: Optional[Path], log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
    """
    if debug:
        level = logging.DEBUG
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    # Explicit level only applies to a custom log file
    if log_file:
        level = getattr(logging, log_level.upper())

    if debug and not log_file:
        log_path = Path.cwd() / "sirengrid-debug.log"
    elif log_file:
        log_path = log_file
    else:
        DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = DEFAULT_LOG_DIR / "sirengrid.log"

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")


@click.group()
@click.pass_context
@click.version_option(version=__version__, prog_name="sirengrid")
@click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Editor config file (default: ~/.sirengrid/config.json)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./sirengrid-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_path: Optional[Path],
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Siren Grid - view and rewrite carcols.meta siren settings as a light grid.

    Each siren setting is shown as a grid: one row per light channel
    (headlights, tail lights, indicators, extra 1-32), one column per
    sequencer step.

    \b
    Examples:
      # Summarize the siren settings of a file
      sirengrid info carcols.meta

      # Show the grid of the second siren setting
      sirengrid grid carcols.meta --siren 1

      # Rewrite a file through the grid (normalizes colors and layout)
      sirengrid export carcols.meta -o carcols.out.meta

      # Enable debug logging
      sirengrid --debug info carcols.meta
    """
    setup_logging(verbose, debug, log_file, log_level)

    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


cli.add_command(info)
cli.add_command(grid)
cli.add_command(export_command)

if __name__ == "__main__":
    cli()
