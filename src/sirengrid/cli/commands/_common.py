"""Helpers shared by the CLI commands."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from sirengrid.descriptor import parse
from sirengrid.exceptions import DescriptorNotFoundError, format_error_for_display
from sirengrid.models import EditorConfig, LightingDescriptor

logger = logging.getLogger(__name__)

FILE_ARGUMENT = click.Path(exists=True, dir_okay=False, path_type=Path)


def read_descriptor(path: Path) -> LightingDescriptor:
    """
    Read and parse a carcols.meta file.

    Raises:
        DescriptorNotFoundError: If the file has no siren settings section
    """
    text = path.read_text(encoding="utf-8")
    descriptor = parse(text)
    if descriptor is None:
        raise DescriptorNotFoundError(str(path))
    return descriptor


def load_config(ctx: click.Context) -> EditorConfig:
    config_path: Optional[Path] = (ctx.obj or {}).get("config_path")
    return EditorConfig.load_or_default(config_path)


def fail(error: Exception) -> NoReturn:
    """Print an error without a traceback and exit with status 1."""
    logger.error(f"Command failed: {error}", exc_info=True)

    message, recovery_hint = format_error_for_display(error)
    click.echo(f"ERROR: {message}", err=True)
    if recovery_hint:
        click.echo(recovery_hint, err=True)
    sys.exit(1)
