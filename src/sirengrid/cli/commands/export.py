"""Export command implementation."""

import logging
from pathlib import Path
from typing import Optional

import click

from sirengrid.exceptions import SirenGridError
from sirengrid.services import PatternStore

from ._common import FILE_ARGUMENT, fail, load_config, read_descriptor

logger = logging.getLogger(__name__)


@click.command(name="export")
@click.pass_context
@click.argument("file", type=FILE_ARGUMENT)
@click.option("--siren", "-s", type=int, default=0, show_default=True, help="Siren setting id")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write to this file instead of stdout",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail when cells hold values carcols.meta cannot store (default: from config)",
)
def export_command(
    ctx: click.Context,
    file: Path,
    siren: int,
    output: Optional[Path],
    strict: Optional[bool],
):
    """Load one siren setting of FILE into the grid and write it back out.

    The result is the whole siren section, with colors written as
    0xFFRRGGBB and the file re-indented.
    """
    try:
        config = load_config(ctx)
        descriptor = read_descriptor(file)

        store = PatternStore(config)
        store.load_siren(descriptor, siren)
        text = store.export_descriptor(strict=strict)

        if output is None:
            click.echo(text, nl=False)
        else:
            output.write_text(text, encoding="utf-8")
            click.echo(f"Wrote {output}", err=True)
            logger.info(f"Exported siren setting {siren} of {file} to {output}")
    except SirenGridError as e:
        fail(e.with_context(source=str(file)))
    except OSError as e:
        fail(e)
