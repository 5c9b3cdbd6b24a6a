"""Info command implementation."""

from pathlib import Path

import click

from sirengrid.exceptions import SirenGridError

from ._common import FILE_ARGUMENT, fail, read_descriptor


@click.command()
@click.argument("file", type=FILE_ARGUMENT)
def info(file: Path):
    """Summarize the siren settings of a carcols.meta FILE."""
    try:
        descriptor = read_descriptor(file)
    except (SirenGridError, OSError) as e:
        fail(e)

    click.echo(f"Vehicle: {descriptor.vehicle_name}")
    click.echo(f"Grid: {descriptor.total_rows} rows x {descriptor.total_columns} columns")
    click.echo(f"Siren settings: {descriptor.setting_count}\n")

    for setting in descriptor.siren_settings:
        source = f" (id {setting.source_id})" if setting.source_id is not None else ""
        click.echo(f"[{setting.id}] {setting.name}{source}")
        click.echo(f"    Tempo: {setting.sequencer_bpm} bpm")
        click.echo(f"    Lights: {setting.active_channel_count}")
        click.echo(f"    Texture: {setting.texture_name}")
