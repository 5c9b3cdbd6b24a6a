"""Grid command implementation."""

from pathlib import Path

import click

from sirengrid.colors import NO_COLOR, PALETTE
from sirengrid.converter import load_siren
from sirengrid.exceptions import SirenGridError
from sirengrid.models import GridCell, slot_for_row

from ._common import FILE_ARGUMENT, fail, read_descriptor

# One character per palette color; other colors render as "*"
CELL_SYMBOLS = {
    PALETTE["red"]: "R",
    PALETTE["blue"]: "B",
    PALETTE["white"]: "W",
    PALETTE["amber"]: "A",
    PALETTE["purple"]: "P",
    PALETTE["green"]: "G",
    PALETTE["lightblue"]: "C",
    PALETTE["pink"]: "K",
}


def cell_symbol(cell: GridCell) -> str:
    if cell.color == NO_COLOR:
        return "."
    return CELL_SYMBOLS.get(cell.color, "*")


@click.command()
@click.argument("file", type=FILE_ARGUMENT)
@click.option("--siren", "-s", type=int, default=0, show_default=True, help="Siren setting id")
@click.option("--active-only", is_flag=True, help="Only show rows with lit cells")
def grid(file: Path, siren: int, active_only: bool):
    """Print the light grid of one siren setting in FILE.

    \b
    Legend: R red, B blue, W white, A amber, P purple, G green,
            C light blue, K pink, * other color, . off
    """
    try:
        descriptor = read_descriptor(file)
    except (SirenGridError, OSError) as e:
        fail(e)

    setting = descriptor.get_setting(siren)
    if setting is None:
        click.echo(
            f"Warning: no siren setting {siren} "
            f"(file has {descriptor.setting_count}), showing an empty grid",
            err=True,
        )
    else:
        click.echo(f"{setting.name} - {setting.sequencer_bpm} bpm")

    pattern = load_siren(descriptor, siren)
    for row in range(pattern.rows):
        cells = pattern.row(row)
        if active_only and not any(cell.is_active for cell in cells):
            continue
        slot = slot_for_row(row)
        label = slot.value if slot is not None else ""
        click.echo(f"{row:>3} {label:<16} {''.join(cell_symbol(cell) for cell in cells)}")
