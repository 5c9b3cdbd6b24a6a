"""Grid dimension inference.

Both rules are heuristics, not something the carcols format defines:

- rows: enough for the busiest siren setting, never fewer than 32
- columns: 20 steps at the reference tempo of 600 bpm, scaled linearly
  with the fastest setting's tempo, never fewer than 20

Tempo is capped at `MAX_SEQUENCER_BPM` (60000 bpm, 2000 columns). The
parser defaults anything above it, and `columns_for_bpm` clamps it, so a
corrupt tempo cannot produce a grid too large to build.
"""

import math
from collections.abc import Iterable

from sirengrid.models import SirenSetting
from sirengrid.models.channel import MAX_SEQUENCER_BPM
from sirengrid.models.descriptor import MIN_COLUMNS, MIN_ROWS

REFERENCE_BPM = 600


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3)."""
    return math.floor(value + 0.5)


def columns_for_bpm(bpm: float) -> int:
    """Sequencer steps for a tempo, before the floor is applied."""
    return round_half_up(MIN_COLUMNS * min(bpm, MAX_SEQUENCER_BPM) / REFERENCE_BPM)


def infer_rows(settings: Iterable[SirenSetting]) -> int:
    """Row count: the largest active-channel count, at least 32."""
    return max([MIN_ROWS, *(setting.active_channel_count for setting in settings)])


def infer_columns(settings: Iterable[SirenSetting]) -> int:
    """Column count: the largest tempo-scaled step count, at least 20."""
    return max([MIN_COLUMNS, *(columns_for_bpm(setting.sequencer_bpm) for setting in settings)])


def infer_dimensions(settings: Iterable[SirenSetting]) -> tuple[int, int]:
    """
    Compute (rows, columns) for a set of siren settings.

    Example:
        >>> infer_dimensions([])
        (32, 20)
    """
    settings = list(settings)
    return infer_rows(settings), infer_columns(settings)
