"""Tolerant parser for the siren section of carcols.meta files.

The parser accepts any well-formed XML and never raises for it:

- no `CVehicleModelInfoVarGlobal/Sirens` container -> `parse` returns None
- a siren setting that fails to parse -> skipped, the rest still load
- a light item that fails to parse -> its slot keeps the default channel
- a missing or unparsable number -> that field alone takes its default

Field values are read from the `value` attribute, the way carcols.meta
stores them (`<sequencerBpm value="600"/>`), falling back to the element
text (`<sequencerBpm>600</sequencerBpm>`).

Light items inside a setting's `sirens` list are assigned to extra slots
purely by position: the first item is extra 1, the second extra 2, and so
on up to 32. Their content is never used to pick a slot, and the
fixed-role slots (headlights, tail lights, indicators) are never filled
from that list.
"""

import logging
import math
import xml.etree.ElementTree as ET
from typing import Optional

from sirengrid.exceptions import collect_errors
from sirengrid.models import LightChannel, LightingDescriptor, SirenSetting, extra_slot
from sirengrid.models.channel import (
    DEFAULT_FALLOFF_EXPONENT,
    DEFAULT_FALLOFF_MAX,
    DEFAULT_INNER_CONE_ANGLE,
    DEFAULT_INTENSITY,
    DEFAULT_OFFSET,
    DEFAULT_OUTER_CONE_ANGLE,
    DEFAULT_SEQUENCER_BPM,
    DEFAULT_TEXTURE_NAME,
    EXTRA_SLOT_COUNT,
    MAX_SEQUENCER_BPM,
)
from sirengrid.models.descriptor import UNKNOWN_VEHICLE

from .dimensions import infer_dimensions, round_half_up

logger = logging.getLogger(__name__)

ROOT_TAG = "CVehicleModelInfoVarGlobal"
SETTINGS_TAG = "Sirens"
ITEM_TAG = "Item"
LIGHTS_TAG = "sirens"

# Tempo given to channels read from a `sirens` item; the file has no per-light tempo
PARSED_CHANNEL_BPM = 500


def _read_raw(element: ET.Element, path: str) -> Optional[str]:
    """Get the stripped value of a child element, or None if absent/empty."""
    child = element.find(path)
    if child is None:
        return None
    raw = child.get("value")
    if raw is None:
        raw = child.text
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _read_text(element: ET.Element, path: str, default: str) -> str:
    raw = _read_raw(element, path)
    return raw if raw is not None else default


def _read_float(
    element: ET.Element,
    path: str,
    default: float,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> float:
    """Read a number, defaulting when absent, unparsable, non-finite or out of range."""
    raw = _read_raw(element, path)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.debug(f"Unparsable number for <{path}>: {raw!r}, using {default}")
        return default
    if (
        not math.isfinite(value)
        or (minimum is not None and value < minimum)
        or (maximum is not None and value > maximum)
    ):
        logger.debug(f"Out-of-range number for <{path}>: {raw!r}, using {default}")
        return default
    return value


def _read_int(
    element: ET.Element,
    path: str,
    default: int,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    value = _read_float(element, path, float(default), minimum, maximum)
    return round_half_up(value)


def _read_optional_int(element: ET.Element, path: str) -> Optional[int]:
    raw = _read_raw(element, path)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def parse_light(element: ET.Element) -> LightChannel:
    """
    Parse one item of a setting's `sirens` list.

    Only the color and the direct `intensity` child are edited through the
    grid; corona and rotation values are carried along as optics fields.

    Args:
        element: The `<Item>` element

    Returns:
        The channel; color is "none" when the item has no color
    """
    return LightChannel(
        color=_read_raw(element, "color"),
        intensity=_read_float(element, "intensity", DEFAULT_INTENSITY, minimum=0.0),
        falloff_max=_read_float(element, "corona/intensity", DEFAULT_FALLOFF_MAX),
        falloff_exponent=DEFAULT_FALLOFF_EXPONENT,
        inner_cone_angle=_read_float(element, "corona/size", DEFAULT_INNER_CONE_ANGLE),
        outer_cone_angle=_read_float(element, "corona/pull", DEFAULT_OUTER_CONE_ANGLE),
        offset=_read_float(element, "rotation/start", DEFAULT_OFFSET),
        texture_name=DEFAULT_TEXTURE_NAME,
        sequencer_bpm=PARSED_CHANNEL_BPM,
    )


def parse_siren_setting(element: ET.Element, setting_id: int) -> SirenSetting:
    """
    Parse one item of the `Sirens` collection.

    Args:
        element: The `<Item>` element
        setting_id: Ordinal to assign (position among successfully parsed settings)

    Returns:
        The siren setting with all 38 slots populated
    """
    channels = SirenSetting.default_channels()
    name = _read_text(element, "name", "")

    lights = element.find(LIGHTS_TAG)
    if lights is not None:
        items = lights.findall(ITEM_TAG)
        if len(items) > EXTRA_SLOT_COUNT:
            logger.debug(
                f"{name or setting_id}: ignoring {len(items) - EXTRA_SLOT_COUNT} lights "
                f"beyond the first {EXTRA_SLOT_COUNT}"
            )

        collector = collect_errors(f"parse lights of {name or setting_id}")
        for position, item in enumerate(items[:EXTRA_SLOT_COUNT], start=1):
            with collector.try_operation(f"light #{position}"):
                channel = parse_light(item)
                if not channel.is_active:
                    logger.debug(f"Light #{position} has no color, slot left at default")
                    continue
                channels[extra_slot(position)] = channel

        if collector.has_errors:
            logger.warning(collector.get_summary())

    setting = SirenSetting(
        id=setting_id,
        name=name,
        source_id=_read_optional_int(element, "id"),
        time_multiplier=_read_float(element, "timeMultiplier", 1.0),
        light_falloff_max=_read_float(element, "lightFalloffMax", DEFAULT_FALLOFF_MAX),
        light_falloff_exponent=_read_float(element, "lightFalloffExponent", DEFAULT_FALLOFF_EXPONENT),
        light_inner_cone_angle=_read_float(element, "lightInnerConeAngle", DEFAULT_INNER_CONE_ANGLE),
        light_outer_cone_angle=_read_float(element, "lightOuterConeAngle", DEFAULT_OUTER_CONE_ANGLE),
        light_offset=_read_float(element, "lightOffset", DEFAULT_OFFSET),
        texture_name=_read_text(element, "textureName", DEFAULT_TEXTURE_NAME),
        sequencer_bpm=_read_int(
            element, "sequencerBpm", DEFAULT_SEQUENCER_BPM, minimum=1, maximum=MAX_SEQUENCER_BPM
        ),
        channels=channels,
    )
    logger.debug(
        f"Parsed siren setting {setting.id} '{setting.name}': "
        f"{setting.active_channel_count} active lights, {setting.sequencer_bpm} bpm"
    )
    return setting


def find_settings_container(root: ET.Element) -> Optional[ET.Element]:
    """Locate `CVehicleModelInfoVarGlobal/Sirens`, or None."""
    holder = root if root.tag == ROOT_TAG else root.find(f".//{ROOT_TAG}")
    if holder is None:
        return None
    return holder.find(SETTINGS_TAG)


def parse(text: str) -> Optional[LightingDescriptor]:
    """
    Parse carcols.meta content into a lighting descriptor.

    Args:
        text: Raw descriptor text

    Returns:
        The descriptor, or None when the text is not well-formed XML or
        has no siren settings container. Never raises for XML input.

    Example:
        >>> descriptor = parse(open("carcols.meta", encoding="utf-8").read())
        >>> if descriptor is None:
        ...     print("not a carcols.meta")
    """
    if not text or not text.strip():
        logger.warning("Empty descriptor text")
        return None

    try:
        root = ET.fromstring(text.lstrip("\ufeff"))
    except ET.ParseError as e:
        logger.warning(f"Descriptor is not well-formed XML: {e}")
        return None

    container = find_settings_container(root)
    if container is None:
        logger.warning(f"No {ROOT_TAG}/{SETTINGS_TAG} section found in descriptor")
        return None

    settings: list[SirenSetting] = []
    collector = collect_errors("parse siren settings")
    for position, item in enumerate(container.findall(ITEM_TAG)):
        with collector.try_operation(f"siren setting #{position}"):
            settings.append(parse_siren_setting(item, len(settings)))

    if collector.has_errors:
        logger.warning(collector.get_summary())

    vehicle_name = _read_text(container, f"{ITEM_TAG}/name", UNKNOWN_VEHICLE)
    total_rows, total_columns = infer_dimensions(settings)

    logger.info(
        f"Parsed descriptor '{vehicle_name}': {len(settings)} siren settings, "
        f"grid {total_rows}x{total_columns}"
    )
    return LightingDescriptor(
        vehicle_name=vehicle_name,
        siren_settings=settings,
        total_rows=total_rows,
        total_columns=total_columns,
    )
