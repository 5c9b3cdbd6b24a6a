"""Serialize a lighting descriptor back to carcols.meta XML.

The output is the siren section only, laid out the way `parse` reads it,
so `parse(write_descriptor(d))` gives back the same settings and the
same extra-slot channels.

What does not survive a save:

- fixed-role channels (headlights, tail lights, indicators): the parser
  never reads them from the file, so they are not written; a warning is
  logged when one of them is lit
- the alpha byte of colors, which is always written as FF
- grid-only cell attributes (direction, multiples, scale factor), which
  never reach the descriptor model in the first place
"""

import logging
import xml.etree.ElementTree as ET

from sirengrid.colors import to_descriptor_color
from sirengrid.models import (
    EXTRA_SLOTS,
    FIXED_ROLE_SLOTS,
    LightChannel,
    LightingDescriptor,
    SirenSetting,
)

from .parser import ITEM_TAG, LIGHTS_TAG, ROOT_TAG, SETTINGS_TAG

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _number(value: float) -> str:
    return f"{value:.6f}"


def _value_element(parent: ET.Element, tag: str, value: str) -> ET.Element:
    return ET.SubElement(parent, tag, {"value": value})


def _text_element(parent: ET.Element, tag: str, text: str) -> ET.Element:
    element = ET.SubElement(parent, tag)
    element.text = text
    return element


def _append_light(lights: ET.Element, channel: LightChannel) -> None:
    """Write one `sirens/Item`; inactive channels become an empty placeholder item."""
    item = ET.SubElement(lights, ITEM_TAG)
    if not channel.is_active:
        return

    rotation = ET.SubElement(item, "rotation")
    _value_element(rotation, "start", _number(channel.offset))

    corona = ET.SubElement(item, "corona")
    _value_element(corona, "intensity", _number(channel.falloff_max))
    _value_element(corona, "size", _number(channel.inner_cone_angle))
    _value_element(corona, "pull", _number(channel.outer_cone_angle))

    _value_element(item, "color", to_descriptor_color(channel.color))
    _value_element(item, "intensity", _number(channel.intensity))


def _append_setting(container: ET.Element, setting: SirenSetting) -> None:
    item = ET.SubElement(container, ITEM_TAG)

    if setting.source_id is not None:
        _value_element(item, "id", str(setting.source_id))
    _text_element(item, "name", setting.name)
    _value_element(item, "timeMultiplier", _number(setting.time_multiplier))
    _value_element(item, "lightFalloffMax", _number(setting.light_falloff_max))
    _value_element(item, "lightFalloffExponent", _number(setting.light_falloff_exponent))
    _value_element(item, "lightInnerConeAngle", _number(setting.light_inner_cone_angle))
    _value_element(item, "lightOuterConeAngle", _number(setting.light_outer_cone_angle))
    _value_element(item, "lightOffset", _number(setting.light_offset))
    _text_element(item, "textureName", setting.texture_name)
    _value_element(item, "sequencerBpm", str(setting.sequencer_bpm))

    lit_fixed = [slot.value for slot in FIXED_ROLE_SLOTS if setting.channel(slot).is_active]
    if lit_fixed:
        logger.warning(
            f"Siren setting '{setting.name}': {', '.join(lit_fixed)} cannot be stored "
            f"in carcols.meta and will not be saved"
        )

    # Extras are positional: the n-th item is extra n, so gaps get placeholders
    active_extras = [n for n, slot in enumerate(EXTRA_SLOTS, start=1) if setting.channel(slot).is_active]
    lights = ET.SubElement(item, LIGHTS_TAG)
    last = max(active_extras, default=0)
    for slot in EXTRA_SLOTS[:last]:
        _append_light(lights, setting.channel(slot))


def write_descriptor(descriptor: LightingDescriptor) -> str:
    """
    Serialize a descriptor to carcols.meta text.

    Args:
        descriptor: The descriptor to write

    Returns:
        XML text, starting with an XML declaration
    """
    root = ET.Element(ROOT_TAG)
    container = ET.SubElement(root, SETTINGS_TAG)
    for setting in descriptor.siren_settings:
        _append_setting(container, setting)

    ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")

    logger.info(
        f"Serialized descriptor '{descriptor.vehicle_name}' "
        f"({descriptor.setting_count} siren settings)"
    )
    return f"{XML_DECLARATION}\n{body}\n"
