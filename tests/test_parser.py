"""Unit tests for the carcols.meta parser."""

import xml.etree.ElementTree as ET

import pytest

from sirengrid.descriptor import parse, parse_light, parse_siren_setting
from sirengrid.models import ALL_SLOTS, EXTRA_SLOTS, FIXED_ROLE_SLOTS, ChannelSlot, default_channel


def wrap_settings(items: str) -> str:
    """Put setting items into a minimal carcols document."""
    return f"<CVehicleModelInfoVarGlobal><Sirens>{items}</Sirens></CVehicleModelInfoVarGlobal>"


def setting_with_lights(lights: str, extra: str = "") -> str:
    return wrap_settings(f"<Item><name>test</name>{extra}<sirens>{lights}</sirens></Item>")


class TestParseStructure:
    """Test structural failures and the empty container."""

    @pytest.mark.unit
    def test_empty_container_gives_defaults(self):
        """A container with no items still yields a descriptor."""
        descriptor = parse(wrap_settings(""))

        assert descriptor is not None
        assert descriptor.siren_settings == []
        assert descriptor.total_rows == 32
        assert descriptor.total_columns == 20

    @pytest.mark.unit
    def test_missing_container_returns_none(self):
        assert parse("<CVehicleModelInfoVarGlobal><Kits/></CVehicleModelInfoVarGlobal>") is None
        assert parse("<Other><Sirens/></Other>") is None

    @pytest.mark.unit
    def test_malformed_xml_returns_none(self):
        assert parse("<CVehicleModelInfoVarGlobal><Sirens>") is None
        assert parse("not xml at all") is None

    @pytest.mark.unit
    def test_empty_text_returns_none(self):
        assert parse("") is None
        assert parse("   \n") is None

    @pytest.mark.unit
    def test_byte_order_mark_is_ignored(self):
        descriptor = parse("\ufeff" + wrap_settings(""))
        assert descriptor is not None

    @pytest.mark.unit
    def test_container_below_another_root(self):
        """The vehicle section may be nested in a larger document."""
        text = f"<Root>{wrap_settings('<Item><name>nested</name></Item>')}</Root>"
        descriptor = parse(text)

        assert descriptor is not None
        assert descriptor.vehicle_name == "nested"


class TestParseDescriptor:
    """Test parsing of a realistic two-setting file."""

    @pytest.mark.unit
    def test_settings_and_ids(self, descriptor):
        assert descriptor.setting_count == 2
        assert [s.id for s in descriptor.siren_settings] == [0, 1]
        assert [s.source_id for s in descriptor.siren_settings] == [1001, 1002]

    @pytest.mark.unit
    def test_vehicle_name_from_first_setting(self, descriptor):
        assert descriptor.vehicle_name == "police_main"

    @pytest.mark.unit
    def test_dimensions(self, descriptor):
        """1200 bpm doubles the 20-column baseline."""
        assert descriptor.total_rows == 32
        assert descriptor.total_columns == 40

    @pytest.mark.unit
    def test_setting_fields(self, descriptor):
        setting = descriptor.get_setting(0)

        assert setting.name == "police_main"
        assert setting.time_multiplier == 1.0
        assert setting.light_falloff_max == 80.0
        assert setting.light_falloff_exponent == 55.0
        assert setting.light_inner_cone_angle == pytest.approx(2.29061)
        assert setting.light_outer_cone_angle == 70.0
        assert setting.texture_name == "VehicleLight_sirenlight"
        assert setting.sequencer_bpm == 600

    @pytest.mark.unit
    def test_missing_fields_default(self, descriptor):
        setting = descriptor.get_setting(1)

        assert setting.time_multiplier == 1.0
        assert setting.light_falloff_max == 50.0
        assert setting.light_falloff_exponent == 1.0
        assert setting.light_offset == 0.0
        assert setting.texture_name == "VehicleLight_sirenlight"
        assert setting.sequencer_bpm == 1200

    @pytest.mark.unit
    def test_light_channels(self, descriptor):
        setting = descriptor.get_setting(0)

        first = setting.channel(ChannelSlot.EXTRA_1)
        assert first.color == "#FF0000"
        assert first.intensity == 1.5
        assert first.falloff_max == 40.0
        assert first.inner_cone_angle == 0.8
        assert first.outer_cone_angle == 0.15
        assert first.offset == 0.5
        assert first.sequencer_bpm == 500

        second = setting.channel(ChannelSlot.EXTRA_2)
        assert second.color == "#0066FF"
        assert second.intensity == 2.0
        assert second.falloff_max == 50.0

        # Position 3 has no color and stays default
        assert setting.channel(ChannelSlot.EXTRA_3) == default_channel()

        fourth = setting.channel(ChannelSlot.EXTRA_4)
        assert fourth.color == "#00FFFF"
        assert fourth.intensity == 3.5

        assert setting.active_slots == [ChannelSlot.EXTRA_1, ChannelSlot.EXTRA_2, ChannelSlot.EXTRA_4]

    @pytest.mark.unit
    def test_siren0_scenario(self, siren0_text):
        descriptor = parse(siren0_text)

        assert descriptor is not None
        assert descriptor.total_columns == 20
        channel = descriptor.get_setting(0).channel(ChannelSlot.EXTRA_1)
        assert channel.color == "#FF0000"
        assert channel.intensity == 5.0


class TestPositionalMapping:
    """Light items fill extra slots by position only."""

    @pytest.mark.unit
    def test_three_items_fill_first_three_extras(self):
        lights = "".join(f'<Item><color value="{c}"/></Item>' for c in ["red", "blue", "green"])
        setting = parse(setting_with_lights(lights)).get_setting(0)

        expected = {ChannelSlot.EXTRA_1, ChannelSlot.EXTRA_2, ChannelSlot.EXTRA_3}
        for slot in ALL_SLOTS:
            if slot in expected:
                assert setting.channel(slot).is_active
            else:
                assert setting.channel(slot) == default_channel()
        assert len(ALL_SLOTS) - len(expected) == 35

    @pytest.mark.unit
    def test_fixed_role_slots_never_filled(self, descriptor):
        for setting in descriptor.siren_settings:
            for slot in FIXED_ROLE_SLOTS:
                assert setting.channel(slot) == default_channel()

    @pytest.mark.unit
    def test_items_beyond_32_are_ignored(self):
        lights = '<Item><color value="red"/></Item>' * 40
        setting = parse(setting_with_lights(lights)).get_setting(0)

        assert setting.active_slots == list(EXTRA_SLOTS)
        assert setting.active_channel_count == 32

    @pytest.mark.unit
    def test_content_does_not_pick_slot(self):
        """An item that looks like a headlight still lands in extra 1."""
        lights = '<Item><name>left_headlight</name><color value="white"/></Item>'
        setting = parse(setting_with_lights(lights)).get_setting(0)

        assert setting.channel(ChannelSlot.EXTRA_1).color == "#FFFFFF"
        assert not setting.channel(ChannelSlot.LEFT_HEADLIGHT).is_active


class TestValueDefaults:
    """Unparsable values default one field at a time."""

    @pytest.mark.unit
    def test_unparsable_number_defaults(self):
        extra = '<sequencerBpm value="fast"/><lightFalloffMax value="12.5"/>'
        setting = parse(setting_with_lights("", extra)).get_setting(0)

        assert setting.sequencer_bpm == 600
        assert setting.light_falloff_max == 12.5

    @pytest.mark.unit
    def test_non_finite_and_negative_tempo_default(self):
        for raw in ["nan", "inf", "-5", "0"]:
            extra = f'<sequencerBpm value="{raw}"/>'
            setting = parse(setting_with_lights("", extra)).get_setting(0)
            assert setting.sequencer_bpm == 600

    @pytest.mark.unit
    def test_huge_tempo_defaults(self):
        """A tempo past the cap would build millions of columns; it is defaulted instead."""
        for raw in ["1e300", "60000000", "60001"]:
            descriptor = parse(setting_with_lights("", f'<sequencerBpm value="{raw}"/>'))

            assert descriptor.get_setting(0).sequencer_bpm == 600
            assert descriptor.total_columns == 20

    @pytest.mark.unit
    def test_tempo_at_cap_is_kept(self):
        descriptor = parse(setting_with_lights("", '<sequencerBpm value="60000"/>'))

        assert descriptor.get_setting(0).sequencer_bpm == 60000
        assert descriptor.total_columns == 2000

    @pytest.mark.unit
    def test_tempo_rounds_half_up(self):
        setting = parse(setting_with_lights("", '<sequencerBpm value="600.5"/>')).get_setting(0)
        assert setting.sequencer_bpm == 601

    @pytest.mark.unit
    def test_element_text_is_accepted(self):
        setting = parse(setting_with_lights("", "<sequencerBpm>900</sequencerBpm>")).get_setting(0)
        assert setting.sequencer_bpm == 900

    @pytest.mark.unit
    def test_bad_light_intensity_defaults(self):
        lights = '<Item><color value="red"/><intensity value="bright"/></Item>'
        channel = parse(setting_with_lights(lights)).get_setting(0).channel(ChannelSlot.EXTRA_1)

        assert channel.color == "#FF0000"
        assert channel.intensity == 3.5

    @pytest.mark.unit
    def test_unnamed_setting_gets_generated_name(self):
        descriptor = parse(wrap_settings("<Item><sequencerBpm value='600'/></Item>"))

        assert descriptor.vehicle_name == "Unknown Vehicle"
        assert descriptor.get_setting(0).name == "Siren 0"


class TestItemFailures:
    """A failing item is isolated from its siblings."""

    @pytest.mark.unit
    def test_failing_setting_is_skipped(self, monkeypatch, carcols_text):
        import sirengrid.descriptor.parser as parser_module

        real = parser_module.parse_siren_setting
        calls = []

        def flaky(element, setting_id):
            calls.append(setting_id)
            if len(calls) == 1:
                raise ValueError("broken setting")
            return real(element, setting_id)

        monkeypatch.setattr(parser_module, "parse_siren_setting", flaky)
        descriptor = parse(carcols_text)

        assert descriptor is not None
        assert descriptor.setting_count == 1
        # The surviving setting takes the next free id
        assert descriptor.get_setting(0).name == "police_alt"

    @pytest.mark.unit
    def test_failing_light_keeps_default(self, monkeypatch):
        import sirengrid.descriptor.parser as parser_module

        real = parser_module.parse_light

        def flaky(element):
            if element.find("name") is not None:
                raise ValueError("broken light")
            return real(element)

        monkeypatch.setattr(parser_module, "parse_light", flaky)
        lights = '<Item><name>bad</name><color value="red"/></Item><Item><color value="blue"/></Item>'
        setting = parse(setting_with_lights(lights)).get_setting(0)

        assert setting.channel(ChannelSlot.EXTRA_1) == default_channel()
        assert setting.channel(ChannelSlot.EXTRA_2).color == "#0066FF"


class TestElementParsers:
    """Test the per-element parsers directly."""

    @pytest.mark.unit
    def test_parse_light_without_color(self):
        channel = parse_light(ET.fromstring("<Item><intensity value='2'/></Item>"))
        assert not channel.is_active

    @pytest.mark.unit
    def test_corona_intensity_is_not_light_intensity(self):
        element = ET.fromstring(
            "<Item><corona><intensity value='90'/></corona><color value='red'/></Item>"
        )
        channel = parse_light(element)

        assert channel.intensity == 3.5
        assert channel.falloff_max == 90.0

    @pytest.mark.unit
    def test_parse_siren_setting_uses_given_id(self):
        element = ET.fromstring("<Item><id value='7'/><name>x</name></Item>")
        setting = parse_siren_setting(element, 3)

        assert setting.id == 3
        assert setting.source_id == 7
