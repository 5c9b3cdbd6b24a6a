"""Unit tests for grid dimension inference."""

import pytest

from sirengrid.descriptor import infer_dimensions
from sirengrid.descriptor.dimensions import columns_for_bpm, round_half_up
from sirengrid.models import ChannelSlot, LightChannel, SirenSetting, extra_slot


def setting(setting_id: int = 0, bpm: int = 600, lights: int = 0) -> SirenSetting:
    channels = {extra_slot(n): LightChannel(color="red") for n in range(1, lights + 1)}
    return SirenSetting(id=setting_id, sequencer_bpm=bpm, channels=channels)


class TestInferDimensions:
    """Test infer_dimensions."""

    @pytest.mark.unit
    def test_no_settings(self):
        assert infer_dimensions([]) == (32, 20)

    @pytest.mark.unit
    def test_reference_tempo(self):
        assert infer_dimensions([setting(bpm=600)]) == (32, 20)

    @pytest.mark.unit
    def test_double_tempo_doubles_columns(self):
        """600 infers 20 columns, 1200 infers 40."""
        assert infer_dimensions([setting(bpm=600)])[1] == 20
        assert infer_dimensions([setting(bpm=1200)])[1] == 40
        assert infer_dimensions([setting(0, 600), setting(1, 1200)])[1] == 40

    @pytest.mark.unit
    def test_slow_tempo_keeps_minimum(self):
        assert infer_dimensions([setting(bpm=150)]) == (32, 20)

    @pytest.mark.unit
    def test_columns_are_monotonic_in_tempo(self):
        previous = 0
        for bpm in range(100, 3000, 37):
            columns = infer_dimensions([setting(bpm=bpm)])[1]
            assert columns >= previous
            previous = columns

    @pytest.mark.unit
    def test_tempo_beyond_cap_is_clamped(self):
        """Settings built directly with a huge tempo still give a bounded grid."""
        assert columns_for_bpm(60000) == 2000
        assert columns_for_bpm(1e300) == 2000
        assert infer_dimensions([setting(bpm=10**12)]) == (32, 2000)

    @pytest.mark.unit
    def test_rows_follow_busiest_setting(self):
        """Rows never drop below 32, even with few lights."""
        assert infer_dimensions([setting(lights=3)])[0] == 32

        busy = SirenSetting(
            id=0,
            channels={
                **{extra_slot(n): LightChannel(color="red") for n in range(1, 33)},
                ChannelSlot.LEFT_HEADLIGHT: LightChannel(color="white"),
                ChannelSlot.RIGHT_HEADLIGHT: LightChannel(color="white"),
            },
        )
        assert infer_dimensions([busy, setting(1)])[0] == 34


class TestRounding:
    """Test the rounding rule behind the column count."""

    @pytest.mark.unit
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2

    @pytest.mark.unit
    def test_columns_for_bpm(self):
        # 20 * 645 / 600 = 21.5
        assert columns_for_bpm(645) == 22
        assert columns_for_bpm(900) == 30
