"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from sirengrid.descriptor import parse
from sirengrid.models import EditorConfig


# Two siren settings; the first has lights at positions 1, 2 and 4
# (position 3 has no color), the second runs at twice the reference tempo.
CARCOLS_TEXT = """<?xml version="1.0" encoding="UTF-8"?>
<CVehicleModelInfoVarGlobal>
  <Kits />
  <Lights />
  <Sirens>
    <Item>
      <id value="1001"/>
      <name>police_main</name>
      <timeMultiplier value="1.000000"/>
      <lightFalloffMax value="80.000000"/>
      <lightFalloffExponent value="55.000000"/>
      <lightInnerConeAngle value="2.290610"/>
      <lightOuterConeAngle value="70.000000"/>
      <lightOffset value="0.000000"/>
      <textureName>VehicleLight_sirenlight</textureName>
      <sequencerBpm value="600"/>
      <sirens>
        <Item>
          <rotation>
            <start value="0.500000"/>
          </rotation>
          <corona>
            <intensity value="40.000000"/>
            <size value="0.800000"/>
            <pull value="0.150000"/>
          </corona>
          <color value="0xFFFF0000"/>
          <intensity value="1.500000"/>
        </Item>
        <Item>
          <color value="0xFF0066FF"/>
          <intensity value="2.000000"/>
        </Item>
        <Item>
          <intensity value="1.000000"/>
        </Item>
        <Item>
          <color value="Light-Blue"/>
        </Item>
      </sirens>
    </Item>
    <Item>
      <id value="1002"/>
      <name>police_alt</name>
      <sequencerBpm value="1200"/>
      <sirens>
        <Item>
          <color value="0xFFFFFFFF"/>
          <intensity value="3.000000"/>
        </Item>
      </sirens>
    </Item>
  </Sirens>
</CVehicleModelInfoVarGlobal>
"""

# Single setting with one red light at intensity 5.0
SIREN0_TEXT = """<CVehicleModelInfoVarGlobal>
  <Sirens>
    <Item>
      <name>Siren0</name>
      <sequencerBpm value="600"/>
      <sirens>
        <Item>
          <color value="0xFFFF0000"/>
          <intensity value="5.0"/>
        </Item>
      </sirens>
    </Item>
  </Sirens>
</CVehicleModelInfoVarGlobal>
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def carcols_text():
    """Descriptor text with two siren settings."""
    return CARCOLS_TEXT


@pytest.fixture
def siren0_text():
    """Descriptor text with one setting and one red light."""
    return SIREN0_TEXT


@pytest.fixture
def descriptor(carcols_text):
    """Parsed two-setting descriptor."""
    result = parse(carcols_text)
    assert result is not None
    return result


@pytest.fixture
def carcols_file(temp_dir, carcols_text):
    """Two-setting descriptor written to disk."""
    path = temp_dir / "carcols.meta"
    path.write_text(carcols_text, encoding="utf-8")
    return path


@pytest.fixture
def config():
    """Editor config with default values."""
    return EditorConfig()
