"""Smoke tests for CLI commands.

Uses Click's CliRunner; every invocation logs to a temporary file so the
user's log directory is left alone.
"""

import pytest
from click.testing import CliRunner

from sirengrid.cli.main import cli
from sirengrid.descriptor import parse
from sirengrid.models import ChannelSlot


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, temp_dir):
    """Invoke the CLI with logging sent to a temp file."""
    def _invoke(*args):
        return runner.invoke(cli, ["--log-file", str(temp_dir / "test.log"), *args])
    return _invoke


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Siren Grid" in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    @pytest.mark.parametrize("command", ["info", "grid", "export"])
    def test_command_help(self, invoke, command):
        result = invoke(command, "--help")
        assert result.exit_code == 0


@pytest.mark.integration
class TestInfoCommand:
    """Test the info command."""

    def test_info(self, invoke, carcols_file):
        result = invoke("info", str(carcols_file))

        assert result.exit_code == 0
        assert "Vehicle: police_main" in result.output
        assert "Grid: 32 rows x 40 columns" in result.output
        assert "[0] police_main (id 1001)" in result.output
        assert "Tempo: 1200 bpm" in result.output

    def test_info_without_sirens(self, invoke, temp_dir):
        path = temp_dir / "empty.meta"
        path.write_text("<CVehicleModelInfoVarGlobal/>")

        result = invoke("info", str(path))

        assert result.exit_code == 1
        assert "No siren settings found" in result.output

    def test_info_missing_file(self, invoke, temp_dir):
        result = invoke("info", str(temp_dir / "nope.meta"))
        assert result.exit_code != 0


@pytest.mark.integration
class TestGridCommand:
    """Test the grid command."""

    def test_grid(self, invoke, carcols_file):
        result = invoke("grid", str(carcols_file))

        assert result.exit_code == 0
        assert "police_main - 600 bpm" in result.output
        assert "R" * 40 in result.output
        assert "extra_1" in result.output

    def test_grid_active_only(self, invoke, carcols_file):
        result = invoke("grid", str(carcols_file), "--siren", "1", "--active-only")

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "police_alt - 1200 bpm"
        assert len(lines) == 2
        assert "W" * 40 in lines[1]

    def test_grid_unknown_siren(self, invoke, carcols_file):
        result = invoke("grid", str(carcols_file), "--siren", "5")

        assert result.exit_code == 0
        assert "no siren setting 5" in result.output


@pytest.mark.integration
class TestExportCommand:
    """Test the export command."""

    def test_export_to_stdout(self, invoke, carcols_file):
        result = invoke("export", str(carcols_file))

        assert result.exit_code == 0
        descriptor = parse(result.output)
        assert descriptor.setting_count == 2
        assert descriptor.get_setting(0).channel(ChannelSlot.EXTRA_4).color == "#00FFFF"

    def test_export_to_file(self, invoke, carcols_file, temp_dir):
        output = temp_dir / "out.meta"
        result = invoke("export", str(carcols_file), "--siren", "1", "-o", str(output))

        assert result.exit_code == 0
        assert parse(output.read_text(encoding="utf-8")) == parse(carcols_file.read_text(encoding="utf-8"))

    def test_export_with_bad_config(self, runner, carcols_file, temp_dir):
        config_path = temp_dir / "config.json"
        config_path.write_text('{"default_rows": "lots"}')

        result = runner.invoke(
            cli,
            ["--log-file", str(temp_dir / "test.log"), "--config", str(config_path), "export", str(carcols_file)],
        )

        assert result.exit_code == 1
        assert "default_rows" in result.output
