"""
Tests for the CLI interface.
"""
import pytest
import yaml
from typer.testing import CliRunner

from gas_usage.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL

runner = CliRunner()


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings file enabling fraction mode."""
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.dump({"modes": {"fraction_mode": True}}), encoding="utf-8")
    return str(path)


class TestCalculateCommand:
    """Test the calculate command."""

    def test_single_entry(self):
        """Plain mode usage until midnight."""
        result = runner.invoke(app, ["calculate", "011000,2"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Daily Gas Usage" in result.output
        assert "1680" in result.output
        assert "1d 10:00 2L/min" in result.output

    def test_overnight_entries(self):
        result = runner.invoke(app, ["calculate", "012200,5", "020800,1"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "600" in result.output
        assert "3360" in result.output

    def test_fraction_mode(self):
        """FiO2 is shown and used."""
        result = runner.invoke(app, ["calculate", "030900,10,40", "--fraction"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "FiO2:40%" in result.output
        assert "2164.6" in result.output

    def test_no_ambient_mode(self):
        """Nitrogen column appears in no-ambient mode."""
        result = runner.invoke(app, ["calculate", "041400,15,60", "-f", "-n"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Nitrogen" in result.output
        assert "5400" in result.output
        assert "3600" in result.output

    def test_export(self):
        """Billing text is printed per day."""
        result = runner.invoke(app, ["calculate", "011000,2", "--export"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "1d: oxygen 1680L" in result.output
        assert "402400+552010/1680*1" in result.output

    def test_export_no_ambient(self):
        result = runner.invoke(app, ["calculate", "041400,15,60", "-f", "-n", "-e"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "402400+552010/5400*1" in result.output
        assert "402400+552010/3600*1" in result.output

    def test_rejected_entry(self):
        """Invalid time fails the command."""
        result = runner.invoke(app, ["calculate", "012500,2"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Rejected entry" in result.output
        assert "Invalid date/time" in result.output

    def test_missing_fraction_in_fraction_mode(self):
        result = runner.invoke(app, ["calculate", "010900,2", "--fraction"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Invalid FiO2" in result.output

    def test_too_many_fields(self):
        result = runner.invoke(app, ["calculate", "010900,2,40,1"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "expected TIME,FLOW[,FIO2]" in result.output

    def test_no_ambient_requires_fraction(self):
        result = runner.invoke(app, ["calculate", "010900,2", "--no-ambient"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "requires fraction_mode" in result.output

    def test_settings_file_enables_fraction_mode(self, settings_file):
        result = runner.invoke(app, ["calculate", "030900,10,40", "--config", settings_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "2164.6" in result.output

    def test_missing_settings_file(self):
        result = runner.invoke(app, ["calculate", "010900,2", "-c", "nonexistent.yaml"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Settings file not found" in result.output


class TestStatusCommand:
    """Test the status command."""

    def test_default_status(self):
        result = runner.invoke(app, ["status"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "ready" in result.output
        assert "Mode: plain" in result.output
        assert "2024-01" in result.output

    def test_status_with_settings(self, settings_file):
        result = runner.invoke(app, ["status", "--config", settings_file])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Mode: supplemental" in result.output


def test_no_command_prints_hint():
    result = runner.invoke(app, [])

    assert result.exit_code == 0
    assert "Use --help" in result.output
