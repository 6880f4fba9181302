"""
Unit tests for usage text formatting.
"""

import pytest

from gas_usage.core.export import format_number, format_usage_line, generate_usage_text
from gas_usage.storage.models import DailyUsage


class TestFormatNumber:
    """Test number rendering."""

    @pytest.mark.parametrize("value, expected", [
        (1680.0, "1680"),
        (0.0, "0"),
        (50, "50"),
        (2164.6, "2164.6"),
        (120.5, "120.5"),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestGenerateUsageText:
    """Test billing text for the clipboard."""

    def test_normal_mode(self):
        """Only the oxygen line is produced."""
        assert generate_usage_text(120.5, 50, False) == "402400+552010/120.5*1"

    def test_no_ambient_mode(self):
        """Nitrogen gets its own line."""
        text = generate_usage_text(120.5, 50, True)
        assert text == "402400+552010/120.5*1\n402400+552010/50*1"

    def test_no_ambient_mode_without_nitrogen(self):
        """No nitrogen line when nothing was used."""
        assert generate_usage_text(1680.0, 0.0, True) == "402400+552010/1680*1"


class TestFormatUsageLine:
    """Test per-day summary lines."""

    def test_oxygen_only(self):
        usage = DailyUsage(oxygen_liters=1680.0, diluent_liters=0.0)
        assert format_usage_line(3, usage, False) == "3d: oxygen 1680L"

    def test_with_nitrogen(self):
        usage = DailyUsage(oxygen_liters=5400.0, diluent_liters=3600.0)
        assert format_usage_line(4, usage, True) == "4d: oxygen 5400L / nitrogen 3600L"
