"""
Configuration management and loading.

Handles calculator settings: accounting modes and the reference calendar.
"""

import calendar
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import yaml

from gas_usage.core.accumulator import GasMode, resolve_mode
from gas_usage.core.timestamps import DEFAULT_MONTH, DEFAULT_YEAR


@dataclass(frozen=True)
class ModeConfig:
    """Gas accounting mode flags."""
    fraction_mode: bool = False
    no_ambient_mode: bool = False

    def __post_init__(self):
        """No-ambient accounting needs FiO2 values to split the mix."""
        if self.no_ambient_mode and not self.fraction_mode:
            raise ValueError("no_ambient_mode requires fraction_mode")

    @property
    def gas_mode(self) -> GasMode:
        return resolve_mode(self.fraction_mode, self.no_ambient_mode)


@dataclass(frozen=True)
class CalendarConfig:
    """Year and month that entered day numbers belong to."""
    year: int = DEFAULT_YEAR
    month: int = DEFAULT_MONTH

    def __post_init__(self):
        """Validate calendar values."""
        if self.year < 1:
            raise ValueError("year must be >= 1")
        if not 1 <= self.month <= 12:
            raise ValueError("month must be between 1 and 12")

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]


@dataclass(frozen=True)
class Settings:
    """Complete calculator configuration."""
    modes: ModeConfig = field(default_factory=ModeConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)


def load_settings(path: str) -> Settings:
    """Load and validate calculator settings from a YAML file.

    Unknown keys and wrongly typed values are rejected instead of being
    ignored, so a typo cannot silently switch the accounting mode.

    Args:
        path: Path to YAML configuration file

    Returns:
        Validated Settings object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in settings file {path}: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'modes', 'calendar'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    modes_data = _section(raw_config, 'modes', {'fraction_mode', 'no_ambient_mode'})
    for key, value in modes_data.items():
        if not isinstance(value, bool):
            raise ValueError(f"'modes.{key}' must be true or false")

    calendar_data = _section(raw_config, 'calendar', {'year', 'month'})
    for key, value in calendar_data.items():
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"'calendar.{key}' must be an integer")

    return Settings(
        modes=ModeConfig(**modes_data),
        calendar=CalendarConfig(**calendar_data)
    )


def _section(raw_config: Dict, name: str, allowed_keys: set) -> Dict:
    """Extract an optional sub-section, rejecting unknown keys.

    Raises:
        ValueError: If the section is not a dictionary or has unknown keys
    """
    data = raw_config.get(name)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{name}' must be a dictionary")

    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown {name} keys: {unknown_keys}")
    return data
