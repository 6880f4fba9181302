"""
Data models for the entry store.

Defines flow-change records and per-day usage aggregates.
"""

from dataclasses import dataclass
from datetime import datetime


AMBIENT_FRACTION = 21


@dataclass(frozen=True)
class FlowRecord:
    """Immutable flow-change event entered by the user.

    The record is in effect from its timestamp until the next record
    (or the end of its calendar day). Edits are modelled as
    delete-then-reinsert, never as mutation.
    """
    timestamp: datetime
    flow_rate: float  # L/min
    inspired_fraction: int = AMBIENT_FRACTION  # FiO2 in percent

    def __post_init__(self):
        """Validate flow and fraction ranges."""
        if self.flow_rate < 0:
            raise ValueError("flow_rate cannot be negative")
        if not AMBIENT_FRACTION <= self.inspired_fraction <= 100:
            raise ValueError("inspired_fraction must be between 21 and 100")


@dataclass
class DailyUsage:
    """Gas volumes consumed on one day of the month, in liters."""
    oxygen_liters: float = 0.0
    diluent_liters: float = 0.0
