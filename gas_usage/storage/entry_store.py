"""
In-memory store of flow-change entries.

Validates raw form input and keeps the records ordered by timestamp.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from gas_usage.core.accumulator import compute_usage
from gas_usage.core.errors import AddResult, EntryValidationError, ValidationErrorKind
from gas_usage.core.export import format_number
from gas_usage.core.timestamps import (
    DEFAULT_MONTH,
    DEFAULT_YEAR,
    format_for_input,
    parse_timestamp
)
from .models import AMBIENT_FRACTION, DailyUsage, FlowRecord


logger = logging.getLogger(__name__)

DEFAULT_DAY = 1

# ASCII digits only; float() and int() also accept underscores and other scripts
FLOW_PATTERN = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
FRACTION_PATTERN = re.compile(r"[0-9]{1,3}")


@dataclass(frozen=True)
class EntryDraft:
    """Form text of a record taken out of the store for editing."""
    timestamp_text: str
    flow_text: str
    fraction_text: str


class EntryStore:
    """Ordered collection of flow records.

    Input is validated on add; a rejected entry leaves the store
    untouched. Out-of-range indices are ignored rather than raising,
    since list positions shown to the user can be stale.
    """

    def __init__(self, year: int = DEFAULT_YEAR, month: int = DEFAULT_MONTH):
        """Initialize an empty store.

        Args:
            year: Reference year for parsed timestamps
            month: Reference month for parsed timestamps
        """
        self.year = year
        self.month = month
        self._records: List[FlowRecord] = []
        self._last_day: Optional[int] = None

    def __len__(self) -> int:
        return len(self._records)

    @property
    def last_day(self) -> int:
        """Day inherited by entries typed without a day."""
        return self._last_day if self._last_day is not None else DEFAULT_DAY

    def add(
        self,
        timestamp_text: str,
        flow_text: str,
        fraction_text: str = "",
        fraction_mode: bool = False
    ) -> AddResult:
        """Validate raw entry text and insert the record.

        Args:
            timestamp_text: "DDHHMM" or "HHMM"
            flow_text: Flow rate in L/min
            fraction_text: FiO2 percentage, only read in fraction mode
            fraction_mode: Whether FiO2 is required

        Returns:
            AddResult with the stored record, or with the validation error
        """
        try:
            record = self._parse_entry(timestamp_text, flow_text, fraction_text, fraction_mode)
        except EntryValidationError as e:
            logger.debug("Rejected entry %r: %s", timestamp_text, e.message)
            return AddResult(error=e)

        self._records.append(record)
        self._records.sort(key=lambda r: r.timestamp)
        self._last_day = record.timestamp.day

        logger.debug("Added entry at %s (%d total)", record.timestamp.isoformat(), len(self._records))
        return AddResult(record=record)

    def _parse_entry(
        self,
        timestamp_text: str,
        flow_text: str,
        fraction_text: str,
        fraction_mode: bool
    ) -> FlowRecord:
        if not timestamp_text or not timestamp_text.strip() or not flow_text or not flow_text.strip():
            raise EntryValidationError(
                ValidationErrorKind.MISSING_FIELD,
                "Enter both a date/time and a flow rate."
            )

        timestamp = parse_timestamp(timestamp_text, self.last_day, self.year, self.month)
        if timestamp is None:
            raise EntryValidationError(
                ValidationErrorKind.INVALID_TIMESTAMP,
                f"Invalid date/time: {timestamp_text!r}."
            )

        flow_text = flow_text.strip()
        flow = float(flow_text) if FLOW_PATTERN.fullmatch(flow_text) else math.nan
        if not math.isfinite(flow):
            raise EntryValidationError(
                ValidationErrorKind.INVALID_FLOW,
                f"Invalid flow rate: {flow_text!r}."
            )

        fraction = AMBIENT_FRACTION
        if fraction_mode:
            fraction_text = (fraction_text or "").strip()
            fraction = int(fraction_text) if FRACTION_PATTERN.fullmatch(fraction_text) else -1
            if fraction < AMBIENT_FRACTION or fraction > 100:
                raise EntryValidationError(
                    ValidationErrorKind.INVALID_FRACTION,
                    "Invalid FiO2. Enter a whole number from 21 to 100."
                )

        return FlowRecord(timestamp=timestamp, flow_rate=flow, inspired_fraction=fraction)

    def remove(self, index: int) -> None:
        """Delete the record at index; out-of-range indices are ignored."""
        if 0 <= index < len(self._records):
            removed = self._records.pop(index)
            logger.debug("Removed entry at %s", removed.timestamp.isoformat())

    def get(self, index: int) -> Optional[FlowRecord]:
        """Record at index, or None if out of range."""
        if 0 <= index < len(self._records):
            return self._records[index]
        return None

    def take_for_edit(self, index: int) -> Optional[EntryDraft]:
        """Remove a record and return its form text for re-entry.

        Re-submitting the draft through add() recreates the record.
        """
        record = self.get(index)
        if record is None:
            return None
        self.remove(index)
        return EntryDraft(
            timestamp_text=format_for_input(record.timestamp),
            flow_text=format_number(record.flow_rate),
            fraction_text=str(record.inspired_fraction)
        )

    def clear(self) -> None:
        """Remove all records and forget the last used day."""
        self._records = []
        self._last_day = None

    def snapshot(self) -> Tuple[FlowRecord, ...]:
        """Immutable, timestamp-ordered view of the records."""
        return tuple(self._records)

    def compute_usage(self, fraction_mode: bool, no_ambient_mode: bool) -> Dict[int, DailyUsage]:
        """Daily usage over the current records."""
        return compute_usage(self.snapshot(), fraction_mode, no_ambient_mode)
