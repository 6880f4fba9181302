"""
Daily gas usage accumulation.

Walks the ordered flow records and converts them into liters consumed
per day of month, splitting every record's active interval at midnight.
"""

import logging
import math
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Dict, Sequence, Tuple

from gas_usage.storage.models import AMBIENT_FRACTION, DailyUsage, FlowRecord


logger = logging.getLogger(__name__)

# Non-oxygen share of room air, used to dilute supplemental oxygen
AMBIENT_DILUENT_SHARE = 0.79


class GasMode(Enum):
    """Gas-fraction accounting mode."""
    PLAIN = "plain"                # flow is pure oxygen
    SUPPLEMENTAL = "supplemental"  # oxygen above room air only
    NO_AMBIENT = "no_ambient"      # oxygen/nitrogen mix, no room air


def resolve_mode(fraction_mode: bool, no_ambient_mode: bool) -> GasMode:
    """Pick the accounting mode from the two settings flags.

    no_ambient_mode only applies when fraction_mode is on.
    """
    if not fraction_mode:
        return GasMode.PLAIN
    if no_ambient_mode:
        return GasMode.NO_AMBIENT
    return GasMode.SUPPLEMENTAL


def gas_volumes(record: FlowRecord, minutes: float, mode: GasMode) -> Tuple[float, float]:
    """Oxygen and diluent liters used by one record over `minutes`.

    Args:
        record: Flow record in effect
        minutes: Duration of the chunk in minutes
        mode: Accounting mode

    Returns:
        (oxygen_liters, diluent_liters), unrounded
    """
    flow = record.flow_rate
    fio2 = record.inspired_fraction

    if mode == GasMode.PLAIN:
        return flow * minutes, 0.0

    if mode == GasMode.SUPPLEMENTAL:
        # Nothing is added at room-air FiO2
        rate = max(0.0, (fio2 - AMBIENT_FRACTION) * 0.01 / AMBIENT_DILUENT_SHARE * flow)
        return rate * minutes, 0.0

    oxygen = fio2 * 0.01 * flow * minutes
    diluent = (100 - fio2) * 0.01 * flow * minutes
    return oxygen, diluent


def round_liters(value: float) -> float:
    """Round half-up to one decimal place.

    Overflowed totals are returned as they are.
    """
    shifted = value * 10 + 0.5
    if not math.isfinite(shifted):
        return value
    return math.floor(shifted) / 10


def _next_midnight(dt: datetime) -> datetime:
    return datetime.combine(dt.date() + timedelta(days=1), time())


def compute_usage(
    records: Sequence[FlowRecord],
    fraction_mode: bool,
    no_ambient_mode: bool
) -> Dict[int, DailyUsage]:
    """Compute gas usage per day of month.

    Each record is active until the next record's timestamp. The last
    record is active until the end of its own day. Intervals crossing
    midnight are split so that every chunk is credited to the day it
    falls on. Totals are rounded once, after accumulation.

    Buckets are keyed by day of month only, so the same day number in
    two different months shares one bucket.

    Args:
        records: Records sorted ascending by timestamp
        fraction_mode: Whether FiO2 values are used
        no_ambient_mode: Whether the source gas is a mix with no room air

    Returns:
        Mapping of day of month to DailyUsage, in chronological order
    """
    usage: Dict[int, DailyUsage] = {}
    if not records:
        return usage

    mode = resolve_mode(fraction_mode, no_ambient_mode)

    for i, record in enumerate(records):
        if i + 1 < len(records):
            coverage_end = records[i + 1].timestamp
        else:
            coverage_end = _next_midnight(record.timestamp)

        pointer = record.timestamp
        remaining = coverage_end - pointer

        while remaining > timedelta(0):
            chunk_end = min(coverage_end, _next_midnight(pointer))
            chunk = chunk_end - pointer
            minutes = chunk.total_seconds() / 60

            oxygen, diluent = gas_volumes(record, minutes, mode)
            bucket = usage.setdefault(pointer.day, DailyUsage())
            bucket.oxygen_liters += oxygen
            bucket.diluent_liters += diluent

            pointer = chunk_end
            remaining -= chunk

    for bucket in usage.values():
        bucket.oxygen_liters = round_liters(bucket.oxygen_liters)
        bucket.diluent_liters = round_liters(bucket.diluent_liters)

    logger.debug(
        "Computed %s usage for %d record(s) over %d day(s)",
        mode.value, len(records), len(usage)
    )
    return usage
