"""
Usage text for display and clipboard export.

The export line is a fixed billing-code template consumed by the
hospital ordering system and must be reproduced exactly.
"""

from gas_usage.storage.models import DailyUsage


BILLING_CODE_PREFIX = "402400+552010"


def format_number(value: float) -> str:
    """Render a number without a trailing ".0" when it is whole."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def generate_usage_text(oxygen: float, diluent: float, no_ambient_mode: bool) -> str:
    """Build the billing text for one day.

    Args:
        oxygen: Oxygen liters (already rounded)
        diluent: Nitrogen liters (already rounded)
        no_ambient_mode: Whether nitrogen is billed as well

    Returns:
        One line for oxygen, plus a nitrogen line when there is any
    """
    text = f"{BILLING_CODE_PREFIX}/{format_number(oxygen)}*1"
    if no_ambient_mode and diluent > 0:
        text += f"\n{BILLING_CODE_PREFIX}/{format_number(diluent)}*1"
    return text


def format_usage_line(day: int, usage: DailyUsage, no_ambient_mode: bool) -> str:
    """Human-readable summary, e.g. "3d: oxygen 1680L / nitrogen 0L"."""
    line = f"{day}d: oxygen {format_number(usage.oxygen_liters)}L"
    if no_ambient_mode:
        line += f" / nitrogen {format_number(usage.diluent_liters)}L"
    return line
