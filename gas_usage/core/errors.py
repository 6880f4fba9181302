"""
Entry validation errors.

Bad form input is reported back to the caller as a value, never raised
out of the entry store.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gas_usage.storage.models import FlowRecord


class ValidationErrorKind(Enum):
    """Reasons an entry can be rejected."""
    MISSING_FIELD = "missing_field"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_FLOW = "invalid_flow"
    INVALID_FRACTION = "invalid_fraction"


class EntryValidationError(ValueError):
    """Rejected entry with a human-readable reason."""
    def __init__(self, kind: ValidationErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class AddResult:
    """Outcome of adding an entry: either the stored record or the error."""
    record: Optional[FlowRecord] = None
    error: Optional[EntryValidationError] = None

    @property
    def success(self) -> bool:
        return self.error is None
