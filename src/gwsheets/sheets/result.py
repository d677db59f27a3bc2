"""
Tagged results for lookups.
A lookup that finds nothing, or finds more than one candidate, is an
expected outcome rather than an exception, so the caller gets a Result
holding either the entity or the reason it couldn't be resolved.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import LookupFailed

class WorksheetLookupError(Enum):
    NO_ENTRY = "no-entry"
    NO_WORKSHEET = "no-worksheet"
    MORE_THAN_ONE_WORKSHEET = "more-than-one-worksheet"

class SpreadsheetLookupError(Enum):
    NO_ENTRY = "no-entry"
    NO_SPREADSHEET = "no-spreadsheet"
    MORE_THAN_ONE_SPREADSHEET = "more-than-one-spreadsheet"

class CellLookupError(Enum):
    NO_CELLS = "no-cells"
    MORE_THAN_ONE_CELL = "more-than-one-cell"

@dataclass(frozen=True)
class Result():
    """
    Exactly one of value or error is set.  Truthy on success.
    """
    value: Any = field(default=None)
    error: WorksheetLookupError|SpreadsheetLookupError|CellLookupError|None = field(default=None)

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("Result must have exactly one of value or error")

    def __bool__(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        return f"ok:{self.value}" if self else f"error:{self.error.value}"

    @classmethod
    def ok(cls, value: Any):
        return cls(value=value)

    @classmethod
    def fail(cls, error: WorksheetLookupError|SpreadsheetLookupError|CellLookupError):
        return cls(error=error)

    def unwrap(self) -> Any:
        """The value, or LookupFailed carrying the error reason"""
        if self.error is not None:
            raise LookupFailed(self.error)
        return self.value
