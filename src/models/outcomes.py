"""
Reader and scan outcome models

Type-safe structures returned by the scalar readers and the dispatch loop.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Optional


class FailureKind(Enum):
    """
    Why a reader or directive did not succeed

    The dispatch loop halts on any of these; only END_OF_INPUT before the
    first conversion changes the value returned to the caller.
    """
    END_OF_INPUT = "end-of-input"    # stream exhausted before a significant character
    MATCH = "match"                  # character class mismatch
    WIDTH = "width"                  # field width left no room for a valid value
    STRUCTURAL = "structural"        # date separator or color '#'/pair problem
    LOGICAL = "logical"              # date outside the calendar


@dataclass(frozen=True)
class RGBColor:
    """
    A color parsed from #RRGGBB

    Attributes:
        red: 0-255
        green: 0-255
        blue: 0-255
    """
    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class CalendarDate:
    """
    A validated calendar date parsed from DD/MM/YYYY or DD-MM-YYYY

    Attributes:
        day: 1-31, bounded by month and leap-year rules
        month: 1-12
        year: Non-negative year
    """
    day: int
    month: int
    year: int


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of one scalar reader call

    Either ok with a value, or a failure with its kind. On failure the
    cursor has already been restored according to the reader's contract.

    Example:
        >>> ParseOutcome.success(42)
        ParseOutcome(ok=True, value=42, failure=None)
        >>> ParseOutcome.fail(FailureKind.MATCH).ok
        False
    """
    ok: bool
    value: Any = None
    failure: Optional[FailureKind] = None

    @classmethod
    def success(cls, value: Any) -> "ParseOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def fail(cls, kind: FailureKind) -> "ParseOutcome":
        return cls(ok=False, failure=kind)


@dataclass
class ScanReport:
    """
    Result of running a directive sequence against a cursor

    Returned by Scanner.directives_run(). scan() reduces it to an int.

    Attributes:
        assigned: Conversions stored into output slots
        converted: Successful conversions, suppressed ones included
        halted: True if a directive failed before the end of the sequence
        failure: Kind of the halting failure, if any
        halted_at: Index of the halting directive, if any
        consumed: Characters consumed from the cursor during the run
    """
    assigned: int = 0
    converted: int = 0
    halted: bool = False
    failure: Optional[FailureKind] = None
    halted_at: Optional[int] = None
    consumed: int = 0

    @property
    def input_failure(self) -> bool:
        """End of input was hit before any conversion succeeded"""
        return self.failure is FailureKind.END_OF_INPUT and self.converted == 0
