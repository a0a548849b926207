"""
Output slot models

Slots are the caller-owned, typed, mutable targets that conversions are
bound to, matched positionally against the non-suppressed conversions of a
format string. The binder narrows values to the slot's declared size.

Example:
    >>> count, day = IntSlot(), DateSlot()
    >>> scan("%d %D", [count, day], "3 01/02/2024")
    2
    >>> count.value, day.value.month
    (3, 2)
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .outcomes import CalendarDate, RGBColor


@dataclass
class IntSlot:
    """
    Integer slot for %d, %x and %b

    Attributes:
        bits: Storage width (8, 16, 32 or 64), must match the length modifier
        signed: Two's-complement signed storage when True
        value: Last stored value
    """
    bits: int = 32
    signed: bool = True
    value: int = 0


@dataclass
class FloatSlot:
    """
    Floating point slot for %f (bits=32) and %lf (bits=64)

    Attributes:
        bits: 32 for single precision, 64 for double precision
        value: Last stored value
    """
    bits: int = 32
    value: float = 0.0


@dataclass
class CharSlot:
    """
    Fixed-size character block for %c

    The block is never terminated: a %Nc conversion overwrites the first N
    cells and leaves the rest of the buffer untouched.

    Attributes:
        buffer: Character cells, one str of length 1 each
    """
    buffer: List[str] = field(default_factory=lambda: ["\0"])

    @classmethod
    def sized(cls, size: int, fill: str = "\0") -> "CharSlot":
        """Create a block of `size` cells prefilled with `fill`"""
        return cls(buffer=[fill] * size)

    @property
    def size(self) -> int:
        return len(self.buffer)

    @property
    def value(self) -> str:
        return "".join(self.buffer)


@dataclass
class StrSlot:
    """String slot for %s and %L (always holds a complete string)"""
    value: str = ""


@dataclass
class DateSlot:
    """Date slot for %D"""
    value: Optional[CalendarDate] = None


@dataclass
class ColorSlot:
    """Color slot for %R"""
    value: Optional[RGBColor] = None
