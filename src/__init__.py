"""
formscan - scanf-style formatted input engine

Reads typed values (integers, floats, characters, words, lines, dates and
colors) from text according to a format string.
"""

__version__ = "1.0.0"

from .lib import (
    ArgumentBinder,
    FormatCompiler,
    InputCursor,
    Scanner,
    SlotError,
    SpecifierRegistry,
    scan,
    scan_values,
    LOG,
    state_connectToLogger,
)
from .models import (
    CalendarDate,
    CharSlot,
    ColorSlot,
    DateSlot,
    FloatSlot,
    IntSlot,
    RGBColor,
    StrSlot,
)

__all__ = [
    "ArgumentBinder",
    "FormatCompiler",
    "InputCursor",
    "Scanner",
    "SlotError",
    "SpecifierRegistry",
    "scan",
    "scan_values",
    "LOG",
    "state_connectToLogger",
    "CalendarDate",
    "CharSlot",
    "ColorSlot",
    "DateSlot",
    "FloatSlot",
    "IntSlot",
    "RGBColor",
    "StrSlot",
    "__version__",
]
