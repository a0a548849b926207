"""
formscan - scanf-style formatted input engine

Format compiler, scalar readers, argument binder and dispatch loop.
"""

__version__ = "1.0.0"

from .cursor import InputCursor
from .compiler import FormatCompiler
from .specifiers import SpecifierRegistry
from .binder import ArgumentBinder, SlotError
from .scanner import Scanner, scan, scan_values
from .lexer import ScanFormatLexer, format_highlight
from .log import LOG, state_connectToLogger

__all__ = [
    "InputCursor",
    "FormatCompiler",
    "SpecifierRegistry",
    "ArgumentBinder",
    "SlotError",
    "Scanner",
    "scan",
    "scan_values",
    "ScanFormatLexer",
    "format_highlight",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
