"""
Models package for formscan

Contains data structures and type definitions for the scanning engine
and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .directives import Conversion, Directive, LengthModifier, Literal, NoOp, WhitespaceMatch
from .specifiers import SpecifierCategory, SpecifierSpec
from .outcomes import CalendarDate, FailureKind, ParseOutcome, RGBColor, ScanReport
from .slots import CharSlot, ColorSlot, DateSlot, FloatSlot, IntSlot, StrSlot

__all__ = [
    "ProgramState",
    "pipeline",
    "Conversion",
    "Directive",
    "LengthModifier",
    "Literal",
    "NoOp",
    "WhitespaceMatch",
    "SpecifierCategory",
    "SpecifierSpec",
    "CalendarDate",
    "FailureKind",
    "ParseOutcome",
    "RGBColor",
    "ScanReport",
    "CharSlot",
    "ColorSlot",
    "DateSlot",
    "FloatSlot",
    "IntSlot",
    "StrSlot",
]
