"""
Format directive models

Defines the directive variants produced by the FormatCompiler and the
length modifiers recognized inside a conversion specification.

A format string such as "Age: %3hd" compiles to:
    Literal('A'), Literal('g'), Literal('e'), Literal(':'),
    WhitespaceMatch(),
    Conversion(suppressed=False, width=3, length_mod=LengthModifier.SHORT, specifier='d')
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Union


class LengthModifier(Enum):
    """
    Length modifiers of a conversion specification

    The value is the token as written in the format string. Only NONE,
    SHORT, SIGNED_BYTE, LONG and LONG_LONG change the output slot size;
    INTMAX, SIZE and PTRDIFF are accepted but bind with default sizing.
    """
    NONE = ""
    SIGNED_BYTE = "hh"
    SHORT = "h"
    LONG_LONG = "ll"
    LONG = "l"
    INTMAX = "j"
    SIZE = "z"
    PTRDIFF = "t"

    @property
    def affects_sizing(self) -> bool:
        return self in SIZING_MODIFIERS


SIZING_MODIFIERS = {
    LengthModifier.SIGNED_BYTE,
    LengthModifier.SHORT,
    LengthModifier.LONG,
    LengthModifier.LONG_LONG,
}


@dataclass(frozen=True)
class Literal:
    """
    Exact-match directive for one non-whitespace format character

    Attributes:
        char: The character the input must contain at this point
    """
    char: str


@dataclass(frozen=True)
class WhitespaceMatch:
    """Matches zero or more input whitespace characters (never fails)"""


@dataclass(frozen=True)
class Conversion:
    """
    A conversion specification (%[*][width][length]specifier)

    Attributes:
        suppressed: '*' present; value is parsed and validated but not stored
        width: Maximum field width, None when not written in the format
        length_mod: Length modifier selecting the output slot size
        specifier: Specifier letter ('d', 'x', 'f', 'c', 's', 'b', 'L', 'D', 'R')
    """
    suppressed: bool
    width: Optional[int]
    length_mod: LengthModifier
    specifier: str

    @property
    def text(self) -> str:
        """Reconstruct the conversion as it would appear in a format string"""
        star = "*" if self.suppressed else ""
        width = "" if self.width is None else str(self.width)
        return f"%{star}{width}{self.length_mod.value}{self.specifier}"


@dataclass(frozen=True)
class NoOp:
    """
    An unrecognized conversion, skipped by the dispatch loop

    Attributes:
        text: The conversion text as written (e.g. "%q" or a trailing "%")
    """
    text: str


Directive = Union[Literal, WhitespaceMatch, Conversion, NoOp]
