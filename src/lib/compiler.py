"""
Format string compiler for formscan

Transforms a format string into a flat list of directives in a single
left-to-right pass.

Grammar:
    whitespace run          -> WhitespaceMatch()
    %%                      -> Literal('%')
    %[*][width][len]letter  -> Conversion(...)
    % + unknown letter      -> NoOp(text)  (SyntaxError in strict mode)
    any other character     -> Literal(char)

where len is one of hh, h, ll, l, j, z, t (longest match first).

Example:
    >>> FormatCompiler("%*3c%c").compile()
    [Conversion(suppressed=True, width=3, length_mod=<LengthModifier.NONE: ''>, specifier='c'),
     Conversion(suppressed=False, width=None, length_mod=<LengthModifier.NONE: ''>, specifier='c')]
"""

from typing import List, Optional

from ..config import appsettings
from ..models.directives import (
    Conversion,
    Directive,
    LengthModifier,
    Literal,
    NoOp,
    WhitespaceMatch,
)
from .log import LOG
from .readers import DIGITS, WHITESPACE

# Longest tokens first so "hh" is not read as "h" followed by 'h'
LENGTH_TOKENS = [
    LengthModifier.SIGNED_BYTE,
    LengthModifier.SHORT,
    LengthModifier.LONG_LONG,
    LengthModifier.LONG,
    LengthModifier.INTMAX,
    LengthModifier.SIZE,
    LengthModifier.PTRDIFF,
]


class FormatCompiler:
    """
    Compiler for scanf-style format strings

    Handles:
    - Literal characters and whitespace runs
    - Conversion specifications with suppression, width and length
    - %% escapes
    - Unknown specifiers (NoOp, or SyntaxError when strict)
    """

    def __init__(self, format: str, registry=None, strict: Optional[bool] = None):
        """
        Initialize compiler with a format string

        Args:
            format: Format string to compile
            registry: Optional SpecifierRegistry deciding which letters exist
            strict: Raise on unknown specifiers (defaults to appsettings.strict_mode)

        Attributes:
            position: Current character position in the format
            line_number: Current line in the format (for error reporting)
            directives: Accumulated directive list
        """
        self.format = format
        self.position = 0
        self.line_number = 1
        self.directives: List[Directive] = []

        if registry is None:
            from .specifiers import SpecifierRegistry
            registry = SpecifierRegistry()
        self.registry = registry
        self.strict = appsettings.strict_mode if strict is None else strict

    def compile(self) -> List[Directive]:
        """
        Compile the whole format string

        Returns:
            List of directives in format order
        """
        LOG(f"Compiling format {self.format!r}", level=3)
        while self.position < len(self.format):
            c = self.format[self.position]
            if c in WHITESPACE:
                self.whitespace_compile()
            elif c == "%":
                self.conversion_compile()
            else:
                self.directives.append(Literal(c))
                self.char_advance()
        LOG(f"Compiled {len(self.directives)} directives", level=3)
        return self.directives

    def char_peek(self) -> Optional[str]:
        if self.position < len(self.format):
            return self.format[self.position]
        return None

    def char_advance(self) -> None:
        if self.format[self.position] == "\n":
            self.line_number += 1
        self.position += 1

    def whitespace_compile(self) -> None:
        """Collapse a run of format whitespace into one WhitespaceMatch"""
        while self.char_peek() is not None and self.char_peek() in WHITESPACE:
            self.char_advance()
        self.directives.append(WhitespaceMatch())

    def width_take(self) -> Optional[int]:
        """Read an optional decimal field width"""
        start = self.position
        while self.char_peek() is not None and self.char_peek() in DIGITS:
            self.char_advance()
        if self.position == start:
            return None
        return int(self.format[start:self.position])

    def lengthModifier_take(self) -> LengthModifier:
        """Read an optional length modifier token"""
        for modifier in LENGTH_TOKENS:
            if self.format.startswith(modifier.value, self.position):
                self.position += len(modifier.value)
                return modifier
        return LengthModifier.NONE

    def conversion_compile(self) -> None:
        """Compile one %-introduced specification starting at the current position"""
        start = self.position
        start_line = self.line_number
        self.char_advance()

        if self.char_peek() == "%":
            self.char_advance()
            self.directives.append(Literal("%"))
            return

        suppressed = self.char_peek() == "*"
        if suppressed:
            self.char_advance()
        width = self.width_take()
        length_mod = self.lengthModifier_take()

        letter = self.char_peek()
        if letter is None or self.registry.spec_get(letter) is None:
            if letter is not None:
                self.char_advance()
            text = self.format[start:self.position]
            if self.strict:
                self.position = start
                self.line_number = start_line
                if letter is None:
                    self.error(f"Conversion '{text}' is missing its specifier")
                self.error(f"Unknown conversion specifier '{letter}' in '{text}'")
            LOG(f"Skipping unknown conversion '{text}'", level=3)
            self.directives.append(NoOp(text))
            return

        self.char_advance()
        self.directives.append(Conversion(
            suppressed=suppressed,
            width=width,
            length_mod=length_mod,
            specifier=letter,
        ))

    def error(self, message: str) -> None:
        """
        Report a format error with context

        Raises:
            SyntaxError: Always, with line, position and a caret under the
                         offending conversion
        """
        context_start = max(0, self.position - 40)
        context_end = min(len(self.format), self.position + 40)
        context = self.format[context_start:context_end]

        raise SyntaxError(
            f"\n{message}\n"
            f"Line {self.line_number}, position {self.position}\n"
            f"Context: ...{context}...\n"
            f"         {' ' * (self.position - context_start + 3)}^"
        )
