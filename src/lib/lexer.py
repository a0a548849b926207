"""
Custom Pygments lexer for formscan format strings

Highlights scanf-style format strings when the CLI echoes them at higher
verbosity.

Token types:
- Punctuation: The '%' introducing a conversion
- Operator: Suppression star
- Number.Integer: Field width
- Keyword.Type: Length modifier (hh, h, l, ll, j, z, t)
- Name.Function: Specifier letter
- String.Escape: %%
- Error: Unrecognized conversions
- Text.Whitespace: Whitespace runs (match any amount of input whitespace)
- String: Literal characters
"""

import re

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Error,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)

from .specifiers import SpecifierRegistry

SPECIFIER_LETTERS = re.escape(SpecifierRegistry().letters())


class ScanFormatLexer(RegexLexer):
    """
    Lexer for scanf-style format strings

    Example:
        Age:%*3hd

    Tokens:
        Age: → String
        % → Punctuation
        * → Operator
        3 → Number.Integer
        h → Keyword.Type
        d → Name.Function
    """

    name = 'ScanFormat'
    aliases = ['scanformat', 'formscan']
    filenames = []
    flags = re.DOTALL
    ensurenl = False

    tokens = {
        'root': [
            (r'%%', String.Escape),

            # Known conversion: %[*][width][length]specifier
            (r'(%)(\*?)([0-9]*)(hh|h|ll|l|j|z|t)?([' + SPECIFIER_LETTERS + r'])',
             bygroups(Punctuation, Operator, Number.Integer, Keyword.Type, Name.Function)),

            # Any other character after the prefix, whitespace included, is
            # taken as the unknown specifier
            (r'%\*?[0-9]*(?:hh|h|ll|l|j|z|t)?.?', Error),

            (r'[ \t\n\v\f\r]+', Text.Whitespace),
            (r'[^% \t\n\v\f\r]+', String),
        ],
    }


def format_highlight(format: str) -> str:
    """
    Render a format string with terminal colors

    Args:
        format: Format string to render

    Returns:
        ANSI-colored text
    """
    return highlight(format, ScanFormatLexer(), TerminalFormatter())
