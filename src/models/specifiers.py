"""
Conversion specifier metadata models

Defines the structure and categories of conversion specifiers for
compilation, binding and documentation.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List


class SpecifierCategory(Enum):
    """
    Categories of conversion specifiers

    Used for organization and documentation.
    """
    NUMERIC = "numeric"          # %d, %x, %f, %b
    TEXT = "text"                # %c, %s, %L
    STRUCTURED = "structured"    # %D, %R


@dataclass
class SpecifierSpec:
    """
    Specification for a conversion specifier

    Defines metadata, the scalar reader and the slot type for a specifier.
    Used by SpecifierRegistry to manage available conversions.

    Attributes:
        letter: Specifier character as written after '%'
        name: Short human-readable name
        category: Category for organization
        description: Human-readable description
        reader: Scalar reader (cursor, width) -> ParseOutcome
        slot_type: Output slot class the binder expects
        skips_whitespace: Whether the reader skips leading whitespace
        signed: Default signedness of IntSlots built for this specifier
        examples: Example usage strings
    """
    letter: str
    name: str
    category: SpecifierCategory
    description: str
    reader: Callable
    slot_type: type
    skips_whitespace: bool = True
    signed: bool = True
    examples: List[str] = field(default_factory=list)

    def help_line(self) -> str:
        """One-line summary of the specifier for CLI help"""
        note = "" if self.skips_whitespace else " (no whitespace skip)"
        examples = f" [{', '.join(self.examples)}]" if self.examples else ""
        return f"%{self.letter}  {self.name}: {self.description}{note}{examples}"
