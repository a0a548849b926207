"""
Conversion specifier registry for formscan

Maps each specifier letter to its scalar reader and output slot type.
Uses SpecifierSpec for metadata; the compiler consults the registry to
recognize specifiers and the scanner dispatches through it.
"""

from typing import Callable, Dict, List, Optional

from ..models.specifiers import SpecifierCategory, SpecifierSpec
from ..models.slots import CharSlot, ColorSlot, DateSlot, FloatSlot, IntSlot, StrSlot
from . import readers


class SpecifierRegistry:
    """
    Registry of conversion specifiers

    Maps specifier letters to SpecifierSpec objects containing metadata,
    readers and slot types. Each Scanner owns its registry, so custom
    specifiers can be registered without affecting other scans.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in specifiers"""
        self.specs: Dict[str, SpecifierSpec] = {}
        self.numericSpecifiers_register()
        self.textSpecifiers_register()
        self.structuredSpecifiers_register()

    def register(self, spec: SpecifierSpec) -> None:
        """Register a specifier specification, replacing any previous one"""
        if len(spec.letter) != 1 or not spec.letter.isalpha():
            raise ValueError(f"Specifier letter must be a single letter, got '{spec.letter}'")
        self.specs[spec.letter] = spec

    def get(self, letter: str) -> Optional[Callable]:
        """
        Get the scalar reader for a specifier letter

        Args:
            letter: Specifier character as written after '%'

        Returns:
            Reader function or None if the letter is not registered
        """
        spec = self.spec_get(letter)
        return spec.reader if spec else None

    def spec_get(self, letter: str) -> Optional[SpecifierSpec]:
        """Get full specifier specification by letter"""
        return self.specs.get(letter)

    def specifiers_listByCategory(self, category: SpecifierCategory) -> List[SpecifierSpec]:
        """Get all specifiers in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def letters(self) -> str:
        """All registered specifier letters, in registration order"""
        return "".join(self.specs)

    def help_format(self) -> str:
        """
        Describe the registered specifiers, grouped by category

        Used as the CLI help epilog.
        """
        lines = []
        for category in SpecifierCategory:
            specs = self.specifiers_listByCategory(category)
            if not specs:
                continue
            lines.append(f"{category.value} conversions:")
            lines.extend(f"  {spec.help_line()}" for spec in specs)
        return "\n".join(lines)

    def numericSpecifiers_register(self) -> None:
        """Register %d, %x, %f and %b"""
        self.register(SpecifierSpec(
            letter="d",
            name="decimal",
            category=SpecifierCategory.NUMERIC,
            description="Signed decimal integer, leading zeros stay decimal",
            reader=readers.integer_read,
            slot_type=IntSlot,
            examples=["%d", "%4d", "%hhd", "%lld"],
        ))

        self.register(SpecifierSpec(
            letter="x",
            name="hex",
            category=SpecifierCategory.NUMERIC,
            description="Hexadecimal integer with optional sign and 0x/0X prefix",
            reader=readers.hex_read,
            slot_type=IntSlot,
            signed=False,
            examples=["%x", "%3x", "%lx"],
        ))

        self.register(SpecifierSpec(
            letter="f",
            name="float",
            category=SpecifierCategory.NUMERIC,
            description="Floating point number with optional fraction and exponent",
            reader=readers.float_read,
            slot_type=FloatSlot,
            examples=["%f", "%lf", "%4f"],
        ))

        self.register(SpecifierSpec(
            letter="b",
            name="binary",
            category=SpecifierCategory.NUMERIC,
            description="Binary integer of 0/1 digits with optional sign, no prefix",
            reader=readers.binary_read,
            slot_type=IntSlot,
            signed=False,
            examples=["%b", "%2b", "%llb"],
        ))

    def textSpecifiers_register(self) -> None:
        """Register %c, %s and %L"""
        self.register(SpecifierSpec(
            letter="c",
            name="chars",
            category=SpecifierCategory.TEXT,
            description="Fixed-size character block, not terminated",
            reader=readers.chars_read,
            slot_type=CharSlot,
            skips_whitespace=False,
            examples=["%c", "%2c", " %c"],
        ))

        self.register(SpecifierSpec(
            letter="s",
            name="string",
            category=SpecifierCategory.TEXT,
            description="Whitespace-delimited word",
            reader=readers.string_read,
            slot_type=StrSlot,
            examples=["%s", "%5s", "Name:%s"],
        ))

        self.register(SpecifierSpec(
            letter="L",
            name="line",
            category=SpecifierCategory.TEXT,
            description="Rest of the line up to, not including, the newline",
            reader=readers.line_read,
            slot_type=StrSlot,
            examples=["%L", "%5L %L"],
        ))

    def structuredSpecifiers_register(self) -> None:
        """Register %D and %R"""
        self.register(SpecifierSpec(
            letter="D",
            name="date",
            category=SpecifierCategory.STRUCTURED,
            description="Calendar date DD/MM/YYYY or DD-MM-YYYY, validated",
            reader=readers.date_read,
            slot_type=DateSlot,
            examples=["%D", "%10D"],
        ))

        self.register(SpecifierSpec(
            letter="R",
            name="color",
            category=SpecifierCategory.STRUCTURED,
            description="RGB color #RRGGBB",
            reader=readers.color_read,
            slot_type=ColorSlot,
            examples=["%R", "Color:%R", "%*R %d %R"],
        ))
