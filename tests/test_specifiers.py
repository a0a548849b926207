"""
Specifier registry tests

Tests built-in registration, lookup, categories and custom specifiers.
"""

import pytest

from formscan.lib.cursor import InputCursor
from formscan.lib.readers import integer_read, integral_read
from formscan.lib.scanner import Scanner, scan
from formscan.lib.specifiers import SpecifierRegistry
from formscan.models.slots import IntSlot, StrSlot
from formscan.models.specifiers import SpecifierCategory, SpecifierSpec


def octal_read(cursor, width=None):
    return integral_read(cursor, width, "01234567", 8)


def octal_spec():
    return SpecifierSpec(
        letter="o",
        name="octal",
        category=SpecifierCategory.NUMERIC,
        description="Octal integer",
        reader=octal_read,
        slot_type=IntSlot,
    )


class TestBuiltins:
    """Test built-in specifiers"""

    def test_all_letters_registered(self):
        """Nine built-in specifiers"""
        assert sorted(SpecifierRegistry().specs) == sorted("dxfcsbLDR")

    def test_get_returns_reader(self):
        """get() returns the scalar reader"""
        assert SpecifierRegistry().get("d") is integer_read

    def test_unknown_letter(self):
        """Unknown letters have no reader and no spec"""
        registry = SpecifierRegistry()
        assert registry.get("q") is None
        assert registry.spec_get("q") is None

    def test_case_sensitive(self):
        """'l' is not 'L'"""
        registry = SpecifierRegistry()
        assert registry.spec_get("L") is not None
        assert registry.spec_get("l") is None

    def test_letters_in_registration_order(self):
        """letters() follows registration order"""
        assert SpecifierRegistry().letters() == "dxfbcsLDR"

    def test_hex_and_binary_unsigned(self):
        """Only %x and %b default to unsigned slots"""
        registry = SpecifierRegistry()
        assert [s.letter for s in registry.specs.values() if not s.signed] == ["x", "b"]

    @pytest.mark.parametrize("category,letters", [
        (SpecifierCategory.NUMERIC, "bdfx"),
        (SpecifierCategory.TEXT, "Lcs"),
        (SpecifierCategory.STRUCTURED, "DR"),
    ])
    def test_categories(self, category, letters):
        """Specifiers are grouped by category"""
        specs = SpecifierRegistry().specifiers_listByCategory(category)
        assert "".join(sorted(spec.letter for spec in specs)) == letters

    def test_only_chars_keep_whitespace(self):
        """%c is the only built-in that does not skip whitespace"""
        registry = SpecifierRegistry()
        assert [s.letter for s in registry.specs.values() if not s.skips_whitespace] == ["c"]

    def test_slot_types(self):
        """Words and lines both bind to StrSlot"""
        registry = SpecifierRegistry()
        assert registry.spec_get("s").slot_type is StrSlot
        assert registry.spec_get("L").slot_type is StrSlot


class TestHelp:
    """Test the specifier help text"""

    def test_help_line(self):
        """A help line names the letter, description and examples"""
        line = SpecifierRegistry().spec_get("x").help_line()
        assert line.startswith("%x  hex: Hexadecimal integer")
        assert line.endswith("[%x, %3x, %lx]")

    def test_help_line_whitespace_note(self):
        """%c is marked as not skipping whitespace"""
        assert "(no whitespace skip)" in SpecifierRegistry().spec_get("c").help_line()
        assert "whitespace skip" not in SpecifierRegistry().spec_get("s").help_line()

    def test_help_format_groups_by_category(self):
        """Categories appear in order, each followed by its specifiers"""
        lines = SpecifierRegistry().help_format().splitlines()
        headers = [line for line in lines if line.endswith("conversions:")]
        assert headers == [
            "numeric conversions:", "text conversions:", "structured conversions:"
        ]
        assert lines[1].startswith("  %d  decimal:")
        assert len(lines) == 12

    def test_help_format_includes_custom(self):
        """Registered specifiers appear in the help text"""
        registry = SpecifierRegistry()
        registry.register(octal_spec())
        assert "  %o  octal: Octal integer" in registry.help_format()


class TestCustomSpecifiers:
    """Test registering additional specifiers"""

    def test_register_and_scan(self):
        """A registered specifier is compiled, read and bound"""
        registry = SpecifierRegistry()
        registry.register(octal_spec())
        slot = IntSlot(bits=16)
        scanner = Scanner(InputCursor("17 "), registry=registry)
        assert scanner.scan("%ho", [slot]) == 1
        assert slot.value == 15

    def test_registries_are_independent(self):
        """Default scans do not see custom specifiers"""
        registry = SpecifierRegistry()
        registry.register(octal_spec())
        assert SpecifierRegistry().spec_get("o") is None
        assert scan("%o", [IntSlot()], "17") == 0

    @pytest.mark.parametrize("letter", ["", "ab", "%", "1"])
    def test_invalid_letter(self, letter):
        """Specifier letters must be single letters"""
        spec = octal_spec()
        spec.letter = letter
        with pytest.raises(ValueError, match="single letter"):
            SpecifierRegistry().register(spec)
