"""
Scanner tests

Tests the dispatch loop through scan() and scan_values(): literals,
whitespace, suppression, halting, the end-of-input result and pushback
shared across consecutive scans.
"""

import io

import pytest

from formscan import (
    CharSlot,
    ColorSlot,
    DateSlot,
    FloatSlot,
    InputCursor,
    IntSlot,
    RGBColor,
    Scanner,
    SlotError,
    StrSlot,
    scan,
    scan_values,
)
from formscan.config import AppSettings
from formscan.models.outcomes import FailureKind


class TestBasicScans:
    """Test single and multiple conversions"""

    def test_two_integers(self):
        """Leading zeros stay decimal"""
        a, b = IntSlot(), IntSlot()
        assert scan("%d %d", [a, b], "007 010") == 2
        assert (a.value, b.value) == (7, 10)

    def test_literal_prefix(self):
        """Literal text must match exactly"""
        name = StrSlot()
        assert scan("Name:%s", [name], "Name:Alice") == 1
        assert name.value == "Alice"

    def test_percent_literal(self):
        """%% matches a percent sign"""
        rate = IntSlot()
        assert scan("%d%%", [rate], "50%") == 1
        assert rate.value == 50

    def test_mixed_specifiers(self):
        """Every specifier in one format"""
        slots = [IntSlot(), IntSlot(), FloatSlot(bits=64), CharSlot(), StrSlot(),
                 IntSlot(), StrSlot(), DateSlot(), ColorSlot()]
        text = "-4 ff 2.5 Q word 101 the line\n01/02/2003 #0A0B0C"
        assert scan("%d %x %lf %c %s %b %L %D %R", slots, text) == 9
        assert [s.value for s in slots[:7]] == [-4, 255, 2.5, "Q", "word", 5, "the line"]
        assert slots[7].value.year == 2003
        assert slots[8].value == RGBColor(red=10, green=11, blue=12)

    def test_hex_into_signed_slot(self):
        """Negative hex into a signed int"""
        slot = IntSlot()
        assert scan("%x", [slot], "-ff") == 1
        assert slot.value == -255

    def test_unsigned_64_binary(self):
        """64 ones fill an unsigned 64-bit slot"""
        slot = IntSlot(bits=64, signed=False)
        assert scan("%llb", [slot], "1" * 64) == 1
        assert slot.value == 2 ** 64 - 1

    def test_stream_source(self):
        """A text stream works as a source"""
        slot = IntSlot()
        assert scan("%d", [slot], io.StringIO("  12\n")) == 1
        assert slot.value == 12


class TestWhitespace:
    """Test whitespace directives"""

    def test_space_before_char(self):
        """' %c' skips whitespace, '%c' does not"""
        c = CharSlot()
        assert scan(" %c", [c], "   x") == 1
        assert c.value == "x"
        assert scan("%c", [c], "   x") == 1
        assert c.value == " "

    def test_whitespace_matches_nothing(self):
        """Format whitespace matches zero input whitespace"""
        a, b = IntSlot(), StrSlot()
        assert scan("%d %s", [a, b], "5x") == 2
        assert b.value == "x"

    def test_line_then_char(self):
        """%L leaves the newline for %c"""
        line, c = StrSlot(), CharSlot()
        assert scan("%L%c", [line, c], "abc\nX") == 2
        assert c.value == "\n"


class TestSuppression:
    """Test '*' conversions"""

    def test_suppressed_block(self):
        """%*3c skips three characters without a slot"""
        c = CharSlot()
        assert scan("%*3c%c", [c], "123X") == 1
        assert c.value == "X"

    def test_suppressed_color(self):
        """Suppressed conversions consume input but not slots"""
        n, color = IntSlot(), ColorSlot()
        assert scan("%*R %d %R", [n, color], "#010203 7 #FFFFFF") == 2
        assert n.value == 7
        assert color.value == RGBColor(red=255, green=255, blue=255)

    def test_suppression_advances_like_assignment(self):
        """Suppressed and assigned scans leave the stream in the same place"""
        first, second = InputCursor("12ab"), InputCursor("12ab")
        scan("%*d", [], first)
        scan("%d", [IntSlot()], second)
        assert first.next() == second.next() == "a"

    def test_suppressed_only_counts_zero(self):
        """A successful suppressed conversion returns 0, not end of input"""
        assert scan("%*d", [], "5") == 0


class TestHalting:
    """Test the first failure stops the scan"""

    def test_halts_at_first_failure(self):
        """Later conversions are not attempted"""
        a, b = IntSlot(value=-1), IntSlot(value=-1)
        assert scan("%d %d", [a, b], "1 x 2") == 1
        assert (a.value, b.value) == (1, -1)

    def test_literal_mismatch(self):
        """A mismatching literal halts and is pushed back"""
        cursor = InputCursor("a-b")
        assert scan("a:%s", [StrSlot()], cursor) == 0
        assert cursor.next() == "-"

    def test_date_failure(self):
        """Invalid date returns 0"""
        assert scan("%D", [DateSlot()], "31/04/2020") == 0

    def test_color_missing_prefix(self):
        """Color without '#' returns 0"""
        assert scan("%R", [ColorSlot()], "112233") == 0

    def test_color_space_after_prefix(self):
        """'# 112233' is a structural failure"""
        assert scan("%R", [ColorSlot()], "# 112233") == 0

    def test_sign_only_float(self):
        """A lone sign is a match failure"""
        assert scan("%f", [FloatSlot()], "-") == 0

    def test_report(self):
        """directives_run reports the halting directive"""
        scanner = Scanner(InputCursor("7 x"))
        directives = scanner.format_compile("%d %d")
        report = scanner.directives_run(directives, [IntSlot(), IntSlot()])
        assert report.assigned == 1
        assert report.halted
        assert report.failure is FailureKind.MATCH
        assert report.halted_at == 2
        assert report.consumed == 2

    def test_unknown_specifier_skipped(self):
        """An unknown conversion is a no-op"""
        a, b = IntSlot(), IntSlot()
        assert scan("%d %q%d", [a, b], "1 2") == 2
        assert b.value == 2


class TestEndOfInput:
    """Test the end-of-input result"""

    @pytest.mark.parametrize("format,slot_type,text", [
        ("%d", IntSlot, ""),
        ("%s", StrSlot, "   "),
        ("%x", IntSlot, "\n"),
        ("%b", IntSlot, ""),
        ("%L", StrSlot, ""),
        ("%R", ColorSlot, "#"),
        ("%R", ColorSlot, "#1234"),
        ("%D", DateSlot, ""),
    ])
    def test_eof_before_first_conversion(self, format, slot_type, text):
        """End of input before any conversion returns -1"""
        assert scan(format, [slot_type()], text) == -1

    def test_literal_at_end_of_input(self):
        """A literal with no input left is end of input"""
        assert scan("x%d", [IntSlot()], "") == -1

    def test_eof_after_conversion(self):
        """End of input after a conversion returns the count"""
        a, b = IntSlot(), IntSlot()
        assert scan("%d %d", [a, b], "4") == 1

    def test_char_on_empty_input(self):
        """%c on empty input returns 0"""
        assert scan("%c", [CharSlot()], "") == 0

    def test_custom_eof_result(self):
        """The end-of-input result is configurable"""
        scanner = Scanner(InputCursor(""), settings=AppSettings(eof_result=-99))
        assert scanner.scan("%d", [IntSlot()]) == -99


class TestConsecutiveScans:
    """Test a shared cursor across scans"""

    def test_float_exponent_pushback(self):
        """Characters pushed back by one scan are read by the next"""
        cursor = InputCursor("1.2e+X")
        value, rest = FloatSlot(), CharSlot.sized(3)
        assert scan("%f", [value], cursor) == 1
        assert scan("%3c", [rest], cursor) == 1
        assert rest.value == "e+X"

    def test_width_split(self):
        """%5L %L splits a long line"""
        a, b = StrSlot(), StrSlot()
        assert scan("%5L %L", [a, b], "ABCDEFGHIJK\nXYZ\n") == 2
        assert (a.value, b.value) == ("ABCDE", "FGHIJK")

    def test_lines_one_by_one(self):
        """Repeated %L scans walk the lines"""
        cursor = InputCursor("A\nB\nC\n")
        line = StrSlot()
        values = []
        for _ in range(3):
            scan("%L", [line], cursor)
            values.append(line.value)
        assert values == ["A", "B", "C"]

    def test_scanner_keeps_cursor(self):
        """A Scanner reuses its cursor"""
        scanner = Scanner(InputCursor("12/12/2020X"))
        assert scanner.scan("%D", [DateSlot()]) == 1
        c = CharSlot()
        assert scanner.scan("%c", [c]) == 1
        assert c.value == "X"


class TestScanValues:
    """Test scan_values()"""

    def test_values(self):
        """Default slots are built from the format"""
        assert scan_values("%s %x", "name ff") == (2, ["name", 255])

    def test_values_partial(self):
        """Only assigned values are returned"""
        assert scan_values("%d %d", "3 z") == (1, [3])

    def test_values_eof(self):
        """End of input returns the end-of-input result and no values"""
        assert scan_values("%d", "") == (-1, [])

    def test_hex_values_unsigned(self):
        """Default %x slots are unsigned"""
        assert scan_values("%x", "ffffffff") == (1, [4294967295])

    def test_binary_values_unsigned(self):
        """Default %b slots are unsigned"""
        assert scan_values("%b", "1" * 32) == (1, [4294967295])

    def test_decimal_values_signed(self):
        """Default %d slots stay signed"""
        assert scan_values("%d", "-5") == (1, [-5])

    def test_short_hex_values_wrap_unsigned(self):
        """%hx wraps into an unsigned 16-bit slot"""
        assert scan_values("%hx", "-1") == (1, [65535])


class TestSlotMisuse:
    """Test programming errors surface as exceptions"""

    def test_missing_slot_raises(self):
        """Too few slots raise SlotError"""
        with pytest.raises(SlotError):
            scan("%d %d", [IntSlot()], "1 2")

    def test_extra_slots_ignored(self):
        """Extra slots are left untouched"""
        extra = IntSlot(value=42)
        assert scan("%d", [IntSlot(), extra], "1") == 1
        assert extra.value == 42
