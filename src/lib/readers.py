"""
Scalar readers for conversion specifiers

Each reader consumes characters from an InputCursor and returns a
ParseOutcome. Readers never raise on bad input: on failure they restore
the cursor according to their own contract and report a FailureKind.

Shared skeleton (integer, hex, float, binary):
1. Skip leading whitespace (not counted toward the field width)
2. End of input at this point is FailureKind.END_OF_INPUT
3. Optional sign (counted toward the width)
4. Body characters while they fit the grammar and the width
5. Push back the one stopper character that ended the body, if any
6. No body character: push back everything read since step 1

Width: for the numeric, date and color readers a width of 0 is the same
as no width. %c treats 0 as 1; %s and %L treat it as an empty budget.
"""

import calendar
from typing import List, Optional, Tuple

from .cursor import InputCursor
from ..models.outcomes import CalendarDate, FailureKind, ParseOutcome, RGBColor

WHITESPACE = " \t\n\v\f\r"
SIGNS = "+-"
DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"
BINARY_DIGITS = "01"
HEX_MARKERS = "xX"
EXPONENT_MARKERS = "eE"
DATE_SEPARATORS = "/-"
COLOR_PREFIX = "#"

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def whitespace_skip(cursor: InputCursor) -> Optional[str]:
    """
    Consume leading whitespace

    Returns:
        The first non-whitespace character (already consumed), or None
        at end of input
    """
    c = cursor.next()
    while c is not None and c in WHITESPACE:
        c = cursor.next()
    return c


def limit_resolve(width: Optional[int]) -> Optional[int]:
    """Width limit for readers where 0 means unlimited"""
    return width if width else None


def room_has(used: int, limit: Optional[int]) -> bool:
    return limit is None or used < limit


def stopper_return(cursor: InputCursor, c: Optional[str]) -> None:
    if c is not None:
        cursor.push_back(c)


def taken_restore(cursor: InputCursor, taken: List[str]) -> None:
    """Push back characters so they are read again in their original order"""
    for c in reversed(taken):
        cursor.push_back(c)


def failure_classify(taken: List[str], limit: Optional[int]) -> FailureKind:
    """WIDTH if the budget was spent before a body character, MATCH otherwise"""
    if not room_has(len(taken), limit):
        return FailureKind.WIDTH
    return FailureKind.MATCH


def digits_collect(
    cursor: InputCursor,
    c: Optional[str],
    digits: str,
    taken: List[str],
    limit: Optional[int],
) -> Tuple[int, Optional[str]]:
    """
    Append the run of `digits` starting at `c` to `taken`

    Stops at the first character outside `digits` or when `taken` fills
    the width limit.

    Args:
        cursor: Input cursor
        c: Current character (already consumed)
        digits: Allowed characters
        taken: Characters attributed to the value so far (mutated)
        limit: Width limit or None

    Returns:
        (number of digits appended, stopper). The stopper is the first
        character read but not appended (None at end of input); the caller
        is responsible for pushing it back.
    """
    count = 0
    while c is not None and c in digits and room_has(len(taken), limit):
        taken.append(c)
        count += 1
        c = cursor.next()
    return count, c


def integral_finish(
    cursor: InputCursor,
    c: Optional[str],
    taken: List[str],
    count: int,
    base: int,
    limit: Optional[int],
) -> ParseOutcome:
    stopper_return(cursor, c)
    if not count:
        kind = failure_classify(taken, limit)
        taken_restore(cursor, taken)
        return ParseOutcome.fail(kind)
    return ParseOutcome.success(int("".join(taken), base))


def integral_read(
    cursor: InputCursor, width: Optional[int], digits: str, base: int
) -> ParseOutcome:
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    limit = limit_resolve(width)
    taken: List[str] = []
    if c in SIGNS:
        taken.append(c)
        c = cursor.next()

    count, c = digits_collect(cursor, c, digits, taken, limit)
    return integral_finish(cursor, c, taken, count, base, limit)


# ---------------------------------------------------------------------------
# Numeric readers
# ---------------------------------------------------------------------------

def integer_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a signed decimal integer (%d)

    Leading zeros are decimal ("010" is ten). The value is an unbounded
    Python int; narrowing to the slot size is the binder's job.

    Example:
        "-9876" with width 4 -> -987, "6" left in the stream
    """
    return integral_read(cursor, width, DIGITS, 10)


def hex_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a hexadecimal integer (%x)

    Accepts an optional sign and an optional 0x/0X prefix. The prefix is
    only taken when the width leaves room for both of its characters;
    otherwise the '0' is read as a digit and 'x' becomes the stopper.
    A prefix with no hex digit after it fails and is pushed back.

    Example:
        "-0xA" -> -10
        "0x1234" with width 3 -> 1
    """
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    limit = limit_resolve(width)
    taken: List[str] = []
    if c in SIGNS:
        taken.append(c)
        c = cursor.next()

    if c == "0":
        marker = cursor.next()
        if marker is not None and marker in HEX_MARKERS and (
            limit is None or len(taken) + 2 <= limit
        ):
            taken.extend((c, marker))
            c = cursor.next()
        else:
            stopper_return(cursor, marker)

    count, c = digits_collect(cursor, c, HEX_DIGITS, taken, limit)
    return integral_finish(cursor, c, taken, count, 16, limit)


def binary_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a binary integer (%b)

    Only '0' and '1' digits, optional sign, no 0b prefix ("0b101" reads 0
    and leaves 'b').
    """
    return integral_read(cursor, width, BINARY_DIGITS, 2)


def exponent_read(
    cursor: InputCursor, marker: str, taken: List[str], limit: Optional[int]
) -> Optional[str]:
    """
    Tentatively read a float exponent after the mantissa

    Args:
        cursor: Input cursor
        marker: The 'e' or 'E' already consumed
        taken: Mantissa characters (extended only if the exponent is valid)
        limit: Width limit or None

    Returns:
        The stopper the caller must push back, or None when the exponent
        was abandoned: then the stopper, the exponent sign and the marker
        have all been pushed back, leaving the stream as if the attempt
        never happened.
    """
    attempt = [marker]
    c = cursor.next()
    if c is not None and c in SIGNS and room_has(len(taken) + len(attempt), limit):
        attempt.append(c)
        c = cursor.next()

    if c is not None and c in DIGITS and room_has(len(taken) + len(attempt), limit):
        taken.extend(attempt)
        _, c = digits_collect(cursor, c, DIGITS, taken, limit)
        return c

    stopper_return(cursor, c)
    taken_restore(cursor, attempt)
    return None


def float_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a floating point number (%f)

    Grammar: [sign] digits* ['.' digits*] [('e'|'E') [sign] digits+]
    At least one mantissa digit is required (".5" and "5." are valid,
    "." is not).

    Example:
        "1.2e+X" -> 1.2, with "e+X" restored to the stream
    """
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    limit = limit_resolve(width)
    taken: List[str] = []
    if c in SIGNS:
        taken.append(c)
        c = cursor.next()

    count, c = digits_collect(cursor, c, DIGITS, taken, limit)

    if c == "." and room_has(len(taken), limit):
        taken.append(c)
        c = cursor.next()
        fraction, c = digits_collect(cursor, c, DIGITS, taken, limit)
        count += fraction

    if count and c is not None and c in EXPONENT_MARKERS and room_has(len(taken), limit):
        c = exponent_read(cursor, c, taken, limit)

    stopper_return(cursor, c)
    if not count:
        kind = failure_classify(taken, limit)
        taken_restore(cursor, taken)
        return ParseOutcome.fail(kind)
    return ParseOutcome.success(float("".join(taken)))


# ---------------------------------------------------------------------------
# Text readers
# ---------------------------------------------------------------------------

def chars_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a fixed-size character block (%c)

    Does not skip whitespace. Reads exactly `width` characters (1 when
    unspecified or 0). Running out of input fails, and the characters
    read so far stay consumed.
    """
    size = width if width else 1
    block: List[str] = []
    for _ in range(size):
        c = cursor.next()
        if c is None:
            return ParseOutcome.fail(FailureKind.MATCH)
        block.append(c)
    return ParseOutcome.success("".join(block))


def string_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a whitespace-delimited word (%s)

    The delimiting whitespace is pushed back for the next directive.
    """
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    word: List[str] = []
    while c is not None and c not in WHITESPACE and (width is None or len(word) < width):
        word.append(c)
        c = cursor.next()

    stopper_return(cursor, c)
    return ParseOutcome.success("".join(word))


def line_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read the rest of a line (%L)

    Leading whitespace and newlines are skipped, except that a newline
    followed by end of input is the boundary of an empty line. The
    terminating newline is never consumed.

    Example:
        "   \\n"      -> "" (newline left in the stream)
        "\\nB\\n"     -> "B"
        "abc\\nX"     -> "abc" (next character is '\\n')
    """
    c = cursor.next()
    while c is not None and c in WHITESPACE:
        if c == "\n":
            following = cursor.next()
            if following is None:
                cursor.push_back(c)
                return ParseOutcome.success("")
            cursor.push_back(following)
        c = cursor.next()

    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    line: List[str] = []
    while c is not None and c != "\n" and (width is None or len(line) < width):
        line.append(c)
        c = cursor.next()

    stopper_return(cursor, c)
    return ParseOutcome.success("".join(line))


# ---------------------------------------------------------------------------
# Structured readers
# ---------------------------------------------------------------------------

def days_inMonth(month: int, year: int) -> int:
    """Days in a month, February having 29 in leap years"""
    if month == 2 and calendar.isleap(year):
        return 29
    return DAYS_IN_MONTH[month - 1]


def date_isValid(day: int, month: int, year: int) -> bool:
    """Check a parsed date against the calendar"""
    if month < 1 or month > 12 or day < 1:
        return False
    return day <= days_inMonth(month, year)


def date_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read a calendar date (%D) as DD/MM/YYYY or DD-MM-YYYY

    Both separators must be the same character. Any number of digits is
    accepted per field ("1/1/5" is day 1, month 1, year 5). Characters
    consumed before a failure stay consumed; the stopper is pushed back.

    Failures:
        STRUCTURAL for a missing or mismatched separator,
        LOGICAL for a date outside the calendar,
        WIDTH when the field width cuts the day or month.
    """
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    limit = limit_resolve(width)
    taken: List[str] = []
    fields: List[int] = []
    separator: Optional[str] = None

    for index in range(3):
        if index:
            if not room_has(len(taken), limit):
                stopper_return(cursor, c)
                return ParseOutcome.fail(FailureKind.WIDTH)
            if c is None or c not in (separator or DATE_SEPARATORS):
                stopper_return(cursor, c)
                return ParseOutcome.fail(FailureKind.STRUCTURAL)
            separator = c
            taken.append(c)
            c = cursor.next()

        start = len(taken)
        count, c = digits_collect(cursor, c, DIGITS, taken, limit)
        if not count:
            stopper_return(cursor, c)
            if not room_has(len(taken), limit):
                return ParseOutcome.fail(FailureKind.WIDTH)
            return ParseOutcome.fail(FailureKind.MATCH if index == 0 else FailureKind.STRUCTURAL)
        fields.append(int("".join(taken[start:])))

    stopper_return(cursor, c)

    day, month, year = fields
    if not date_isValid(day, month, year):
        return ParseOutcome.fail(FailureKind.LOGICAL)
    return ParseOutcome.success(CalendarDate(day=day, month=month, year=year))


def hexPair_read(cursor: InputCursor) -> ParseOutcome:
    """
    Read exactly two hex digits as one byte (0-255)

    If the first character is not a hex digit it is pushed back. If the
    second is not, only the second is pushed back: the first stays
    consumed.
    """
    high = cursor.next()
    if high is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)
    if high not in HEX_DIGITS:
        cursor.push_back(high)
        return ParseOutcome.fail(FailureKind.STRUCTURAL)

    low = cursor.next()
    if low is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)
    if low not in HEX_DIGITS:
        cursor.push_back(low)
        return ParseOutcome.fail(FailureKind.STRUCTURAL)

    return ParseOutcome.success(int(high + low, 16))


def color_read(cursor: InputCursor, width: Optional[int] = None) -> ParseOutcome:
    """
    Read an RGB color (%R) as #RRGGBB

    No separators are allowed after '#'. With a width, each pair needs two
    characters of remaining budget ("%7R" is the exact fit).

    Example:
        "#AaBbCc" -> RGBColor(red=170, green=187, blue=204)
    """
    c = whitespace_skip(cursor)
    if c is None:
        return ParseOutcome.fail(FailureKind.END_OF_INPUT)

    limit = limit_resolve(width)
    if c != COLOR_PREFIX:
        cursor.push_back(c)
        return ParseOutcome.fail(FailureKind.STRUCTURAL)

    used = 1
    channels: List[int] = []
    for _ in range(3):
        if limit is not None and used + 2 > limit:
            return ParseOutcome.fail(FailureKind.WIDTH)
        outcome = hexPair_read(cursor)
        if not outcome.ok:
            return outcome
        channels.append(outcome.value)
        used += 2

    red, green, blue = channels
    return ParseOutcome.success(RGBColor(red=red, green=green, blue=blue))
