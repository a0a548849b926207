"""
Dispatch loop for formscan

Runs a compiled directive sequence against an InputCursor, invoking the
scalar readers through the specifier registry and binding their values
through the ArgumentBinder. The loop halts at the first failing directive;
there is no backtracking across directives.

Example:
    >>> year, month = IntSlot(), IntSlot()
    >>> scan("%d-%d", [year, month], "2024-07 rest")
    2
    >>> scan_values("%s %x", "name ff")
    (2, ['name', 255])
"""

from typing import Any, List, Optional, Tuple, Union, TextIO

from ..config import appsettings
from ..models.directives import Conversion, Directive, Literal, NoOp, WhitespaceMatch
from ..models.outcomes import FailureKind, ScanReport
from .binder import ArgumentBinder
from .compiler import FormatCompiler
from .cursor import InputCursor
from .log import LOG
from .readers import stopper_return, whitespace_skip
from .specifiers import SpecifierRegistry


class Scanner:
    """
    Format-driven scanner bound to one input cursor

    Consecutive scans on the same Scanner share the cursor, so characters
    pushed back by one scan are read by the next.
    """

    def __init__(
        self,
        cursor: InputCursor,
        registry: Optional[SpecifierRegistry] = None,
        binder: Optional[ArgumentBinder] = None,
        settings=None,
    ) -> None:
        """
        Initialize scanner

        Args:
            cursor: Input cursor to read from
            registry: Specifier registry (a fresh one by default)
            binder: Argument binder (one sharing the registry by default)
            settings: AppSettings instance (the appsettings singleton by default)

        Attributes:
            report: ScanReport of the most recent scan, None before the first
        """
        self.cursor = cursor
        self.registry = registry if registry is not None else SpecifierRegistry()
        self.binder = binder if binder is not None else ArgumentBinder(self.registry)
        self.settings = settings if settings is not None else appsettings
        self.report: Optional[ScanReport] = None

    def format_compile(self, format: str) -> List[Directive]:
        return FormatCompiler(format, self.registry, self.settings.strict_mode).compile()

    def whitespace_match(self) -> None:
        """Consume all contiguous whitespace (matches zero or more)"""
        stopper_return(self.cursor, whitespace_skip(self.cursor))

    def literal_match(self, char: str) -> Optional[FailureKind]:
        """
        Consume one character that must equal `char`

        Returns:
            None on match, otherwise the failure kind. A mismatching
            character is pushed back.
        """
        c = self.cursor.next()
        if c is None:
            return FailureKind.END_OF_INPUT
        if c != char:
            self.cursor.push_back(c)
            return FailureKind.MATCH
        return None

    def conversion_run(
        self, conversion: Conversion, slots: List[Any], report: ScanReport
    ) -> Optional[FailureKind]:
        reader = self.registry.get(conversion.specifier)
        if reader is None:
            return None

        outcome = reader(self.cursor, conversion.width)
        if not outcome.ok:
            return outcome.failure

        report.converted += 1
        if not conversion.suppressed:
            self.binder.bind(conversion, outcome.value, slots, report.assigned)
            report.assigned += 1
        return None

    def directive_run(
        self, directive: Directive, slots: List[Any], report: ScanReport
    ) -> Optional[FailureKind]:
        """Execute one directive, returning the failure kind if it halts the scan"""
        if isinstance(directive, WhitespaceMatch):
            self.whitespace_match()
            return None
        if isinstance(directive, Literal):
            return self.literal_match(directive.char)
        if isinstance(directive, NoOp):
            return None
        return self.conversion_run(directive, slots, report)

    def directives_run(self, directives: List[Directive], slots: List[Any]) -> ScanReport:
        """
        Run a directive sequence to completion or to the first failure

        Args:
            directives: Compiled directives
            slots: Output slots for the non-suppressed conversions

        Returns:
            ScanReport with counts and the halting failure, if any

        Raises:
            SlotError: A slot is missing or does not fit its conversion
        """
        report = ScanReport()
        start = self.cursor.offset

        for index, directive in enumerate(directives):
            failure = self.directive_run(directive, slots, report)
            if failure is not None:
                report.halted = True
                report.failure = failure
                report.halted_at = index
                LOG(f"Halted at directive {index} ({directive!r}): {failure.value}", level=3)
                break

        report.consumed = self.cursor.offset - start
        self.report = report
        return report

    def result_make(self, report: ScanReport) -> int:
        if report.input_failure:
            return self.settings.eof_result
        return report.assigned

    def scan(self, format: str, slots: List[Any]) -> int:
        """
        Scan the cursor with a format string into caller slots

        Returns:
            Number of assigned conversions, or settings.eof_result when the
            input ended before any conversion succeeded
        """
        report = self.directives_run(self.format_compile(format), slots)
        return self.result_make(report)

    def values_scan(self, format: str) -> Tuple[int, List[Any]]:
        """
        Scan into default slots built for the format

        Returns:
            (result as from scan(), values of the assigned slots in order)
        """
        directives = self.format_compile(format)
        slots = self.binder.slots_make(directives)
        report = self.directives_run(directives, slots)
        return self.result_make(report), [slot.value for slot in slots[:report.assigned]]


def cursor_resolve(source: Union[InputCursor, str, TextIO]) -> InputCursor:
    """Use an existing cursor as is, wrap anything else in a fresh one"""
    if isinstance(source, InputCursor):
        return source
    return InputCursor(source)


def scan(format: str, slots: List[Any], source: Union[InputCursor, str, TextIO]) -> int:
    """
    Scan formatted input into output slots

    Args:
        format: scanf-style format string
        slots: Output slots, one per non-suppressed conversion
        source: InputCursor (pushback kept across calls), str or text stream

    Returns:
        Number of assigned conversions, or appsettings.eof_result on
        end of input before the first conversion
    """
    return Scanner(cursor_resolve(source)).scan(format, slots)


def scan_values(format: str, source: Union[InputCursor, str, TextIO]) -> Tuple[int, List[Any]]:
    """Scan formatted input and return (result, assigned values)"""
    return Scanner(cursor_resolve(source)).values_scan(format)
