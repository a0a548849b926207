#!/usr/bin/env python3
"""
formscan - scanf-style formatted input extraction

Applies a format string repeatedly to a text file and writes one record
per successful scan to a YAML file.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Format conversions:
    %d %x %b %f     decimal, hex, binary integers and floats
    %c %s %L        character blocks, words and whole lines
    %D %R           dates (DD/MM/YYYY) and colors (#RRGGBB)
    %*..            parse and validate without storing
    %5d %hhd %lf    field width and length modifiers

Usage:
    formscan inputdir/ outputdir/ --inputFile data.txt --format "%D %d"

Examples:
    # One date and amount per line
    formscan . out/ --inputFile ledger.txt --format "%D %f"

    # Skip a label, keep the color
    formscan . out/ --inputFile palette.txt --format "%*s %R" --outputFile colors.yaml

    # Trace every directive
    formscan . out/ --inputFile data.txt --format "%d,%d" -vvv
"""

import sys
import dataclasses
from pathlib import Path
from argparse import (
    ArgumentParser,
    Namespace,
    ArgumentDefaultsHelpFormatter,
    RawDescriptionHelpFormatter,
)
from typing import Any, Dict, List

import yaml
from chris_plugin import chris_plugin

from .config import appsettings
from .lib import (
    FormatCompiler,
    InputCursor,
    Scanner,
    SlotError,
    SpecifierRegistry,
    __version__,
    LOG,
    format_highlight,
    state_connectToLogger,
)
from .models import ProgramState, pipeline


class HelpFormatter(ArgumentDefaultsHelpFormatter, RawDescriptionHelpFormatter):
    """Show defaults and keep the specifier table's line breaks"""


# Define CLI arguments
parser = ArgumentParser(
    description="formscan - extract records from text with scanf-style format strings",
    epilog=SpecifierRegistry().help_format(),
    formatter_class=HelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input text file (relative to inputdir)"
)

parser.add_argument(
    "--format", required=True, type=str, help="Format string applied to each record"
)

parser.add_argument(
    "--outputFile",
    default="",
    type=str,
    help="YAML output filename within outputdir (defaults to FORMSCAN_RECORDS_FILENAME)",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate the environment and resolve file paths.

    Verifies that the input file exists and that the format compiles,
    then creates the output directory.

    Returns:
        ProgramState with inputSourceFile, outputPath and envOK set

    Exits:
        1 if the input file is missing or the format is rejected
    """
    state = inputstate.copy()
    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    try:
        directives = FormatCompiler(state.format).compile()
    except SyntaxError as e:
        print(f"Format error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Format: {format_highlight(state.format).rstrip()}", level=2)
    LOG(f"Format compiles to {len(directives)} directives", level=3)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputPath = state.outputdir / (state.outputFile or appsettings.records_filename)
    LOG(f"Output file: {state.outputPath}", level=2)

    state.envOK = True
    return state


def records_scan(inputstate: ProgramState) -> ProgramState:
    """
    Apply the format to the input file until it stops matching.

    A single cursor spans the whole file, so each scan resumes where the
    previous one stopped (pushback included). Extraction ends at the
    first scan that assigns nothing, at end of input, when a scan consumes
    no characters, or when appsettings.max_records is reached.

    Returns:
        ProgramState with records and scanReport set

    Exits:
        1 if the file cannot be read or the format cannot be bound
    """
    state = inputstate.copy()
    LOG("Scanning records...", level=1)

    records: List[List[Any]] = []
    try:
        with state.inputSourceFile.open(encoding="utf-8") as stream:
            scanner = Scanner(InputCursor(stream))
            while True:
                before = scanner.cursor.offset
                result, values = scanner.values_scan(state.format)
                if result <= 0 or scanner.cursor.offset == before:
                    break
                records.append(values)
                LOG(f"Record {len(records)}: {values}", level=3)
                if appsettings.records_limitReached(len(records)):
                    LOG(f"Stopping at record limit {appsettings.max_records}", level=2)
                    break
                if scanner.cursor.at_end():
                    break
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    except SlotError as e:
        print(f"Binding error: {e}", file=sys.stderr)
        sys.exit(1)

    state.records = records
    state.scanReport = scanner.report
    LOG(f"Extracted {len(records)} records", level=2)
    return state


def value_serialize(value: Any) -> Any:
    """Convert dates and colors to mappings for YAML output"""
    if dataclasses.is_dataclass(value):
        return dataclasses.asdict(value)
    return value


def records_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the extracted records to the YAML output file.

    Exits:
        1 if records are missing or the file cannot be written
    """
    state = inputstate.copy()

    if state.records is None:
        print("Error: No records available", file=sys.stderr)
        sys.exit(1)

    document: Dict[str, Any] = {
        "format": state.format,
        "source": state.inputFile,
        "count": len(state.records),
        "records": [[value_serialize(v) for v in record] for record in state.records],
    }

    try:
        with state.outputPath.open("w", encoding="utf-8") as stream:
            yaml.safe_dump(document, stream, sort_keys=False, allow_unicode=True)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.outputPath}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display extraction results.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if records is None
    """
    state: ProgramState = inputstate.copy()
    if state.records is None:
        print("Error: Extraction failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Extraction complete", level=1)
    LOG(f"  Records: {len(state.records)}", level=1)
    LOG(f"  Output:  {state.outputPath}", level=1)
    report = state.scanReport
    if report is not None and report.halted:
        LOG(
            f"  Last scan halted at directive {report.halted_at} ({report.failure.value})",
            level=2,
        )
    return state


@chris_plugin(
    parser=parser,
    title="formscan - scanf-style record extraction",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - extract records from a text file.

    Orchestrates the pipeline:
        1. env_check: Validate paths and the format
        2. records_scan: Scan the input repeatedly
        3. records_write: Write records as YAML
        4. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - inputFile: str - Input text filename
            - format: str - Format string
            - outputFile: str - YAML output filename
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing the input file
        outputdir: Directory where records are written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, records_scan, records_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
