"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field

from .outcomes import ScanReport


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the extraction pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, format, outputFile
        - env_check: inputSourceFile, outputPath, envOK
        - records_scan: records, scanReport
        - records_write: (writes outputPath)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input text file
        outputdir: Directory the YAML records are written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        format: Format string applied to each record
        outputFile: Output filename, appsettings.records_filename when empty
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        outputPath: Resolved path to the YAML output file
        records: One list of values per successful scan
        scanReport: Report of the scan that ended extraction
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    format: str = field(default="")
    outputFile: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputPath: Path = field(default=Path("/"))
    records: Optional[List[List[Any]]] = field(default=None)
    scanReport: Optional[ScanReport] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        CLI options without a matching field are ignored.

        Args:
            options: Parsed CLI arguments (inputFile, format, etc.)
            inputdir: Directory containing the input file
            outputdir: Directory for extracted records

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**{**filtered_options, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            records_scan,
            records_write,
            results_report
        )

    is results_report(records_write(records_scan(env_check(initial_state)))),
    read left-to-right.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
