"""
Directory driver for batch conversion.

Converts every SDF file of an input directory into a SMILES text file in an
output directory, printing one status line and a progress bar per file.
Errors are reported per file and never stop the remaining files; only an
output directory that cannot be created aborts the run.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from .converter import BatchConverter
from .exceptions import OutputDirectoryError, OutputWriteFailure, SourceUnreadable
from .models import ConversionResult, FileReport

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "summary.csv"
FAILURES_SUFFIX = ".failed.tsv"


def progress_bar(completed: int, total: int, width: int = 10) -> str:
    """
    Render a coarse ASCII progress bar, e.g. ``[====>      ] 40%``.

    Args:
        completed: Number of items completed
        total: Total number of items
        width: Number of bar cells

    Returns:
        str: The rendered bar
    """
    progress = completed * 100 // total if total > 0 else 100
    filled = progress * width // 100
    return "[" + "=" * filled + ">" + " " * (width - filled) + f"] {progress}%"


class DirectoryDriver:
    """
    Runs the BatchConverter over all matching files of a directory.
    """

    def __init__(self, input_dir: Union[str, Path], output_dir: Union[str, Path],
                 converter: Optional[BatchConverter] = None,
                 input_extension: str = ".sdf", output_extension: str = ".txt",
                 write_summary: bool = False, write_failures: bool = False):
        """
        Initialize the driver.

        Args:
            input_dir: Directory containing the SDF files
            output_dir: Directory receiving one text file per SDF file
            converter: Converter to use (defaults to an RDKit converter)
            input_extension: Extension of the files to convert (case-insensitive)
            output_extension: Extension of the written files
            write_summary: Write a summary.csv with one row per file
            write_failures: Write a <name>.failed.tsv listing failed records
        """
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.converter = converter if converter is not None else BatchConverter()
        self.input_extension = input_extension
        self.output_extension = output_extension
        self.write_summary = write_summary
        self.write_failures = write_failures

    def find_input_files(self) -> List[Path]:
        """
        List the files to convert, sorted by name.

        Returns:
            List[Path]: Matching files directly inside the input directory

        Raises:
            FileNotFoundError: If the input directory does not exist
        """
        if not self.input_dir.is_dir():
            raise FileNotFoundError(f"The directory {self.input_dir} does not exist.")

        extension = self.input_extension.lower()
        return sorted(
            path for path in self.input_dir.iterdir()
            if path.is_file() and path.suffix.lower() == extension
        )

    def ensure_output_dir(self) -> None:
        """
        Create the output directory if it does not exist.

        Raises:
            OutputDirectoryError: If the directory cannot be created
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(str(self.output_dir), e.strerror or str(e))

    def output_path_for(self, input_path: Path) -> Path:
        """Output file for an input file: same stem, output extension."""
        return self.output_dir / f"{input_path.stem}{self.output_extension}"

    def process_file(self, input_path: Path) -> FileReport:
        """
        Convert one file and write its SMILES, one per line.

        Args:
            input_path: SDF file to convert

        Returns:
            FileReport: Outcome of the conversion; errors are stored, not raised
        """
        report = FileReport(input_path=input_path)

        try:
            result = self.converter.convert(input_path)
        except SourceUnreadable as e:
            report.error = e.reason
            return report

        report.total = result.total
        report.failed = result.failed_count

        output_path = self.output_path_for(input_path)
        try:
            write_smiles(output_path, result)
            if self.write_failures and result.failed_count > 0:
                write_failure_report(
                    self.output_dir / f"{input_path.stem}{FAILURES_SUFFIX}", result
                )
        except OutputWriteFailure as e:
            report.error = e.message
            return report

        report.output_path = output_path
        report.written = result.succeeded_count
        return report

    def run(self, files: Optional[Iterable[Path]] = None) -> List[FileReport]:
        """
        Convert all files, printing a status line and progress bar per file.

        The output directory is created before any input file is read.

        Args:
            files: Files to convert (default: find_input_files())

        Returns:
            List[FileReport]: One report per file, in processing order

        Raises:
            OutputDirectoryError: If the output directory cannot be created
        """
        self.ensure_output_dir()
        files = list(files) if files is not None else self.find_input_files()

        reports = []
        for i, input_path in enumerate(files):
            report = self.process_file(input_path)
            reports.append(report)

            if report.ok:
                print(f"Processed '{input_path.name}': {report.written} molecules "
                      f"written to '{report.output_path}'")
                if report.failed:
                    logger.info(f"{input_path.name}: {report.failed} of {report.total} "
                                f"records could not be converted")
            else:
                print(f"Error processing '{input_path.name}': {report.error}")

            print(progress_bar(i + 1, len(files)))

        if self.write_summary and reports:
            try:
                summary_path = write_summary(self.output_dir / SUMMARY_FILENAME, reports)
                print(f"Saved summary to {summary_path}")
            except OutputWriteFailure as e:
                print(f"Error: {e}")

        return reports


def write_smiles(path: Path, result: ConversionResult) -> None:
    """
    Write the converted SMILES one per line, replacing any existing file.

    Raises:
        OutputWriteFailure: If the file cannot be written
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            text = result.as_text()
            if text:
                f.write(f"{text}\n")
    except OSError as e:
        raise OutputWriteFailure(str(path), e.strerror or str(e))


def write_failure_report(path: Path, result: ConversionResult) -> None:
    """
    Write the failed records of a conversion as ``index<TAB>error`` lines.

    Indices are 1-based record numbers, as shown to users.

    Raises:
        OutputWriteFailure: If the file cannot be written
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write("Record\tError\n")
            for record in result.failures:
                f.write(f"{record.index + 1}\t{record.error}\n")
    except OSError as e:
        raise OutputWriteFailure(str(path), e.strerror or str(e))


def summary_table(reports: List[FileReport]) -> pd.DataFrame:
    """One row per file: name, output, total, written, failed, error."""
    return pd.DataFrame(
        [report.to_row() for report in reports],
        columns=['file', 'output', 'total', 'written', 'failed', 'error']
    )


def write_summary(path: Path, reports: List[FileReport]) -> Path:
    """
    Save the per-file summary table as CSV.

    Raises:
        OutputWriteFailure: If the file cannot be written
    """
    try:
        summary_table(reports).to_csv(path, index=False)
    except OSError as e:
        raise OutputWriteFailure(str(path), e.strerror or str(e))
    return path
