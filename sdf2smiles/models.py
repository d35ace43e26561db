"""
Data models for SDF to SMILES conversion.

This module defines the values passed between the conversion steps: the
molecule set produced by opening a source file, the per-record and per-file
conversion results, and progress events.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional


@dataclass(frozen=True)
class ProgressEvent:
    """Percentage of records processed so far (0-100)."""
    percent: int

    def __post_init__(self):
        if not 0 <= self.percent <= 100:
            raise ValueError(f"percent must be between 0 and 100, got {self.percent}")


@dataclass(frozen=True)
class ConversionRecord:
    """
    Outcome of converting one source record.

    Attributes:
        index: 0-based position of the record in the source file
        smiles: SMILES string, None when the record failed
        failed: Whether the record could not be parsed or encoded
        error: Failure message, if any
    """
    index: int
    smiles: Optional[str] = None
    failed: bool = False
    error: Optional[str] = None


@dataclass
class ConversionResult:
    """
    Aggregate result of converting one source file.

    Attributes:
        total: Number of source records seen
        succeeded: SMILES strings in source order
        failed_count: Number of records that could not be converted
        failures: Failed records, in source order
        records: One record per source record, in source order
    """
    total: int = 0
    succeeded: List[str] = field(default_factory=list)
    failed_count: int = 0
    failures: List[ConversionRecord] = field(default_factory=list)
    records: List[ConversionRecord] = field(default_factory=list)

    def __post_init__(self):
        """Validate the counts after initialization."""
        if len(self.succeeded) + self.failed_count != self.total:
            raise ValueError(
                f"Inconsistent result: {len(self.succeeded)} succeeded + "
                f"{self.failed_count} failed != {self.total} total"
            )
        if self.records and len(self.records) != self.total:
            raise ValueError(
                f"Inconsistent result: {len(self.records)} records != {self.total} total"
            )

    @classmethod
    def from_records(cls, records: List[ConversionRecord]) -> "ConversionResult":
        """Build a result from the per-record outcomes of one source."""
        failures = [record for record in records if record.failed]
        return cls(
            total=len(records),
            succeeded=[record.smiles for record in records if not record.failed],
            failed_count=len(failures),
            failures=failures,
            records=list(records)
        )

    @property
    def succeeded_count(self) -> int:
        return len(self.succeeded)

    def as_text(self) -> str:
        """Newline-joined SMILES, as copied to the clipboard and written to files."""
        return "\n".join(self.succeeded)


@dataclass
class MoleculeSet:
    """
    Molecule handles read from one source file.

    Produced once by the file-open step and only read afterwards. Records the
    toolkit could not parse are kept as None so that every source record is
    accounted for.

    Attributes:
        source: Path the molecules were read from
        molecules: Toolkit molecule handles in source order
    """
    source: str
    molecules: List[Optional[Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.molecules)

    def __iter__(self):
        return iter(self.molecules)

    @property
    def total(self) -> int:
        return len(self.molecules)

    @property
    def parsed_count(self) -> int:
        """Number of records the toolkit parsed successfully."""
        return sum(1 for mol in self.molecules if mol is not None)


@dataclass
class FileReport:
    """
    Outcome of converting one file during a directory run.

    Attributes:
        input_path: Source SDF file
        output_path: Output text file (None if nothing was written)
        total: Records seen in the source
        written: SMILES lines written
        failed: Records that could not be converted
        error: Per-file error message, if the file was not converted
    """
    input_path: Path
    output_path: Optional[Path] = None
    total: int = 0
    written: int = 0
    failed: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_row(self) -> dict:
        """Flatten the report into a summary table row."""
        return {
            'file': self.input_path.name,
            'output': str(self.output_path) if self.output_path else '',
            'total': self.total,
            'written': self.written,
            'failed': self.failed,
            'error': self.error or ''
        }
