"""Tests for data models and exceptions."""

from pathlib import Path

import pytest

from sdf2smiles.exceptions import (
    ConversionError,
    OutputWriteFailure,
    RecordFailure,
    SourceUnreadable,
)
from sdf2smiles.models import (
    ConversionRecord,
    ConversionResult,
    FileReport,
    MoleculeSet,
    ProgressEvent,
)


class TestProgressEvent:

    @pytest.mark.parametrize("percent", [0, 50, 100])
    def test_valid(self, percent: int) -> None:
        assert ProgressEvent(percent).percent == percent

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_out_of_range(self, percent: int) -> None:
        with pytest.raises(ValueError):
            ProgressEvent(percent)


class TestConversionResult:
    """Test the conversion result invariant and helpers."""

    def test_empty(self) -> None:
        result = ConversionResult()
        assert result.total == 0
        assert result.as_text() == ""

    def test_counts_must_add_up(self) -> None:
        with pytest.raises(ValueError, match="Inconsistent result"):
            ConversionResult(total=3, succeeded=["C"], failed_count=1)

    def test_count_and_text(self) -> None:
        result = ConversionResult(
            total=3,
            succeeded=["C", "CC"],
            failed_count=1,
            failures=[ConversionRecord(index=1, failed=True, error="could not be parsed")]
        )

        assert result.succeeded_count == 2
        assert result.as_text() == "C\nCC"

    def test_from_records(self) -> None:
        records = [
            ConversionRecord(index=0, smiles="C"),
            ConversionRecord(index=1, failed=True, error="empty SMILES"),
            ConversionRecord(index=2, smiles="CC"),
        ]

        result = ConversionResult.from_records(records)

        assert result.total == 3
        assert result.succeeded == ["C", "CC"]
        assert result.failed_count == 1
        assert result.failures == [records[1]]
        assert result.records == records

    def test_records_must_match_total(self) -> None:
        with pytest.raises(ValueError, match="records"):
            ConversionResult(total=2, succeeded=["C", "N"], records=[ConversionRecord(index=0, smiles="C")])


class TestMoleculeSet:

    def test_counts(self) -> None:
        molecules = MoleculeSet("a.sdf", ["m1", None, "m3"])

        assert len(molecules) == 3
        assert molecules.total == 3
        assert molecules.parsed_count == 2
        assert list(molecules) == ["m1", None, "m3"]


class TestFileReport:

    def test_successful_row(self, tmp_path: Path) -> None:
        report = FileReport(tmp_path / "a.sdf", tmp_path / "a.txt", total=3, written=2, failed=1)

        assert report.ok
        assert report.to_row() == {
            'file': "a.sdf",
            'output': str(tmp_path / "a.txt"),
            'total': 3,
            'written': 2,
            'failed': 1,
            'error': ''
        }

    def test_failed_row(self) -> None:
        report = FileReport(Path("b.sdf"), error="No such file or directory")

        assert not report.ok
        assert report.to_row()['output'] == ''
        assert report.to_row()['error'] == "No such file or directory"


class TestExceptions:
    """Test exception messages and hierarchy."""

    def test_source_unreadable(self) -> None:
        error = SourceUnreadable("a.sdf", "Permission denied")

        assert isinstance(error, ConversionError)
        assert error.path == "a.sdf"
        assert error.reason == "Permission denied"
        assert str(error) == "Cannot read 'a.sdf': Permission denied"

    def test_record_failure_uses_record_number(self) -> None:
        error = RecordFailure(2, "could not be parsed")

        assert error.index == 2
        assert str(error) == "Record 3: could not be parsed"

    def test_output_write_failure(self) -> None:
        error = OutputWriteFailure("out/a.txt", "Disk full")

        assert error.message == "Cannot write 'out/a.txt': Disk full"
        assert error.path == "out/a.txt"
