"""
Exceptions raised by the SDF to SMILES conversion pipeline.

Only SourceUnreadable, OutputWriteFailure and OutputDirectoryError ever
reach a caller. RecordFailure is raised and recovered inside the conversion
loop and ends up as a failed ConversionRecord.
"""

from typing import Optional


class ConversionError(Exception):
    """Base exception for conversion errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


class SourceUnreadable(ConversionError):
    """The input file cannot be opened or read as a molecule source."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(f"Cannot read '{path}': {reason}", path=str(path))


class RecordFailure(ConversionError):
    """A single record failed to parse or encode."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Record {index + 1}: {reason}")


class OutputWriteFailure(ConversionError):
    """An output artifact could not be written."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(f"Cannot write '{path}': {reason}", path=str(path))


class OutputDirectoryError(ConversionError):
    """The output directory does not exist and could not be created."""

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(f"Cannot create output directory '{path}': {reason}", path=str(path))


class ToolkitUnavailable(ConversionError):
    """The requested chemistry toolkit is unknown or not installed."""
    pass
