"""
SDF to SMILES

Converts the molecule records of SDF files into SMILES strings.

This package provides:
- A batch converter for single SDF files with per-record progress
- A console driver converting every SDF file of a directory
- A small window for converting one file and copying the SMILES

Main modules:
- converter: BatchConverter
- driver: Directory conversion and output files
- toolkits: RDKit and Open Babel backends
- config: Configuration management
- main: Command-line interface
- gui: Graphical interface
"""

from .config import ConverterConfig, load_config
from .converter import BatchConverter, percent_complete
from .driver import DirectoryDriver, progress_bar
from .exceptions import (
    ConversionError,
    OutputDirectoryError,
    OutputWriteFailure,
    RecordFailure,
    SourceUnreadable,
    ToolkitUnavailable,
)
from .models import ConversionRecord, ConversionResult, FileReport, MoleculeSet, ProgressEvent
from .tasks import ConversionTask
from .toolkits import get_toolkit

__version__ = "1.0.0"

__all__ = [
    "BatchConverter",
    "ConversionError",
    "ConversionRecord",
    "ConversionResult",
    "ConversionTask",
    "ConverterConfig",
    "DirectoryDriver",
    "FileReport",
    "MoleculeSet",
    "OutputDirectoryError",
    "OutputWriteFailure",
    "ProgressEvent",
    "RecordFailure",
    "SourceUnreadable",
    "ToolkitUnavailable",
    "get_toolkit",
    "load_config",
    "percent_complete",
    "progress_bar",
]
