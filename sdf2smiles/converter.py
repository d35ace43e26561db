"""
Batch conversion of SDF records to SMILES.

This module contains the BatchConverter class, which opens one source file,
encodes every record with the configured toolkit and reports progress after
each record. Failures of single records are counted and skipped; only a
source that cannot be opened fails the whole conversion.
"""

import logging
import time
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Union

from .exceptions import RecordFailure, SourceUnreadable
from .models import ConversionRecord, ConversionResult, MoleculeSet, ProgressEvent
from .toolkits import RDKitToolkit, Toolkit

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def percent_complete(processed: int, total: int) -> int:
    """
    Percentage of records processed, rounded to the nearest integer.

    Args:
        processed: Records processed so far
        total: Total records in the source (must be positive)

    Returns:
        int: Percentage between 0 and 100
    """
    if total <= 0:
        raise ValueError(f"total must be positive, got {total}")
    if not 0 <= processed <= total:
        raise ValueError(f"processed must be between 0 and {total}, got {processed}")
    return round(processed * 100 / total)


class BatchConverter:
    """
    Converts the molecule records of one SDF file into SMILES strings.

    The converter keeps no state between calls: each conversion works on the
    MoleculeSet it is given, so the same converter can serve the console
    driver and the GUI.
    """

    def __init__(self, toolkit: Optional[Toolkit] = None):
        """
        Initialize the converter.

        Args:
            toolkit: Chemistry toolkit backend (defaults to RDKit)
        """
        self.toolkit = toolkit if toolkit is not None else RDKitToolkit()

    def open_source(self, source_path: Union[str, Path]) -> MoleculeSet:
        """
        Read every record of an SDF file in a single pass.

        Args:
            source_path: Path to the SDF file

        Returns:
            MoleculeSet: Molecule handles in source order, None for unparsable records

        Raises:
            SourceUnreadable: If the file cannot be opened or read
        """
        path = str(source_path)
        try:
            handle = open(path, 'rb')
        except OSError as e:
            raise SourceUnreadable(path, e.strerror or str(e))

        with handle:
            return self.read_stream(handle, source=path)

    def read_stream(self, stream: BinaryIO, source: str = "<stream>") -> MoleculeSet:
        """
        Read every record from an open binary stream.

        The stream is consumed once from its current position, so it does not
        need to be seekable.

        Args:
            stream: Binary SDF stream
            source: Name used in messages and stored on the MoleculeSet

        Returns:
            MoleculeSet: Molecule handles in source order

        Raises:
            SourceUnreadable: If the toolkit cannot read the stream
        """
        try:
            molecules = list(self.toolkit.read_records(stream))
        except Exception as e:
            raise SourceUnreadable(source, str(e))

        molecule_set = MoleculeSet(source=source, molecules=molecules)
        logger.debug(f"Read {molecule_set.total} records from {source} "
                     f"({molecule_set.parsed_count} parsed)")
        return molecule_set

    def convert_molecules(self, molecules: MoleculeSet,
                          progress: Optional[ProgressCallback] = None) -> ConversionResult:
        """
        Encode each molecule of a set as SMILES.

        Records are processed strictly in order. After each record, success
        or failure, the progress callback receives the percentage processed.
        An empty set returns an empty result without calling it.

        Args:
            molecules: Molecule set returned by open_source
            progress: Optional callback receiving a ProgressEvent per record

        Returns:
            ConversionResult: SMILES in source order and failure counts
        """
        total = len(molecules)
        records: List[ConversionRecord] = []
        start_time = time.time()

        for index, mol in enumerate(molecules):
            try:
                smiles = self._encode(index, mol)
            except RecordFailure as e:
                records.append(ConversionRecord(index=index, failed=True, error=e.reason))
                logger.info(f"{molecules.source}: {e}")
            else:
                records.append(ConversionRecord(index=index, smiles=smiles))

            if progress is not None:
                progress(ProgressEvent(percent_complete(index + 1, total)))

        result = ConversionResult.from_records(records)
        logger.debug(f"Converted {result.succeeded_count}/{total} records from {molecules.source} "
                     f"({time.time() - start_time:.2f}s)")
        return result

    def convert(self, source_path: Union[str, Path],
                progress: Optional[ProgressCallback] = None) -> ConversionResult:
        """
        Open an SDF file and convert all of its records.

        Args:
            source_path: Path to the SDF file
            progress: Optional callback receiving a ProgressEvent per record

        Returns:
            ConversionResult: SMILES in source order and failure counts

        Raises:
            SourceUnreadable: If the file cannot be opened or read
        """
        return self.convert_molecules(self.open_source(source_path), progress)

    def _encode(self, index: int, mol) -> str:
        """Encode one record, raising RecordFailure if it cannot be converted."""
        if mol is None:
            raise RecordFailure(index, "could not be parsed")

        try:
            smiles = self.toolkit.to_smiles(mol)
        except Exception as e:
            raise RecordFailure(index, f"SMILES encoding failed: {e}")

        if not smiles:
            raise RecordFailure(index, "empty SMILES")

        return smiles
