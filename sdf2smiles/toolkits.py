"""
Chemistry toolkit backends.

A toolkit provides the two capabilities the converter relies on: reading
molecule records from an SDF stream and encoding a molecule as SMILES. All
chemistry is delegated to the toolkit; records it cannot parse are yielded
as None.

Backends:
- rdkit: RDKit MolFromMolBlock / MolToSmiles (default)
- openbabel: Open Babel OBConversion (optional, ``pip install sdf2smiles[openbabel]``)
"""

import io
import logging
from typing import BinaryIO, Dict, Iterator, List, Optional, Type

from rdkit import Chem, RDLogger

from .exceptions import ToolkitUnavailable

logger = logging.getLogger(__name__)

RECORD_DELIMITER = "$$$$"


class Toolkit:
    """
    Base class for toolkit backends.

    The stream is cut into records at the ``$$$$`` delimiter and each record
    is parsed on its own. Blank lines after the last delimiter are not a
    record.
    """

    name = ""

    def __init__(self, sanitize: bool = True, remove_hs: bool = True,
                 canonical: bool = True, isomeric_smiles: bool = True):
        self.sanitize = sanitize
        self.remove_hs = remove_hs
        self.canonical = canonical
        self.isomeric_smiles = isomeric_smiles

    def read_records(self, stream: BinaryIO) -> Iterator[Optional[object]]:
        """
        Read molecule records from a binary SDF stream in a single pass.

        Args:
            stream: Open binary stream positioned at the first record

        Yields:
            A molecule handle per record, or None for a record that could not be parsed
        """
        for block in split_records(stream):
            yield self.parse_record(block)

    def parse_record(self, block: str) -> Optional[object]:
        """Parse one record block; None if the toolkit rejects it."""
        raise NotImplementedError

    def to_smiles(self, mol) -> str:
        """Encode one molecule handle as SMILES."""
        raise NotImplementedError


class RDKitToolkit(Toolkit):
    """RDKit backend."""

    name = "rdkit"

    def parse_record(self, block: str) -> Optional[Chem.Mol]:
        # Data items after "M  END" are ignored by the MOL block parser
        return Chem.MolFromMolBlock(block, sanitize=self.sanitize, removeHs=self.remove_hs)

    def to_smiles(self, mol: Chem.Mol) -> str:
        return Chem.MolToSmiles(
            mol,
            isomericSmiles=self.isomeric_smiles,
            canonical=self.canonical
        )


class OpenBabelToolkit(Toolkit):
    """Open Babel backend."""

    name = "openbabel"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        try:
            from openbabel import openbabel as ob
        except ImportError:
            raise ToolkitUnavailable(
                "Open Babel is not installed. Install it with: pip install openbabel-wheel"
            )
        self._ob = ob
        self._reader = self._conversion("smi")

    def _conversion(self, out_format: str):
        ob = self._ob
        conv = ob.OBConversion()
        conv.SetInAndOutFormats("sdf", out_format)
        # Write the bare SMILES without the molecule title
        conv.AddOption("n", ob.OBConversion.OUTOPTIONS)
        if not self.isomeric_smiles:
            conv.AddOption("i", ob.OBConversion.OUTOPTIONS)
        return conv

    def parse_record(self, block: str):
        mol = self._ob.OBMol()
        if not self._reader.ReadString(mol, block):
            return None
        if self.remove_hs:
            mol.DeleteHydrogens()
        return mol

    def to_smiles(self, mol) -> str:
        conv = self._conversion("can" if self.canonical else "smi")
        return conv.WriteString(mol).strip()


def split_records(stream: BinaryIO) -> Iterator[str]:
    """
    Split an SDF stream into record blocks at the ``$$$$`` delimiter.

    A trailing block without a delimiter is yielded if it holds anything
    other than whitespace.
    """
    text = io.TextIOWrapper(stream, encoding="utf-8", errors="replace", newline=None)
    lines: List[str] = []
    try:
        for line in text:
            if line.rstrip() == RECORD_DELIMITER:
                lines.append(line)
                yield "".join(lines)
                lines = []
            else:
                lines.append(line)
        if "".join(lines).strip():
            yield "".join(lines)
    finally:
        # Leave the caller's stream open
        text.detach()


TOOLKITS: Dict[str, Type[Toolkit]] = {
    RDKitToolkit.name: RDKitToolkit,
    OpenBabelToolkit.name: OpenBabelToolkit,
}


def get_toolkit(name: str = "rdkit", **options) -> Toolkit:
    """
    Create a toolkit backend by name.

    Args:
        name: Backend name ("rdkit" or "openbabel")
        **options: sanitize, remove_hs, canonical, isomeric_smiles

    Returns:
        Toolkit: The backend instance

    Raises:
        ToolkitUnavailable: If the name is unknown or the backend is not installed
    """
    try:
        toolkit_class = TOOLKITS[name]
    except KeyError:
        raise ToolkitUnavailable(
            f"Unknown toolkit '{name}'. Use one of: {', '.join(sorted(TOOLKITS))}"
        )
    return toolkit_class(**options)


def set_toolkit_logging(verbose: bool = False) -> None:
    """Silence RDKit's own parser messages unless running verbose."""
    if verbose:
        RDLogger.EnableLog('rdApp.*')
    else:
        RDLogger.DisableLog('rdApp.*')
