"""Test configuration and fixtures for sdf2smiles tests."""

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional

import pytest
from rdkit import Chem

from sdf2smiles.toolkits import Toolkit


# A carbon bonded to five carbons: the block parses but fails sanitization,
# so the SDF reader yields None for it.
PENTAVALENT_CARBON_BLOCK = """pentavalent
     sdf2smiles tests

  6  5  0  0  0  0  0  0  0  0999 V2000
    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
    1.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
   -1.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
    0.0000    1.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
    0.0000   -1.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
    0.0000    0.0000    1.0000 C   0  0  0  0  0  0  0  0  0  0  0  0
  1  2  1  0
  1  3  1  0
  1  4  1  0
  1  5  1  0
  1  6  1  0
M  END
"""

VALID_SMILES = ["CCO", "c1ccccc1", "CC(=O)O", "CCN", "C1CCCCC1"]


def canonical(smiles: str) -> str:
    """RDKit canonical SMILES used as the expected output."""
    return Chem.MolToSmiles(Chem.MolFromSmiles(smiles))


def mol_block(smiles: str, name: str = "") -> str:
    """MOL block for a SMILES string."""
    mol = Chem.MolFromSmiles(smiles)
    mol.SetProp("_Name", name)
    return Chem.MolToMolBlock(mol)


def sdf_text(blocks: Iterable[str]) -> str:
    """Join MOL blocks into SDF text."""
    return "".join(f"{block}$$$$\n" for block in blocks)


def write_sdf(path: Path, smiles_list: List[Optional[str]]) -> Path:
    """
    Write an SDF file; None entries become a record that fails to parse.

    Args:
        path: Destination file
        smiles_list: SMILES per record, None for a malformed record

    Returns:
        Path: The written file
    """
    blocks = [
        PENTAVALENT_CARBON_BLOCK if smiles is None else mol_block(smiles, f"mol_{i + 1}")
        for i, smiles in enumerate(smiles_list)
    ]
    path.write_text(sdf_text(blocks))
    return path


class FakeToolkit(Toolkit):
    """
    Toolkit returning preset records.

    Records are used as their own SMILES; None is an unparsable record, and
    records listed in ``fail_on`` raise when encoded.
    """

    name = "fake"

    def __init__(self, records: List[Optional[str]], fail_on: Iterable[str] = ()):
        super().__init__()
        self.records = records
        self.fail_on = set(fail_on)
        self.reads = 0

    def read_records(self, stream) -> Iterator[Optional[str]]:
        self.reads += 1
        stream.read()
        yield from self.records

    def to_smiles(self, mol: str) -> str:
        if mol in self.fail_on:
            raise ValueError(f"cannot encode {mol}")
        return mol


@pytest.fixture
def sdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Create SDF files under tmp_path."""
    def factory(smiles_list: List[Optional[str]], name: str = "molecules.sdf") -> Path:
        return write_sdf(tmp_path / name, smiles_list)
    return factory


@pytest.fixture
def five_records_third_malformed(sdf_factory) -> Path:
    """Five records, the third of which cannot be parsed."""
    return sdf_factory(["CCO", "c1ccccc1", None, "CC(=O)O", "CCN"], "five.sdf")


@pytest.fixture
def empty_sdf(tmp_path: Path) -> Path:
    """An SDF file without records."""
    path = tmp_path / "empty.sdf"
    path.write_text("")
    return path
