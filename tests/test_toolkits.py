"""Tests for the chemistry toolkit backends."""

import io
import sys

import pytest
from rdkit import Chem

from sdf2smiles.exceptions import ToolkitUnavailable
from sdf2smiles.toolkits import OpenBabelToolkit, RDKitToolkit, get_toolkit, split_records

from conftest import PENTAVALENT_CARBON_BLOCK, canonical, mol_block, sdf_text


def sdf_stream(blocks) -> io.BytesIO:
    return io.BytesIO(sdf_text(blocks).encode())


class TestGetToolkit:
    """Test toolkit lookup."""

    def test_default_is_rdkit(self) -> None:
        toolkit = get_toolkit()
        assert isinstance(toolkit, RDKitToolkit)
        assert toolkit.canonical and toolkit.isomeric_smiles

    def test_options_are_passed(self) -> None:
        toolkit = get_toolkit("rdkit", canonical=False, remove_hs=False)
        assert not toolkit.canonical
        assert not toolkit.remove_hs

    def test_unknown_toolkit(self) -> None:
        with pytest.raises(ToolkitUnavailable, match="Unknown toolkit"):
            get_toolkit("chemdraw")

    def test_openbabel_not_installed(self, monkeypatch) -> None:
        monkeypatch.setitem(sys.modules, "openbabel", None)
        with pytest.raises(ToolkitUnavailable, match="openbabel-wheel"):
            get_toolkit("openbabel")


class TestRDKitToolkit:
    """Test the RDKit backend."""

    def test_reads_records_in_order(self) -> None:
        stream = sdf_stream([mol_block("CCO"), PENTAVALENT_CARBON_BLOCK, mol_block("CCN")])
        toolkit = RDKitToolkit()

        mols = list(toolkit.read_records(stream))

        assert len(mols) == 3
        assert mols[1] is None
        assert [toolkit.to_smiles(mols[i]) for i in (0, 2)] == [canonical("CCO"), canonical("CCN")]

    def test_blank_lines_after_last_record(self) -> None:
        stream = io.BytesIO((sdf_text([mol_block("CCO")]) + "\n\n").encode())

        mols = list(RDKitToolkit().read_records(stream))

        assert len(mols) == 1
        assert mols[0] is not None

    def test_non_isomeric(self) -> None:
        mol = Chem.MolFromSmiles("C[C@H](N)O")

        assert "@" in RDKitToolkit().to_smiles(mol)
        assert "@" not in RDKitToolkit(isomeric_smiles=False).to_smiles(mol)

    def test_without_sanitizing(self) -> None:
        stream = sdf_stream([PENTAVALENT_CARBON_BLOCK])
        mols = list(RDKitToolkit(sanitize=False).read_records(stream))

        assert mols[0] is not None


class TestSplitRecords:
    """Test splitting SDF text at record delimiters."""

    def test_split(self) -> None:
        stream = io.BytesIO(b"first\nM  END\n$$$$\nsecond\nM  END\n$$$$\n")
        assert list(split_records(stream)) == [
            "first\nM  END\n$$$$\n",
            "second\nM  END\n$$$$\n",
        ]

    def test_trailing_record_without_delimiter(self) -> None:
        stream = io.BytesIO(b"first\n$$$$\nsecond\nM  END\n")
        assert list(split_records(stream)) == ["first\n$$$$\n", "second\nM  END\n"]

    def test_trailing_whitespace_is_ignored(self) -> None:
        stream = io.BytesIO(b"first\n$$$$\n\n  \n")
        assert list(split_records(stream)) == ["first\n$$$$\n"]

    def test_windows_line_endings(self) -> None:
        stream = io.BytesIO(b"first\r\n$$$$\r\n")
        assert list(split_records(stream)) == ["first\n$$$$\n"]

    def test_stream_stays_open(self) -> None:
        stream = io.BytesIO(b"first\n$$$$\n")
        list(split_records(stream))
        assert not stream.closed


class TestOpenBabelToolkit:
    """Test the Open Babel backend, when installed."""

    @pytest.fixture
    def toolkit(self) -> OpenBabelToolkit:
        pytest.importorskip("openbabel")
        return OpenBabelToolkit()

    def test_reads_and_encodes(self, toolkit: OpenBabelToolkit) -> None:
        stream = sdf_stream([mol_block("CCO", "ethanol"), mol_block("c1ccccc1", "benzene")])

        smiles = [toolkit.to_smiles(mol) for mol in toolkit.read_records(stream)]

        assert [canonical(s) for s in smiles] == [canonical("CCO"), canonical("c1ccccc1")]
        assert all("ethanol" not in s and "benzene" not in s for s in smiles)
