"""Tests for Topology."""

import pytest

from moltraj.core.errors import UsageError
from moltraj.model.atom import Atom
from moltraj.model.residue import Residue
from moltraj.model.topology import Topology


def _topology(natoms: int) -> Topology:
    topology = Topology()
    for i in range(natoms):
        topology.add_atom(Atom(f"A{i}", "C"))
    return topology


class TestAtoms:
    def test_add_and_index(self):
        topology = _topology(3)
        assert topology.natoms == 3
        assert len(topology) == 3
        assert topology[1].name == "A1"
        assert [a.name for a in topology] == ["A0", "A1", "A2"]

    def test_index_out_of_range(self):
        with pytest.raises(UsageError):
            _topology(2)[2]

    def test_setitem(self):
        topology = _topology(2)
        topology[0] = Atom("Zn", "Zn")
        assert topology[0].element == "Zn"

    def test_resize_grows_with_blank_atoms(self):
        topology = _topology(1)
        topology.resize(3)
        assert topology.natoms == 3
        assert topology[2].is_blank


class TestBonds:
    def test_add_bond_canonical(self):
        topology = _topology(4)
        topology.add_bond(2, 0)
        assert topology.bonds == [(0, 2)]
        assert topology.isbond(0, 2)
        assert topology.isbond(2, 0)

    def test_no_duplicate_bonds(self):
        topology = _topology(4)
        topology.add_bond(0, 1)
        topology.add_bond(1, 0)
        topology.add_bond(0, 1)
        assert topology.bonds == [(0, 1)]

    def test_self_bond_is_usage_error(self):
        with pytest.raises(UsageError):
            _topology(2).add_bond(1, 1)

    def test_out_of_range_bond_is_usage_error(self):
        topology = _topology(2)
        with pytest.raises(UsageError):
            topology.add_bond(0, 2)
        with pytest.raises(UsageError):
            topology.add_bond(-1, 0)

    def test_bonds_keep_insertion_order(self):
        topology = _topology(5)
        topology.add_bond(3, 4)
        topology.add_bond(0, 1)
        topology.add_bond(2, 0)
        assert topology.bonds == [(3, 4), (0, 1), (0, 2)]
        assert topology.neighbors(0) == [1, 2]

    def test_remove_bond(self):
        topology = _topology(3)
        topology.add_bond(0, 1)
        topology.remove_bond(1, 0)
        topology.remove_bond(1, 2)
        assert topology.bonds == []

    def test_shrink_drops_bonds(self):
        topology = _topology(4)
        topology.add_bond(0, 1)
        topology.add_bond(2, 3)
        topology.resize(3)
        assert topology.bonds == [(0, 1)]


class TestResidues:
    def test_add_residue(self):
        topology = _topology(4)
        residue = Residue("HOH", 1)
        for i in (0, 1, 2):
            residue.add_atom(i)
        topology.add_residue(residue)

        assert topology.residues == [residue]
        assert topology.residue_for_atom(1) is residue
        assert topology.residue_for_atom(3) is None

    def test_residue_out_of_range(self):
        residue = Residue("HOH")
        residue.add_atom(5)
        with pytest.raises(UsageError):
            _topology(3).add_residue(residue)

    def test_first_residue_wins(self):
        topology = _topology(2)
        first, second = Residue("A"), Residue("B")
        first.add_atom(0)
        second.add_atom(0)
        topology.add_residue(first)
        topology.add_residue(second)
        assert len(topology.residues) == 2
        assert topology.residue_for_atom(0) is first

    def test_shrink_drops_residue_members(self):
        topology = _topology(3)
        residue = Residue("X")
        residue.add_atom(0)
        residue.add_atom(2)
        topology.add_residue(residue)
        topology.resize(2)
        assert list(topology.residues[0]) == [0]
        assert topology.residue_for_atom(2) is None


class TestWholeTopology:
    def test_is_blank(self):
        topology = Topology()
        topology.resize(3)
        assert topology.is_blank()

        topology.add_bond(0, 1)
        assert not topology.is_blank()

        named = Topology()
        named.add_atom(Atom("O"))
        assert not named.is_blank()

    def test_clear(self):
        topology = _topology(2)
        topology.add_bond(0, 1)
        topology.clear()
        assert topology.natoms == 0
        assert topology.bonds == []
        assert topology.residues == []

    def test_copy_is_independent(self):
        topology = _topology(3)
        topology.add_bond(0, 1)
        residue = Residue("R", 1)
        residue.add_atom(0)
        topology.add_residue(residue)

        other = topology.copy()
        other.add_bond(1, 2)
        other.residues[0].add_atom(2)

        assert topology.bonds == [(0, 1)]
        assert list(topology.residues[0]) == [0]
        assert other.residue_for_atom(0) is other.residues[0]
