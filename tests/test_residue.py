"""Tests for Residue and Atom."""

import pytest

from moltraj.core.errors import UsageError
from moltraj.model.atom import Atom
from moltraj.model.residue import Residue


class TestResidue:
    def test_name_and_id(self):
        residue = Residue("ALA", 4)
        assert residue.name == "ALA"
        assert residue.id == 4

    def test_no_id(self):
        residue = Residue("GUA")
        assert residue.id is None

    def test_atoms_dedup_and_order(self):
        residue = Residue("ALA", 4)
        assert len(residue) == 0
        for index in (0, 56, 30):
            residue.add_atom(index)
        assert len(residue) == 3

        residue.add_atom(56)
        assert len(residue) == 3
        assert list(residue) == [0, 30, 56]
        assert residue.atoms == (0, 30, 56)
        assert residue.contains(56)
        assert 30 in residue
        assert 31 not in residue

    def test_negative_index(self):
        with pytest.raises(UsageError):
            Residue("ALA").add_atom(-1)

    def test_remove_atom(self):
        residue = Residue("ALA")
        residue.add_atom(3)
        residue.add_atom(1)
        residue.remove_atom(3)
        residue.remove_atom(42)
        assert list(residue) == [1]

    def test_properties(self):
        residue = Residue("foo")
        residue.set("foo", 35)
        residue.set("bar", False)
        assert residue.get("foo").as_double() == 35.0
        assert residue.get_bool("bar") is False

        residue.set("foo", "test")
        assert residue.get_string("foo") == "test"
        assert residue.get("not here") is None

    def test_copy_and_equality(self):
        residue = Residue("HOH", 1)
        residue.add_atom(2)
        other = residue.copy()
        assert other == residue
        other.add_atom(5)
        assert other != residue
        assert list(residue) == [2]


class TestAtom:
    def test_defaults(self):
        atom = Atom()
        assert atom.name == ""
        assert atom.element == ""
        assert atom.is_blank

    def test_frozen(self):
        atom = Atom("CA", "C")
        with pytest.raises(AttributeError):
            atom.name = "CB"

    def test_properties_do_not_affect_equality(self):
        a = Atom("O", "O")
        b = Atom("O", "O")
        a.set("charge", -0.8)
        assert a == b
        assert a.get_double("charge") == -0.8
        assert b.get("charge") is None

    def test_copy_properties(self):
        a = Atom("O", "O")
        a.set("charge", -0.8)
        b = a.copy()
        b.set("charge", 0.0)
        assert a.get_double("charge") == -0.8
