"""Static structure of a frame: atoms, bonds and residues."""

from __future__ import annotations

from typing import Iterator, Optional

from moltraj.core.errors import UsageError
from moltraj.model.atom import Atom
from moltraj.model.residue import Residue

Bond = tuple[int, int]


class Topology:
    """Ordered atoms plus the bonds and residues built over their indices.

    Bonds are unordered pairs stored as ``(min, max)`` and kept in insertion
    order. Each atom belongs to at most one residue as far as
    :meth:`residue_for_atom` is concerned; overlapping residues are not
    rejected, the first one added wins.
    """

    def __init__(self) -> None:
        self._atoms: list[Atom] = []
        self._bonds: dict[Bond, None] = {}
        self._residues: list[Residue] = []
        self._atom_residue: dict[int, Residue] = {}

    # --- atoms ----------------------------------------------------------------

    @property
    def natoms(self) -> int:
        return len(self._atoms)

    @property
    def atoms(self) -> list[Atom]:
        return list(self._atoms)

    def add_atom(self, atom: Atom) -> None:
        self._atoms.append(atom)

    def resize(self, natoms: int) -> None:
        """Grow with blank atoms, or shrink dropping what refers to removed atoms."""
        if natoms < 0:
            raise UsageError(f"Topology size must be non-negative, got {natoms}")
        if natoms >= len(self._atoms):
            self._atoms.extend(Atom() for _ in range(natoms - len(self._atoms)))
            return

        del self._atoms[natoms:]
        self._bonds = {b: None for b in self._bonds if b[1] < natoms}
        for residue in self._residues:
            for index in [i for i in residue if i >= natoms]:
                residue.remove_atom(index)
        self._atom_residue = {i: r for i, r in self._atom_residue.items() if i < natoms}

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._atoms):
            raise UsageError(f"Atom index {index} out of range for a topology of {len(self._atoms)} atoms")

    def __getitem__(self, index: int) -> Atom:
        self._check_index(index)
        return self._atoms[index]

    def __setitem__(self, index: int, atom: Atom) -> None:
        self._check_index(index)
        self._atoms[index] = atom

    def __len__(self) -> int:
        return len(self._atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(list(self._atoms))

    # --- bonds ----------------------------------------------------------------

    def add_bond(self, i: int, j: int) -> None:
        self._check_index(i)
        self._check_index(j)
        if i == j:
            raise UsageError(f"Can not bond atom {i} to itself")
        self._bonds.setdefault((min(i, j), max(i, j)), None)

    def remove_bond(self, i: int, j: int) -> None:
        self._bonds.pop((min(i, j), max(i, j)), None)

    def isbond(self, i: int, j: int) -> bool:
        return (min(i, j), max(i, j)) in self._bonds

    @property
    def bonds(self) -> list[Bond]:
        """Bonds in insertion order."""
        return list(self._bonds)

    def neighbors(self, index: int) -> list[int]:
        """Atoms bonded to ``index``, in bond insertion order."""
        out = []
        for i, j in self._bonds:
            if i == index:
                out.append(j)
            elif j == index:
                out.append(i)
        return out

    # --- residues -------------------------------------------------------------

    def add_residue(self, residue: Residue) -> None:
        for index in residue:
            if index >= len(self._atoms):
                raise UsageError(
                    f"Residue '{residue.name}' refers to atom {index}, "
                    f"but the topology only has {len(self._atoms)} atoms"
                )
        self._residues.append(residue)
        for index in residue:
            self._atom_residue.setdefault(index, residue)

    @property
    def residues(self) -> list[Residue]:
        return list(self._residues)

    def residue_for_atom(self, index: int) -> Optional[Residue]:
        return self._atom_residue.get(index)

    # --- whole topology -------------------------------------------------------

    def is_blank(self) -> bool:
        """True when the topology carries no information beyond an atom count."""
        return not self._bonds and not self._residues and all(a.is_blank for a in self._atoms)

    def clear(self) -> None:
        self._atoms.clear()
        self._bonds.clear()
        self._residues.clear()
        self._atom_residue.clear()

    def copy(self) -> "Topology":
        other = Topology()
        other._atoms = [a.copy() for a in self._atoms]
        other._bonds = dict(self._bonds)
        for residue in self._residues:
            other.add_residue(residue.copy())
        return other

    def __repr__(self) -> str:
        return f"<Topology atoms={self.natoms} bonds={len(self._bonds)} residues={len(self._residues)}>"
