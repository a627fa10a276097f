from __future__ import annotations

from bisect import bisect_left
from typing import Iterator, Optional

from moltraj.core.errors import UsageError
from moltraj.model.property import HasProperties, PropertyMap


class Residue(HasProperties):
    """Named, optionally numbered group of atom indices.

    Atom indices are stored once each and always iterated in ascending
    order, whatever the insertion order.
    """

    def __init__(self, name: str, id: Optional[int] = None):
        self.name = name
        self.id = id
        self.properties = PropertyMap()
        self._atoms: list[int] = []

    def add_atom(self, index: int) -> None:
        if index < 0:
            raise UsageError(f"Atom index must be non-negative, got {index}")
        pos = bisect_left(self._atoms, index)
        if pos < len(self._atoms) and self._atoms[pos] == index:
            return
        self._atoms.insert(pos, index)

    def remove_atom(self, index: int) -> None:
        pos = bisect_left(self._atoms, index)
        if pos < len(self._atoms) and self._atoms[pos] == index:
            del self._atoms[pos]

    def contains(self, index: int) -> bool:
        pos = bisect_left(self._atoms, index)
        return pos < len(self._atoms) and self._atoms[pos] == index

    @property
    def atoms(self) -> tuple[int, ...]:
        return tuple(self._atoms)

    def copy(self) -> "Residue":
        other = Residue(self.name, self.id)
        other._atoms = list(self._atoms)
        other.properties = self.properties.copy()
        return other

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and self.contains(index)

    def __iter__(self) -> Iterator[int]:
        return iter(tuple(self._atoms))

    def __len__(self) -> int:
        return len(self._atoms)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Residue):
            return NotImplemented
        return (self.name, self.id, self._atoms) == (other.name, other.id, other._atoms)

    def __repr__(self) -> str:
        rid = "" if self.id is None else f" {self.id}"
        return f"<Residue {self.name}{rid} atoms={len(self)}>"
