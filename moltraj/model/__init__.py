"""moltraj.model — format-independent trajectory data model.

    Frame
    ├── positions / velocities: (natoms, 3) arrays
    ├── topology: Topology
    │   ├── atoms: list[Atom]
    │   ├── bonds: list[(i, j)]
    │   └── residues: list[Residue]
    ├── cell: UnitCell
    └── properties: PropertyMap
"""

from moltraj.model.atom import Atom
from moltraj.model.cell import CellShape, UnitCell
from moltraj.model.frame import Frame
from moltraj.model.property import Property, PropertyKind, PropertyMap
from moltraj.model.residue import Residue
from moltraj.model.topology import Topology

__all__ = [
    "Atom",
    "CellShape",
    "Frame",
    "Property",
    "PropertyKind",
    "PropertyMap",
    "Residue",
    "Topology",
    "UnitCell",
]
