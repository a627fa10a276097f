"""One trajectory step: positions, optional velocities, topology, cell, properties."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from moltraj.core.errors import UsageError
from moltraj.model.atom import Atom
from moltraj.model.cell import UnitCell
from moltraj.model.property import HasProperties, PropertyMap
from moltraj.model.topology import Topology


def _as_vector(value: Sequence[float], *, where: str) -> np.ndarray:
    vec = np.asarray(value, dtype=np.float64)
    if vec.shape != (3,):
        raise UsageError(f"{where}: expected 3 components, got shape {vec.shape}")
    return vec


class Frame(HasProperties):
    """Atomic state of a single step.

    ``positions`` (and ``velocities`` when present) are ``(natoms, 3)`` float64
    views over an internal buffer that grows geometrically, so building a
    frame atom by atom stays linear.
    """

    def __init__(self, topology: Optional[Topology] = None, cell: Optional[UnitCell] = None):
        self.properties = PropertyMap()
        self._topology = Topology()
        self._cell = cell if cell is not None else UnitCell()
        self._natoms = 0
        self._positions = np.zeros((0, 3))
        self._velocities: Optional[np.ndarray] = None
        if topology is not None:
            self.resize(topology.natoms)
            self.set_topology(topology)

    # --- size -----------------------------------------------------------------

    @property
    def natoms(self) -> int:
        return self._natoms

    def __len__(self) -> int:
        return self._natoms

    def _reserve(self, natoms: int) -> None:
        capacity = len(self._positions)
        if natoms <= capacity:
            return
        capacity = max(natoms, 2 * capacity, 16)
        positions = np.zeros((capacity, 3))
        positions[: self._natoms] = self._positions[: self._natoms]
        self._positions = positions
        if self._velocities is not None:
            velocities = np.zeros((capacity, 3))
            velocities[: self._natoms] = self._velocities[: self._natoms]
            self._velocities = velocities

    def resize(self, natoms: int) -> None:
        """Set the number of atoms; new atoms are blank and sit at the origin."""
        if natoms < 0:
            raise UsageError(f"Frame size must be non-negative, got {natoms}")
        self._reserve(natoms)
        if natoms > self._natoms:
            self._positions[self._natoms : natoms] = 0.0
            if self._velocities is not None:
                self._velocities[self._natoms : natoms] = 0.0
        self._topology.resize(natoms)
        self._natoms = natoms

    def add_atom(
        self,
        atom: Atom,
        position: Sequence[float],
        velocity: Optional[Sequence[float]] = None,
    ) -> None:
        pos = _as_vector(position, where="Frame.add_atom position")
        vel = _as_vector(velocity, where="Frame.add_atom velocity") if velocity is not None else None
        if vel is not None and self._velocities is None:
            self.add_velocities()

        self._reserve(self._natoms + 1)
        self._positions[self._natoms] = pos
        if self._velocities is not None:
            self._velocities[self._natoms] = vel if vel is not None else 0.0
        self._topology.add_atom(atom)
        self._natoms += 1

    def clear(self) -> None:
        """Reset to an empty frame with the default cell and no properties."""
        self._natoms = 0
        self._topology.clear()
        self._velocities = None
        self._cell = UnitCell()
        self.properties.clear()

    # --- positions and velocities ---------------------------------------------

    @property
    def positions(self) -> np.ndarray:
        return self._positions[: self._natoms]

    @positions.setter
    def positions(self, values: Sequence[Sequence[float]]) -> None:
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (self._natoms, 3):
            raise UsageError(f"positions: expected shape ({self._natoms}, 3), got {arr.shape}")
        self._positions[: self._natoms] = arr

    @property
    def has_velocities(self) -> bool:
        return self._velocities is not None

    @property
    def velocities(self) -> Optional[np.ndarray]:
        if self._velocities is None:
            return None
        return self._velocities[: self._natoms]

    @velocities.setter
    def velocities(self, values: Sequence[Sequence[float]]) -> None:
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (self._natoms, 3):
            raise UsageError(f"velocities: expected shape ({self._natoms}, 3), got {arr.shape}")
        self.add_velocities()
        self._velocities[: self._natoms] = arr  # type: ignore[index]

    def add_velocities(self) -> None:
        """Start storing velocities, all zero, if not already stored."""
        if self._velocities is None:
            self._velocities = np.zeros_like(self._positions)

    # --- topology and cell ----------------------------------------------------

    @property
    def topology(self) -> Topology:
        return self._topology

    def set_topology(self, topology: Topology) -> None:
        if topology.natoms != self._natoms:
            raise UsageError(
                f"Topology has {topology.natoms} atoms, but the frame has {self._natoms}"
            )
        self._topology = topology

    @property
    def cell(self) -> UnitCell:
        return self._cell

    @cell.setter
    def cell(self, cell: UnitCell) -> None:
        self.set_cell(cell)

    def set_cell(self, cell: UnitCell) -> None:
        if not isinstance(cell, UnitCell):
            raise UsageError(f"Expected a UnitCell, got {type(cell).__name__}")
        self._cell = cell

    # --- helpers --------------------------------------------------------------

    def copy(self) -> "Frame":
        other = Frame(cell=self._cell)
        other.resize(self._natoms)
        other.positions = self.positions
        if self._velocities is not None:
            other.velocities = self.velocities  # type: ignore[assignment]
        other._topology = self._topology.copy()
        other.properties = self.properties.copy()
        return other

    def to_dataframe(self) -> pd.DataFrame:
        """One row per atom: name, element, position and owning residue."""
        rows = []
        for i, atom in enumerate(self._topology):
            residue = self._topology.residue_for_atom(i)
            x, y, z = self.positions[i]
            rows.append({
                "index": i,
                "name": atom.name,
                "element": atom.element,
                "x": float(x),
                "y": float(y),
                "z": float(z),
                "residue": residue.name if residue is not None else None,
                "resid": residue.id if residue is not None else None,
            })
        columns = ["index", "name", "element", "x", "y", "z", "residue", "resid"]
        df = pd.DataFrame(rows, columns=columns)
        if self._velocities is not None:
            df[["vx", "vy", "vz"]] = self.velocities
        return df

    def __repr__(self) -> str:
        return f"<Frame atoms={self._natoms} cell={self._cell.shape.value}>"
