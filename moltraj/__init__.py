"""moltraj — read and write molecular trajectory files.

Every format reads into and writes from the same data model (Frame,
Topology, Residue, Atom, UnitCell, Property). Trajectory binds a format to
a file and handles the step cursor and topology/cell overrides.

Usage::

    from moltraj import Trajectory

    with Trajectory("protein.pdb") as traj:
        print(traj.nsteps)
        frame = traj.read_step(2)
        print(frame.positions[:3], frame.topology.bonds[:3])
"""

from __future__ import annotations

from moltraj.core.errors import FileError, FormatError, MoltrajError, UsageError
from moltraj.core.logging_utils import reset_warning_sink, set_warning_sink
from moltraj.formats.registry import available_formats, format_for, register_format
from moltraj.model import (
    Atom,
    CellShape,
    Frame,
    Property,
    PropertyKind,
    PropertyMap,
    Residue,
    Topology,
    UnitCell,
)
from moltraj.trajectory import Trajectory

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Trajectory",
    "Frame",
    "Topology",
    "Residue",
    "Atom",
    "UnitCell",
    "CellShape",
    "Property",
    "PropertyKind",
    "PropertyMap",
    "MoltrajError",
    "FormatError",
    "FileError",
    "UsageError",
    "set_warning_sink",
    "reset_warning_sink",
    "available_formats",
    "format_for",
    "register_format",
]
