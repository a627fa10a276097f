"""moltraj.formats — one Format subclass per on-disk layout.

Architecture:
    - base.py: Format contract (describe / nsteps / read / read_step / write)
    - pdb_format.py: PDBFormat (fixed-column PDB records)
    - xyz_format.py: XYZFormat (names and positions only)
    - registry.py: name / extension lookup used by Trajectory

Usage::

    from moltraj.formats import format_for

    fmt_cls = format_for("protein.pdb")
    print(fmt_cls.description())
"""

from moltraj.formats.base import Format
from moltraj.formats.pdb_format import PDBFormat
from moltraj.formats.registry import available_formats, format_for, register_format
from moltraj.formats.xyz_format import XYZFormat

__all__ = [
    "Format",
    "PDBFormat",
    "XYZFormat",
    "available_formats",
    "format_for",
    "register_format",
]
