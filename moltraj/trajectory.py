"""Trajectory: one Format bound to one File, with a step cursor and overrides.

Usage::

    from moltraj import Trajectory, UnitCell

    with Trajectory("water.xyz") as traj:
        traj.set_cell(UnitCell(20, 20, 20))
        traj.set_topology("water.pdb")
        for frame in traj:
            print(frame.natoms, frame.cell.volume)

    with Trajectory("out.pdb", "w") as out:
        out << frame
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from moltraj.core.errors import FormatError, MoltrajError, UsageError
from moltraj.core.files import TextFile
from moltraj.core.logging_utils import WarningSink, get_logger
from moltraj.formats.base import Format
from moltraj.formats.registry import format_for
from moltraj.model.cell import UnitCell
from moltraj.model.frame import Frame
from moltraj.model.topology import Topology

logger = get_logger(__name__)

MODES = ("r", "w", "a")


class Trajectory:
    """Read or write a sequence of Frames in one file.

    Args:
        path: file to open. In ``"r"`` mode it must exist; ``"w"`` creates or
            truncates it; ``"a"`` creates it or appends to it.
        mode: ``"r"``, ``"w"`` or ``"a"``.
        format: explicit format name (``"PDB"``, ``"XYZ"``); guessed from the
            extension when omitted.
        warnings: callable receiving non-fatal format warnings. Defaults to
            the process-wide sink (see ``moltraj.set_warning_sink``).

    Raises:
        FormatError: no format matches ``format`` or the extension.
        FileError: the file can not be opened.
        UsageError: unknown ``mode``.
    """

    def __init__(
        self,
        path: str | Path,
        mode: str = "r",
        format: Optional[str] = None,
        *,
        warnings: Optional[WarningSink] = None,
    ):
        if mode not in MODES:
            raise UsageError(f"Unknown trajectory mode '{mode}', expected one of {list(MODES)}")
        self._path = Path(path)
        self._mode = mode
        self._warnings = warnings
        self._closed = True
        self._step = 0
        self._nsteps: Optional[int] = None
        self._topology: Optional[Topology] = None
        self._cell: Optional[UnitCell] = None

        # Resolve the format before touching the file, so a bad name opens nothing
        format_cls = format_for(self._path, format)

        existing = 0
        if mode == "a" and self._path.exists():
            with TextFile(self._path, "r") as previous:
                existing = format_cls(previous, warnings).nsteps()

        self._file = TextFile(self._path, mode)
        try:
            self._format: Format = format_cls(self._file, warnings)
        except Exception:
            self._file.close()
            raise
        self._closed = False

        if mode != "r":
            self._nsteps = existing
        logger.debug("Opened %s as %s (mode=%s)", self._path, format_cls.name, mode)

    # --- state ----------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def format(self) -> Format:
        self._check_open()
        return self._format

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def step(self) -> int:
        """Index of the next step ``read()`` returns (or steps written so far)."""
        return self._step

    def _check_open(self) -> None:
        if self._closed:
            raise UsageError(f"Trajectory '{self._path}' is closed")

    def _check_readable(self) -> None:
        self._check_open()
        if self._mode != "r":
            raise UsageError(f"Can not read from '{self._path}': opened in mode '{self._mode}'")

    def _check_writable(self) -> None:
        self._check_open()
        if self._mode == "r":
            raise UsageError(f"Can not write to '{self._path}': opened in mode 'r'")

    @property
    def nsteps(self) -> int:
        """Steps in the file (read mode, computed once), or steps in the file after writing."""
        self._check_open()
        if self._nsteps is None:
            self._nsteps = self._format.nsteps()
        return self._nsteps

    def __len__(self) -> int:
        return self.nsteps

    def done(self) -> bool:
        """True once every step has been read. Always False when writing."""
        self._check_open()
        if self._mode != "r":
            return False
        return self._step >= self.nsteps

    # --- overrides ------------------------------------------------------------

    def set_topology(self, topology: Topology | str | Path, format: Optional[str] = None) -> None:
        """Use ``topology`` for steps whose format or content carries none.

        Given a path, the topology of the first step of that file is used.
        """
        self._check_open()
        if isinstance(topology, Topology):
            self._topology = topology.copy()
            return
        with Trajectory(topology, "r", format, warnings=self._warnings) as other:
            self._topology = other.read().topology
        logger.debug("Using topology from %s for %s", topology, self._path)

    def set_cell(self, cell: UnitCell) -> None:
        """Use ``cell`` for steps that do not define a unit cell."""
        self._check_open()
        if not isinstance(cell, UnitCell):
            raise UsageError(f"Expected a UnitCell, got {type(cell).__name__}")
        self._cell = cell

    def _apply_read_overrides(self, frame: Frame, step: int) -> None:
        topology = self._topology
        if topology is not None and (not self._format.carries_topology or frame.topology.is_blank()):
            if topology.natoms != frame.natoms:
                raise FormatError(
                    f"Topology override has {topology.natoms} atoms, but step {step} "
                    f"of '{self._path}' has {frame.natoms}"
                )
            frame.set_topology(topology.copy())
        if self._cell is not None and frame.cell.is_infinite:
            frame.set_cell(self._cell)

    def _apply_write_overrides(self, frame: Frame) -> Frame:
        topology = self._topology if frame.topology.is_blank() else None
        cell = self._cell if frame.cell.is_infinite else None
        if topology is None and cell is None:
            return frame

        # never modify the caller's frame
        frame = frame.copy()
        if topology is not None:
            if topology.natoms != frame.natoms:
                raise UsageError(
                    f"Topology override has {topology.natoms} atoms, "
                    f"but the frame to write has {frame.natoms}"
                )
            frame.set_topology(topology.copy())
        if cell is not None:
            frame.set_cell(cell)
        return frame

    # --- reading --------------------------------------------------------------

    def _read_into(self, frame: Frame) -> Frame:
        position = self._file.tell()
        try:
            self._format.read(frame)
            self._apply_read_overrides(frame, self._step)
        except MoltrajError:
            # the step is not consumed: a retry reads it again
            self._file.seek(position)
            raise
        self._step += 1
        return frame

    def read(self) -> Frame:
        """Read the next step."""
        self._check_readable()
        return self._read_into(Frame())

    def read_step(self, step: int) -> Frame:
        """Read a given step; the next ``read()`` returns ``step + 1``.

        Costs a scan from the start of the file up to ``step``. On failure
        the cursor and the file position are left as they were.
        """
        self._check_readable()
        position = self._file.tell()
        try:
            frame = self._format.read_step(step, Frame())
            self._apply_read_overrides(frame, step)
        except MoltrajError:
            self._file.seek(position)
            raise
        self._step = step + 1
        return frame

    def __rshift__(self, frame: Frame) -> "Trajectory":
        """``traj >> frame`` reads the next step into an existing frame."""
        self._check_readable()
        self._read_into(frame)
        return self

    def __iter__(self) -> Iterator[Frame]:
        """Yield the remaining steps, from the cursor to the end."""
        self._check_readable()
        while not self.done():
            yield self.read()

    # --- writing --------------------------------------------------------------

    def write(self, frame: Frame) -> None:
        """Append ``frame`` as a new step."""
        self._check_writable()
        self._format.write(self._apply_write_overrides(frame))
        self._step += 1
        self._nsteps = (self._nsteps or 0) + 1

    def __lshift__(self, frame: Frame) -> "Trajectory":
        """``traj << frame`` writes a step."""
        self.write(frame)
        return self

    # --- lifetime -------------------------------------------------------------

    def close(self) -> None:
        """Release the file. Later operations raise UsageError; closing twice is a no-op."""
        if self._closed:
            return
        self._file.close()
        self._closed = True

    def __enter__(self) -> "Trajectory":
        self._check_open()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"mode={self._mode}"
        return f"<Trajectory {self._path} {state}>"
