"""Abstract Format contract shared by every trajectory format.

A Format is bound to one open TextFile and knows how to:

    describe   description() / extensions()
    count      nsteps()
    read       read(frame) / read_step(step, frame)
    write      write(frame)

Formats have no seek table: ``read_step`` rewinds and skips step terminators,
so its cost grows with ``step``. Callers that need the step count should
cache ``nsteps()`` (Trajectory does).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from moltraj.core import logging_utils
from moltraj.core.errors import FormatError, UsageError
from moltraj.core.files import TextFile
from moltraj.core.logging_utils import WarningSink
from moltraj.model.frame import Frame


class Format(ABC):
    """Codec for one on-disk trajectory layout.

    Class attributes:
        name: explicit name used for registry lookups (``format="PDB"``).
        carries_topology: False for formats that only store names and
            positions; Trajectory then substitutes its override topology.
    """

    name: str = ""
    carries_topology: bool = True

    def __init__(self, file: TextFile, warn: Optional[WarningSink] = None):
        self._file = file
        self._warn_sink = warn

    @property
    def file(self) -> TextFile:
        return self._file

    def warn(self, message: str) -> None:
        """Report a non-fatal condition; parsing or writing carries on."""
        if self._warn_sink is not None:
            self._warn_sink(message)
        else:
            logging_utils.warn(message)

    # --- description ----------------------------------------------------------

    @staticmethod
    @abstractmethod
    def description() -> str:
        """Human-readable name of the format."""
        ...

    @staticmethod
    @abstractmethod
    def extensions() -> list[str]:
        """Lowercase file extensions this format handles (e.g. ['.pdb'])."""
        ...

    # --- reading --------------------------------------------------------------

    @abstractmethod
    def _forward(self, limit: Optional[int]) -> int:
        """Skip up to ``limit`` steps (all if None) and return how many were skipped."""
        ...

    @abstractmethod
    def _read(self, frame: Frame) -> None:
        """Parse the step at the file cursor into a cleared ``frame``."""
        ...

    def nsteps(self) -> int:
        position = self._file.tell()
        self._file.rewind()
        try:
            return self._forward(None)
        finally:
            self._file.seek(position)

    def read(self, frame: Frame) -> Frame:
        if self._file.eof():
            raise FormatError(f"No more steps to read in '{self._file.filename}'")
        frame.clear()
        self._read(frame)
        return frame

    def read_step(self, step: int, frame: Frame) -> Frame:
        if step < 0:
            raise UsageError(f"Step must be non-negative, got {step}")
        self._file.rewind()
        skipped = self._forward(step)
        if skipped < step:
            raise FormatError(
                f"Can not read step {step} in '{self._file.filename}': "
                f"the file only contains {skipped} steps"
            )
        return self.read(frame)

    # --- writing --------------------------------------------------------------

    @abstractmethod
    def write(self, frame: Frame) -> None:
        """Append one step to the file."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._file.filename}>"
