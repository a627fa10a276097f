"""XYZ format codec.

Each step is:

    N
    comment line
    name x y z      (N times)

There is no connectivity, residue or cell information, so Trajectory can
provide them through its topology and cell overrides.
"""

from __future__ import annotations

from typing import Optional

from moltraj.core.errors import FormatError
from moltraj.formats.base import Format
from moltraj.model.atom import Atom
from moltraj.model.frame import Frame


class XYZFormat(Format):
    """Plain XYZ files: atom names and positions only."""

    name = "XYZ"
    carries_topology = False

    @staticmethod
    def description() -> str:
        return "XYZ file format."

    @staticmethod
    def extensions() -> list[str]:
        return [".xyz", ".xyz.gz"]

    def _next_count_line(self) -> Optional[str]:
        """Skip blank lines; None at end of file."""
        while not self._file.eof():
            line = self._file.getline()
            if line.strip():
                return line
        return None

    def _parse_natoms(self, line: str) -> int:
        try:
            natoms = int(line.strip())
        except ValueError:
            raise FormatError(
                f"Expected an atom count in '{self._file.filename}' "
                f"at line {self._file.lineno}, got '{line}'"
            ) from None
        if natoms < 0:
            raise FormatError(f"Negative atom count {natoms} in '{self._file.filename}'")
        return natoms

    def _forward(self, limit: Optional[int]) -> int:
        skipped = 0
        while limit is None or skipped < limit:
            line = self._next_count_line()
            if line is None:
                break
            natoms = self._parse_natoms(line)
            for _ in range(natoms + 1):
                if self._file.eof():
                    # incomplete last step
                    return skipped
                self._file.getline()
            skipped += 1
        return skipped

    def _read(self, frame: Frame) -> None:
        line = self._next_count_line()
        if line is None:
            raise FormatError(f"No more steps to read in '{self._file.filename}'")
        natoms = self._parse_natoms(line)

        if self._file.eof():
            raise FormatError(f"Missing comment line in '{self._file.filename}'")
        frame.set("comment", self._file.getline())

        for i in range(natoms):
            if self._file.eof():
                raise FormatError(
                    f"Expected {natoms} atoms in XYZ step, but '{self._file.filename}' ended after {i}"
                )
            line = self._file.getline()
            fields = line.split()
            if len(fields) < 4:
                raise FormatError(f"Expected 'name x y z' in XYZ atom line, got '{line}'")
            try:
                position = (float(fields[1]), float(fields[2]), float(fields[3]))
            except ValueError:
                raise FormatError(f"Could not read positions in XYZ atom line '{line}'") from None
            frame.add_atom(Atom(fields[0], fields[0]), position)

    def write(self, frame: Frame) -> None:
        comment = (frame.get_string("comment") or "").replace("\n", " ")
        lines = [str(frame.natoms), comment]
        for atom, (x, y, z) in zip(frame.topology, frame.positions):
            name = (atom.name or atom.element or "X").replace(" ", "_")
            lines.append(f"{name} {x:.5f} {y:.5f} {z:.5f}")
        self._file.write("\n".join(lines) + "\n")
