"""PDB format codec — fixed-column text records, one step per END record.

Reading classifies every line by its record name:

    CRYST1          unit cell
    ATOM / HETATM   atom name, position and residue
    CONECT          up to four bonds around one atom
    END, ENDMDL     end of the current step
    REMARK, ...     administrative records, skipped
    anything else   warning, skipped

Writing emits one CRYST1 record, every atom as HETATM, CONECT records and a
closing END, using the same columns the reader consumes.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from moltraj.core.errors import FormatError, UsageError
from moltraj.core.logging_utils import get_logger
from moltraj.formats.base import Format
from moltraj.model.atom import Atom
from moltraj.model.cell import UnitCell
from moltraj.model.frame import Frame
from moltraj.model.residue import Residue

logger = get_logger(__name__)

MAX_CONECT_NEIGHBORS = 4
MAX_PDB_ATOMS = 99999


class Record(Enum):
    CRYST1 = "CRYST1"
    ATOM = "ATOM"
    HETATM = "HETATM"
    CONECT = "CONECT"
    END = "END"
    IGNORED = "IGNORED"
    UNKNOWN = "UNKNOWN"


IGNORED_RECORDS = frozenset({
    "REMARK", "MASTER", "AUTHOR", "CAVEAT", "COMPND", "EXPDTA", "KEYWDS",
    "OBSLTE", "SOURCE", "SPLIT", "SPRSDE", "TITLE", "JRNL", "HEADER",
    "MODEL", "TER", "ANISOU", "SEQRES", "HET", "HETNAM", "HETSYN", "FORMUL",
    "HELIX", "SHEET", "SSBOND", "LINK", "CISPEP", "SITE", "DBREF", "SEQADV",
    "MODRES", "REVDAT", "NUMMDL", "MDLTYP",
    "ORIGX1", "ORIGX2", "ORIGX3", "SCALE1", "SCALE2", "SCALE3",
    "MTRIX1", "MTRIX2", "MTRIX3",
})


def get_record(line: str) -> Record:
    """Classify a line by its leading record name."""
    # END, ENDMDL, and END records missing their trailing spaces
    if line.startswith("END"):
        return Record.END
    rec = line[:6].strip()
    if rec == "CRYST1":
        return Record.CRYST1
    if rec == "ATOM":
        return Record.ATOM
    if rec == "HETATM":
        return Record.HETATM
    if rec == "CONECT":
        return Record.CONECT
    if not rec or rec in IGNORED_RECORDS:
        return Record.IGNORED
    return Record.UNKNOWN


# ======================================================================
# Fixed-column field parsing
# ======================================================================

def _parse_float(line: str, start: int, stop: int, field: str) -> float:
    raw = line[start:stop]
    try:
        return float(raw)
    except ValueError:
        raise FormatError(
            f"Could not read {field} from columns [{start}:{stop}] ('{raw}') in record '{line}'"
        ) from None


def _parse_int(line: str, start: int, stop: int, field: str) -> int:
    raw = line[start:stop]
    try:
        return int(raw)
    except ValueError:
        raise FormatError(
            f"Could not read {field} from columns [{start}:{stop}] ('{raw}') in record '{line}'"
        ) from None


# ======================================================================
# PDBFormat
# ======================================================================

class PDBFormat(Format):
    """Protein Data Bank text files (.pdb, .ent and their gzipped forms)."""

    name = "PDB"
    carries_topology = True

    def __init__(self, file, warn=None):
        super().__init__(file, warn)
        # residue id -> residue being built for the current step
        self._residues: dict[int, Residue] = {}

    @staticmethod
    def description() -> str:
        return "PDB file format."

    @staticmethod
    def extensions() -> list[str]:
        return [".pdb", ".ent", ".pdb.gz", ".ent.gz"]

    # --- reading --------------------------------------------------------------

    def _forward(self, limit: Optional[int]) -> int:
        skipped = 0
        while (limit is None or skipped < limit) and not self._file.eof():
            if self._file.getline().startswith("END"):
                skipped += 1
        return skipped

    def _read(self, frame: Frame) -> None:
        self._residues = {}
        ended = False
        while not self._file.eof():
            line = self._file.getline()
            record = get_record(line)
            if record is Record.CRYST1:
                self._read_cryst1(frame, line)
            elif record in (Record.ATOM, Record.HETATM):
                self._read_atom(frame, line)
            elif record is Record.CONECT:
                self._read_conect(frame, line)
            elif record is Record.END:
                ended = True
                break
            elif record is Record.UNKNOWN:
                self.warn(f"Unknown PDB record: '{line}'")

        if not ended:
            self.warn(f"Missing END record in PDB file '{self._file.filename}'")

        for residue in self._residues.values():
            frame.topology.add_residue(residue)
        self._residues = {}

    def _read_cryst1(self, frame: Frame, line: str) -> None:
        if len(line) < 54:
            raise FormatError(f"CRYST1 record is too small: '{line}'")
        a = _parse_float(line, 6, 15, "cell length a")
        b = _parse_float(line, 15, 24, "cell length b")
        c = _parse_float(line, 24, 33, "cell length c")
        alpha = _parse_float(line, 33, 40, "cell angle alpha")
        beta = _parse_float(line, 40, 47, "cell angle beta")
        gamma = _parse_float(line, 47, 54, "cell angle gamma")
        # all-zero lengths is how many programs say "no box", angles included
        if a == 0 and b == 0 and c == 0:
            frame.set_cell(UnitCell())
        else:
            try:
                frame.set_cell(UnitCell(a, b, c, alpha, beta, gamma))
            except UsageError as e:
                self.warn(f"Invalid unit cell in CRYST1 record, ignored: {e} ('{line}')")

        space_group = line[55:65].strip()
        if space_group and space_group not in ("P 1", "P1"):
            self.warn(
                f"Space group is not P1 (got '{space_group}') in '{self._file.filename}', ignored."
            )

    def _read_atom(self, frame: Frame, line: str) -> None:
        if len(line) < 54:
            raise FormatError(f"{line[:6].strip()} record is too small: '{line}'")

        element = line[76:78].strip()
        name = line[12:16].strip()
        x = _parse_float(line, 30, 38, "x position")
        y = _parse_float(line, 38, 46, "y position")
        z = _parse_float(line, 46, 54, "z position")
        frame.add_atom(Atom(name, element), (x, y, z))

        atom_id = frame.natoms - 1
        try:
            resid = int(line[22:26])
        except ValueError:
            logger.debug("No residue information in record '%s'", line)
            return

        residue = self._residues.get(resid)
        if residue is None:
            residue = Residue(line[17:20].strip(), resid)
            self._residues[resid] = residue
        residue.add_atom(atom_id)

    def _read_conect(self, frame: Frame, line: str) -> None:
        length = len(line.rstrip())

        # PDB serials are 1-based
        def read_index(start: int) -> int:
            return _parse_int(line, start, start + 5, "atom serial") - 1

        i = read_index(6)
        for start in (11, 16, 21, 26):
            if length <= start:
                break
            j = read_index(start)
            if not (0 <= i < frame.natoms and 0 <= j < frame.natoms) or i == j:
                self.warn(f"Bad atomic numbers in CONECT, ignored. ('{line}')")
                continue
            frame.topology.add_bond(i, j)

    # --- writing --------------------------------------------------------------

    def write(self, frame: Frame) -> None:
        if frame.natoms > MAX_PDB_ATOMS:
            raise FormatError(
                f"PDB format can not store more than {MAX_PDB_ATOMS} atoms, got {frame.natoms}"
            )

        cell = frame.cell
        topology = frame.topology
        self._check_widths(frame)
        # The space group and Z value are not tracked, always write P 1
        lines = [
            f"CRYST1{cell.a:9.3f}{cell.b:9.3f}{cell.c:9.3f}"
            f"{cell.alpha:7.2f}{cell.beta:7.2f}{cell.gamma:7.2f} P 1           1"
        ]

        for i, atom in enumerate(topology):
            serial = i + 1
            x, y, z = frame.positions[i]
            residue = topology.residue_for_atom(i)
            if residue is not None:
                resname = residue.name
                resid = residue.id if residue.id is not None else serial
            else:
                resname = "RES"
                resid = serial
            if not -999 <= resid <= 9999:
                self.warn(f"Residue id {resid} does not fit in a PDB record, written as {resid % 10000}")
                resid %= 10000
            # Everything is HETATM: there is no way to know if this is a biomolecule.
            # Chain is always 'X'; altLoc and iCode are left empty.
            lines.append(
                f"HETATM{serial:5d} {atom.name[:4]:>4s} {resname[:3]:3s} X{resid:4d}    "
                f"{x:8.3f}{y:8.3f}{z:8.3f}{0.0:6.2f}{0.0:6.2f}"
                f"          {atom.element[:2]:>2s}"
            )

        for i, neighbors in enumerate(self._conect_table(frame)):
            if neighbors:
                lines.append(f"CONECT{i + 1:5d}" + "".join(f"{j + 1:5d}" for j in neighbors))

        lines.append("END")
        self._file.write("\n".join(lines) + "\n")

    @staticmethod
    def _check_widths(frame: Frame) -> None:
        """Refuse values that would overflow their fixed-width column."""
        for name, length in zip("abc", frame.cell.lengths):
            if len(f"{length:9.3f}") > 9:
                raise FormatError(
                    f"Cell length {name} = {length} does not fit in a PDB CRYST1 record"
                )
        if frame.natoms == 0:
            return
        # the widest coordinate is the smallest or the largest one
        positions = frame.positions
        for value in (positions.min(), positions.max()):
            if len(f"{value:8.3f}") > 8:
                raise FormatError(
                    f"Position {value} does not fit in a PDB atom record "
                    f"(range -999.999 to 9999.999)"
                )

    def _conect_table(self, frame: Frame) -> list[list[int]]:
        """Neighbors per atom, at most four, in bond insertion order.

        A bond dropped for one of its atoms is dropped for the other one too,
        so what is written reads back as exactly the kept bonds.
        """
        connect: list[list[int]] = [[] for _ in range(frame.natoms)]
        for i, j in frame.topology.bonds:
            connect[i].append(j)
            connect[j].append(i)

        dropped: set[tuple[int, int]] = set()
        for i, neighbors in enumerate(connect):
            kept = [j for j in neighbors if (min(i, j), max(i, j)) not in dropped]
            if len(kept) > MAX_CONECT_NEIGHBORS:
                self.warn(
                    f"PDB 'CONECT' record can not handle more than {MAX_CONECT_NEIGHBORS} bonds, "
                    f"got {len(kept)} around atom {i}."
                )
                for j in kept[MAX_CONECT_NEIGHBORS:]:
                    dropped.add((min(i, j), max(i, j)))

        return [
            [j for j in neighbors if (min(i, j), max(i, j)) not in dropped]
            for i, neighbors in enumerate(connect)
        ]
