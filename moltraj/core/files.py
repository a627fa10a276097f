"""Line-oriented text file access used by every text format.

A TextFile is opened once in one of three modes and reads ahead by one line,
so ``eof()`` is known before the next ``getline()`` call. Files whose name
ends in ``.gz`` are transparently (de)compressed.
"""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import IO, Optional

from moltraj.core.errors import FileError, UsageError
from moltraj.core.logging_utils import get_logger

logger = get_logger(__name__)

# Reading is done on bytes so line offsets are counted, not asked for
_FILE_MODES = {"r": "rb", "w": "wt", "a": "at"}


class TextFile:
    """Blocking, stateful handle over a text file.

    Modes: ``"r"`` (file must exist), ``"w"`` (create or truncate),
    ``"a"`` (create or append).
    """

    def __init__(self, path: str | Path, mode: str = "r"):
        if mode not in _FILE_MODES:
            raise UsageError(f"Unknown file mode '{mode}', expected one of {sorted(_FILE_MODES)}")
        self._path = Path(path)
        self._mode = mode
        self._next: Optional[str] = None
        # byte offsets of the prefetched line and of the line after it
        self._position: int = 0
        self._offset: int = 0
        self._lineno = 0

        opener = gzip.open if self._path.suffix == ".gz" else open
        try:
            if mode == "r":
                self._handle: IO = opener(self._path, _FILE_MODES[mode])
            else:
                self._handle = opener(self._path, _FILE_MODES[mode], encoding="utf-8")
        except OSError as e:
            raise FileError(f"Could not open '{self._path}' in mode '{mode}': {e}") from e
        logger.debug("Opened %s (mode=%s)", self._path, mode)

        if mode == "r":
            self._prefetch()

    # --- properties -----------------------------------------------------------

    @property
    def filename(self) -> str:
        return str(self._path)

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def closed(self) -> bool:
        return self._handle.closed

    @property
    def lineno(self) -> int:
        """Number of lines consumed since the start of the file."""
        return self._lineno

    # --- reading --------------------------------------------------------------

    def _require(self, readable: bool) -> None:
        if self.closed:
            raise UsageError(f"File '{self._path}' is closed")
        if readable and self._mode != "r":
            raise UsageError(f"File '{self._path}' is not opened for reading (mode '{self._mode}')")
        if not readable and self._mode == "r":
            raise UsageError(f"File '{self._path}' is not opened for writing (mode 'r')")

    def _prefetch(self) -> None:
        try:
            raw = self._handle.readline()
        except OSError as e:
            raise FileError(f"Could not read from '{self._path}': {e}") from e
        self._position = self._offset
        self._offset += len(raw)
        if not raw:
            self._next = None
            return
        try:
            self._next = raw.decode("utf-8").rstrip("\r\n")
        except UnicodeDecodeError as e:
            raise FileError(
                f"Could not decode line {self._lineno + 1} of '{self._path}' as UTF-8: {e}"
            ) from e

    def eof(self) -> bool:
        """True when every line has been consumed."""
        self._require(readable=True)
        return self._next is None

    def getline(self) -> str:
        """Return the next line without its line terminator."""
        self._require(readable=True)
        if self._next is None:
            raise FileError(f"Unexpected end of file in '{self._path}'")
        line = self._next
        self._lineno += 1
        self._prefetch()
        return line

    def tell(self) -> tuple[int, int]:
        """Opaque position of the next unread line, usable with :meth:`seek`."""
        self._require(readable=True)
        return (self._position, self._lineno)

    def seek(self, position: tuple[int, int]) -> None:
        self._require(readable=True)
        offset, lineno = position
        try:
            self._handle.seek(offset)
        except OSError as e:
            raise FileError(f"Could not seek in '{self._path}': {e}") from e
        self._offset = offset
        self._lineno = lineno
        self._prefetch()

    def rewind(self) -> None:
        """Go back to the first line."""
        self.seek((0, 0))

    # --- writing --------------------------------------------------------------

    def write(self, text: str) -> None:
        self._require(readable=False)
        try:
            self._handle.write(text)
        except OSError as e:
            raise FileError(f"Could not write to '{self._path}': {e}") from e

    # --- lifetime -------------------------------------------------------------

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()
            logger.debug("Closed %s", self._path)

    def __enter__(self) -> "TextFile":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"mode={self._mode}"
        return f"<TextFile {self._path} {state}>"
