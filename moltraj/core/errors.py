"""Exception hierarchy shared by the whole package.

    MoltrajError
    ├── FormatError   malformed content for the active format
    ├── FileError     underlying I/O failure
    └── UsageError    caller contract violation
"""

from __future__ import annotations


class MoltrajError(Exception):
    """Base class for every error raised by moltraj."""


class FormatError(MoltrajError):
    """File content does not follow the format's layout."""


class FileError(MoltrajError):
    """A file could not be opened, read or written."""


class UsageError(MoltrajError):
    """The library was called in a way its contract forbids."""
