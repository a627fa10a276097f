"""Format registry: resolve a Format class from a name or a file extension.

New formats are added with :func:`register_format`, without touching
Trajectory. Built-in formats are registered on first lookup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from moltraj.core.errors import FormatError, UsageError
from moltraj.core.logging_utils import get_logger
from moltraj.formats.base import Format

logger = get_logger(__name__)

_BY_EXTENSION: dict[str, type[Format]] = {}
_BY_NAME: dict[str, type[Format]] = {}
_builtins_loaded = False


def register_format(format_cls: type[Format]) -> None:
    """Register a format class under its name and declared extensions.

    Built-in formats are loaded first, so a registered class can take over
    one of their names or extensions.
    """
    _ensure_registry()
    _add(format_cls)


def _add(format_cls: type[Format]) -> None:
    if not format_cls.name:
        raise UsageError(f"{format_cls.__name__} must define a non-empty 'name'")
    _BY_NAME[format_cls.name.lower()] = format_cls
    for ext in format_cls.extensions():
        _BY_EXTENSION[ext.lower()] = format_cls
    logger.debug("Registered format %s for %s", format_cls.name, format_cls.extensions())


def _ensure_registry() -> None:
    global _builtins_loaded
    if _builtins_loaded:
        return
    _builtins_loaded = True
    from moltraj.formats.pdb_format import PDBFormat
    from moltraj.formats.xyz_format import XYZFormat
    _add(PDBFormat)
    _add(XYZFormat)


def available_formats() -> dict[str, list[str]]:
    """Format name -> extensions, for every registered format."""
    _ensure_registry()
    return {cls.name: list(cls.extensions()) for cls in _BY_NAME.values()}


def format_for(path: str | Path, name: Optional[str] = None) -> type[Format]:
    """Return the Format class for an explicit ``name``, or else for the path extension."""
    _ensure_registry()
    if name:
        try:
            return _BY_NAME[name.lower()]
        except KeyError:
            known = sorted(cls.name for cls in _BY_NAME.values())
            raise FormatError(f"Unknown format '{name}'. Supported: {known}") from None

    filename = Path(path).name.lower()
    for ext in sorted(_BY_EXTENSION, key=len, reverse=True):
        if filename.endswith(ext):
            return _BY_EXTENSION[ext]
    available = sorted(_BY_EXTENSION)
    raise FormatError(f"No format for '{path}'. Supported extensions: {available}")
