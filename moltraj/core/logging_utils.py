from __future__ import annotations

import logging
from typing import Callable, Optional

WarningSink = Callable[[str], None]

_warnings_logger = logging.getLogger("moltraj.warnings")
_sink: Optional[WarningSink] = None


def get_logger(name: str) -> logging.Logger:
    """Return a module logger with a sensible default configuration."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        from moltraj.config import load_settings

        settings = load_settings()
        logging.basicConfig(level=settings.log_level, format=settings.log_format)
    return logger


def _log_warning(message: str) -> None:
    _warnings_logger.warning(message)


def set_warning_sink(sink: Optional[WarningSink]) -> None:
    """Route non-fatal format warnings to ``sink`` for the whole process.

    Passing ``None`` is the same as :func:`reset_warning_sink`.
    """
    global _sink
    _sink = sink


def reset_warning_sink() -> None:
    """Send warnings back to the ``moltraj.warnings`` logger."""
    set_warning_sink(None)


def warn(message: str) -> None:
    """Emit a warning through the current process-wide sink."""
    (_sink or _log_warning)(message)
