from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parents[1] / ".env"
if _env_path.is_file():
    load_dotenv(_env_path, override=False)


@dataclass
class MoltrajSettings:
    """Configuration loaded from MOLTRAJ_* environment variables.

    Logging:
      MOLTRAJ_LOG_LEVEL=INFO
      MOLTRAJ_LOG_FORMAT=%(asctime)s %(levelname)s %(name)s - %(message)s

    Command line:
      MOLTRAJ_DEFAULT_FORMAT=PDB   (used when an extension is not registered)
    """

    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s - %(message)s"
    default_format: Optional[str] = None


def load_settings() -> MoltrajSettings:
    """Load settings from environment variables."""
    return MoltrajSettings(
        log_level=os.environ.get("MOLTRAJ_LOG_LEVEL", "INFO").upper(),
        log_format=os.environ.get(
            "MOLTRAJ_LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s - %(message)s"
        ),
        default_format=os.environ.get("MOLTRAJ_DEFAULT_FORMAT") or None,
    )
