from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES = Path(__file__).resolve().parent / "fixtures"


class WarningCollector:
    """Warning sink that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def matching(self, text: str) -> list[str]:
        return [m for m in self.messages if text in m]


@pytest.fixture
def collected() -> WarningCollector:
    return WarningCollector()


@pytest.fixture
def water_pdb() -> Path:
    return FIXTURES / "water.pdb"


@pytest.fixture
def water_xyz() -> Path:
    return FIXTURES / "water.xyz"
