from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

from moltraj.core.errors import UsageError


class CellShape(Enum):
    INFINITE = "infinite"
    ORTHORHOMBIC = "orthorhombic"
    TRICLINIC = "triclinic"


@dataclass(frozen=True)
class UnitCell:
    """Periodic box from three lengths (Angstrom) and three angles (degrees).

    The default cell has zero lengths and stands for "no periodic box"
    (``CellShape.INFINITE``).
    """

    a: float = 0.0
    b: float = 0.0
    c: float = 0.0
    alpha: float = 90.0
    beta: float = 90.0
    gamma: float = 90.0

    def __post_init__(self) -> None:
        for name in ("a", "b", "c"):
            value = float(getattr(self, name))
            if value < 0:
                raise UsageError(f"UnitCell.{name} must be non-negative, got {value}")
            object.__setattr__(self, name, value)
        for name in ("alpha", "beta", "gamma"):
            value = float(getattr(self, name))
            if not 0 < value < 180:
                raise UsageError(f"UnitCell.{name} must be in (0, 180) degrees, got {value}")
            object.__setattr__(self, name, value)

    @property
    def lengths(self) -> tuple[float, float, float]:
        return (self.a, self.b, self.c)

    @property
    def angles(self) -> tuple[float, float, float]:
        return (self.alpha, self.beta, self.gamma)

    @property
    def shape(self) -> CellShape:
        if self.a == 0 and self.b == 0 and self.c == 0:
            return CellShape.INFINITE
        if self.alpha == 90 and self.beta == 90 and self.gamma == 90:
            return CellShape.ORTHORHOMBIC
        return CellShape.TRICLINIC

    @property
    def is_infinite(self) -> bool:
        return self.shape is CellShape.INFINITE

    @property
    def matrix(self) -> np.ndarray:
        """Cell vectors as rows, ``a`` along x and ``b`` in the xy plane."""
        alpha, beta, gamma = (math.radians(x) for x in self.angles)
        cos_a, cos_b, cos_g = math.cos(alpha), math.cos(beta), math.cos(gamma)
        sin_g = math.sin(gamma)

        cx = self.c * cos_b
        cy = self.c * (cos_a - cos_b * cos_g) / sin_g
        cz = math.sqrt(max(self.c**2 - cx**2 - cy**2, 0.0))
        return np.array([
            [self.a, 0.0, 0.0],
            [self.b * cos_g, self.b * sin_g, 0.0],
            [cx, cy, cz],
        ])

    @property
    def volume(self) -> float:
        if self.is_infinite:
            return 0.0
        return float(abs(np.linalg.det(self.matrix)))
