"""2D simplex noise seeded from the deterministic RNG.

Coherent gradient noise in roughly [-1, 1].  The permutation table is a
Fisher-Yates shuffle driven by DeterministicRNG in the MAP_GEN domain, so a
seed fully determines the noise field.
"""

from __future__ import annotations

import math
from typing import Protocol

from tactics.core.enums import Domain
from tactics.systems.rng import DeterministicRNG

# Skew / unskew factors for two dimensions
_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

# 12 gradient directions (edges of a cube projected on the plane)
_GRAD2: tuple[tuple[float, float], ...] = (
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (1, 0), (-1, 0),
    (0, 1), (0, -1), (0, 1), (0, -1),
)


class NoiseSource(Protocol):
    """Anything that can sample a 2D coherent noise field."""

    def noise2d(self, x: float, z: float) -> float: ...


class SimplexNoise:
    """Seeded 2D simplex noise."""

    __slots__ = ("_perm", "_perm_mod12")

    def __init__(self, rng: DeterministicRNG) -> None:
        table = rng.shuffled(Domain.MAP_GEN, 0, list(range(256)))
        self._perm: list[int] = table + table
        self._perm_mod12: list[int] = [p % 12 for p in self._perm]

    def noise2d(self, x: float, z: float) -> float:
        perm = self._perm
        perm_mod12 = self._perm_mod12

        # Which simplex cell are we in?
        s = (x + z) * _F2
        i = math.floor(x + s)
        j = math.floor(z + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        z0 = z - (j - t)

        # Upper or lower triangle of the cell
        if x0 > z0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + _G2
        z1 = z0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        z2 = z0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        gi0 = perm_mod12[ii + perm[jj]]
        gi1 = perm_mod12[ii + i1 + perm[jj + j1]]
        gi2 = perm_mod12[ii + 1 + perm[jj + 1]]

        n0 = _corner(gi0, x0, z0)
        n1 = _corner(gi1, x1, z1)
        n2 = _corner(gi2, x2, z2)

        # Scale the sum to land in [-1, 1]
        return 70.0 * (n0 + n1 + n2)


def _corner(gi: int, x: float, z: float) -> float:
    t = 0.5 - x * x - z * z
    if t < 0:
        return 0.0
    gx, gz = _GRAD2[gi]
    t *= t
    return t * t * (gx * x + gz * z)
