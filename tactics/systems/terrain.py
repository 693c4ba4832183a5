"""Terrain generator — builds the voxel battlefield from layered noise.

Every (x, z) column becomes a single solid stack whose height comes from
summed octaves of simplex noise.  Only the top voxel of a stack is
walkable, which gives a heightmap battlefield with no overhangs.

All generation is deterministic given a seed.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace

from tactics.config import BattleConfig
from tactics.core.enums import TerrainType
from tactics.core.grid import Grid
from tactics.core.models import Cell
from tactics.systems.noise import NoiseSource, SimplexNoise
from tactics.systems.rng import DeterministicRNG

logger = logging.getLogger(__name__)

_SEED_BITS = 63


class TerrainGenerator:
    """Produces a Grid for one battlefield configuration.

    An explicit *noise* source overrides the seeded simplex noise; it is
    used as-is for every call.
    """

    __slots__ = ("_config", "_noise")

    def __init__(self, config: BattleConfig | None = None, noise: NoiseSource | None = None) -> None:
        self._config = config or BattleConfig()
        self._noise = noise

    @property
    def config(self) -> BattleConfig:
        return self._config

    def generate(
        self,
        width: int | None = None,
        max_height: int | None = None,
        depth: int | None = None,
        noise_scale: float | None = None,
        seed: int | None = None,
    ) -> Grid:
        """Build a new grid.  Arguments left as None fall back to the config.

        Raises InvalidConfigError before doing any work if a dimension or the
        noise scale is not positive.
        """
        overrides = {
            k: v for k, v in (
                ("width", width), ("max_height", max_height),
                ("depth", depth), ("noise_scale", noise_scale), ("seed", seed),
            ) if v is not None
        }
        cfg = replace(self._config, **overrides)
        cfg.validate()

        resolved_seed = cfg.seed
        if resolved_seed is None:
            resolved_seed = random.getrandbits(_SEED_BITS)
            logger.info("No terrain seed given, drew seed=%d", resolved_seed)

        noise = self._noise or SimplexNoise(DeterministicRNG(resolved_seed))

        cells: list[Cell] = []
        x_offset = cfg.width / 2
        z_offset = cfg.depth / 2
        y_offset = cfg.max_height / 2

        for x in range(cfg.width):
            for z in range(cfg.depth):
                value = self._octave_noise(noise, cfg, x, z)
                stack = stack_height(value, cfg.max_height)
                terrain = self._terrain_for(cfg, value)
                for level in range(stack):
                    cells.append(Cell(
                        x=x - x_offset,
                        y=level - y_offset,
                        z=z - z_offset,
                        traversable=level == stack - 1,
                        terrain=terrain,
                    ))

        grid = Grid(cells, width=cfg.width, depth=cfg.depth,
                    max_height=cfg.max_height, seed=resolved_seed)
        logger.info(
            "Generated terrain %dx%d (max height %d, scale %g, seed=%d): %d cells",
            cfg.width, cfg.depth, cfg.max_height, cfg.noise_scale, resolved_seed, len(grid),
        )
        return grid

    # -- internals --

    @staticmethod
    def _octave_noise(noise: NoiseSource, cfg: BattleConfig, x: int, z: int) -> float:
        """Sum the octaves at (x, z) and remap the result to about [0, 1]."""
        amplitude = 1.0
        frequency = 1.0
        total = 0.0
        for _ in range(cfg.octaves):
            nx = (x * frequency) / cfg.noise_scale
            nz = (z * frequency) / cfg.noise_scale
            total += amplitude * noise.noise2d(nx, nz)
            amplitude *= cfg.persistence
            frequency *= cfg.lacunarity
        return (total + 1) / 2

    @staticmethod
    def _terrain_for(cfg: BattleConfig, value: float) -> TerrainType:
        if value >= cfg.mountain_threshold:
            return TerrainType.MOUNTAIN
        if value >= cfg.forest_threshold:
            return TerrainType.FOREST
        return TerrainType.GRASS


def stack_height(value: float, max_height: int) -> int:
    """Map a normalised noise value to a column height in [1, max_height]."""
    return min(max_height, max(1, math.floor(value * max_height)))


def generate_terrain(
    width: int,
    max_height: int,
    depth: int,
    noise_scale: float,
    seed: int | None = None,
    noise: NoiseSource | None = None,
) -> Grid:
    """One-shot helper around TerrainGenerator with default octave settings."""
    return TerrainGenerator(noise=noise).generate(
        width=width, max_height=max_height, depth=depth,
        noise_scale=noise_scale, seed=seed,
    )
