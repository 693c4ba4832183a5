"""Engine systems: RNG, coherent noise, terrain generation."""

from tactics.systems.noise import NoiseSource, SimplexNoise
from tactics.systems.rng import DeterministicRNG
from tactics.systems.terrain import TerrainGenerator, generate_terrain

__all__ = ["DeterministicRNG", "NoiseSource", "SimplexNoise", "TerrainGenerator", "generate_terrain"]
