"""Battle configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass

from tactics.core.errors import InvalidConfigError


@dataclass(frozen=True)
class BattleConfig:
    """Immutable configuration for one battlefield."""

    # World
    seed: int | None = None                # None = draw a fresh seed per generation
    width: int = 20
    depth: int = 20
    max_height: int = 10

    # Noise
    noise_scale: float = 30.0              # Larger values = smoother terrain
    octaves: int = 4
    persistence: float = 0.5               # Amplitude multiplier per octave
    lacunarity: float = 2.0                # Frequency multiplier per octave

    # Terrain tags by normalised column height
    forest_threshold: float = 0.55
    mountain_threshold: float = 0.75

    # Spatial lookups
    cell_tolerance: float = 0.1            # Render-space coordinates are fractional

    # Search
    max_search_nodes: int | None = None    # None = unbounded A* expansion

    # Logging
    log_level: str = "INFO"

    def validate(self) -> None:
        """Raise InvalidConfigError if the battlefield cannot be generated."""
        for name in ("width", "depth", "max_height"):
            value = getattr(self, name)
            if value <= 0:
                raise InvalidConfigError(f"{name} must be positive, got {value}")
        if self.noise_scale <= 0:
            raise InvalidConfigError(f"noise_scale must be positive, got {self.noise_scale}")
        if self.octaves <= 0:
            raise InvalidConfigError(f"octaves must be positive, got {self.octaves}")
        if self.cell_tolerance <= 0:
            raise InvalidConfigError(f"cell_tolerance must be positive, got {self.cell_tolerance}")
        if self.max_search_nodes is not None and self.max_search_nodes <= 0:
            raise InvalidConfigError(
                f"max_search_nodes must be positive or None, got {self.max_search_nodes}"
            )
