"""Turn-based voxel tactics battle core."""

__version__ = "0.1.0"
