"""Seeded procedural hexagonal world map generation."""

from .biomes import Biome
from .exceptions import (
    ConfigurationError,
    MapFileError,
    TileNotFoundError,
    WorldMapError,
)
from .generation import (
    GenerationConfig,
    generate,
    generate_from_config,
    load_config,
    validate_world_map,
)
from .hexgrid import (
    axial_to_offset_odd_r,
    hex_distance,
    neighbors,
    offset_to_axial_odd_r,
)
from .types import AxialCoord, GridCoord, Tile, WorldMap, WorldType

__all__ = [
    # Types
    "Biome",
    "WorldType",
    "GridCoord",
    "AxialCoord",
    "Tile",
    "WorldMap",
    # Generation
    "GenerationConfig",
    "generate",
    "generate_from_config",
    "load_config",
    "validate_world_map",
    # Hex grid
    "neighbors",
    "offset_to_axial_odd_r",
    "axial_to_offset_odd_r",
    "hex_distance",
    # Exceptions
    "WorldMapError",
    "ConfigurationError",
    "TileNotFoundError",
    "MapFileError",
]
