"""Core output types: coordinates, tiles and the assembled world map."""

from collections import Counter
from collections.abc import Mapping
from enum import Enum
from typing import Any

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, PrivateAttr, model_validator

from .biomes import Biome, biome_value
from .exceptions import TileNotFoundError
from .hexgrid import offset_distance


class WorldType(str, Enum):
    """World-type archetype selecting how elevation is shaped."""

    PANGEA = "pangea"
    CONTINENTS = "continents"
    ISLANDS = "islands"


class GridCoord(BaseModel, frozen=True):
    """Immutable odd-r offset coordinate: column ``x``, row ``y``."""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class AxialCoord(BaseModel, frozen=True):
    """Immutable axial hex coordinate."""

    q: int
    r: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.q, self.r)

    def __hash__(self) -> int:
        return hash((self.q, self.r))

    def __str__(self) -> str:
        return f"[{self.q}, {self.r}]"


class Tile(BaseModel, frozen=True):
    """Generated properties of a single hex cell."""

    grid: GridCoord
    axial: AxialCoord
    biome: Biome
    elevation: float
    moisture: float
    is_village: bool = False


class WorldMap(BaseModel, frozen=True):
    """Complete generated map handed to collaborators.

    Tiles are stored row-major, so the tile at ``(x, y)`` lives at index
    ``y * width + x``.
    """

    width: int
    height: int
    effective_seed: int
    world_type: WorldType
    tiles: tuple[Tile, ...]

    _tile_index: dict[tuple[int, int], Tile] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_tile_layout(self) -> "WorldMap":
        expected = self.width * self.height
        if len(self.tiles) != expected:
            raise ValueError(
                f"Expected {expected} tiles for {self.width}x{self.height}, "
                f"got {len(self.tiles)}"
            )
        return self

    def model_post_init(self, __context: Any) -> None:
        self._tile_index = {tile.grid.as_tuple(): tile for tile in self.tiles}

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Tile:
        """Get tile at grid coordinate ``(x, y)``.

        Raises:
            TileNotFoundError: If the coordinate is outside the map.
        """
        if not self.in_bounds(x, y):
            raise TileNotFoundError(f"No tile at ({x}, {y})")
        return self.tiles[y * self.width + x]

    def get_tile(self, coord: GridCoord) -> Tile:
        return self.tile_at(coord.x, coord.y)

    @property
    def tiles_by_coord(self) -> Mapping[tuple[int, int], Tile]:
        """Mapping from ``(x, y)`` grid coordinate to tile, built once per map."""
        return self._tile_index

    @property
    def village_tile(self) -> Tile:
        """The guaranteed start tile."""
        return self.tile_at(self.width // 2, self.height // 2)

    def distance_from_village(self, x: int, y: int) -> int:
        """Hex-hop distance from the village to ``(x, y)``."""
        village = self.village_tile.grid
        return offset_distance((village.x, village.y), (x, y))

    def biome_counts(self) -> dict[Biome, int]:
        """Number of tiles per biome (biomes that never occur count 0)."""
        counts = Counter(tile.biome for tile in self.tiles)
        return {biome: counts.get(biome, 0) for biome in Biome}

    def biome_array(self) -> NDArray[np.uint8]:
        """Biome grid codes as a ``(height, width)`` uint8 array."""
        values = [biome_value(tile.biome) for tile in self.tiles]
        return np.array(values, dtype=np.uint8).reshape(self.height, self.width)

    def elevation_array(self) -> NDArray[np.float64]:
        values = [tile.elevation for tile in self.tiles]
        return np.array(values, dtype=np.float64).reshape(self.height, self.width)

    def moisture_array(self) -> NDArray[np.float64]:
        values = [tile.moisture for tile in self.tiles]
        return np.array(values, dtype=np.float64).reshape(self.height, self.width)
