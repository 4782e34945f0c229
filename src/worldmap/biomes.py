"""Biome types and their compact grid encoding."""

from enum import Enum


class Biome(str, Enum):
    """Terrain classification of a single hex cell."""

    WATER = "water"
    PLAINS = "plains"
    FOREST = "forest"
    DESERT = "desert"
    MOUNTAINS = "mountains"

    @property
    def is_land(self) -> bool:
        """Whether climate adjustment and smoothing may touch this biome."""
        return self in _LAND_TYPES

    @property
    def habitable(self) -> bool:
        """Whether a settlement can be founded on this biome."""
        return self not in _UNINHABITABLE_TYPES


# Define sets for O(1) lookup
_LAND_TYPES = frozenset({
    Biome.PLAINS,
    Biome.FOREST,
    Biome.DESERT,
})

_UNINHABITABLE_TYPES = frozenset({
    Biome.WATER,
    Biome.MOUNTAINS,
})


# Biome grids are stored as uint8 arrays using these codes
WATER = 0
PLAINS = 1
FOREST = 2
DESERT = 3
MOUNTAINS = 4

LAND_CODES = (PLAINS, FOREST, DESERT)

_BIOME_CODES: dict[Biome, int] = {
    Biome.WATER: WATER,
    Biome.PLAINS: PLAINS,
    Biome.FOREST: FOREST,
    Biome.DESERT: DESERT,
    Biome.MOUNTAINS: MOUNTAINS,
}

_CODE_BIOMES: dict[int, Biome] = {code: biome for biome, code in _BIOME_CODES.items()}


def biome_value(biome: Biome) -> int:
    """Convert Biome to its uint8 grid code."""
    return _BIOME_CODES[biome]


def biome_from_value(value: int) -> Biome:
    """Convert a uint8 grid code back to Biome.

    Raises:
        ValueError: If the code does not name a biome.
    """
    try:
        return _CODE_BIOMES[int(value)]
    except KeyError:
        raise ValueError(f"Unknown biome code: {value}") from None


def is_land_value(value: int) -> bool:
    """Whether a grid code is one of the land biomes."""
    return value in LAND_CODES
