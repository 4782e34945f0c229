"""Shared test fixtures for world map tests."""

import numpy as np
import pytest

from worldmap import biomes
from worldmap.generation import GenerationConfig, generate
from worldmap.types import WorldMap


@pytest.fixture
def small_config() -> GenerationConfig:
    """16x12 map with default continents settings."""
    return GenerationConfig(width=16, height=12)


@pytest.fixture
def small_map(small_config: GenerationConfig) -> WorldMap:
    """Map generated from ``small_config`` with seed 42."""
    return generate(42, small_config)


@pytest.fixture
def corner_water_map() -> np.ndarray:
    """3x3 biome grid with a single water cell at (0, 0).

        W P P
         P P P
        P P P
    """
    biome_map = np.full((3, 3), biomes.PLAINS, dtype=np.uint8)
    biome_map[0, 0] = biomes.WATER
    return biome_map
