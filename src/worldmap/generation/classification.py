"""Biome classification: water, mountains, desert, plains."""

import numpy as np
from numpy.typing import NDArray

from .. import biomes
from .config import ClassificationConfig


def classify_biomes(
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    ridge: NDArray[np.float64],
    config: ClassificationConfig,
) -> NDArray[np.uint8]:
    """Classify each cell into an initial biome.

    Rules are applied in priority order:
    1. elevation < water_threshold -> WATER
    2. elevation > mountain_threshold and ridge > ridge_threshold -> MOUNTAINS
    3. moisture < desert_moisture_threshold -> DESERT
    4. otherwise PLAINS

    High elevation alone never makes a mountain; the ridge noise must
    agree.

    Args:
        elevation: Shaped elevation field [0, 1].
        moisture: Moisture field [0, 1].
        ridge: Ridge noise field [0, 1].
        config: Classification thresholds.

    Returns:
        2D array of biome codes as uint8.
    """
    biome_map = np.full(elevation.shape, biomes.PLAINS, dtype=np.uint8)

    water = elevation < config.water_threshold
    mountains = (
        ~water
        & (elevation > config.mountain_threshold)
        & (ridge > config.ridge_threshold)
    )
    desert = ~water & ~mountains & (moisture < config.desert_moisture_threshold)

    biome_map[desert] = biomes.DESERT
    biome_map[mountains] = biomes.MOUNTAINS
    biome_map[water] = biomes.WATER

    return biome_map
