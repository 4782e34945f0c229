"""Climate consistency rules: coastal dryness and forest promotion."""

import numpy as np
from numpy.typing import NDArray

from .. import biomes
from ..hexgrid import count_neighbors
from .config import ClassificationConfig, ClimateConfig


def land_mask(biome_map: NDArray[np.uint8]) -> NDArray[np.bool_]:
    """Boolean mask of land biome cells (plains, forest, desert)."""
    return np.isin(biome_map, biomes.LAND_CODES)


def apply_desert_consistency(
    biome_map: NDArray[np.uint8],
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    water_distance: NDArray[np.int32],
    thresholds: ClassificationConfig,
    climate: ClimateConfig,
) -> None:
    """Re-derive desert vs plains for every land cell, in place.

    A land cell is desert only when it is dry, low enough, and (with the
    coastal rule on) further than ``coast_water_distance_max`` hops from
    water. Every other land cell becomes plains, so this both creates and
    removes deserts. Water and mountains are untouched.
    """
    land = land_mask(biome_map)

    dry = moisture < thresholds.desert_moisture_threshold
    low = elevation < climate.desert_max_elevation
    if climate.use_coast_dryness_rule:
        inland = water_distance > climate.coast_water_distance_max
    else:
        inland = np.ones_like(land)

    desert = land & dry & low & inland
    biome_map[land] = biomes.PLAINS
    biome_map[desert] = biomes.DESERT


def apply_forest_promotion(
    biome_map: NDArray[np.uint8],
    moisture: NDArray[np.float64],
    forest_patch: NDArray[np.float64],
    thresholds: ClassificationConfig,
    climate: ClimateConfig,
) -> None:
    """Promote wet plains to forest, in place.

    Must run after ``apply_desert_consistency``: the desert adjacency
    penalty counts deserts in the post-consistency map. Deserts never
    change here, so neighbor counts are stable for the whole pass.
    """
    candidates = (biome_map == biomes.PLAINS) & (
        moisture > thresholds.forest_moisture_threshold
    )

    if climate.use_forest_patch_breakup:
        candidates &= forest_patch >= thresholds.forest_patch_threshold

    if climate.use_desert_adjacency_penalty:
        desert_neighbors = count_neighbors(biome_map == biomes.DESERT)
        candidates &= desert_neighbors <= climate.max_desert_neighbors_for_forest

    biome_map[candidates] = biomes.FOREST


def apply_climate_adjustments(
    biome_map: NDArray[np.uint8],
    elevation: NDArray[np.float64],
    moisture: NDArray[np.float64],
    forest_patch: NDArray[np.float64],
    water_distance: NDArray[np.int32],
    thresholds: ClassificationConfig,
    climate: ClimateConfig,
) -> None:
    """Run desert consistency then forest promotion on ``biome_map`` in place.

    Args:
        biome_map: Classified biome codes, mutated in place.
        elevation: Shaped elevation field.
        moisture: Moisture field.
        forest_patch: Forest patch breakup noise.
        water_distance: Hex-hop distance to water (UNREACHED when unknown).
        thresholds: Classification thresholds.
        climate: Climate rule configuration.
    """
    apply_desert_consistency(
        biome_map, elevation, moisture, water_distance, thresholds, climate
    )
    apply_forest_promotion(biome_map, moisture, forest_patch, thresholds, climate)
