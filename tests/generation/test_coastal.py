"""Tests for the coastal distance field."""

import numpy as np

from worldmap import biomes
from worldmap.generation.coastal import UNREACHED, compute_distance_to_water
from worldmap.hexgrid import offset_distance


class TestDistanceToWater:
    """Tests for multi-source BFS distance."""

    def test_hand_built_grid(self, corner_water_map: np.ndarray) -> None:
        """Distances follow odd-r adjacency from the single water cell."""
        distance = compute_distance_to_water(corner_water_map)
        expected = np.array([
            [0, 1, 2],
            [1, 2, 3],
            [2, 2, 3],
        ])
        np.testing.assert_array_equal(distance, expected)

    def test_dtype(self, corner_water_map: np.ndarray) -> None:
        assert compute_distance_to_water(corner_water_map).dtype == np.int32

    def test_disabled_is_unreached(self, corner_water_map: np.ndarray) -> None:
        distance = compute_distance_to_water(corner_water_map, enabled=False)
        assert (distance == UNREACHED).all()

    def test_no_water_is_unreached(self) -> None:
        biome_map = np.full((4, 5), biomes.PLAINS, dtype=np.uint8)
        assert (compute_distance_to_water(biome_map) == UNREACHED).all()

    def test_matches_nearest_water(self) -> None:
        """BFS distance equals the minimum hex distance to any water cell."""
        rng = np.random.default_rng(21)
        biome_map = np.where(
            rng.random((8, 9)) < 0.15, biomes.WATER, biomes.PLAINS
        ).astype(np.uint8)
        biome_map[0, 0] = biomes.WATER
        water = [(int(x), int(y)) for y, x in zip(*np.nonzero(biome_map == biomes.WATER))]

        distance = compute_distance_to_water(biome_map)
        for y in range(8):
            for x in range(9):
                nearest = min(offset_distance((x, y), w) for w in water)
                assert distance[y, x] == nearest

    def test_mountains_do_not_block(self) -> None:
        biome_map = np.full((1, 4), biomes.MOUNTAINS, dtype=np.uint8)
        biome_map[0, 0] = biomes.WATER
        np.testing.assert_array_equal(
            compute_distance_to_water(biome_map), [[0, 1, 2, 3]]
        )
