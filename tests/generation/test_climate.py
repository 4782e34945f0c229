"""Tests for climate consistency rules."""

import numpy as np

from worldmap import biomes
from worldmap.generation.climate import (
    apply_climate_adjustments,
    apply_desert_consistency,
    apply_forest_promotion,
    land_mask,
)
from worldmap.generation.coastal import UNREACHED, compute_distance_to_water
from worldmap.generation.config import ClassificationConfig, ClimateConfig

W = biomes.WATER
P = biomes.PLAINS
F = biomes.FOREST
D = biomes.DESERT
M = biomes.MOUNTAINS


class TestLandMask:
    def test_land_mask(self) -> None:
        biome_map = np.array([[W, P, F, D, M]], dtype=np.uint8)
        np.testing.assert_array_equal(
            land_mask(biome_map), [[False, True, True, True, False]]
        )


class TestDesertConsistency:
    """Tests for coastal dryness and desert re-derivation."""

    def _coast_row(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        biome_map = np.array([[W, P, P, P, P, P]], dtype=np.uint8)
        elevation = np.full((1, 6), 0.5)
        moisture = np.full((1, 6), 0.1)
        return biome_map, elevation, moisture

    def test_coast_stays_green(self) -> None:
        """Dry cells within the coastal distance become plains."""
        biome_map, elevation, moisture = self._coast_row()
        distance = compute_distance_to_water(biome_map)

        apply_desert_consistency(
            biome_map, elevation, moisture, distance,
            ClassificationConfig(), ClimateConfig(coast_water_distance_max=3),
        )

        np.testing.assert_array_equal(biome_map, [[W, P, P, P, D, D]])

    def test_rule_disabled(self) -> None:
        biome_map, elevation, moisture = self._coast_row()
        distance = compute_distance_to_water(biome_map, enabled=False)

        apply_desert_consistency(
            biome_map, elevation, moisture, distance,
            ClassificationConfig(), ClimateConfig(use_coast_dryness_rule=False),
        )

        np.testing.assert_array_equal(biome_map, [[W, D, D, D, D, D]])

    def test_high_ground_not_desert(self) -> None:
        biome_map = np.array([[P, P]], dtype=np.uint8)
        elevation = np.array([[0.5, 0.65]])
        moisture = np.full((1, 2), 0.1)
        distance = np.full((1, 2), UNREACHED, dtype=np.int32)

        apply_desert_consistency(
            biome_map, elevation, moisture, distance,
            ClassificationConfig(), ClimateConfig(desert_max_elevation=0.65),
        )

        np.testing.assert_array_equal(biome_map, [[D, P]])

    def test_moist_desert_reverts(self) -> None:
        biome_map = np.array([[D, F]], dtype=np.uint8)
        moisture = np.full((1, 2), 0.5)
        distance = np.full((1, 2), UNREACHED, dtype=np.int32)

        apply_desert_consistency(
            biome_map, np.full((1, 2), 0.5), moisture, distance,
            ClassificationConfig(), ClimateConfig(),
        )

        np.testing.assert_array_equal(biome_map, [[P, P]])

    def test_water_and_mountains_untouched(self) -> None:
        biome_map = np.array([[W, M, P]], dtype=np.uint8)
        distance = np.full((1, 3), UNREACHED, dtype=np.int32)

        apply_desert_consistency(
            biome_map, np.full((1, 3), 0.5), np.full((1, 3), 0.0), distance,
            ClassificationConfig(), ClimateConfig(),
        )

        assert biome_map[0, 0] == W
        assert biome_map[0, 1] == M


class TestForestPromotion:
    """Tests for forest promotion."""

    def test_wet_plains_become_forest(self) -> None:
        biome_map = np.array([[P, P]], dtype=np.uint8)
        moisture = np.array([[0.8, 0.5]])
        patch = np.full((1, 2), 0.9)

        apply_forest_promotion(
            biome_map, moisture, patch, ClassificationConfig(), ClimateConfig()
        )

        np.testing.assert_array_equal(biome_map, [[F, P]])

    def test_patch_breakup(self) -> None:
        biome_map = np.array([[P, P, P]], dtype=np.uint8)
        moisture = np.full((1, 3), 0.8)
        patch = np.array([[0.3, 0.48, 0.9]])

        apply_forest_promotion(
            biome_map, moisture, patch,
            ClassificationConfig(forest_patch_threshold=0.48), ClimateConfig(),
        )

        np.testing.assert_array_equal(biome_map, [[P, F, F]])

    def test_patch_breakup_disabled(self) -> None:
        biome_map = np.array([[P]], dtype=np.uint8)

        apply_forest_promotion(
            biome_map, np.array([[0.8]]), np.array([[0.0]]),
            ClassificationConfig(), ClimateConfig(use_forest_patch_breakup=False),
        )

        assert biome_map[0, 0] == F

    def test_raised_forest_threshold_keeps_plains(self) -> None:
        """A high desert threshold also lifts the forest moisture cutoff."""
        biome_map = np.array([[P]], dtype=np.uint8)

        apply_forest_promotion(
            biome_map, np.array([[0.7]]), np.ones((1, 1)),
            ClassificationConfig(desert_moisture_threshold=0.8), ClimateConfig(),
        )

        assert biome_map[0, 0] == P

    def _desert_flanked(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Centre (1, 1) is wet plains with deserts above and below."""
        biome_map = np.full((3, 3), P, dtype=np.uint8)
        biome_map[0, 1] = D
        biome_map[2, 1] = D
        moisture = np.zeros((3, 3))
        moisture[1, 1] = 0.9
        patch = np.ones((3, 3))
        return biome_map, moisture, patch

    def test_desert_adjacency_penalty(self) -> None:
        biome_map, moisture, patch = self._desert_flanked()

        apply_forest_promotion(
            biome_map, moisture, patch,
            ClassificationConfig(), ClimateConfig(max_desert_neighbors_for_forest=1),
        )

        assert biome_map[1, 1] == P

    def test_penalty_allows_enough_neighbors(self) -> None:
        biome_map, moisture, patch = self._desert_flanked()

        apply_forest_promotion(
            biome_map, moisture, patch,
            ClassificationConfig(), ClimateConfig(max_desert_neighbors_for_forest=2),
        )

        assert biome_map[1, 1] == F

    def test_penalty_disabled(self) -> None:
        biome_map, moisture, patch = self._desert_flanked()

        apply_forest_promotion(
            biome_map, moisture, patch,
            ClassificationConfig(), ClimateConfig(use_desert_adjacency_penalty=False),
        )

        assert biome_map[1, 1] == F

    def test_only_plains_promoted(self) -> None:
        biome_map = np.array([[D, W, M]], dtype=np.uint8)

        apply_forest_promotion(
            biome_map, np.full((1, 3), 0.9), np.ones((1, 3)),
            ClassificationConfig(), ClimateConfig(),
        )

        np.testing.assert_array_equal(biome_map, [[D, W, M]])


class TestClimateAdjustments:
    """Tests for the combined climate stage."""

    def test_preserves_water_and_mountains(self) -> None:
        rng = np.random.default_rng(12)
        biome_map = rng.choice([W, P, D, M], size=(12, 14)).astype(np.uint8)
        before = biome_map.copy()
        distance = compute_distance_to_water(biome_map)

        apply_climate_adjustments(
            biome_map,
            rng.random((12, 14)),
            rng.random((12, 14)),
            rng.random((12, 14)),
            distance,
            ClassificationConfig(),
            ClimateConfig(),
        )

        np.testing.assert_array_equal(biome_map == W, before == W)
        np.testing.assert_array_equal(biome_map == M, before == M)

    def test_new_desert_blocks_forest(self) -> None:
        """Forest promotion sees deserts created by the consistency rule."""
        biome_map = np.full((3, 3), P, dtype=np.uint8)
        moisture = np.full((3, 3), 0.1)
        moisture[1, 1] = 0.9
        distance = np.full((3, 3), UNREACHED, dtype=np.int32)

        apply_climate_adjustments(
            biome_map,
            np.full((3, 3), 0.5),
            moisture,
            np.ones((3, 3)),
            distance,
            ClassificationConfig(),
            ClimateConfig(),
        )

        assert biome_map[1, 1] == P
        assert biome_map[0, 0] == D
