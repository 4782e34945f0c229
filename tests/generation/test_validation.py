"""Tests for post-generation validation."""

from worldmap.biomes import Biome
from worldmap.generation.config import ClassificationConfig, GenerationConfig
from worldmap.generation.generator import generate
from worldmap.generation.validation import ValidationResult, validate_world_map
from worldmap.types import WorldMap


def _replace_tile(world_map: WorldMap, x: int, y: int, **update) -> WorldMap:
    tiles = list(world_map.tiles)
    index = y * world_map.width + x
    tiles[index] = tiles[index].model_copy(update=update)
    return world_map.model_copy(update={"tiles": tuple(tiles)})


class TestValidationResult:
    def test_error_fails(self) -> None:
        result = ValidationResult()
        assert result.passed
        result.add_error("broken")
        assert not result.passed
        assert result.errors == ["broken"]

    def test_warning_passes(self) -> None:
        result = ValidationResult()
        result.add_warning("odd")
        assert result.passed
        assert result.warnings == ["odd"]


class TestValidateWorldMap:
    """Tests for validate_world_map."""

    def test_generated_map_passes(
        self, small_map: WorldMap, small_config: GenerationConfig
    ) -> None:
        result = validate_world_map(small_map, small_config)
        assert result.passed
        assert result.errors == []

    def test_missing_village(
        self, small_map: WorldMap, small_config: GenerationConfig
    ) -> None:
        broken = _replace_tile(small_map, 8, 6, is_village=False)
        result = validate_world_map(broken, small_config)
        assert not result.passed
        assert any("village" in error for error in result.errors)

    def test_uninhabitable_village(
        self, small_map: WorldMap, small_config: GenerationConfig
    ) -> None:
        broken = _replace_tile(small_map, 8, 6, biome=Biome.MOUNTAINS)
        result = validate_world_map(broken, small_config)
        assert not result.passed

    def test_out_of_range_elevation(
        self, small_map: WorldMap, small_config: GenerationConfig
    ) -> None:
        broken = _replace_tile(small_map, 0, 0, elevation=1.5)
        result = validate_world_map(broken, small_config)
        assert not result.passed

    def test_bad_axial(
        self, small_map: WorldMap, small_config: GenerationConfig
    ) -> None:
        tile = small_map.tile_at(1, 1)
        broken = _replace_tile(
            small_map, 1, 1, axial=tile.axial.model_copy(update={"q": 9})
        )
        result = validate_world_map(broken, small_config)
        assert any("axial" in error for error in result.errors)

    def test_threshold_mismatch(self, small_map: WorldMap) -> None:
        """Checking against different thresholds flags the water cells."""
        other = GenerationConfig(
            width=16,
            height=12,
            classification=ClassificationConfig(water_threshold=0.0),
        )
        result = validate_world_map(small_map, other)
        water = small_map.biome_counts()[Biome.WATER]
        assert result.passed == (water == 0)

    def test_all_water_warns(self) -> None:
        config = GenerationConfig(
            width=6,
            height=5,
            classification=ClassificationConfig(water_threshold=1.0),
        )
        world_map = generate(3, config)
        result = validate_world_map(world_map, config)
        land = sum(
            1 for tile in world_map.tiles if tile.biome.is_land and not tile.is_village
        )
        assert result.passed
        assert bool(result.warnings) == (land == 0)
