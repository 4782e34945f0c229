"""Post-generation validation of world maps."""

from dataclasses import dataclass, field

import structlog

from ..biomes import Biome
from ..hexgrid import offset_to_axial_odd_r
from ..types import WorldMap
from .config import GenerationConfig

logger = structlog.get_logger()


@dataclass
class ValidationResult:
    """Problems found in a generated map.

    Any error fails the map; warnings are reported but never fail it.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


def validate_world_map(
    world_map: WorldMap,
    config: GenerationConfig,
) -> ValidationResult:
    """Validate a generated map against the generation invariants.

    Args:
        world_map: Generated map.
        config: Configuration the map was generated with.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Tiles sit at their grid index with matching axial coordinates
    _check_coordinates(world_map, result)

    # Check 2: Exactly one habitable village at the centre
    _check_village(world_map, result)

    # Check 3: Elevation and moisture in range
    _check_value_ranges(world_map, result)

    # Check 4: Water and mountains agree with the thresholds
    _check_thresholds(world_map, config, result)

    # Check 5: Some land besides the village
    _check_land_fraction(world_map, result)

    if result.passed:
        logger.info("world_map_validation_passed", seed=world_map.effective_seed)
    else:
        logger.warning(
            "world_map_validation_failed",
            seed=world_map.effective_seed,
            errors=len(result.errors),
        )
        for error in result.errors:
            logger.error("world_map_validation_error", detail=error)

    for warning in result.warnings:
        logger.warning("world_map_validation_warning", detail=warning)

    return result


def _check_coordinates(world_map: WorldMap, result: ValidationResult) -> None:
    misplaced = 0
    bad_axial = 0
    for index, tile in enumerate(world_map.tiles):
        x, y = index % world_map.width, index // world_map.width
        if tile.grid.as_tuple() != (x, y):
            misplaced += 1
        if tile.axial.as_tuple() != offset_to_axial_odd_r(tile.grid.x, tile.grid.y):
            bad_axial += 1

    if misplaced:
        result.add_error(f"{misplaced} tiles are stored out of row-major order")
    if bad_axial:
        result.add_error(f"{bad_axial} tiles have inconsistent axial coordinates")


def _check_village(world_map: WorldMap, result: ValidationResult) -> None:
    villages = [tile for tile in world_map.tiles if tile.is_village]
    if len(villages) != 1:
        result.add_error(f"Expected exactly one village, found {len(villages)}")

    village = world_map.village_tile
    if not village.is_village:
        result.add_error(f"Centre tile {village.grid} is not flagged as the village")
    if not village.biome.habitable:
        result.add_error(f"Village tile {village.grid} is {village.biome.value}")


def _check_value_ranges(world_map: WorldMap, result: ValidationResult) -> None:
    out_of_range = sum(
        1
        for tile in world_map.tiles
        if not (0.0 <= tile.elevation <= 1.0 and 0.0 <= tile.moisture <= 1.0)
    )
    if out_of_range:
        result.add_error(f"{out_of_range} tiles have elevation or moisture outside [0, 1]")


def _check_thresholds(
    world_map: WorldMap,
    config: GenerationConfig,
    result: ValidationResult,
) -> None:
    thresholds = config.classification
    dry_water = 0
    missing_water = 0
    low_mountains = 0

    for tile in world_map.tiles:
        if tile.is_village:
            continue
        below_water = tile.elevation < thresholds.water_threshold
        if below_water and tile.biome != Biome.WATER:
            missing_water += 1
        if not below_water and tile.biome == Biome.WATER:
            dry_water += 1
        if tile.biome == Biome.MOUNTAINS and tile.elevation <= thresholds.mountain_threshold:
            low_mountains += 1

    if missing_water:
        result.add_error(f"{missing_water} tiles below the water threshold are not water")
    if dry_water:
        result.add_error(f"{dry_water} water tiles sit above the water threshold")
    if low_mountains:
        result.add_error(f"{low_mountains} mountain tiles sit below the mountain threshold")


def _check_land_fraction(world_map: WorldMap, result: ValidationResult) -> None:
    land = sum(1 for tile in world_map.tiles if tile.biome.is_land and not tile.is_village)
    if land == 0:
        result.add_warning("Map has no land besides the village")
