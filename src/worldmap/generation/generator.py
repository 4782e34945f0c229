"""Main world map generation orchestration."""

import numpy as np
import structlog
from numpy.typing import NDArray

from .. import biomes
from ..biomes import Biome, biome_from_value
from ..exceptions import ConfigurationError
from ..hexgrid import offset_to_axial_odd_r
from ..types import AxialCoord, GridCoord, Tile, WorldMap
from .classification import classify_biomes
from .climate import apply_climate_adjustments
from .coastal import compute_distance_to_water
from .config import GenerationConfig
from .fields import build_noise_fields, draw_field_offsets, make_rng, normalize_seed
from .shaping import build_continent_centers, shape_elevation
from .smoothing import smooth_land_biomes

logger = structlog.get_logger()


class GenerationResult:
    """Result of the generation pipeline with intermediate grids."""

    def __init__(
        self,
        config: GenerationConfig,
        seed: int,
        biome_map: NDArray[np.uint8],
        elevation: NDArray[np.float64],
        moisture: NDArray[np.float64],
        water_distance: NDArray[np.int32],
        village: tuple[int, int],
    ):
        self.config = config
        self.seed = seed
        self.biome_map = biome_map
        self.elevation = elevation
        self.moisture = moisture
        self.water_distance = water_distance
        self.village = village


def _require_config(config: GenerationConfig | None) -> GenerationConfig:
    if config is None:
        raise ConfigurationError("Generation requires a GenerationConfig, got None")
    if not isinstance(config, GenerationConfig):
        raise ConfigurationError(
            f"Expected GenerationConfig, got {type(config).__name__}"
        )
    return config


def village_coordinate(width: int, height: int) -> tuple[int, int]:
    """Grid coordinate of the guaranteed start cell."""
    return width // 2, height // 2


def place_village(biome_map: NDArray[np.uint8]) -> tuple[int, int]:
    """Force the centre cell to plains and return its coordinate.

    Runs after smoothing so the vote can never revert it. This is the one
    stage allowed to overwrite a water or mountain cell.
    """
    height, width = biome_map.shape
    x, y = village_coordinate(width, height)
    biome_map[y, x] = biomes.PLAINS
    return x, y


def run_pipeline(seed: int, config: GenerationConfig | None) -> GenerationResult:
    """Run every generation stage and keep the intermediate grids.

    Args:
        seed: Generation seed (wrapped to signed 32-bit).
        config: Generation configuration.

    Returns:
        GenerationResult with final biome map and retained fields.

    Raises:
        ConfigurationError: If ``config`` is missing.
    """
    config = _require_config(config)
    seed = normalize_seed(seed)
    log = logger.bind(seed=seed, world_type=config.world_type.value)

    # Stage A: Base noise fields
    log.debug("stage_noise_fields", width=config.width, height=config.height)
    rng = make_rng(seed)
    offsets = draw_field_offsets(rng)
    fields = build_noise_fields(config, offsets)

    # Stage B: World-type shaping
    log.debug("stage_shaping")
    centers = build_continent_centers(rng, config)
    elevation = shape_elevation(fields.elevation, config, centers)

    # Stage C: Classification
    log.debug("stage_classification")
    biome_map = classify_biomes(
        elevation, fields.moisture, fields.ridge, config.classification
    )

    # Stage D: Distance to water
    log.debug("stage_coastal_distance", enabled=config.climate.use_coast_dryness_rule)
    water_distance = compute_distance_to_water(
        biome_map, enabled=config.climate.use_coast_dryness_rule
    )

    # Stage E: Climate rules
    log.debug("stage_climate")
    apply_climate_adjustments(
        biome_map,
        elevation,
        fields.moisture,
        fields.forest_patch,
        water_distance,
        config.classification,
        config.climate,
    )

    # Stage F: Smoothing
    if config.smoothing.enabled:
        log.debug("stage_smoothing", passes=config.smoothing.passes)
        smooth_land_biomes(biome_map, config.smoothing.passes)

    # Stage G: Village
    village = place_village(biome_map)
    log.debug("stage_village", x=village[0], y=village[1])

    return GenerationResult(
        config=config,
        seed=seed,
        biome_map=biome_map,
        elevation=elevation,
        moisture=fields.moisture,
        water_distance=water_distance,
        village=village,
    )


def assemble_world_map(result: GenerationResult) -> WorldMap:
    """Package per-cell pipeline output into an immutable WorldMap."""
    height, width = result.biome_map.shape
    village_x, village_y = result.village
    biome_lookup = {code: biome_from_value(code) for code in np.unique(result.biome_map)}

    tiles: list[Tile] = []
    for y in range(height):
        for x in range(width):
            q, r = offset_to_axial_odd_r(x, y)
            tiles.append(
                Tile(
                    grid=GridCoord(x=x, y=y),
                    axial=AxialCoord(q=q, r=r),
                    biome=biome_lookup[result.biome_map[y, x]],
                    elevation=float(result.elevation[y, x]),
                    moisture=float(result.moisture[y, x]),
                    is_village=(x == village_x and y == village_y),
                )
            )

    return WorldMap(
        width=width,
        height=height,
        effective_seed=result.seed,
        world_type=result.config.world_type,
        tiles=tuple(tiles),
    )


def generate(seed: int, config: GenerationConfig | None) -> WorldMap:
    """Generate a complete world map.

    Identical ``(seed, config)`` pairs always produce identical maps.

    Args:
        seed: Generation seed (wrapped to signed 32-bit).
        config: Generation configuration.

    Returns:
        WorldMap with one tile per grid cell.

    Raises:
        ConfigurationError: If ``config`` is missing.
    """
    result = run_pipeline(seed, config)
    world_map = assemble_world_map(result)
    _log_map_stats(world_map)
    return world_map


def resolve_seed(
    config: GenerationConfig | None,
    rng: np.random.Generator | None = None,
) -> int:
    """Pick the seed a config asks for.

    Args:
        config: Generation configuration.
        rng: Source for random seeds; a fresh unseeded generator by default.

    Returns:
        ``config.seed``, or a random signed 32-bit seed when
        ``use_random_seed`` is set.
    """
    config = _require_config(config)
    if not config.use_random_seed:
        return normalize_seed(config.seed)
    rng = rng or np.random.default_rng()
    return int(rng.integers(-(1 << 31), 1 << 31))


def generate_from_config(
    config: GenerationConfig | None,
    rng: np.random.Generator | None = None,
) -> WorldMap:
    """Generate using the seed resolved from the config itself."""
    return generate(resolve_seed(config, rng), config)


def _log_map_stats(world_map: WorldMap) -> None:
    """Log generated map statistics."""
    total = len(world_map.tiles)
    counts = world_map.biome_counts()
    village = world_map.village_tile

    logger.info(
        "world_generated",
        seed=world_map.effective_seed,
        world_type=world_map.world_type.value,
        width=world_map.width,
        height=world_map.height,
        tiles=total,
        village=str(village.grid),
    )
    for biome in Biome:
        pct = counts[biome] / total * 100
        logger.debug("biome_share", biome=biome.value, count=counts[biome], percent=round(pct, 1))
