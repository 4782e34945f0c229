"""World map generation configuration models.

Out-of-range numbers are clamped into their valid range rather than rejected,
so any structurally valid config produces a complete map.
"""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from ..types import WorldType


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


class NoiseScaleConfig(BaseModel, frozen=True):
    """Wavelengths (in cells) of the four coherent noise fields."""

    elevation_scale: float = Field(default=26.0, description="Elevation noise scale")
    moisture_scale: float = Field(default=20.0, description="Moisture noise scale")
    ridge_scale: float = Field(default=11.0, description="Ridge noise scale")
    forest_patch_scale: float = Field(
        default=8.0, description="Forest patch breakup noise scale"
    )

    @field_validator(
        "elevation_scale", "moisture_scale", "ridge_scale", "forest_patch_scale"
    )
    @classmethod
    def _positive_scale(cls, value: float) -> float:
        return max(0.0001, value)


class ShapingConfig(BaseModel, frozen=True):
    """World-type elevation shaping parameters."""

    use_radial_falloff: bool = Field(
        default=True, description="Lower elevation towards the map edges"
    )
    falloff_strength: float = Field(default=0.36, description="Radial falloff (0-1)")
    continent_count: int = Field(
        default=4, description="Continent centres for the Continents world type"
    )
    continent_spread: float = Field(
        default=0.42, description="Continent size and spacing (0.05-1)"
    )
    island_scale_multiplier: float = Field(
        default=1.55, description="Shrinks elevation wavelength for Islands (0.25-3)"
    )
    extra_water_bias: float = Field(
        default=0.12, description="Elevation removed everywhere for Islands (0-0.5)"
    )

    @field_validator("falloff_strength")
    @classmethod
    def _clamp_falloff(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)

    @field_validator("continent_count")
    @classmethod
    def _clamp_continents(cls, value: int) -> int:
        return int(_clamp(value, 1, 12))

    @field_validator("continent_spread")
    @classmethod
    def _clamp_spread(cls, value: float) -> float:
        return _clamp(value, 0.05, 1.0)

    @field_validator("island_scale_multiplier")
    @classmethod
    def _clamp_island_scale(cls, value: float) -> float:
        return _clamp(value, 0.25, 3.0)

    @field_validator("extra_water_bias")
    @classmethod
    def _clamp_water_bias(cls, value: float) -> float:
        return _clamp(value, 0.0, 0.5)


class ClassificationConfig(BaseModel, frozen=True):
    """Biome classification thresholds, all in [0, 1].

    Field order matters: ``mountain_threshold`` is raised to at least
    ``water_threshold`` and ``forest_moisture_threshold`` to at least
    ``desert_moisture_threshold``.
    Both raises also apply when only the lower threshold is given.
    """

    water_threshold: float = Field(
        default=0.44, description="Elevation below this is water"
    )
    mountain_threshold: float = Field(
        default=0.76,
        description="Elevation above this may be mountains",
        validate_default=True,
    )
    ridge_threshold: float = Field(
        default=0.62, description="Ridge noise above this confirms mountains"
    )
    desert_moisture_threshold: float = Field(
        default=0.27, description="Moisture below this is desert"
    )
    forest_moisture_threshold: float = Field(
        default=0.63,
        description="Moisture above this may become forest",
        validate_default=True,
    )
    forest_patch_threshold: float = Field(
        default=0.48, description="Forest patch noise needed for forest"
    )

    @field_validator(
        "water_threshold",
        "mountain_threshold",
        "ridge_threshold",
        "desert_moisture_threshold",
        "forest_moisture_threshold",
        "forest_patch_threshold",
    )
    @classmethod
    def _clamp_unit(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)

    @field_validator("mountain_threshold")
    @classmethod
    def _mountain_above_water(cls, value: float, info: ValidationInfo) -> float:
        water = info.data.get("water_threshold")
        return value if water is None else max(water, value)

    @field_validator("forest_moisture_threshold")
    @classmethod
    def _forest_above_desert(cls, value: float, info: ValidationInfo) -> float:
        desert = info.data.get("desert_moisture_threshold")
        return value if desert is None else max(desert, value)


class ClimateConfig(BaseModel, frozen=True):
    """Climate consistency rules applied after classification."""

    use_coast_dryness_rule: bool = Field(
        default=True, description="Keep deserts away from the coast"
    )
    coast_water_distance_max: int = Field(
        default=3, description="Cells within this many hops of water never become desert"
    )
    desert_max_elevation: float = Field(
        default=0.65, description="Elevation at or above this never becomes desert"
    )
    use_forest_patch_breakup: bool = Field(
        default=True, description="Require forest patch noise for forests"
    )
    use_desert_adjacency_penalty: bool = Field(
        default=True, description="Suppress forests next to deserts"
    )
    max_desert_neighbors_for_forest: int = Field(
        default=1, description="Max desert neighbors a forest cell may have"
    )

    @field_validator("coast_water_distance_max")
    @classmethod
    def _clamp_coast_distance(cls, value: int) -> int:
        return int(_clamp(value, 1, 6))

    @field_validator("desert_max_elevation")
    @classmethod
    def _clamp_desert_elevation(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)

    @field_validator("max_desert_neighbors_for_forest")
    @classmethod
    def _clamp_desert_neighbors(cls, value: int) -> int:
        return int(_clamp(value, 0, 6))


class SmoothingConfig(BaseModel, frozen=True):
    """Neighbor-majority smoothing of land biomes."""

    enabled: bool = Field(default=True, description="Run the smoothing passes")
    passes: int = Field(default=1, description="Number of smoothing passes (1-3)")

    @field_validator("passes")
    @classmethod
    def _clamp_passes(cls, value: int) -> int:
        return int(_clamp(value, 1, 3))


class GenerationConfig(BaseModel, frozen=True):
    """Complete world map generation configuration."""

    world_type: WorldType = Field(
        default=WorldType.CONTINENTS, description="Elevation shaping archetype"
    )
    land_coverage: float = Field(
        default=0.52, description="Uniform elevation bias towards land (0-1)"
    )
    width: int = Field(default=56, description="Map width in hex cells")
    height: int = Field(default=36, description="Map height in hex cells")

    seed: int = Field(default=12345, description="Seed used by generate_from_config")
    use_random_seed: bool = Field(
        default=False, description="Draw a fresh seed for every generate_from_config"
    )

    noise: NoiseScaleConfig = Field(default_factory=NoiseScaleConfig)
    shaping: ShapingConfig = Field(default_factory=ShapingConfig)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)
    climate: ClimateConfig = Field(default_factory=ClimateConfig)
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)

    @field_validator("land_coverage")
    @classmethod
    def _clamp_coverage(cls, value: float) -> float:
        return _clamp(value, 0.0, 1.0)

    @field_validator("width", "height")
    @classmethod
    def _at_least_one(cls, value: int) -> int:
        return max(1, value)

    def with_world_type_preset(
        self, world_type: WorldType | None = None
    ) -> "GenerationConfig":
        """Return a copy with the recommended defaults for a world type.

        Map size and seed settings are kept; shaping, noise scales,
        thresholds and climate rules are replaced.

        Args:
            world_type: Archetype to apply, defaults to this config's.

        Returns:
            New validated GenerationConfig.
        """
        world_type = WorldType(world_type or self.world_type)
        data = self.model_dump()
        data["world_type"] = world_type
        for section, values in _WORLD_TYPE_PRESETS[world_type].items():
            _merge_section(data, section, values)
        for section, values in _SHARED_PRESET.items():
            _merge_section(data, section, values)
        return GenerationConfig.model_validate(data)


def _merge_section(data: dict[str, Any], section: str, values: Any) -> None:
    if isinstance(values, dict):
        data[section] = {**data[section], **values}
    else:
        data[section] = values


_WORLD_TYPE_PRESETS: dict[WorldType, dict[str, Any]] = {
    WorldType.PANGEA: {
        "land_coverage": 0.62,
        "noise": {"elevation_scale": 30.0, "moisture_scale": 22.0, "ridge_scale": 12.0},
        "shaping": {
            "use_radial_falloff": True,
            "falloff_strength": 0.52,
            "continent_count": 1,
            "continent_spread": 0.30,
            "island_scale_multiplier": 1.0,
            "extra_water_bias": 0.0,
        },
        "classification": {"water_threshold": 0.43, "mountain_threshold": 0.78},
    },
    WorldType.CONTINENTS: {
        "land_coverage": 0.52,
        "noise": {"elevation_scale": 26.0, "moisture_scale": 20.0, "ridge_scale": 11.0},
        "shaping": {
            "use_radial_falloff": True,
            "falloff_strength": 0.34,
            "continent_count": 4,
            "continent_spread": 0.42,
            "island_scale_multiplier": 1.25,
            "extra_water_bias": 0.04,
        },
        "classification": {"water_threshold": 0.44, "mountain_threshold": 0.76},
    },
    WorldType.ISLANDS: {
        "land_coverage": 0.34,
        "noise": {"elevation_scale": 18.0, "moisture_scale": 18.0, "ridge_scale": 10.0},
        "shaping": {
            "use_radial_falloff": False,
            "falloff_strength": 0.14,
            "continent_count": 2,
            "continent_spread": 0.55,
            "island_scale_multiplier": 1.85,
            "extra_water_bias": 0.16,
        },
        "classification": {"water_threshold": 0.48, "mountain_threshold": 0.74},
    },
}

# Applied after every world type preset
_SHARED_PRESET: dict[str, Any] = {
    "classification": {
        "ridge_threshold": 0.62,
        "desert_moisture_threshold": 0.27,
        "forest_moisture_threshold": 0.63,
        "forest_patch_threshold": 0.48,
    },
    "climate": {
        "coast_water_distance_max": 3,
        "desert_max_elevation": 0.65,
        "max_desert_neighbors_for_forest": 1,
    },
    "smoothing": {"passes": 1},
}


def load_config(config_path: Path) -> GenerationConfig:
    """Load generation configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return GenerationConfig.model_validate(data)


# World type presets bundled with the package
PRESETS_DIR = Path(__file__).resolve().parent.parent / "configs"


def find_config(name: str) -> Path:
    """Resolve ``name`` to a TOML config file.

    Names containing ``/`` or ending in ``.toml`` are used as paths;
    anything else names a bundled preset such as ``"islands"``.

    Raises:
        FileNotFoundError: If no file matches.
    """
    path = Path(name)
    if "/" not in name and path.suffix != ".toml":
        path = PRESETS_DIR / f"{name}.toml"
    if not path.is_file():
        raise FileNotFoundError(
            f"No config named {name!r} (bundled presets: {', '.join(list_configs())})"
        )
    return path


def list_configs() -> list[str]:
    """Names of the bundled presets, sorted."""
    return sorted(path.stem for path in PRESETS_DIR.glob("*.toml"))
