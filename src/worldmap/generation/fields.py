"""Field generation: seeded offsets and the four base noise fields."""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..types import WorldType
from .config import GenerationConfig
from .noise import sample_noise_field

# Offsets are drawn from [-OFFSET_RANGE, OFFSET_RANGE)
OFFSET_RANGE = 100_000

_INT32_SPAN = 1 << 32
_INT32_MIN = -(1 << 31)


def normalize_seed(seed: int) -> int:
    """Wrap any integer into the signed 32-bit seed range."""
    return (int(seed) - _INT32_MIN) % _INT32_SPAN + _INT32_MIN


def make_rng(seed: int) -> np.random.Generator:
    """Create the single random source for a generation run.

    numpy rejects negative seeds, so the unsigned view of the 32-bit
    seed is used.
    """
    return np.random.default_rng(normalize_seed(seed) & 0xFFFFFFFF)


@dataclass(frozen=True)
class FieldOffsets:
    """Sample offsets for each noise field, in cells."""

    elevation: tuple[float, float]
    moisture: tuple[float, float]
    ridge: tuple[float, float]
    forest_patch: tuple[float, float]


@dataclass(frozen=True)
class NoiseFields:
    """Base noise fields, each of shape (height, width) in [0, 1]."""

    elevation: NDArray[np.float64]
    moisture: NDArray[np.float64]
    ridge: NDArray[np.float64]
    forest_patch: NDArray[np.float64]


def _draw_offset(rng: np.random.Generator) -> tuple[float, float]:
    x, y = rng.integers(-OFFSET_RANGE, OFFSET_RANGE, size=2)
    return float(x), float(y)


def draw_field_offsets(rng: np.random.Generator) -> FieldOffsets:
    """Draw decorrelated offsets for all four fields.

    The draw order (elevation, moisture, ridge, forest patch) is fixed;
    reordering it changes every map generated from a given seed.
    """
    elevation = _draw_offset(rng)
    moisture = _draw_offset(rng)
    ridge = _draw_offset(rng)
    forest_patch = _draw_offset(rng)
    return FieldOffsets(
        elevation=elevation,
        moisture=moisture,
        ridge=ridge,
        forest_patch=forest_patch,
    )


def elevation_scale(config: GenerationConfig) -> float:
    """Elevation noise wavelength after the world-type adjustment.

    Islands shrink the wavelength by the island multiplier, giving
    smaller, more numerous landmasses.
    """
    scale = config.noise.elevation_scale
    if config.world_type == WorldType.ISLANDS:
        scale /= config.shaping.island_scale_multiplier
    return scale


def build_noise_fields(config: GenerationConfig, offsets: FieldOffsets) -> NoiseFields:
    """Sample the raw elevation, moisture, ridge and forest patch fields.

    Args:
        config: Generation configuration (size and noise scales).
        offsets: Per-field offsets from ``draw_field_offsets``.

    Returns:
        NoiseFields with unshaped elevation.
    """
    width, height = config.width, config.height

    def sample(scale: float, offset: tuple[float, float]) -> NDArray[np.float64]:
        field = sample_noise_field(width, height, scale, offset[0], offset[1])
        return np.clip(field, 0.0, 1.0)

    return NoiseFields(
        elevation=sample(elevation_scale(config), offsets.elevation),
        moisture=sample(config.noise.moisture_scale, offsets.moisture),
        ridge=sample(config.noise.ridge_scale, offsets.ridge),
        forest_patch=sample(config.noise.forest_patch_scale, offsets.forest_patch),
    )
