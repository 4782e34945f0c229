"""World-type shaping: radial falloff, continent blobs, water bias."""

import math

import numpy as np
import structlog
from numpy.typing import NDArray

from ..types import WorldType
from .config import GenerationConfig

logger = structlog.get_logger()

_SQRT2 = math.sqrt(2.0)

# Bias weights per world type
PANGEA_CENTER_BIAS = 0.42
CONTINENT_FALLOFF_FACTOR = 0.6
CONTINENT_INFLUENCE_WEIGHT = 0.46
ISLAND_FALLOFF_FACTOR = 0.2
COVERAGE_BIAS_WEIGHT = 0.7

# Rejection sampling attempts per requested continent
CENTER_ATTEMPTS_PER_CONTINENT = 30


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def normalized_coordinates(
    width: int, height: int
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Cell coordinates normalized to [0, 1].

    A single-cell axis maps to 0.

    Returns:
        Tuple of (nx, ny) arrays, each of shape (height, width).
    """
    xs = np.arange(width, dtype=np.float64)
    ys = np.arange(height, dtype=np.float64)
    nx = xs / (width - 1) if width > 1 else np.zeros(width, dtype=np.float64)
    ny = ys / (height - 1) if height > 1 else np.zeros(height, dtype=np.float64)
    xx, yy = np.meshgrid(nx, ny)
    return xx, yy


def radial_distance(nx: NDArray[np.float64], ny: NDArray[np.float64]) -> NDArray[np.float64]:
    """Distance from map centre, 0 at the centre and 1 at the corners."""
    x = nx * 2.0 - 1.0
    y = ny * 2.0 - 1.0
    return np.clip(np.sqrt(x * x + y * y) / _SQRT2, 0.0, 1.0)


def continent_count(config: GenerationConfig) -> int:
    """Number of continent centres drawn for the configured world type."""
    count = config.shaping.continent_count
    match config.world_type:
        case WorldType.PANGEA:
            return 1
        case WorldType.CONTINENTS:
            return min(8, max(2, count))
        case WorldType.ISLANDS:
            return min(4, max(1, count))


def build_continent_centers(
    rng: np.random.Generator,
    config: GenerationConfig,
) -> NDArray[np.float64]:
    """Place continent centres in normalized map space.

    Candidates are drawn from [0.1, 0.9]^2 and rejected when closer than a
    spread-dependent minimum to an accepted centre. Once the attempt budget
    runs out, remaining centres are drawn from [0, 1]^2 with no spacing
    check.

    Args:
        rng: Generation random source, positioned after the field offsets.
        config: Generation configuration.

    Returns:
        Array of shape (count, 2) holding (x, y) centres.
    """
    if config.world_type == WorldType.PANGEA:
        return np.array([[0.5, 0.5]], dtype=np.float64)

    count = continent_count(config)
    spread = config.shaping.continent_spread
    min_dist = _lerp(0.06, 0.28, spread)
    max_attempts = count * CENTER_ATTEMPTS_PER_CONTINENT

    centers: list[tuple[float, float]] = []
    attempt = 0
    while attempt < max_attempts and len(centers) < count:
        attempt += 1
        cx = _lerp(0.1, 0.9, rng.random())
        cy = _lerp(0.1, 0.9, rng.random())

        too_close = any(
            math.hypot(cx - ox, cy - oy) < min_dist for ox, oy in centers
        )
        if not too_close:
            centers.append((cx, cy))

    if len(centers) < count:
        logger.debug(
            "continent_spacing_budget_exhausted",
            placed=len(centers),
            requested=count,
            attempts=max_attempts,
        )
    while len(centers) < count:
        centers.append((rng.random(), rng.random()))

    return np.array(centers, dtype=np.float64)


def continental_influence(
    nx: NDArray[np.float64],
    ny: NDArray[np.float64],
    centers: NDArray[np.float64],
    spread: float,
) -> NDArray[np.float64]:
    """Averaged Gaussian falloff around continent centres, clamped to [0, 1].

    Args:
        nx: Normalized x coordinates.
        ny: Normalized y coordinates.
        centers: Array of shape (count, 2) of continent centres.
        spread: Continent spread; larger values give wider blobs.

    Returns:
        Influence array with the shape of ``nx``.
    """
    if len(centers) == 0:
        return np.zeros_like(nx)

    sigma = _lerp(0.08, 0.32, min(1.0, max(0.0, spread)))
    sigma_sq = sigma * sigma

    total = np.zeros_like(nx)
    for cx, cy in centers:
        d2 = (nx - cx) ** 2 + (ny - cy) ** 2
        total += np.exp(-d2 / (2.0 * sigma_sq))

    return np.clip(total / max(1, len(centers)) * 1.8, 0.0, 1.0)


def coverage_bias(config: GenerationConfig) -> float:
    """Uniform elevation shift pushing the map towards land or water."""
    return (config.land_coverage - 0.5) * COVERAGE_BIAS_WEIGHT


def shape_elevation(
    raw_elevation: NDArray[np.float64],
    config: GenerationConfig,
    centers: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Apply world-type shaping and coverage bias to raw elevation.

    Args:
        raw_elevation: Unshaped elevation noise, shape (height, width).
        config: Generation configuration.
        centers: Continent centres from ``build_continent_centers``.

    Returns:
        Shaped elevation clamped to [0, 1].
    """
    height, width = raw_elevation.shape
    nx, ny = normalized_coordinates(width, height)
    radial = radial_distance(nx, ny)
    shaping = config.shaping
    shaped = raw_elevation.astype(np.float64, copy=True)

    match config.world_type:
        case WorldType.PANGEA:
            if shaping.use_radial_falloff:
                shaped -= radial * radial * shaping.falloff_strength
            shaped += (1.0 - radial) ** 2 * PANGEA_CENTER_BIAS

        case WorldType.CONTINENTS:
            if shaping.use_radial_falloff:
                shaped -= (
                    radial * radial * shaping.falloff_strength * CONTINENT_FALLOFF_FACTOR
                )
            influence = continental_influence(nx, ny, centers, shaping.continent_spread)
            shaped += influence * CONTINENT_INFLUENCE_WEIGHT

        case WorldType.ISLANDS:
            if shaping.use_radial_falloff:
                shaped -= (
                    radial * radial * shaping.falloff_strength * ISLAND_FALLOFF_FACTOR
                )
            shaped -= shaping.extra_water_bias

    shaped += coverage_bias(config)
    return np.clip(shaped, 0.0, 1.0)
