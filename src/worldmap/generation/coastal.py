"""Coastal distance: hex-hop distance from every cell to the nearest water."""

from collections import deque

import numpy as np
from numpy.typing import NDArray

from .. import biomes
from ..hexgrid import neighbors_in_bounds

# Distance for cells no water can reach (or when the coastal rule is off)
UNREACHED = np.iinfo(np.int32).max


def unreached_distances(width: int, height: int) -> NDArray[np.int32]:
    """Distance field with every cell unreached."""
    return np.full((height, width), UNREACHED, dtype=np.int32)


def compute_distance_to_water(
    biome_map: NDArray[np.uint8],
    enabled: bool = True,
) -> NDArray[np.int32]:
    """Compute hex-hop distance from each cell to the nearest water cell.

    Multi-source breadth-first search over odd-r adjacency, seeded with
    every water cell at distance 0.

    Args:
        biome_map: 2D array of biome codes, shape (height, width).
        enabled: When False, skip the search and report every cell as
            UNREACHED.

    Returns:
        int32 distance field (0 at water, UNREACHED where no water exists).
    """
    height, width = biome_map.shape
    distance = unreached_distances(width, height)
    if not enabled:
        return distance

    queue: deque[tuple[int, int]] = deque()
    water_ys, water_xs = np.nonzero(biome_map == biomes.WATER)
    for y, x in zip(water_ys.tolist(), water_xs.tolist()):
        distance[y, x] = 0
        queue.append((x, y))

    while queue:
        x, y = queue.popleft()
        next_dist = int(distance[y, x]) + 1
        for nx, ny in neighbors_in_bounds(x, y, width, height):
            if next_dist < distance[ny, nx]:
                distance[ny, nx] = next_dist
                queue.append((nx, ny))

    return distance
