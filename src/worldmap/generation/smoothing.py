"""Neighbor-majority smoothing of land biomes."""

import numpy as np
from numpy.typing import NDArray

from .. import biomes
from ..hexgrid import count_neighbors
from .climate import land_mask

# A cell needs this many land neighbors before it can be outvoted
MIN_LAND_NEIGHBORS = 3
# Neighbors of a single biome needed to flip a cell
MIN_MAJORITY_COUNT = 4
# Cells with more same-biome neighbors than this are never flipped
MAX_OWN_BIOME_NEIGHBORS = 1


def smoothing_pass(biome_map: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Run one majority-vote pass and return the result as a new array.

    Only land neighbors vote. A land cell flips to the majority land biome
    of its neighbors when it has at least three land neighbors, the
    majority has at least four votes, and at most one neighbor shares the
    cell's own biome. With six neighbors at most one biome can reach four
    votes, so the majority is never ambiguous.

    Reads only from ``biome_map``, so iteration order never matters.
    """
    result = biome_map.copy()
    land = land_mask(biome_map)
    land_neighbors = count_neighbors(land)

    votes = {code: count_neighbors(biome_map == code) for code in biomes.LAND_CODES}

    own_votes = np.zeros(biome_map.shape, dtype=np.int32)
    for code, counts in votes.items():
        is_code = biome_map == code
        own_votes[is_code] = counts[is_code]

    eligible = (
        land
        & (land_neighbors >= MIN_LAND_NEIGHBORS)
        & (own_votes <= MAX_OWN_BIOME_NEIGHBORS)
    )
    for code, counts in votes.items():
        flip = eligible & (biome_map != code) & (counts >= MIN_MAJORITY_COUNT)
        result[flip] = code

    return result


def smooth_land_biomes(biome_map: NDArray[np.uint8], passes: int = 1) -> None:
    """Apply ``passes`` smoothing passes to ``biome_map`` in place.

    Each pass reads the map produced by the previous one. Water and
    mountain cells never vote and never change.

    Args:
        biome_map: Biome codes, mutated in place.
        passes: Number of passes (clamped to 1-3).
    """
    passes = min(3, max(1, passes))
    for _ in range(passes):
        biome_map[...] = smoothing_pass(biome_map)
