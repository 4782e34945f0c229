"""Odd-r offset hex grid math: neighbor tables and axial conversion.

Cells are addressed by offset coordinates ``(x, y)`` where ``y`` is the row.
Odd rows are shoved right by half a hex, so the six neighbors of a cell
depend on the parity of its row.
"""

from collections.abc import Iterator

import numpy as np
from numpy.typing import NDArray

Coord = tuple[int, int]

# Neighbor deltas for cells on even rows (y % 2 == 0)
EVEN_ROW_OFFSETS: tuple[Coord, ...] = (
    (+1, 0),
    (-1, 0),
    (0, -1),
    (-1, -1),
    (0, +1),
    (-1, +1),
)

# Neighbor deltas for cells on odd rows (y % 2 == 1)
ODD_ROW_OFFSETS: tuple[Coord, ...] = (
    (+1, 0),
    (-1, 0),
    (+1, -1),
    (0, -1),
    (+1, +1),
    (0, +1),
)


def neighbor_offsets(y: int) -> tuple[Coord, ...]:
    """Return the six neighbor deltas for a cell on row ``y``."""
    return ODD_ROW_OFFSETS if (y & 1) == 1 else EVEN_ROW_OFFSETS


def neighbors(x: int, y: int) -> tuple[Coord, ...]:
    """Return the six neighbor coordinates of ``(x, y)``, unbounded."""
    return tuple((x + dx, y + dy) for dx, dy in neighbor_offsets(y))


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def neighbors_in_bounds(x: int, y: int, width: int, height: int) -> Iterator[Coord]:
    """Yield neighbors of ``(x, y)`` that lie inside a ``width`` x ``height`` grid.

    Order follows the parity table, which callers rely on for tie-breaking.
    """
    for dx, dy in neighbor_offsets(y):
        nx, ny = x + dx, y + dy
        if 0 <= nx < width and 0 <= ny < height:
            yield nx, ny


def count_neighbors(mask: NDArray[np.bool_]) -> NDArray[np.int32]:
    """Count, for every cell, how many of its in-bounds neighbors are set.

    Vectorized equivalent of summing ``mask`` over ``neighbors_in_bounds``.

    Args:
        mask: Boolean grid of shape (height, width).

    Returns:
        int32 grid of neighbor counts in [0, 6].
    """
    height, width = mask.shape
    counts = np.zeros((height, width), dtype=np.int32)
    rows = np.arange(height)

    for parity in (0, 1):
        target_rows = rows[(rows & 1) == parity]
        for dx, dy in neighbor_offsets(parity):
            source_rows = target_rows + dy
            valid = (source_rows >= 0) & (source_rows < height)
            tr = target_rows[valid]
            sr = source_rows[valid]
            if dx == 0:
                counts[tr, :] += mask[sr, :]
            elif dx == 1:
                counts[tr, :-1] += mask[sr, 1:]
            else:
                counts[tr, 1:] += mask[sr, :-1]

    return counts


def offset_to_axial_odd_r(x: int, y: int) -> Coord:
    """Convert odd-r offset coordinates to axial ``(q, r)``.

    ``(y - (y & 1))`` is always even, so floor division is exact.
    """
    q = x - ((y - (y & 1)) // 2)
    r = y
    return q, r


def axial_to_offset_odd_r(q: int, r: int) -> Coord:
    """Convert axial ``(q, r)`` back to odd-r offset coordinates."""
    x = q + ((r - (r & 1)) // 2)
    y = r
    return x, y


def hex_distance(a: Coord, b: Coord) -> int:
    """Hex-hop distance between two axial coordinates."""
    dq = a[0] - b[0]
    dr = a[1] - b[1]
    return (abs(dq) + abs(dq + dr) + abs(dr)) // 2


def offset_distance(a: Coord, b: Coord) -> int:
    """Hex-hop distance between two odd-r offset coordinates."""
    return hex_distance(offset_to_axial_odd_r(*a), offset_to_axial_odd_r(*b))
