"""Coherent noise for map generation.

Provides vectorized 2D gradient (Perlin) noise over a fixed permutation
table. The table is constant, so noise depends only on the sample
coordinates; seeds enter through the coordinate offsets chosen in
``fields.py``. Generated maps are only reproducible against this exact
function, so changing the table or gradients changes every map.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Ken Perlin's reference permutation
_PERMUTATION = np.array(
    [
        151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
        140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
        247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
        57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
        74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
        60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
        65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
        200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
        52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
        207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
        119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
        129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
        218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
        81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
        184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
        222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
    ],
    dtype=np.int64,
)

# Doubled so lookups of p[p[x] + y] never need wrapping
_PERM = np.concatenate([_PERMUTATION, _PERMUTATION])

_DIAGONAL = 1.0 / math.sqrt(2.0)

# Eight unit gradients at 45 degree steps
_GRADIENTS = np.array(
    [
        [1.0, 0.0],
        [-1.0, 0.0],
        [0.0, 1.0],
        [0.0, -1.0],
        [_DIAGONAL, _DIAGONAL],
        [-_DIAGONAL, _DIAGONAL],
        [_DIAGONAL, -_DIAGONAL],
        [-_DIAGONAL, -_DIAGONAL],
    ],
    dtype=np.float64,
)

# Unit-gradient 2D Perlin noise peaks at +/- sqrt(2)/2
_UNIT_RANGE_SCALE = math.sqrt(2.0)


def _fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """6t^5 - 15t^4 + 10t^3"""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(
    a: NDArray[np.float64], b: NDArray[np.float64], t: NDArray[np.float64]
) -> NDArray[np.float64]:
    return a + t * (b - a)


def _gradient_dot(
    hashed: NDArray[np.int64], dx: NDArray[np.float64], dy: NDArray[np.float64]
) -> NDArray[np.float64]:
    gradients = _GRADIENTS[hashed & 7]
    return gradients[..., 0] * dx + gradients[..., 1] * dy


def perlin_2d(x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Sample 2D Perlin noise at the given coordinates.

    Args:
        x: Sample x coordinates (any shape).
        y: Sample y coordinates, broadcastable against ``x``.

    Returns:
        Noise values in roughly [-0.71, 0.71], exactly 0 at integer lattice
        points.
    """
    x, y = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
    )

    x_floor = np.floor(x)
    y_floor = np.floor(y)
    xf = x - x_floor
    yf = y - y_floor

    xi = x_floor.astype(np.int64) & 255
    yi = y_floor.astype(np.int64) & 255

    u = _fade(xf)
    v = _fade(yf)

    h00 = _PERM[_PERM[xi] + yi]
    h01 = _PERM[_PERM[xi] + yi + 1]
    h10 = _PERM[_PERM[xi + 1] + yi]
    h11 = _PERM[_PERM[xi + 1] + yi + 1]

    g00 = _gradient_dot(h00, xf, yf)
    g10 = _gradient_dot(h10, xf - 1.0, yf)
    g01 = _gradient_dot(h01, xf, yf - 1.0)
    g11 = _gradient_dot(h11, xf - 1.0, yf - 1.0)

    return _lerp(_lerp(g00, g10, u), _lerp(g01, g11, u), v)


def perlin_unit(x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Sample Perlin noise remapped to [0, 1] (0.5 at lattice points)."""
    raw = perlin_2d(x, y)
    return np.clip((raw * _UNIT_RANGE_SCALE + 1.0) * 0.5, 0.0, 1.0)


def sample_noise_field(
    width: int,
    height: int,
    scale: float,
    offset_x: float,
    offset_y: float,
) -> NDArray[np.float64]:
    """Sample a full grid of unit noise.

    Cell ``(x, y)`` reads noise at ``((x + offset_x) / scale,
    (y + offset_y) / scale)``.

    Args:
        width: Grid width in cells.
        height: Grid height in cells.
        scale: Noise wavelength in cells (floored at 0.0001).
        offset_x: Horizontal sample offset.
        offset_y: Vertical sample offset.

    Returns:
        Array of shape ``(height, width)`` with values in [0, 1].
    """
    s = max(0.0001, scale)
    xs = (np.arange(width, dtype=np.float64) + offset_x) / s
    ys = (np.arange(height, dtype=np.float64) + offset_y) / s
    return perlin_unit(xs[np.newaxis, :], ys[:, np.newaxis])
