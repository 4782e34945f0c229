"""Tests for odd-r hex grid math."""

import numpy as np
import pytest

from worldmap.hexgrid import (
    EVEN_ROW_OFFSETS,
    ODD_ROW_OFFSETS,
    axial_to_offset_odd_r,
    count_neighbors,
    hex_distance,
    neighbor_offsets,
    neighbors,
    neighbors_in_bounds,
    offset_distance,
    offset_to_axial_odd_r,
)


class TestNeighborTables:
    """Tests for the parity-dependent neighbor tables."""

    def test_even_row_uses_even_table(self) -> None:
        assert neighbor_offsets(0) is EVEN_ROW_OFFSETS
        assert neighbor_offsets(4) is EVEN_ROW_OFFSETS

    def test_odd_row_uses_odd_table(self) -> None:
        assert neighbor_offsets(1) is ODD_ROW_OFFSETS
        assert neighbor_offsets(7) is ODD_ROW_OFFSETS

    def test_even_row_neighbors(self) -> None:
        """Even rows lean left on the rows above and below."""
        assert neighbors(3, 2) == (
            (4, 2), (2, 2), (3, 1), (2, 1), (3, 3), (2, 3),
        )

    def test_odd_row_neighbors(self) -> None:
        """Odd rows lean right on the rows above and below."""
        assert neighbors(3, 3) == (
            (4, 3), (2, 3), (4, 2), (3, 2), (4, 4), (3, 4),
        )

    def test_adjacency_is_symmetric(self) -> None:
        """If b neighbors a then a neighbors b."""
        width, height = 7, 6
        for y in range(height):
            for x in range(width):
                for nx, ny in neighbors_in_bounds(x, y, width, height):
                    assert (x, y) in set(neighbors_in_bounds(nx, ny, width, height))

    def test_neighbors_are_one_hop_away(self) -> None:
        for y in range(4):
            for x in range(4):
                for nx, ny in neighbors(x, y):
                    assert offset_distance((x, y), (nx, ny)) == 1


class TestNeighborsInBounds:
    """Tests for bounded neighbor iteration."""

    def test_interior_cell_has_six(self) -> None:
        assert len(list(neighbors_in_bounds(2, 2, 5, 5))) == 6

    def test_corner_cell_clipped(self) -> None:
        """(0, 0) on an even row only reaches right and down."""
        assert list(neighbors_in_bounds(0, 0, 5, 5)) == [(1, 0), (0, 1)]

    def test_order_follows_table(self) -> None:
        assert list(neighbors_in_bounds(3, 3, 10, 10)) == list(neighbors(3, 3))


class TestCountNeighbors:
    """Tests for vectorized neighbor counting."""

    def test_matches_loop(self) -> None:
        """Vectorized counts equal a direct loop over neighbors_in_bounds."""
        rng = np.random.default_rng(7)
        mask = rng.random((9, 11)) > 0.5
        height, width = mask.shape

        expected = np.zeros((height, width), dtype=np.int32)
        for y in range(height):
            for x in range(width):
                expected[y, x] = sum(
                    int(mask[ny, nx])
                    for nx, ny in neighbors_in_bounds(x, y, width, height)
                )

        np.testing.assert_array_equal(count_neighbors(mask), expected)

    def test_full_mask_interior_is_six(self) -> None:
        counts = count_neighbors(np.ones((5, 5), dtype=bool))
        assert counts[2, 2] == 6
        assert counts[0, 0] == 2

    def test_empty_mask(self) -> None:
        counts = count_neighbors(np.zeros((4, 4), dtype=bool))
        assert counts.sum() == 0
        assert counts.dtype == np.int32

    def test_single_row(self) -> None:
        counts = count_neighbors(np.ones((1, 4), dtype=bool))
        np.testing.assert_array_equal(counts, [[1, 2, 2, 1]])


class TestAxialConversion:
    """Tests for odd-r offset to axial conversion."""

    @pytest.mark.parametrize(
        "offset,axial",
        [
            ((0, 0), (0, 0)),
            ((3, 2), (2, 2)),
            ((3, 3), (2, 3)),
            ((0, 1), (0, 1)),
            ((0, 2), (-1, 2)),
            ((5, 7), (2, 7)),
        ],
    )
    def test_known_values(self, offset: tuple[int, int], axial: tuple[int, int]) -> None:
        assert offset_to_axial_odd_r(*offset) == axial

    def test_matches_formula_for_both_parities(self) -> None:
        for y in range(8):
            for x in range(8):
                q, r = offset_to_axial_odd_r(x, y)
                assert q == x - (y - (y & 1)) // 2
                assert r == y

    def test_inverse(self) -> None:
        for y in range(6):
            for x in range(6):
                assert axial_to_offset_odd_r(*offset_to_axial_odd_r(x, y)) == (x, y)


class TestHexDistance:
    """Tests for hex-hop distance."""

    def test_zero_to_self(self) -> None:
        assert hex_distance((2, 3), (2, 3)) == 0

    def test_straight_line(self) -> None:
        assert hex_distance((0, 0), (4, 0)) == 4

    def test_diagonal(self) -> None:
        assert hex_distance((0, 0), (2, -1)) == 2

    def test_offset_distance_across_rows(self) -> None:
        assert offset_distance((0, 0), (2, 2)) == 3
