"""Tests for the hex coordinate system."""

from __future__ import annotations

import math

import pytest

from hexturn.engine.models import WorldPoint
from hexturn.puzzle.coords import (
    SQRT3,
    cell_key,
    cell_label,
    hex_corner_offsets,
    hex_neighbors,
    neighbor_cell,
    parse_cell_key,
    world_from_cell,
)

ORIGIN = WorldPoint(x=0.0, y=0.0)


class TestCellKey:
    def test_format(self) -> None:
        assert cell_key(3, 5) == "3,5"

    def test_round_trip_including_negatives(self) -> None:
        for q in range(-4, 5):
            for r in range(-4, 5):
                assert parse_cell_key(cell_key(q, r)) == (q, r)

    def test_distinct_cells_distinct_keys(self) -> None:
        keys = {cell_key(q, r) for q in range(-10, 10) for r in range(-10, 10)}
        assert len(keys) == 400

    @pytest.mark.parametrize("bad", ["1", "a,b", "1,2,3", ""])
    def test_malformed_key_rejected(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_cell_key(bad)


class TestNeighbors:
    def test_even_row_offsets(self) -> None:
        assert hex_neighbors((2, 2)) == [(3, 2), (3, 1), (2, 1), (1, 2), (2, 3), (3, 3)]

    def test_odd_row_offsets(self) -> None:
        assert hex_neighbors((2, 1)) == [(3, 1), (2, 0), (1, 0), (1, 1), (1, 2), (2, 2)]

    def test_direction_wraps(self) -> None:
        assert neighbor_cell((2, 1), 6) == neighbor_cell((2, 1), 0)
        assert neighbor_cell((2, 1), -1) == neighbor_cell((2, 1), 5)

    def test_opposite_direction_returns(self) -> None:
        for cell in [(0, 0), (3, 1), (2, 4), (5, 7)]:
            for d in range(6):
                assert neighbor_cell(neighbor_cell(cell, d), d + 3) == cell

    def test_neighbors_are_one_hex_width_away(self) -> None:
        tile_size = 10.0
        for r in range(4):
            for q in range(4):
                center = world_from_cell((q, r), tile_size, ORIGIN)
                for n in hex_neighbors((q, r)):
                    p = world_from_cell(n, tile_size, ORIGIN)
                    assert math.hypot(p.x - center.x, p.y - center.y) == pytest.approx(SQRT3 * tile_size)

    def test_directions_turn_the_same_way_in_both_rows(self) -> None:
        # Direction 1 is up-right, direction 2 up-left, regardless of parity
        for cell in [(2, 2), (2, 3)]:
            c = world_from_cell(cell, 1.0, ORIGIN)
            up_right = world_from_cell(neighbor_cell(cell, 1), 1.0, ORIGIN)
            up_left = world_from_cell(neighbor_cell(cell, 2), 1.0, ORIGIN)
            assert up_right.x > c.x and up_right.y < c.y
            assert up_left.x < c.x and up_left.y < c.y


class TestWorldFromCell:
    def test_even_row_is_shifted(self) -> None:
        p = world_from_cell((0, 0), 2.0, WorldPoint(x=10.0, y=20.0))
        assert p.x == pytest.approx(10.0 + SQRT3)
        assert p.y == pytest.approx(20.0)

    def test_odd_row_is_not_shifted(self) -> None:
        p = world_from_cell((1, 1), 2.0, WorldPoint(x=10.0, y=20.0))
        assert p.x == pytest.approx(10.0 + 2 * SQRT3)
        assert p.y == pytest.approx(23.0)


class TestHexCorners:
    def test_six_corners_on_circle(self) -> None:
        corners = hex_corner_offsets(4.0)
        assert len(corners) == 6
        for c in corners:
            assert math.hypot(c.x, c.y) == pytest.approx(4.0)

    def test_first_corner_at_30_degrees(self) -> None:
        first = hex_corner_offsets(1.0)[0]
        assert first.x == pytest.approx(SQRT3 / 2)
        assert first.y == pytest.approx(0.5)


class TestCellLabel:
    def test_first_cell(self) -> None:
        assert cell_label((0, 0)) == "A1"

    def test_diagonal(self) -> None:
        assert cell_label((1, 1)) == "B2"

    def test_double_letter_rows(self) -> None:
        assert cell_label((0, 25)) == "Z1"
        assert cell_label((0, 26)) == "AA1"
        assert cell_label((4, 27)) == "AB5"
