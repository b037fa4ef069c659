"""Tests for grid shape and tile size derivation."""

from __future__ import annotations

import pytest

from hexturn.engine.errors import UnresolvableGridShapeError
from hexturn.puzzle.coords import SQRT3
from hexturn.puzzle.layout import (
    board_aspect,
    cells_for_shape,
    derive_grid_shape,
    derive_tile_size,
    get_contain_rect,
    padded_height,
    padded_width,
    solve_continuous_shape,
)


class TestShapeFormulas:
    def test_cells_for_shape(self) -> None:
        assert cells_for_shape(7, 3) == 22
        assert cells_for_shape(8, 9) == 76
        assert cells_for_shape(1, 1) == 1

    def test_padded_dimensions(self) -> None:
        assert padded_width(8, 0.5) == pytest.approx(SQRT3 * 9 + 1)
        assert padded_height(9, 0.5) == pytest.approx(15.0)
        assert board_aspect(8, 9, 0.5) == pytest.approx((SQRT3 * 9 + 1) / 15)


class TestContinuousShape:
    def test_root_satisfies_both_targets(self) -> None:
        w, h = solve_continuous_shape(75, 1.5, 0.5)
        assert h > 0
        assert w * h + (h - 1) / 2 == pytest.approx(75)
        assert board_aspect(w, h, 0.5) == pytest.approx(1.5)

    def test_portrait_image(self) -> None:
        w, h = solve_continuous_shape(120, 0.6, 0.0)
        assert board_aspect(w, h, 0.0) == pytest.approx(0.6)


class TestDeriveGridShape:
    def test_regression_value(self) -> None:
        shape = derive_grid_shape(target_cell_count=75, image_aspect=1.5, padding=0.5)
        assert (shape.grid_w, shape.grid_h) == (8, 9)
        assert shape.cell_count == 76
        assert shape.board_aspect == pytest.approx(board_aspect(8, 9, 0.5))
        assert shape.continuous_h == pytest.approx(7.54, abs=0.01)

    def test_result_is_optimal(self) -> None:
        shape = derive_grid_shape(75, 1.5, 0.5)
        best = (abs(shape.cell_count - 75), abs(shape.board_aspect - 1.5))
        for h in range(3, 36, 2):
            for w in range(1, 51):
                candidate = (abs(cells_for_shape(w, h) - 75), abs(board_aspect(w, h, 0.5) - 1.5))
                assert best <= candidate

    def test_height_always_odd(self) -> None:
        for n in (10, 37, 75, 200, 500):
            for ar in (0.5, 1.0, 1.78):
                assert derive_grid_shape(n, ar, 0.5).grid_h % 2 == 1

    def test_exact_count_preferred(self) -> None:
        # 5x3 -> 16 cells exactly
        shape = derive_grid_shape(16, board_aspect(5, 3, 0.0), 0.0)
        assert (shape.grid_w, shape.grid_h) == (5, 3)

    def test_empty_search_space(self) -> None:
        with pytest.raises(UnresolvableGridShapeError):
            derive_grid_shape(75, 1.5, 0.5, h_range=(5, 3))


class TestContainRect:
    def test_wide_image_in_square(self) -> None:
        rect = get_contain_rect(200, 100, 400, 400)
        assert rect.width == pytest.approx(400)
        assert rect.height == pytest.approx(200)
        assert rect.x == pytest.approx(0)
        assert rect.y == pytest.approx(100)


class TestDeriveTileSize:
    def test_viewport_only(self) -> None:
        result = derive_tile_size(1000, 800, grid_w=8, grid_h=9, padding=0.5)
        assert result.tile_size_px == pytest.approx(800 / 15)
        assert result.image_rect is None

    def test_image_constrains(self) -> None:
        result = derive_tile_size(
            1000, 800, grid_w=8, grid_h=9, padding=0.5,
            image_width=1500, image_height=1000,
        )
        assert result.image_rect is not None
        assert result.image_rect.height == pytest.approx(2000 / 3)
        assert result.image_rect.y == pytest.approx(200 / 3)
        assert result.tile_size_px == pytest.approx((2000 / 3) / 15)

    def test_margin_offsets_image_rect(self) -> None:
        result = derive_tile_size(
            1000, 800, grid_w=8, grid_h=9, padding=0.5, viewport_margin_px=20,
            image_width=960, image_height=760,
        )
        assert result.image_rect is not None
        assert result.image_rect.x == pytest.approx(20)
        assert result.image_rect.y == pytest.approx(20)
        assert result.image_rect.width == pytest.approx(960)

    def test_clamped_to_one(self) -> None:
        result = derive_tile_size(10, 10, grid_w=50, grid_h=35, padding=0.5)
        assert result.tile_size_px == 1.0
