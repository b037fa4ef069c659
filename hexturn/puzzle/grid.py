"""Playable cell set for a puzzle board.

Row r holds *width* cells when r is even and *width + 1* when odd, so an
odd height gives a symmetric board with no holes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hexturn.engine.errors import InvalidGridShapeError
from hexturn.engine.models import Cell, CellKey, GridBounds, WorldPoint
from hexturn.puzzle.coords import SQRT3, cell_key, world_from_cell


@dataclass(frozen=True)
class HexGrid:
    """Immutable board topology. Build with create_grid()."""

    width: int
    height: int
    cells: tuple[Cell, ...]
    _members: frozenset[Cell] = field(repr=False, compare=False)

    def has_cell(self, cell: Cell) -> bool:
        return cell in self._members

    def has_all(self, cells: list[Cell]) -> bool:
        return all(c in self._members for c in cells)

    def cell_keys(self) -> list[CellKey]:
        return [cell_key(q, r) for q, r in self.cells]

    def __len__(self) -> int:
        return len(self.cells)


def create_grid(width: int, height: int) -> HexGrid:
    if height % 2 == 0:
        raise InvalidGridShapeError(width, height)
    if width < 1 or height < 1:
        raise InvalidGridShapeError(
            width, height, f"Invalid grid shape {width}x{height}: dimensions must be positive",
        )

    cells: list[Cell] = []
    for r in range(height):
        row_length = width if r % 2 == 0 else width + 1
        for q in range(row_length):
            cells.append((q, r))

    return HexGrid(width=width, height=height, cells=tuple(cells), _members=frozenset(cells))


def get_cell_count(grid: HexGrid) -> int:
    return len(grid.cells)


def get_grid_bounds(grid: HexGrid, tile_size: float, origin: WorldPoint) -> GridBounds:
    """World-space bounding box of every cell's hex outline."""
    half_w = SQRT3 * tile_size / 2
    half_h = tile_size
    min_x = min_y = float("inf")
    max_x = max_y = float("-inf")

    for cell in grid.cells:
        center = world_from_cell(cell, tile_size, origin)
        min_x = min(min_x, center.x - half_w)
        max_x = max(max_x, center.x + half_w)
        min_y = min(min_y, center.y - half_h)
        max_y = max(max_y, center.y + half_h)

    return GridBounds(
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        center_x=(min_x + max_x) / 2,
        center_y=(min_y + max_y) / 2,
        width=max_x - min_x,
        height=max_y - min_y,
    )


def center_origin(grid: HexGrid, tile_size: float, center: WorldPoint) -> WorldPoint:
    """Board origin that puts the grid's bounding-box center on *center*."""
    bounds = get_grid_bounds(grid, tile_size, WorldPoint(x=0.0, y=0.0))
    return WorldPoint(x=center.x - bounds.center_x, y=center.y - bounds.center_y)
