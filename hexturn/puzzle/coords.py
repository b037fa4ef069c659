"""Hex coordinate system for the puzzle board.

Cells are (q, r) pairs laid out in pointy-top rows. Even rows are shifted
right by half a hex width, so neighbor offsets depend on row parity. The
direction index 0-5 defined here is shared by operator definitions,
vertex generation and hover outlines.
"""

from __future__ import annotations

import math

from hexturn.engine.models import Cell, CellKey, WorldPoint

SQRT3 = math.sqrt(3)

# Direction index -> (dq, dr). Index 0 is east, then counter-clockwise on screen.
EVEN_ROW_OFFSETS: list[tuple[int, int]] = [
    (1, 0), (1, -1), (0, -1), (-1, 0), (0, 1), (1, 1),
]
ODD_ROW_OFFSETS: list[tuple[int, int]] = [
    (1, 0), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1),
]


def cell_key(q: int, r: int) -> CellKey:
    return CellKey(f"{q},{r}")


def parse_cell_key(key: str) -> Cell:
    q, r = key.split(",")
    return int(q), int(r)


def neighbor_cell(cell: Cell, direction: int) -> Cell:
    """Return the neighbor of *cell* in direction 0..5 (wraps modulo 6)."""
    q, r = cell
    offsets = EVEN_ROW_OFFSETS if r % 2 == 0 else ODD_ROW_OFFSETS
    dq, dr = offsets[direction % 6]
    return q + dq, r + dr


def hex_neighbors(cell: Cell) -> list[Cell]:
    """Return the 6 neighbors of *cell* in direction order."""
    return [neighbor_cell(cell, d) for d in range(6)]


def hex_corner_offsets(tile_size: float) -> list[WorldPoint]:
    """Six corner offsets at 30 + 60*i degrees, radius *tile_size*.

    The 30-degree phase makes the polygon width and height match the row
    spacing used by world_from_cell.
    """
    corners: list[WorldPoint] = []
    for i in range(6):
        angle = math.pi / 3 * i + math.pi / 6
        corners.append(WorldPoint(
            x=tile_size * math.cos(angle),
            y=tile_size * math.sin(angle),
        ))
    return corners


def world_from_cell(cell: Cell, tile_size: float, origin: WorldPoint) -> WorldPoint:
    q, r = cell
    hex_width = SQRT3 * tile_size
    row_offset_x = hex_width / 2 if r % 2 == 0 else 0.0
    return WorldPoint(
        x=origin.x + q * hex_width + row_offset_x,
        y=origin.y + r * 1.5 * tile_size,
    )


def cell_corners(cell: Cell, tile_size: float, origin: WorldPoint) -> list[WorldPoint]:
    center = world_from_cell(cell, tile_size, origin)
    return [
        WorldPoint(x=center.x + c.x, y=center.y + c.y)
        for c in hex_corner_offsets(tile_size)
    ]


def _row_letter(row: int) -> str:
    if row < 26:
        return chr(65 + row)
    return chr(64 + row // 26) + chr(65 + row % 26)


def cell_label(cell: Cell) -> str:
    """Display label: row letter + 1-based column, e.g. (0, 0) -> "A1"."""
    q, r = cell
    return f"{_row_letter(r)}{q + 1}"
