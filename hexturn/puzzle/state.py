"""Board state: which tile sits in which cell, and how it is rotated.

Tile identity is the key of the tile's home cell, so the solved board is
the identity mapping with every rotation at 0.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from hexturn.engine.models import CellKey, TileId
from hexturn.puzzle.grid import HexGrid

ROTATION_STEPS = 6  # 60-degree units per full turn


@dataclass
class BoardState:
    """Mutable cell <-> tile bijection plus per-tile rotation and home cell."""

    cell_to_tile: dict[CellKey, TileId] = field(default_factory=dict)
    tile_to_cell: dict[TileId, CellKey] = field(default_factory=dict)
    tile_rotation: dict[TileId, int] = field(default_factory=dict)
    tile_home_cell: dict[TileId, CellKey] = field(default_factory=dict)


def create_solved_state(grid: HexGrid) -> BoardState:
    state = BoardState()
    for key in grid.cell_keys():
        tile_id = TileId(key)
        state.cell_to_tile[key] = tile_id
        state.tile_to_cell[tile_id] = key
        state.tile_rotation[tile_id] = 0
        state.tile_home_cell[tile_id] = key
    return state


def is_solved(state: BoardState) -> bool:
    for tile_id, home in state.tile_home_cell.items():
        if state.tile_to_cell.get(tile_id) != home:
            return False
        if state.tile_rotation.get(tile_id, 0) != 0:
            return False
    return True


def clone_state(state: BoardState) -> BoardState:
    return copy.deepcopy(state)


def validate_board_state(state: BoardState, grid: HexGrid) -> list[str]:
    """Run invariant checks on a state. Returns list of errors (empty = OK)."""
    errors: list[str] = []
    grid_keys = set(grid.cell_keys())

    if set(state.cell_to_tile) != grid_keys:
        errors.append("cell_to_tile keys do not match the grid cells")

    if len(state.tile_to_cell) != len(state.cell_to_tile):
        errors.append(
            f"tile_to_cell has {len(state.tile_to_cell)} entries, "
            f"cell_to_tile has {len(state.cell_to_tile)}"
        )

    for cell, tile_id in state.cell_to_tile.items():
        if state.tile_to_cell.get(tile_id) != cell:
            errors.append(f"Tile {tile_id} in cell {cell} maps back to {state.tile_to_cell.get(tile_id)}")

    for tile_id, rotation in state.tile_rotation.items():
        if not isinstance(rotation, int) or not 0 <= rotation < ROTATION_STEPS:
            errors.append(f"Tile {tile_id} has rotation {rotation} outside [0, {ROTATION_STEPS})")

    tiles = set(state.tile_to_cell)
    if set(state.tile_rotation) != tiles:
        errors.append("tile_rotation keys do not match the tile set")
    if set(state.tile_home_cell) != tiles:
        errors.append("tile_home_cell keys do not match the tile set")
    elif sorted(state.tile_home_cell.values()) != sorted(grid_keys):
        errors.append("home cells do not cover the grid exactly once")

    return errors
