"""Apply one operator instance to a board state.

A move permutes the tiles along the instance's cycle and rotates each
moved tile (and the optional spin tile) by the operator's step count.
Rotation convention: ``rotation -= rotation_steps_cw * direction_sign``
(mod 6), so a move followed by the same move with the opposite sign is
the identity.
"""

from __future__ import annotations

from hexturn.engine.errors import MissingTileAtCellError
from hexturn.engine.models import AnchorInstance, MoveRecord, TileId
from hexturn.puzzle.state import ROTATION_STEPS, BoardState


def apply_move(
    state: BoardState,
    instance: AnchorInstance,
    direction_sign: int,
) -> list[TileId]:
    """Apply *instance* in place. Returns the tile ids whose pose changed.

    direction_sign is +1 (clockwise) or -1 (counter-clockwise). The tile at
    cycle position i moves to position (i + direction_sign) mod N.

    Raises MissingTileAtCellError before touching the state if any cycle or
    spin cell is empty.
    """
    if direction_sign not in (1, -1):
        raise ValueError(f"direction_sign must be 1 or -1, got {direction_sign}")

    cycle = instance.cells
    n = len(cycle)

    # Resolve everything first so a desync fails without partial mutation
    source_tiles: list[TileId] = []
    for key in cycle:
        tile_id = state.cell_to_tile.get(key)
        if tile_id is None:
            raise MissingTileAtCellError(key)
        source_tiles.append(tile_id)

    spin_tiles: list[TileId] = []
    for key in instance.spin_cells:
        tile_id = state.cell_to_tile.get(key)
        if tile_id is None:
            raise MissingTileAtCellError(key)
        spin_tiles.append(tile_id)

    delta = -instance.rotation_steps_cw * direction_sign

    for i, tile_id in enumerate(source_tiles):
        dest = cycle[(i + direction_sign) % n]
        state.cell_to_tile[dest] = tile_id
        state.tile_to_cell[tile_id] = dest
        state.tile_rotation[tile_id] = (state.tile_rotation.get(tile_id, 0) + delta) % ROTATION_STEPS

    for tile_id in spin_tiles:
        state.tile_rotation[tile_id] = (state.tile_rotation.get(tile_id, 0) + delta) % ROTATION_STEPS

    changed: list[TileId] = []
    for tile_id in source_tiles + spin_tiles:
        if tile_id not in changed:
            changed.append(tile_id)
    return changed


def inverse_move(record: MoveRecord) -> MoveRecord:
    """Return the move that undoes *record*."""
    return record.model_copy(update={"direction_sign": -record.direction_sign})
