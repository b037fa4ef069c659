"""Move operator catalog and anchor instance generation.

Four operators rotate groups of tiles around a pivot:

- ring6_60:      the 6 neighbors of a cell, 60 degrees per step
- alt3_even_120: neighbors in directions 0, 2, 4; the center spins in place
- alt3_odd_120:  neighbors in directions 1, 3, 5; the center spins in place
- vertex3_120:   the 3 cells meeting at one hex vertex

An instance is only emitted when every cell it touches is on the grid.
Edge pivots with missing cells are skipped.
"""

from __future__ import annotations

import itertools
import math
from typing import Callable

from hexturn.engine.errors import DegenerateVertexAnchorError, UnknownOperatorIdError
from hexturn.engine.models import (
    AnchorId,
    AnchorInstance,
    Cell,
    OperatorDef,
    OperatorId,
    WorldPoint,
)
from hexturn.puzzle.coords import cell_corners, cell_key, neighbor_cell, world_from_cell
from hexturn.puzzle.grid import HexGrid

OPERATOR_DEFS: list[OperatorDef] = [
    OperatorDef(id=OperatorId.RING6, rotation_steps_cw=1, cycle_length=6, label="Ring of 6"),
    OperatorDef(id=OperatorId.ALT3_EVEN, rotation_steps_cw=2, cycle_length=3, spins_anchor=True, label="Alternate 3 (even)"),
    OperatorDef(id=OperatorId.ALT3_ODD, rotation_steps_cw=2, cycle_length=3, spins_anchor=True, label="Alternate 3 (odd)"),
    OperatorDef(id=OperatorId.VERTEX3, rotation_steps_cw=2, cycle_length=3, label="Vertex triad"),
]
"""Fixed catalog order; also the keyboard digit order (1-4)."""

_DEFS_BY_ID: dict[OperatorId, OperatorDef] = {d.id: d for d in OPERATOR_DEFS}

_CELL_OPERATOR_DIRECTIONS: dict[OperatorId, list[int]] = {
    OperatorId.RING6: [0, 1, 2, 3, 4, 5],
    OperatorId.ALT3_EVEN: [0, 2, 4],
    OperatorId.ALT3_ODD: [1, 3, 5],
}

_ANCHOR_SUFFIX: dict[OperatorId, str] = {
    OperatorId.ALT3_EVEN: ":even",
    OperatorId.ALT3_ODD: ":odd",
}


def get_operator_defs() -> list[OperatorDef]:
    return list(OPERATOR_DEFS)


def resolve_operator_id(operator_id: OperatorId | str) -> OperatorId:
    """Coerce a string id to an OperatorId, raising UnknownOperatorIdError."""
    if isinstance(operator_id, OperatorId):
        return operator_id
    try:
        return OperatorId(operator_id)
    except ValueError:
        raise UnknownOperatorIdError(str(operator_id)) from None


def get_operator_def(operator_id: OperatorId | str) -> OperatorDef:
    return _DEFS_BY_ID[resolve_operator_id(operator_id)]


def build_anchor_instances(
    grid: HexGrid,
    operator_id: OperatorId | str,
    tile_size: float = 1.0,
    origin: WorldPoint | None = None,
) -> list[AnchorInstance]:
    """Enumerate every valid pivot of one operator over *grid*.

    *tile_size* and *origin* only affect ``anchor_world``; the cycles are a
    function of the grid topology alone.
    """
    op = get_operator_def(operator_id)
    origin = origin or WorldPoint(x=0.0, y=0.0)
    builder = _BUILDERS[op.id]
    return builder(grid, op, tile_size, origin)


def build_all_anchor_instances(
    grid: HexGrid,
    operator_ids: list[OperatorId] | None = None,
    tile_size: float = 1.0,
    origin: WorldPoint | None = None,
) -> dict[OperatorId, list[AnchorInstance]]:
    ids = operator_ids if operator_ids is not None else [d.id for d in OPERATOR_DEFS]
    return {
        resolve_operator_id(op_id): build_anchor_instances(grid, op_id, tile_size, origin)
        for op_id in ids
    }


def _build_cell_instances(
    grid: HexGrid,
    op: OperatorDef,
    tile_size: float,
    origin: WorldPoint,
) -> list[AnchorInstance]:
    directions = _CELL_OPERATOR_DIRECTIONS[op.id]
    suffix = _ANCHOR_SUFFIX.get(op.id, "")
    instances: list[AnchorInstance] = []

    for anchor in grid.cells:
        targets = [neighbor_cell(anchor, d) for d in directions]
        if not grid.has_all(targets):
            continue
        anchor_key = cell_key(*anchor)
        instances.append(AnchorInstance(
            operator_id=op.id,
            anchor_id=AnchorId(f"cell:{anchor_key}{suffix}"),
            anchor_world=world_from_cell(anchor, tile_size, origin),
            cells=[cell_key(*c) for c in targets],
            spin_cells=[anchor_key] if op.spins_anchor else [],
            rotation_steps_cw=op.rotation_steps_cw,
        ))

    return instances


def _build_vertex_instances(
    grid: HexGrid,
    op: OperatorDef,
    tile_size: float,
    origin: WorldPoint,
) -> list[AnchorInstance]:
    instances: list[AnchorInstance] = []
    seen: set[str] = set()

    for cell_a in grid.cells:
        for d in range(6):
            cell_b = neighbor_cell(cell_a, d)
            cell_d = neighbor_cell(cell_a, (d + 1) % 6)
            if not grid.has_all([cell_a, cell_b, cell_d]):
                continue

            # Each vertex is reachable from all three of its cells; the
            # sorted keys identify it, the discovery order is the cycle.
            keys = [cell_key(*c) for c in (cell_a, cell_b, cell_d)]
            anchor_id = "vtx:" + "|".join(sorted(keys))
            if anchor_id in seen:
                continue
            seen.add(anchor_id)

            instances.append(AnchorInstance(
                operator_id=op.id,
                anchor_id=AnchorId(anchor_id),
                anchor_world=shared_vertex_world(cell_a, cell_b, cell_d, tile_size, origin),
                cells=keys,
                rotation_steps_cw=op.rotation_steps_cw,
            ))

    return instances


def shared_vertex_world(
    cell_a: Cell,
    cell_b: Cell,
    cell_d: Cell,
    tile_size: float,
    origin: WorldPoint,
) -> WorldPoint:
    """Centroid of the corner triple (one corner per cell) that lies closest together.

    Brute force over 6x6x6 corner combinations, scored by the largest
    pairwise distance. Ties keep the first combination found.
    """
    corners = [cell_corners(c, tile_size, origin) for c in (cell_a, cell_b, cell_d)]
    best: tuple[float, WorldPoint] | None = None

    for pa, pb, pd in itertools.product(*corners):
        score = max(
            math.hypot(pa.x - pb.x, pa.y - pb.y),
            math.hypot(pa.x - pd.x, pa.y - pd.y),
            math.hypot(pb.x - pd.x, pb.y - pd.y),
        )
        if best is None or score < best[0]:
            best = (score, WorldPoint(
                x=(pa.x + pb.x + pd.x) / 3,
                y=(pa.y + pb.y + pd.y) / 3,
            ))

    if best is None:
        raise DegenerateVertexAnchorError([cell_key(*c) for c in (cell_a, cell_b, cell_d)])
    return best[1]


_BUILDERS: dict[OperatorId, Callable[[HexGrid, OperatorDef, float, WorldPoint], list[AnchorInstance]]] = {
    OperatorId.RING6: _build_cell_instances,
    OperatorId.ALT3_EVEN: _build_cell_instances,
    OperatorId.ALT3_ODD: _build_cell_instances,
    OperatorId.VERTEX3: _build_vertex_instances,
}
