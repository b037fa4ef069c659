from __future__ import annotations

import logging
import random

from hexturn.config import PuzzleSettings
from hexturn.engine.errors import PuzzleEngineError, SessionLockedError
from hexturn.engine.models import (
    AnchorInstance,
    GridShape,
    MoveRecord,
    OperatorId,
    Rect,
    TileId,
    WorldPoint,
)
from hexturn.puzzle.grid import HexGrid, center_origin, create_grid
from hexturn.puzzle.layout import derive_grid_shape, derive_tile_size
from hexturn.puzzle.move import apply_move
from hexturn.puzzle.operators import build_all_anchor_instances, resolve_operator_id
from hexturn.puzzle.scramble import InstanceIndex, index_instances, lookup_instance, scramble_state
from hexturn.puzzle.state import BoardState, create_solved_state, is_solved

logger = logging.getLogger(__name__)

# Pointer button -> direction sign: primary = counter-clockwise, secondary = clockwise
DIRECTION_BY_POINTER_BUTTON: dict[int, int] = {0: -1, 2: 1}


def direction_for_button(button: int) -> int | None:
    return DIRECTION_BY_POINTER_BUTTON.get(button)


class PuzzleSession:
    """
    Holds everything one puzzle session needs, in place of global state.

    Responsibilities:
    - Derive the grid shape from settings and the image/viewport aspect
    - Own the grid and the single BoardState (created solved, never replaced)
    - Rebuild tile size, origin and anchor instances on layout changes
    - Apply move requests, refusing them while the caller holds the lock
    """

    def __init__(
        self,
        settings: PuzzleSettings | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or PuzzleSettings()
        self.rng = rng or random.Random(self.settings.random_seed)
        self.shape: GridShape | None = None
        self.grid: HexGrid | None = None
        self.state: BoardState | None = None
        self.tile_size: float = 1.0
        self.origin = WorldPoint(x=0.0, y=0.0)
        self.image_rect: Rect | None = None
        self.locked = False
        self._instances: dict[OperatorId, list[AnchorInstance]] = {}
        self._index: InstanceIndex = {}

    # ------------------------------------------------------------------ #
    #  Setup
    # ------------------------------------------------------------------ #

    def start(
        self,
        viewport_width: float,
        viewport_height: float,
        image_width: float | None = None,
        image_height: float | None = None,
    ) -> None:
        """Derive the board, create the solved state and lay it out."""
        if self.state is not None:
            raise PuzzleEngineError("Session already started")

        if image_width and image_height:
            aspect = image_width / image_height
        else:
            aspect = viewport_width / viewport_height

        s = self.settings
        self.shape = derive_grid_shape(
            target_cell_count=s.target_cell_count,
            image_aspect=aspect,
            padding=s.padding_in_tile_units,
            h_range=(s.candidate_h_min, s.candidate_h_max),
            w_range=(s.candidate_w_min, s.candidate_w_max),
        )
        self.grid = create_grid(self.shape.grid_w, self.shape.grid_h)
        self.state = create_solved_state(self.grid)
        logger.info(f"Session started on {self.grid.width}x{self.grid.height} grid ({len(self.grid)} tiles)")

        self.relayout(viewport_width, viewport_height, image_width, image_height)

    def relayout(
        self,
        viewport_width: float,
        viewport_height: float,
        image_width: float | None = None,
        image_height: float | None = None,
    ) -> None:
        """Recompute tile size, origin and anchor instances. The board state is kept."""
        grid = self._require_grid()
        result = derive_tile_size(
            viewport_width=viewport_width,
            viewport_height=viewport_height,
            grid_w=grid.width,
            grid_h=grid.height,
            padding=self.settings.padding_in_tile_units,
            viewport_margin_px=self.settings.viewport_margin_px,
            image_width=image_width,
            image_height=image_height,
        )
        self.tile_size = result.tile_size_px
        self.image_rect = result.image_rect

        if self.image_rect is not None:
            target = self.image_rect.center
        else:
            target = WorldPoint(x=viewport_width / 2, y=viewport_height / 2)
        self.origin = center_origin(grid, self.tile_size, target)

        self._instances = build_all_anchor_instances(
            grid, self.settings.enabled_operators, self.tile_size, self.origin,
        )
        self._index = index_instances(self._instances)
        counts = ", ".join(f"{op.value}={len(v)}" for op, v in self._instances.items())
        logger.info(f"Layout: tile_size={self.tile_size:.2f} origin=({self.origin.x:.1f}, {self.origin.y:.1f}) [{counts}]")

    # ------------------------------------------------------------------ #
    #  Queries
    # ------------------------------------------------------------------ #

    def instances(self, operator_id: OperatorId | str) -> list[AnchorInstance]:
        op_id = resolve_operator_id(operator_id)
        return list(self._instances.get(op_id, []))

    def find_instance(self, operator_id: OperatorId | str, anchor_id: str) -> AnchorInstance:
        return lookup_instance(self._index, resolve_operator_id(operator_id), anchor_id)

    def is_solved(self) -> bool:
        return is_solved(self._require_state())

    # ------------------------------------------------------------------ #
    #  Mutation
    # ------------------------------------------------------------------ #

    def lock(self) -> None:
        self.locked = True

    def unlock(self) -> None:
        self.locked = False

    def request_move(
        self,
        operator_id: OperatorId | str,
        anchor_id: str,
        direction_sign: int,
    ) -> list[TileId]:
        """Apply one move. Returns the tile ids whose pose changed."""
        if self.locked:
            raise SessionLockedError("Move requested while session is locked")
        instance = self.find_instance(operator_id, anchor_id)
        return apply_move(self._require_state(), instance, direction_sign)

    def scramble(self, num_moves: int | None = None) -> list[MoveRecord]:
        moves = self.settings.scramble_moves if num_moves is None else num_moves
        return scramble_state(
            self._require_state(),
            self._instances,
            moves,
            rng=self.rng,
            enabled_operators=self.settings.enabled_operators,
        )

    def _require_grid(self) -> HexGrid:
        if self.grid is None:
            raise PuzzleEngineError("Session not started")
        return self.grid

    def _require_state(self) -> BoardState:
        if self.state is None:
            raise PuzzleEngineError("Session not started")
        return self.state
