from __future__ import annotations

from enum import Enum
from typing import Literal, NewType

from pydantic import BaseModel, Field

# --- Identifiers ---
CellKey = NewType("CellKey", str)
TileId = NewType("TileId", str)
AnchorId = NewType("AnchorId", str)

Cell = tuple[int, int]  # (q, r)
DirectionSign = Literal[1, -1]

# --- Geometry ---
class WorldPoint(BaseModel):
    x: float
    y: float

class Rect(BaseModel):
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> WorldPoint:
        return WorldPoint(x=self.x + self.width / 2, y=self.y + self.height / 2)

class GridBounds(BaseModel):
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    center_x: float
    center_y: float
    width: float
    height: float

# --- Operators ---
class OperatorId(str, Enum):
    RING6 = "ring6_60"
    ALT3_EVEN = "alt3_even_120"
    ALT3_ODD = "alt3_odd_120"
    VERTEX3 = "vertex3_120"

class OperatorDef(BaseModel):
    id: OperatorId
    rotation_steps_cw: int  # 60-degree units
    cycle_length: int
    spins_anchor: bool = False
    label: str = ""

class AnchorInstance(BaseModel):
    operator_id: OperatorId
    anchor_id: AnchorId
    anchor_world: WorldPoint
    cells: list[CellKey]  # ordered cycle
    spin_cells: list[CellKey] = Field(default_factory=list)
    rotation_steps_cw: int

# --- Moves ---
class MoveRecord(BaseModel):
    operator_id: OperatorId
    anchor_id: AnchorId
    direction_sign: DirectionSign

# --- Layout ---
class GridShape(BaseModel):
    grid_w: int
    grid_h: int
    cell_count: int
    board_aspect: float
    continuous_w: float | None = None
    continuous_h: float | None = None

class TileSizeResult(BaseModel):
    tile_size_px: float
    image_rect: Rect | None = None
