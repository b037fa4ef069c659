from __future__ import annotations

import pytest

from hexturn.engine.models import AnchorInstance, OperatorId
from hexturn.puzzle.grid import HexGrid, create_grid
from hexturn.puzzle.operators import build_all_anchor_instances
from hexturn.puzzle.state import BoardState, create_solved_state


@pytest.fixture
def grid_7x3() -> HexGrid:
    return create_grid(7, 3)


@pytest.fixture
def grid_8x9() -> HexGrid:
    return create_grid(8, 9)


@pytest.fixture
def solved_7x3(grid_7x3: HexGrid) -> BoardState:
    return create_solved_state(grid_7x3)


@pytest.fixture
def instances_7x3(grid_7x3: HexGrid) -> dict[OperatorId, list[AnchorInstance]]:
    return build_all_anchor_instances(grid_7x3)


@pytest.fixture
def instances_8x9(grid_8x9: HexGrid) -> dict[OperatorId, list[AnchorInstance]]:
    return build_all_anchor_instances(grid_8x9)
