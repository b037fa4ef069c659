"""CLI for checking scrambles on a derived board.

Usage::

    python -m hexturn.engine.scramble_cli --cells 75 --aspect 1.5 --moves 40

    # Only ring and vertex moves, fixed seed
    python -m hexturn.engine.scramble_cli --operators ring6_60 vertex3_120 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
import sys

from hexturn.config import PuzzleSettings
from hexturn.engine.errors import PuzzleEngineError
from hexturn.engine.models import OperatorId
from hexturn.puzzle.grid import create_grid
from hexturn.puzzle.layout import derive_grid_shape
from hexturn.puzzle.operators import build_all_anchor_instances, get_operator_def
from hexturn.puzzle.scramble import scramble_state, unscramble
from hexturn.puzzle.state import create_solved_state, is_solved, validate_board_state


def main(argv: list[str] | None = None) -> int:
    settings = PuzzleSettings()

    parser = argparse.ArgumentParser(description="Scramble a hex puzzle board and verify it unscrambles")
    parser.add_argument("--cells", type=int, default=settings.target_cell_count)
    parser.add_argument("--aspect", type=float, default=1.5, help="Image aspect ratio (width / height)")
    parser.add_argument("--padding", type=float, default=settings.padding_in_tile_units)
    parser.add_argument("--moves", type=int, default=settings.scramble_moves)
    parser.add_argument("--seed", type=int, default=settings.random_seed)
    parser.add_argument(
        "--operators",
        nargs="+",
        default=[op.value for op in settings.enabled_operators],
        choices=[op.value for op in OperatorId],
    )
    parser.add_argument("--log-level", default=settings.log_level)
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    try:
        shape = derive_grid_shape(args.cells, args.aspect, args.padding)
        grid = create_grid(shape.grid_w, shape.grid_h)
        operators = [OperatorId(op) for op in args.operators]
        instances = build_all_anchor_instances(grid, operators)

        print(f"Grid: {shape.grid_w}x{shape.grid_h}, {shape.cell_count} cells, aspect {shape.board_aspect:.3f}")
        for op_id, op_instances in instances.items():
            print(f"  {get_operator_def(op_id).label:>20s}: {len(op_instances)} anchors")

        state = create_solved_state(grid)
        records = scramble_state(state, instances, args.moves, rng=random.Random(args.seed))
        print(f"Scrambled with {len(records)} moves, solved={is_solved(state)}")

        unscramble(state, records, instances)
    except PuzzleEngineError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    errors = validate_board_state(state, grid)
    for err in errors:
        print(f"  invariant: {err}", file=sys.stderr)

    solved = is_solved(state)
    print(f"Inverse replay solved={solved}")
    return 0 if solved and not errors else 1


if __name__ == "__main__":
    sys.exit(main())
