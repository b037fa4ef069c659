"""Random scrambles built from legal moves.

Every move is undone by the same instance with the opposite sign, so any
scramble is solvable by replaying the inverse sequence in reverse order.
"""

from __future__ import annotations

import logging
import random

from hexturn.engine.errors import UnknownOperatorIdError
from hexturn.engine.models import AnchorId, AnchorInstance, MoveRecord, OperatorId
from hexturn.puzzle.move import apply_move, inverse_move
from hexturn.puzzle.state import BoardState

logger = logging.getLogger(__name__)

InstanceIndex = dict[OperatorId, dict[AnchorId, AnchorInstance]]


def index_instances(instances_by_operator: dict[OperatorId, list[AnchorInstance]]) -> InstanceIndex:
    return {
        op_id: {inst.anchor_id: inst for inst in instances}
        for op_id, instances in instances_by_operator.items()
    }


def lookup_instance(index: InstanceIndex, operator_id: OperatorId, anchor_id: str) -> AnchorInstance:
    by_anchor = index.get(operator_id)
    if by_anchor is None:
        raise UnknownOperatorIdError(operator_id.value, f"Operator not available: {operator_id.value}")
    instance = by_anchor.get(AnchorId(anchor_id))
    if instance is None:
        raise UnknownOperatorIdError(
            operator_id.value, f"Unknown anchor {anchor_id} for operator {operator_id.value}",
        )
    return instance


def scramble_state(
    state: BoardState,
    instances_by_operator: dict[OperatorId, list[AnchorInstance]],
    num_moves: int,
    rng: random.Random | None = None,
    enabled_operators: list[OperatorId] | None = None,
) -> list[MoveRecord]:
    """Apply *num_moves* random moves to *state* in place.

    Each move picks an operator uniformly among the enabled ones that have
    at least one instance, then a uniform instance and a random sign. The
    applied moves are returned so a caller can replay their inverse.
    """
    rng = rng or random.Random()
    enabled = enabled_operators if enabled_operators is not None else list(instances_by_operator)
    operators = [op_id for op_id in enabled if instances_by_operator.get(op_id)]

    if not operators:
        if num_moves > 0:
            logger.warning("Scramble requested but no enabled operator has instances on this grid")
        return []

    records: list[MoveRecord] = []
    for _ in range(num_moves):
        op_id = rng.choice(operators)
        instance = rng.choice(instances_by_operator[op_id])
        sign = rng.choice((1, -1))
        apply_move(state, instance, sign)
        logger.debug(f"Scramble move {op_id.value} {instance.anchor_id} sign={sign:+d}")
        records.append(MoveRecord(
            operator_id=op_id,
            anchor_id=instance.anchor_id,
            direction_sign=sign,
        ))

    logger.info(f"Scrambled board with {len(records)} moves over {len(operators)} operators")
    return records


def unscramble(
    state: BoardState,
    records: list[MoveRecord],
    instances_by_operator: dict[OperatorId, list[AnchorInstance]],
) -> None:
    """Undo *records* by applying each inverse move in reverse order."""
    index = index_instances(instances_by_operator)
    for record in reversed(records):
        undo = inverse_move(record)
        instance = lookup_instance(index, undo.operator_id, undo.anchor_id)
        apply_move(state, instance, undo.direction_sign)
