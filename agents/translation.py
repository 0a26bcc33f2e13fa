"""
Translation of abstract actions into host primitives.

A failure affects only the unit concerned: its command is logged and
dropped while the rest of the joint action goes through.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Union

from infra.logger import get_logger
from skirmish.core.actions import Action
from skirmish.core.errors import ActionTranslationError
from skirmish.core.types import ActionType, MoveDir
from skirmish.world.snapshot import WorldSnapshot

log = get_logger(__name__)


@dataclass(frozen=True)
class PrimitiveMove:
    """Host command: move one cell in a cardinal direction."""
    unit_id: int
    direction: MoveDir

    def __str__(self) -> str:
        return f"move #{self.unit_id} {self.direction.name}"


@dataclass(frozen=True)
class PrimitiveAttack:
    """Host command: basic attack against a target unit."""
    unit_id: int
    target_id: int

    def __str__(self) -> str:
        return f"attack #{self.unit_id} -> #{self.target_id}"


Primitive = Union[PrimitiveMove, PrimitiveAttack]


def direction_between(src: Iterable[int], dst: Iterable[int]) -> MoveDir:
    """
    Cardinal direction of a one-cell step from src to dst.

    Raises:
        ActionTranslationError: For diagonal, zero-length or longer steps
    """
    sx, sy = src
    dx, dy = dst
    try:
        return MoveDir.from_delta(dx - sx, dy - sy)
    except ValueError as exc:
        raise ActionTranslationError(f"Cannot step from {(sx, sy)} to {(dx, dy)}: {exc}") from exc


def move_toward(src: Iterable[int], dst: Iterable[int]) -> Action:
    """MOVE action for a one-cell step from src to dst."""
    return Action.move(direction_between(src, dst))


def translate_action(unit_id: int, action: Action, world: WorldSnapshot) -> Primitive:
    """
    Map one abstract action to a host primitive.

    Raises:
        ActionTranslationError: If the unit or target is missing or dead,
            or the action type is unsupported
    """
    unit = world.get_unit(unit_id)
    if unit is None or not unit.alive:
        raise ActionTranslationError(f"Unit {unit_id} is not a live unit in the world")

    if action.type == ActionType.MOVE:
        return PrimitiveMove(unit_id, action.direction)

    if action.type == ActionType.ATTACK:
        target = world.get_unit(action.target_id)
        if target is None or not target.alive:
            raise ActionTranslationError(f"Attack target {action.target_id} is not a live unit")
        return PrimitiveAttack(unit_id, target.id)

    raise ActionTranslationError(f"Unsupported action type {action.type}")


def translate_joint_action(joint: Mapping[int, Action], world: WorldSnapshot) -> List[Primitive]:
    """
    Translate every entry of a joint action, skipping entries that fail.

    Returns:
        Primitives in joint-action order
    """
    primitives: List[Primitive] = []
    for unit_id, action in joint.items():
        try:
            primitives.append(translate_action(unit_id, action, world))
        except ActionTranslationError as exc:
            log.error("Dropping action %s for unit %s: %s", action, unit_id, exc)
    return primitives
