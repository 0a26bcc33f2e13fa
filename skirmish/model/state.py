"""
CombatSnapshot - the state model searched by the adversarial engine.

A snapshot is a value: transitions build a new snapshot and never edit
the parent, so every SearchNode owns its state outright.

Child generation rules:
- A unit with a live opposing unit in reach must attack the first such
  unit (list order) and is offered nothing else.
- Otherwise it may step into any in-bounds, obstacle-free cell that no
  live unit occupies at the start of the ply.
- A unit with no legal action holds position and takes no part in the
  joint action.
- Joint moves that put two units on the same cell are dropped unless
  allow_stacking is set.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.actions import Action, JointAction
from ..core.types import ActionType, Cell, MoveDir, Side
from ..world.snapshot import WorldSnapshot
from .unit import UnitStat


@dataclass(frozen=True)
class CombatSnapshot:
    """
    Units, obstacles and map extents for one node of the search tree.

    Attributes:
        friendly: Friendly units in stable order (dead ones kept at hp 0)
        enemy: Enemy units in stable order (dead ones kept at hp 0)
        obstacles: Impassable cells, constant for a whole search
        width: Map width
        height: Map height
        to_move: Side whose joint action produces the children
    """
    friendly: Tuple[UnitStat, ...]
    enemy: Tuple[UnitStat, ...]
    obstacles: FrozenSet[Cell] = field(default_factory=frozenset)
    width: int = 1
    height: int = 1
    to_move: Side = Side.FRIENDLY

    @classmethod
    def create(
        cls,
        friendly: Iterable[UnitStat],
        enemy: Iterable[UnitStat],
        width: int,
        height: int,
        obstacles: Iterable[Iterable[int]] = (),
        to_move: Side = Side.FRIENDLY,
    ) -> CombatSnapshot:
        """Build and validate a snapshot from loose collections."""
        snapshot = cls(
            friendly=tuple(friendly),
            enemy=tuple(enemy),
            obstacles=frozenset(Cell(*cell) for cell in obstacles),
            width=width,
            height=height,
            to_move=to_move,
        )
        snapshot.check_invariants()
        return snapshot

    @classmethod
    def from_world(cls, world: WorldSnapshot, player: int) -> CombatSnapshot:
        """
        Build the model for `player` from a host world snapshot.

        Units owned by `player` are friendly; every other player's units
        are enemies. The friendly side moves first.
        """
        friendly = [UnitStat.from_view(u, Side.FRIENDLY) for u in world.units if u.player == player]
        enemy = [UnitStat.from_view(u, Side.ENEMY) for u in world.units if u.player != player]
        return cls.create(
            friendly,
            enemy,
            width=world.width,
            height=world.height,
            obstacles=world.obstacles,
        )

    def check_invariants(self) -> None:
        """
        Raises:
            ValueError: On bad extents, wrong side tags, or two live units
                sharing a cell
        """
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Map dimensions must be positive: {self.width}x{self.height}")
        for unit in self.friendly:
            if unit.side != Side.FRIENDLY:
                raise ValueError(f"{unit.label()} listed as friendly")
        for unit in self.enemy:
            if unit.side != Side.ENEMY:
                raise ValueError(f"{unit.label()} listed as enemy")
        seen: Dict[Cell, int] = {}
        for unit in self.live_units():
            if unit.pos in seen:
                raise ValueError(f"Units {seen[unit.pos]} and {unit.id} share cell {unit.pos}")
            seen[unit.pos] = unit.id

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def units(self, side: Optional[Side] = None) -> Tuple[UnitStat, ...]:
        if side is None:
            return self.friendly + self.enemy
        return self.friendly if side == Side.FRIENDLY else self.enemy

    def live_units(self, side: Optional[Side] = None) -> List[UnitStat]:
        return [unit for unit in self.units(side) if unit.alive]

    def get_unit(self, unit_id: int) -> Optional[UnitStat]:
        return next((unit for unit in self.units() if unit.id == unit_id), None)

    def occupied_cells(self) -> FrozenSet[Cell]:
        return frozenset(unit.pos for unit in self.live_units())

    def in_bounds(self, pos: Iterable[int]) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_over(self) -> bool:
        """True once either side has no live units."""
        return not self.live_units(Side.FRIENDLY) or not self.live_units(Side.ENEMY)

    def total_hp(self, side: Side) -> int:
        return sum(unit.hp for unit in self.live_units(side))

    # ------------------------------------------------------------------
    # Move generation
    # ------------------------------------------------------------------
    def attack_target(self, unit: UnitStat) -> Optional[UnitStat]:
        """First live opposing unit in reach of `unit`, in list order."""
        for other in self.units(unit.side.opponent):
            if unit.can_attack(other):
                return other
        return None

    def legal_actions(self, unit: UnitStat) -> List[Action]:
        """Legal actions of one unit at the start of the ply."""
        if not unit.alive:
            return []

        target = self.attack_target(unit)
        if target is not None:
            return [Action.attack(target.id)]

        if not unit.can_move:
            return []

        occupied = self.occupied_cells()
        actions = []
        for direction in MoveDir:
            dest = unit.pos.offset(*direction.delta)
            if not self.in_bounds(dest) or dest in self.obstacles or dest in occupied:
                continue
            actions.append(Action.move(direction))
        return actions

    def apply(self, joint: Mapping[int, Action], side: Optional[Side] = None) -> CombatSnapshot:
        """
        Successor snapshot after `side` plays `joint`.

        Moves relocate the acting unit only; attacks deduct the attacker's
        damage from the target (HP clamped at 0). The side to move flips.

        Raises:
            ValueError: If an action names a unit or target not in the snapshot
        """
        side = side or self.to_move
        units: Dict[int, UnitStat] = {unit.id: unit for unit in self.units()}

        for unit_id, action in joint.items():
            actor = units.get(unit_id)
            if actor is None:
                raise ValueError(f"Unknown unit {unit_id} in joint action")
            if action.type == ActionType.MOVE:
                units[unit_id] = actor.moved(actor.pos.offset(*action.direction.delta))
            elif action.type == ActionType.ATTACK:
                target = units.get(action.target_id)
                if target is None:
                    raise ValueError(f"Unknown attack target {action.target_id}")
                units[target.id] = target.damaged(actor.attack_damage)

        return replace(
            self,
            friendly=tuple(units[unit.id] for unit in self.friendly),
            enemy=tuple(units[unit.id] for unit in self.enemy),
            to_move=side.opponent,
        )

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def render(self) -> str:
        """ASCII map, top row first. Friendly units upper-case, enemies lower-case."""
        rows = []
        by_cell = {unit.pos: unit for unit in self.live_units()}
        for y in range(self.height - 1, -1, -1):
            row = []
            for x in range(self.width):
                cell = Cell(x, y)
                unit = by_cell.get(cell)
                if unit is not None:
                    icon = unit.kind.icon
                    row.append(icon if unit.side == Side.FRIENDLY else icon.lower())
                elif cell in self.obstacles:
                    row.append("#")
                else:
                    row.append(".")
            rows.append("".join(row))
        return "\n".join(rows)

    def __str__(self) -> str:
        return (f"CombatSnapshot({self.width}x{self.height}, to_move={self.to_move}, "
                f"friendly={len(self.live_units(Side.FRIENDLY))}/{len(self.friendly)}, "
                f"enemy={len(self.live_units(Side.ENEMY))}/{len(self.enemy)})")


@dataclass(frozen=True)
class SearchNode:
    """
    A snapshot paired with the joint action that produced it.

    The root carries an empty action. Nodes are never edited after
    creation.
    """
    action: JointAction
    snapshot: CombatSnapshot

    @classmethod
    def root(cls, snapshot: CombatSnapshot) -> SearchNode:
        return cls(action={}, snapshot=snapshot)


def generate_children(
    snapshot: CombatSnapshot,
    side: Optional[Side] = None,
    *,
    allow_stacking: bool = False,
) -> List[SearchNode]:
    """
    Enumerate every joint action of `side` and its successor snapshot.

    Args:
        snapshot: Parent state
        side: Side to move (defaults to snapshot.to_move)
        allow_stacking: Keep joint moves that end with two units on one cell

    Returns:
        One SearchNode per joint action, in deterministic order (units in
        list order, directions in MoveDir order). Empty when the side has
        no live unit able to act.
    """
    side = side or snapshot.to_move

    actors: List[UnitStat] = []
    choices: List[List[Action]] = []
    for unit in snapshot.live_units(side):
        actions = snapshot.legal_actions(unit)
        if actions:
            actors.append(unit)
            choices.append(actions)

    if not actors:
        return []

    children = []
    for combo in itertools.product(*choices):
        if not allow_stacking and _has_shared_destination(actors, combo):
            continue
        joint = {unit.id: action for unit, action in zip(actors, combo)}
        children.append(SearchNode(joint, snapshot.apply(joint, side)))
    return children


def _has_shared_destination(actors: Sequence[UnitStat], combo: Sequence[Action]) -> bool:
    destinations = set()
    for unit, action in zip(actors, combo):
        if action.type != ActionType.MOVE:
            continue
        dest = unit.pos.offset(*action.direction.delta)
        if dest in destinations:
            return True
        destinations.add(dest)
    return False
