"""
UnitStat - immutable per-node record of one combat unit.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from ..core.types import Cell, Side, UnitKind
from ..world.grid import chebyshev_distance, is_aligned
from ..world.snapshot import UnitView


@dataclass(frozen=True)
class UnitStat:
    """
    A unit inside a CombatSnapshot.

    Transitions never edit a UnitStat; moved() and damaged() return new
    values so that parent and child snapshots share nothing mutable.

    Attributes:
        id: Host unit id, stable across the whole search tree
        side: FRIENDLY or ENEMY
        pos: Current cell
        hp: Hit points; the unit is dead at 0 or below
        attack_damage: Damage dealt by one basic attack
        attack_range: Attack reach as a Chebyshev radius
        kind: Unit-type tag
    """
    id: int
    side: Side
    pos: Cell
    hp: int
    attack_damage: int = 0
    attack_range: int = 1
    kind: UnitKind = UnitKind.UNKNOWN

    @property
    def alive(self) -> bool:
        return self.hp > 0

    @property
    def can_move(self) -> bool:
        return self.alive and self.kind.mobile

    def in_reach(self, target: Iterable[int]) -> bool:
        """
        True when `target` is on this unit's row or column and within
        attack range. With range 1 this is orthogonal adjacency.
        """
        distance = chebyshev_distance(self.pos, target)
        return 0 < distance <= self.attack_range and is_aligned(self.pos, target)

    def can_attack(self, other: UnitStat) -> bool:
        return (
            self.alive
            and other.alive
            and other.side != self.side
            and self.attack_damage > 0
            and self.in_reach(other.pos)
        )

    def moved(self, pos: Iterable[int]) -> UnitStat:
        return replace(self, pos=Cell(*pos))

    def damaged(self, amount: int) -> UnitStat:
        """Return a copy with `amount` hit points removed, clamped at 0."""
        return replace(self, hp=max(0, self.hp - amount))

    def label(self) -> str:
        return f"{self.side.value.lower()} {self.kind.value}#{self.id}"

    @classmethod
    def from_view(cls, view: UnitView, side: Side) -> UnitStat:
        return cls(
            id=view.id,
            side=side,
            pos=view.pos,
            hp=max(0, view.hp),
            attack_damage=view.basic_attack,
            attack_range=view.attack_range,
            kind=view.kind,
        )
