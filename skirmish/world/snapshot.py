"""
Read-only view of the host world handed to agents each turn.

The decision core never mutates a WorldSnapshot; it builds its own
CombatSnapshot from it.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator

from ..core.types import Cell, UnitKind


class UnitView(BaseModel):
    """One unit as reported by the host."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Host unit id")
    player: int = Field(description="Owning player number")
    x: int = Field(description="Column of the unit")
    y: int = Field(description="Row of the unit")
    hp: int = Field(description="Current hit points")
    basic_attack: int = Field(default=0, ge=0, description="Damage dealt by one basic attack")
    attack_range: int = Field(default=1, ge=1, description="Attack reach (Chebyshev radius)")
    unit_type: str = Field(default="unknown", description="Host unit-type label, e.g. 'Footman'")

    @property
    def pos(self) -> Cell:
        return Cell(self.x, self.y)

    @property
    def kind(self) -> UnitKind:
        return UnitKind.from_label(self.unit_type)

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def label(self) -> str:
        return f"{self.unit_type}#{self.id}"


class WorldSnapshot(BaseModel):
    """
    Complete per-turn world state.

    Attributes:
        width: Map width
        height: Map height
        units: All units, including dead ones the host still reports
        obstacles: Impassable cells (resources, walls)
        turn: Host turn number
        current_player: Player whose turn it is
    """
    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    height: PositiveInt
    units: Tuple[UnitView, ...] = ()
    obstacles: Tuple[Tuple[int, int], ...] = ()
    turn: int = 0
    current_player: int = 0

    @model_validator(mode="after")
    def _check_layout(self) -> WorldSnapshot:
        ids = [unit.id for unit in self.units]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate unit ids in world snapshot")
        for cell in self.obstacles:
            if not (0 <= cell[0] < self.width and 0 <= cell[1] < self.height):
                raise ValueError(f"Obstacle out of bounds: {cell}")
        for unit in self.units:
            if not (0 <= unit.x < self.width and 0 <= unit.y < self.height):
                raise ValueError(f"Unit {unit.id} out of bounds: {(unit.x, unit.y)}")
        return self

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def get_unit(self, unit_id: int) -> Optional[UnitView]:
        return next((u for u in self.units if u.id == unit_id), None)

    def units_of(self, player: int, alive_only: bool = True) -> List[UnitView]:
        return [u for u in self.units if u.player == player and (u.alive or not alive_only)]

    def players(self) -> List[int]:
        """Player numbers in order of first appearance."""
        seen: Dict[int, None] = {}
        for unit in self.units:
            seen.setdefault(unit.player, None)
        return list(seen)

    def enemy_player_of(self, player: int) -> Optional[int]:
        """The first player number other than `player`, if any."""
        return next((p for p in self.players() if p != player), None)

    def with_turn(self, turn: int, current_player: int) -> WorldSnapshot:
        return self.model_copy(update={"turn": turn, "current_player": current_player})

    def __str__(self) -> str:
        alive = sum(1 for u in self.units if u.alive)
        return (f"WorldSnapshot(turn={self.turn}, player={self.current_player}, "
                f"units={alive}/{len(self.units)}, grid={self.width}x{self.height})")
