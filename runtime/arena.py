"""
HostSimulation - a minimal turn-based host for exercising agents.

This module handles:
- Holding the authoritative unit state of a match
- Validating host primitives (moves and basic attacks)
- Applying them in submission order
- Publishing read-only WorldSnapshots to agents

Rejected commands are reported as ActionValidation failures and logged;
the simulation never raises for a bad command.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from agents.translation import Primitive, PrimitiveAttack, PrimitiveMove
from infra.logger import get_logger
from skirmish.core.types import ActionValidation, Cell
from skirmish.world.grid import Grid, chebyshev_distance, is_aligned
from skirmish.world.snapshot import UnitView, WorldSnapshot

log = get_logger(__name__)


@dataclass
class CommandResult:
    """
    Outcome of one primitive.

    Attributes:
        unit_id: Unit that was commanded
        command: Text form of the primitive
        success: Whether the command was applied
        failure_reason: ActionValidation error code when rejected
        message: Log line describing what happened
    """
    unit_id: int
    command: str
    success: bool
    failure_reason: str | None
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_id": self.unit_id,
            "command": self.command,
            "success": self.success,
            "failure_reason": self.failure_reason,
            "message": self.message,
        }


@dataclass
class ActionResolutionResult:
    """
    All command outcomes of one turn.

    Attributes:
        results: One CommandResult per submitted primitive, in order
        movement_occurred: True if at least one unit moved
        damage_dealt: Total hit points removed this turn
    """
    results: List[CommandResult]
    movement_occurred: bool = False
    damage_dealt: int = 0

    @property
    def any_success(self) -> bool:
        return any(result.success for result in self.results)

    @property
    def logs(self) -> List[str]:
        return [result.message for result in self.results]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "movement_occurred": self.movement_occurred,
            "damage_dealt": self.damage_dealt,
        }


class HostSimulation:
    """
    Authoritative match state.

    Players act in strict alternation in the order given by `players`
    (default: order of first appearance in the initial world). The turn
    counter increases after every player's turn.
    """

    def __init__(self, world: WorldSnapshot, players: Optional[Iterable[int]] = None):
        self.grid = Grid(world.width, world.height, world.obstacles)
        self._obstacles = world.obstacles
        self._units: Dict[int, UnitView] = {unit.id: unit for unit in world.units}
        self.players: List[int] = list(players) if players is not None else world.players()
        if not self.players:
            raise ValueError("A match needs at least one player")
        self.turn = world.turn
        self.current_player = world.current_player if world.current_player in self.players else self.players[0]
        self.idle_turns = 0

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def snapshot(self) -> WorldSnapshot:
        """Read-only copy of the current world."""
        return WorldSnapshot(
            width=self.grid.width,
            height=self.grid.height,
            units=tuple(self._units.values()),
            obstacles=self._obstacles,
            turn=self.turn,
            current_player=self.current_player,
        )

    def get_unit(self, unit_id: int) -> Optional[UnitView]:
        return self._units.get(unit_id)

    def _occupant(self, cell: Cell) -> Optional[UnitView]:
        return next((u for u in self._units.values() if u.alive and u.pos == cell), None)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self, primitive: Primitive, player: int) -> ActionValidation:
        """Check a primitive against the current state without applying it."""
        unit = self._units.get(primitive.unit_id)
        if unit is None:
            return ActionValidation.fail("UNKNOWN_UNIT", f"Unit {primitive.unit_id} does not exist")
        if unit.player != player:
            return ActionValidation.fail("NOT_OWNER", f"{unit.label()} belongs to player {unit.player}")
        if not unit.alive:
            return ActionValidation.fail("UNIT_DEAD", f"{unit.label()} is dead")

        if isinstance(primitive, PrimitiveMove):
            return self._validate_move(unit, primitive)
        if isinstance(primitive, PrimitiveAttack):
            return self._validate_attack(unit, primitive)
        return ActionValidation.fail("INVALID_TARGET", f"Unsupported command {primitive!r}")

    def _validate_move(self, unit: UnitView, move: PrimitiveMove) -> ActionValidation:
        if not unit.kind.mobile:
            return ActionValidation.fail("IMMOBILE", f"{unit.label()} cannot move")
        dest = unit.pos.offset(*move.direction.delta)
        if not self.grid.in_bounds(dest):
            return ActionValidation.fail("OUT_OF_BOUNDS", f"{unit.label()} cannot leave the map at {dest}")
        if dest in self.grid.obstacles:
            return ActionValidation.fail("OBSTACLE", f"{unit.label()} blocked by obstacle at {dest}")
        occupant = self._occupant(dest)
        if occupant is not None:
            return ActionValidation.fail("COLLISION", f"{unit.label()} blocked by {occupant.label()} at {dest}")
        return ActionValidation.success(f"{unit.label()} moves {move.direction.name} to {dest}")

    def _validate_attack(self, unit: UnitView, attack: PrimitiveAttack) -> ActionValidation:
        if unit.basic_attack <= 0:
            return ActionValidation.fail("NO_CAPABILITY", f"{unit.label()} deals no damage")
        target = self._units.get(attack.target_id)
        if target is None or not target.alive or target.player == unit.player:
            return ActionValidation.fail("INVALID_TARGET", f"{unit.label()} cannot attack unit {attack.target_id}")
        distance = chebyshev_distance(unit.pos, target.pos)
        if not (0 < distance <= unit.attack_range and is_aligned(unit.pos, target.pos)):
            return ActionValidation.fail("OUT_OF_RANGE", f"{target.label()} is out of reach of {unit.label()}")
        return ActionValidation.success(f"{unit.label()} attacks {target.label()}")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def apply(self, primitives: Iterable[Primitive], player: int) -> ActionResolutionResult:
        """
        Validate and apply primitives one after the other.

        Each command sees the effects of the ones before it, so a unit may
        step into a cell vacated earlier in the same turn.
        """
        results: List[CommandResult] = []
        moved = False
        damage = 0

        for primitive in primitives:
            validation = self.validate(primitive, player)
            if not validation.valid:
                log.info("Rejected %s: %s (%s)", primitive, validation.message, validation.error_code)
                results.append(CommandResult(primitive.unit_id, str(primitive), False, validation.error_code, validation.message))
                continue

            unit = self._units[primitive.unit_id]
            if isinstance(primitive, PrimitiveMove):
                dest = unit.pos.offset(*primitive.direction.delta)
                self._units[unit.id] = unit.model_copy(update={"x": dest.x, "y": dest.y})
                moved = True
            else:
                target = self._units[primitive.target_id]
                dealt = min(unit.basic_attack, target.hp)
                self._units[target.id] = target.model_copy(update={"hp": target.hp - dealt})
                damage += dealt
                if self._units[target.id].hp <= 0:
                    log.info("%s destroyed by %s", target.label(), unit.label())

            log.debug(validation.message)
            results.append(CommandResult(primitive.unit_id, str(primitive), True, None, validation.message))

        resolution = ActionResolutionResult(results, movement_occurred=moved, damage_dealt=damage)
        self.idle_turns = 0 if resolution.any_success else self.idle_turns + 1
        return resolution

    def end_turn(self) -> None:
        """Pass play to the next player and advance the turn counter."""
        index = self.players.index(self.current_player)
        self.current_player = self.players[(index + 1) % len(self.players)]
        self.turn += 1
