"""
Victory condition checking for the host simulation.

Pure logic over a WorldSnapshot plus the host's idle counter:
- Structure destruction (a player that started with structures loses them)
- Elimination (a player has no live units)
- Turn limit
- Stagnation (no successful command for too many turns)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from skirmish.core.types import GameResult, UnitKind
from skirmish.world.snapshot import WorldSnapshot


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        result: Game outcome (IN_PROGRESS, VICTORY, DRAW)
        reason: Human-readable explanation of the outcome
        winner: Winning player (None if draw or in progress)
    """
    result: GameResult
    reason: str
    winner: Optional[int] = None

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def __str__(self) -> str:
        if self.result == GameResult.IN_PROGRESS:
            return "Game in progress"
        return f"{self.result}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": self.result.name,
            "reason": self.reason,
            "winner": self.winner,
        }


ONGOING = VictoryResult(GameResult.IN_PROGRESS, "Game ongoing")


class VictoryConditions:
    """
    Stateless checker for end-of-game conditions.

    Usage:
        checker = VictoryConditions(max_turns=200)
        result = checker.check_all(world, idle_turns=host.idle_turns)
        if result.is_game_over:
            print(result)
    """

    def __init__(
        self,
        max_turns: Optional[int] = None,
        max_idle_turns: Optional[int] = 20,
        players: Iterable[int] = (0, 1),
    ):
        """
        Args:
            max_turns: Draw once the host turn counter reaches this value
            max_idle_turns: Draw after this many consecutive turns without
                a successful command (None disables the check)
            players: Player numbers taking part in the match
        """
        self._max_turns = max_turns
        self._max_idle_turns = max_idle_turns
        self._players: List[int] = list(players)

    def check_all(self, world: WorldSnapshot, idle_turns: int = 0) -> VictoryResult:
        """Check all conditions in priority order and return the first that ends the game."""
        for result in (
            self.check_structure_destruction(world),
            self.check_elimination(world),
            self.check_turn_limit(world.turn),
            self.check_stagnation(idle_turns),
        ):
            if result.is_game_over:
                return result
        return ONGOING

    def check_structure_destruction(self, world: WorldSnapshot) -> VictoryResult:
        """
        A player whose structures are all destroyed loses.

        Players that never had a structure are not affected by this check.
        """
        lost = []
        for player in self._players:
            structures = [
                u for u in world.units_of(player, alive_only=False) if u.kind == UnitKind.STRUCTURE
            ]
            if structures and not any(u.alive for u in structures):
                lost.append(player)

        if not lost:
            return ONGOING
        if len(lost) == len(self._players):
            return VictoryResult(GameResult.DRAW, "All structures destroyed - DRAW")
        winner = next(p for p in self._players if p not in lost)
        return VictoryResult(
            GameResult.VICTORY,
            f"Structures of player {lost[0]} destroyed - player {winner} wins",
            winner,
        )

    def check_elimination(self, world: WorldSnapshot) -> VictoryResult:
        """A player with no live units loses; if nobody survives it is a draw."""
        survivors = [p for p in self._players if world.units_of(p)]
        if len(survivors) == len(self._players):
            return ONGOING
        if not survivors:
            return VictoryResult(GameResult.DRAW, "All units destroyed - DRAW")
        if len(survivors) == 1:
            winner = survivors[0]
            return VictoryResult(GameResult.VICTORY, f"All opposing units destroyed - player {winner} wins", winner)
        return ONGOING

    def check_turn_limit(self, current_turn: int) -> VictoryResult:
        if self._max_turns is not None and current_turn >= self._max_turns:
            return VictoryResult(GameResult.DRAW, f"Turn limit reached ({self._max_turns}) - DRAW")
        return ONGOING

    def check_stagnation(self, idle_turns: int) -> VictoryResult:
        if self._max_idle_turns is not None and idle_turns >= self._max_idle_turns:
            return VictoryResult(
                GameResult.DRAW,
                f"Stagnation - no successful command for {self._max_idle_turns} turns - DRAW",
            )
        return ONGOING
